"""
Update Rules - Strength, Ease, Stability and Interval

Pure functions applied by the scheduler after each review.

Key principles:
- Success closes part of the gap between strength and 1.0, failure drops it hard
- Ease grows slowly on success and shrinks on failure; "hard" items shrink it
  even when answered correctly
- A successful review never shortens the interval
"""

from __future__ import annotations

from typing import Optional

from srs_core.config import SchedulerParams
from srs_core.scheduling import constants as c
from srs_core.scheduling.constants import ItemDifficulty


def update_strength(
    decayed_strength: float,
    quality: float,
    passed: bool,
    params: SchedulerParams
) -> float:
    """
    Blend the decayed strength with the review outcome.

    Formula:
        success: S_new = S + (1 - S) * gain * q / 5
        failure: S_new = min(cap, S * 0.5)

    Args:
        decayed_strength: Strength right before the review (decay model output)
        quality: Review quality (0-5)
        passed: Whether the review counts as correct
        params: Scheduler parameters

    Returns:
        New strength in [0, 1]
    """
    if passed:
        gain = params.strength_gain * quality / c.MAX_QUALITY
        new_strength = decayed_strength + (1.0 - decayed_strength) * gain
    else:
        new_strength = min(params.failure_strength_cap, decayed_strength * c.FAILURE_STRENGTH_DECAY)
    return max(0.0, min(1.0, new_strength))


def update_ease(
    ease_factor: float,
    quality: float,
    passed: bool,
    difficulty: ItemDifficulty,
    params: SchedulerParams
) -> float:
    """
    Update the ease factor.

    Formula:
        success: E + bonus * (q - 2) / 3 * m_bonus(difficulty)
        hard success: E - hard_success_penalty
        failure: E - penalty * m_penalty(difficulty)

    Clipped to [min_ease, max_ease].
    """
    if passed and difficulty == ItemDifficulty.HARD:
        delta = -params.hard_success_ease_penalty
    elif passed:
        # Quality below 2 can still pass through an explicit is_correct
        quality_share = max(0.0, (quality - 2.0) / 3.0)
        delta = params.ease_bonus * quality_share * c.EASE_BONUS_MULTIPLIER[difficulty]
    else:
        delta = -params.ease_penalty * c.EASE_PENALTY_MULTIPLIER[difficulty]

    return max(params.min_ease, min(params.max_ease, ease_factor + delta))


def update_stability(stability: float, quality: float, passed: bool, params: SchedulerParams) -> float:
    """
    Stability grows multiplicatively on success and decays on failure.
    """
    if passed:
        new_stability = stability * (1.0 + params.stability_growth * quality / c.MAX_QUALITY)
    else:
        new_stability = stability * c.FAILURE_STABILITY_DECAY
    return max(c.MIN_STABILITY, min(c.MAX_STABILITY, new_stability))


def classify_response_time(response_time: float, average_response_time: float) -> Optional[str]:
    """
    Compare a response against the card's running average.

    Returns:
        "fast", "slow", or None when there is no usable comparison
    """
    if response_time <= 0 or average_response_time <= 0:
        return None
    ratio = response_time / average_response_time
    if ratio < c.FAST_RESPONSE_RATIO:
        return "fast"
    if ratio > c.SLOW_RESPONSE_RATIO:
        return "slow"
    return None


def success_interval(
    previous_interval: float,
    ease_factor: float,
    streak: int,
    lapses: int,
    response_speed: Optional[str],
    params: SchedulerParams
) -> float:
    """
    Next interval after a successful review.

    Base: I_new = I_prev * E, at least one day.

    The growth (I_new - I_prev) is then adjusted by history:
    - lapses remove up to 50% of the growth
    - a long streak adds up to 30%
    - a fast response adds 10%

    The result never drops below the previous interval and is capped at
    max_interval.

    Args:
        previous_interval: Interval before this review (days)
        ease_factor: Updated ease factor
        streak: Success streak before this review
        lapses: Lapse count before this review
        response_speed: Output of classify_response_time
        params: Scheduler parameters

    Returns:
        New interval in days
    """
    base = max(c.MIN_SUCCESS_INTERVAL, previous_interval * ease_factor)
    growth = max(0.0, base - previous_interval)

    if lapses > 0:
        growth *= 1.0 - min(c.MAX_LAPSE_PENALTY, lapses * c.LAPSE_PENALTY_STEP)

    interval = previous_interval + growth

    if streak > c.STREAK_BONUS_START:
        bonus = min(c.MAX_STREAK_BONUS, (streak - c.STREAK_BONUS_START) * c.STREAK_BONUS_STEP)
        interval *= 1.0 + bonus

    if response_speed == "fast":
        interval *= c.FAST_RESPONSE_BONUS

    interval = max(interval, c.MIN_SUCCESS_INTERVAL)
    return max(previous_interval, min(params.max_interval, interval))


def update_average_response_time(average: float, response_time: float, samples: int) -> float:
    """
    Running mean of response times > 0.

    Args:
        average: Current mean
        response_time: New response (ignored when <= 0)
        samples: Number of responses already in the mean
    """
    if response_time <= 0:
        return average
    if samples <= 0 or average <= 0:
        return float(response_time)
    return (average * samples + response_time) / (samples + 1)
