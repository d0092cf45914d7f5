"""
Memory Decay Model - Forgetting Curve

Estimates retrievability of a card at any point in time from its last known
memory state.

Formula: R(t) = exp(-t / S) * strength

Where:
- t = days since the last review
- S = stability_factor * ease_factor
- strength = retrievability recorded at the last review

The result is clamped to [0.05, 0.95]: the model never claims certain recall
or certain forgetting.
"""

from __future__ import annotations

import math
from datetime import datetime
from typing import Optional

from srs_core.scheduling.constants import MAX_DECAY_STRENGTH, MIN_DECAY_STRENGTH
from srs_core.scheduling.memory_state import ReviewCard, add_days, days_between, utc_now

# Guards against a zero/negative stability coming from caller-built cards
_MIN_EFFECTIVE_STABILITY = 1e-6


def effective_stability(card: ReviewCard) -> float:
    """Decay time constant in days."""
    stability = card.memory.stability_factor * card.memory.ease_factor
    return max(_MIN_EFFECTIVE_STABILITY, stability)


def clamp_strength(value: float) -> float:
    return max(MIN_DECAY_STRENGTH, min(MAX_DECAY_STRENGTH, value))


def calculate_retrievability(strength: float, stability: float, days_elapsed: float) -> float:
    """
    Raw (unclamped) exponential decay.

    Args:
        strength: Strength at the last review
        stability: Decay time constant in days
        days_elapsed: Days since the last review (negative values count as 0)

    Returns:
        Retrievability, non-increasing in days_elapsed
    """
    days_elapsed = max(0.0, days_elapsed)
    stability = max(_MIN_EFFECTIVE_STABILITY, stability)
    return math.exp(-days_elapsed / stability) * strength


def current_strength(card: ReviewCard, now: Optional[datetime] = None) -> float:
    """
    Retrievability of the card at `now`, clamped to [0.05, 0.95].

    A card that was never reviewed has not decayed: its stored strength is
    returned (clamped).
    """
    if card.memory.last_reviewed is None:
        return clamp_strength(card.memory.strength)

    now = now or utc_now()
    days = days_between(card.memory.last_reviewed, now)
    raw = calculate_retrievability(card.memory.strength, effective_stability(card), days)
    return clamp_strength(raw)


def project_strength(card: ReviewCard, now: Optional[datetime], days_ahead: float) -> float:
    """Retrievability `days_ahead` days after `now` (None = current time), assuming no review in between."""
    now = now or utc_now()
    return current_strength(card, add_days(now, days_ahead))


def retention_probability(card: ReviewCard, target_time: datetime) -> float:
    """Probability of recalling the card at `target_time` if it is not reviewed before then."""
    return current_strength(card, target_time)
