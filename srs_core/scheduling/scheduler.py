"""
Scheduler - SM-2 Style Review Processing

Pure scheduling and state updates (no I/O).

Main workflow:
1. Validate the outcome (reject before touching anything)
2. Copy the card; the caller's card is never modified
3. Decay strength to the review time, then blend in the outcome
4. Update ease, stability and interval
5. Apply the learning-state transition and counters
6. Return the updated card (caller persists it)
"""

from __future__ import annotations

import copy
import logging
from typing import Optional, Tuple

from srs_core.config import SchedulerParams
from srs_core.errors import ValidationError
from srs_core.scheduling import decay, transitions, updates
from srs_core.scheduling import constants as c
from srs_core.scheduling.memory_state import ReviewCard, ReviewEvent, add_days, ensure_utc, utc_now
from srs_core.scheduling.schemas import OutcomeInput, ReviewOutcome, validate_outcome

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = SchedulerParams()


def process_review(
    card: ReviewCard,
    outcome: OutcomeInput,
    params: Optional[SchedulerParams] = None
) -> ReviewCard:
    """
    Apply one review outcome to a card and return the updated card.

    The input card is left unmodified. Callers must apply reviews of the same
    card in the order they happened.

    Args:
        card: Card before the review
        outcome: ReviewOutcome or mapping with quality (0-5), is_correct,
            response_time (ms), difficulty ("easy"/"medium"/"hard") and
            optionally reviewed_at
        params: Scheduler parameters (defaults when omitted)

    Returns:
        New ReviewCard

    Raises:
        ValidationError: the outcome is invalid or older than the card's
            last review; nothing was modified
    """
    return _review_validated(card, _validated(card, outcome), params)


def _validated(card: ReviewCard, outcome: OutcomeInput) -> ReviewOutcome:
    try:
        return validate_outcome(outcome)
    except ValidationError:
        logger.warning("Rejected review outcome for card %s", card.id)
        raise


def _review_validated(
    card: ReviewCard,
    outcome: ReviewOutcome,
    params: Optional[SchedulerParams]
) -> ReviewCard:
    params = params or DEFAULT_PARAMS
    now = ensure_utc(outcome.reviewed_at) if outcome.reviewed_at is not None else utc_now()

    last_reviewed = card.memory.last_reviewed
    if last_reviewed is not None and now < ensure_utc(last_reviewed):
        logger.warning(
            "Rejected out-of-order review for card %s: %s is before last review %s",
            card.id, now.isoformat(), ensure_utc(last_reviewed).isoformat(),
        )
        raise ValidationError(
            f"Review time {now.isoformat()} is before the last review of card {card.id}",
            field="reviewed_at",
        )

    passed = outcome.passed(params.passing_grade)

    updated = copy.deepcopy(card)
    state_before = card.learning_state

    # Strength at review time uses the state before this review
    decayed = decay.current_strength(card, now)

    if passed:
        _apply_success_update(updated, outcome, decayed, params)
    else:
        _apply_failure_update(updated, outcome, decayed, params)

    updated.learning_state = transitions.next_learning_state(
        state_before, passed, updated.memory.interval, params
    )
    updated.graduated = transitions.is_graduated(card.graduated, updated.memory.interval, params)

    updated.memory.average_response_time = updates.update_average_response_time(
        card.memory.average_response_time,
        outcome.response_time,
        card.memory.review_count,
    )
    updated.memory.review_count = card.memory.review_count + 1
    updated.memory.last_reviewed = now
    updated.memory.next_review = add_days(now, updated.memory.interval)
    updated.updated_at = now

    logger.debug(
        "Card %s reviewed (quality=%s, passed=%s): %s -> %s, interval %.3f -> %.3f days, ease %.2f",
        card.id,
        outcome.quality,
        passed,
        state_before.value,
        updated.learning_state.value,
        card.memory.interval,
        updated.memory.interval,
        updated.memory.ease_factor,
    )
    if updated.graduated and not card.graduated:
        logger.debug("Card %s graduated at interval %.1f days", card.id, updated.memory.interval)

    return updated


def review_with_event(
    card: ReviewCard,
    outcome: OutcomeInput,
    params: Optional[SchedulerParams] = None
) -> Tuple[ReviewCard, ReviewEvent]:
    """
    Process a review and build the matching event for the review log.

    Returns:
        Tuple of (updated_card, review_event)
    """
    outcome = _validated(card, outcome)
    updated = _review_validated(card, outcome, params)
    return updated, ReviewEvent.from_outcome(card, outcome, updated.memory.last_reviewed)


def _apply_success_update(
    card: ReviewCard,
    outcome: ReviewOutcome,
    decayed_strength: float,
    params: SchedulerParams
):
    """
    Apply success rules to the card copy (modifies in place).

    Updates strength, ease, stability, difficulty factor, interval and streak.
    """
    memory = card.memory
    speed = updates.classify_response_time(outcome.response_time, memory.average_response_time)

    memory.ease_factor = updates.update_ease(
        memory.ease_factor, outcome.quality, True, outcome.difficulty, params
    )
    memory.stability_factor = updates.update_stability(
        memory.stability_factor, outcome.quality, True, params
    )
    memory.interval = updates.success_interval(
        previous_interval=memory.interval,
        ease_factor=memory.ease_factor,
        streak=card.performance.streak,
        lapses=card.performance.lapses,
        response_speed=speed,
        params=params,
    )

    strength = updates.update_strength(decayed_strength, outcome.quality, True, params)
    if speed == "fast":
        strength = min(1.0, strength + c.FAST_RESPONSE_STRENGTH_BONUS)
    elif speed == "slow":
        memory.difficulty_factor = min(
            c.MAX_DIFFICULTY_FACTOR, memory.difficulty_factor + c.SLOW_RESPONSE_DIFFICULTY_STEP
        )
    memory.strength = strength

    card.performance.streak += 1


def _apply_failure_update(
    card: ReviewCard,
    outcome: ReviewOutcome,
    decayed_strength: float,
    params: SchedulerParams
):
    """
    Apply failure rules to the card copy (modifies in place).

    Resets the interval to the relearning step, drops strength, shrinks ease
    and stability, resets the streak and counts a lapse for graduated cards.
    """
    memory = card.memory

    memory.strength = updates.update_strength(decayed_strength, outcome.quality, False, params)
    memory.ease_factor = updates.update_ease(
        memory.ease_factor, outcome.quality, False, outcome.difficulty, params
    )
    memory.stability_factor = updates.update_stability(
        memory.stability_factor, outcome.quality, False, params
    )
    memory.interval = params.relearning_interval

    if updates.classify_response_time(outcome.response_time, memory.average_response_time) == "slow":
        memory.difficulty_factor = min(
            c.MAX_DIFFICULTY_FACTOR, memory.difficulty_factor + c.SLOW_RESPONSE_DIFFICULTY_STEP
        )

    card.performance.streak = 0
    if card.graduated:
        card.performance.lapses += 1
