"""
Learning-state machine.

    NEW --(first review)--> LEARNING
    LEARNING --(success, interval > review_threshold)--> REVIEW
    LEARNING / REVIEW / RELEARNING --(failure)--> RELEARNING
    RELEARNING --(success)--> REVIEW

Graduation is separate from the state: it flips once the interval exceeds
graduation_interval and never flips back.
"""

from __future__ import annotations

from srs_core.config import SchedulerParams
from srs_core.scheduling.constants import LearningState


def next_learning_state(
    state: LearningState,
    passed: bool,
    new_interval: float,
    params: SchedulerParams
) -> LearningState:
    """
    State after a review.

    Args:
        state: State before the review
        passed: Whether the review counts as correct
        new_interval: Interval chosen for this review (days)
        params: Scheduler parameters

    Returns:
        New learning state
    """
    if state == LearningState.NEW:
        return LearningState.LEARNING

    if not passed:
        return LearningState.RELEARNING

    if state == LearningState.LEARNING:
        if new_interval > params.review_threshold:
            return LearningState.REVIEW
        return LearningState.LEARNING

    # REVIEW stays REVIEW, RELEARNING recovers to REVIEW
    return LearningState.REVIEW


def is_graduated(already_graduated: bool, new_interval: float, params: SchedulerParams) -> bool:
    """Monotonic: once graduated, always graduated."""
    return already_graduated or new_interval > params.graduation_interval
