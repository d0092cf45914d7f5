"""
srs_core - spaced-repetition scheduling and memory analytics

Pure computation over caller-owned cards and review events (no storage,
no network).

Quick start:
    import srs_core

    card = srs_core.initialize_new_card("user-1")
    card = srs_core.process_review(card, {"quality": 4, "response_time": 2500})
    report = srs_core.calculate_user_performance([card], [], days=30)
"""

import logging

# scheduling first: config depends on scheduling.constants
from srs_core.scheduling import (
    CardCollection,
    LearningState,
    ReviewCard,
    ReviewEvent,
    ReviewOutcome,
    current_strength,
    initialize_new_card,
    is_due,
    priority_score,
    process_review,
    review_with_event,
)
from srs_core.config import SchedulerParams, load_params_from_env
from srs_core.errors import NotFoundError, SchedulingError, ValidationError
from srs_core.analytics import AnalyticsOptions, AnalyticsReport, calculate_user_performance

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Scheduling
    "CardCollection",
    "LearningState",
    "ReviewCard",
    "ReviewEvent",
    "ReviewOutcome",
    "current_strength",
    "initialize_new_card",
    "is_due",
    "priority_score",
    "process_review",
    "review_with_event",

    # Configuration
    "SchedulerParams",
    "load_params_from_env",

    # Errors
    "NotFoundError",
    "SchedulingError",
    "ValidationError",

    # Analytics
    "AnalyticsOptions",
    "AnalyticsReport",
    "calculate_user_performance",
]
