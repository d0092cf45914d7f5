"""
Scheduling - SM-2 style spaced repetition for review cards

Main API for per-card scheduling.

This package implements:
- Exponential forgetting curve: R = exp(-t / (stability * ease)) * strength
- SM-2 style ease/interval updates
- Learning-state machine: NEW -> LEARNING -> REVIEW <-> RELEARNING

Quick start:
    from srs_core import scheduling

    card = scheduling.initialize_new_card("user-1")
    card = scheduling.process_review(card, {"quality": 4, "response_time": 2500})
    scheduling.is_due(card)
"""

# Core scheduler API (algorithm logic)
from srs_core.scheduling.scheduler import process_review, review_with_event

# Decay model
from srs_core.scheduling.decay import (
    calculate_retrievability,
    current_strength,
    project_strength,
    retention_probability,
)

# Card model
from srs_core.scheduling.memory_state import (
    CardContent,
    MemoryState,
    Performance,
    ReviewCard,
    ReviewEvent,
    initialize_new_card,
)

# Outcomes
from srs_core.scheduling.schemas import ReviewOutcome, validate_outcome

# Due-card helpers
from srs_core.scheduling.priority import (
    days_since_review,
    days_until_review,
    is_due,
    is_overdue,
    optimal_review_time,
    priority_score,
)

# Caller-owned collection
from srs_core.scheduling.collection import BatchFailure, BatchResult, CardCollection

# Enums
from srs_core.scheduling.constants import ItemDifficulty, LearningState


__all__ = [
    # Core algorithm
    "process_review",
    "review_with_event",

    # Decay model
    "calculate_retrievability",
    "current_strength",
    "project_strength",
    "retention_probability",

    # Card model
    "CardContent",
    "MemoryState",
    "Performance",
    "ReviewCard",
    "ReviewEvent",
    "initialize_new_card",

    # Outcomes
    "ReviewOutcome",
    "validate_outcome",

    # Due-card helpers
    "days_since_review",
    "days_until_review",
    "is_due",
    "is_overdue",
    "optimal_review_time",
    "priority_score",

    # Collection
    "BatchFailure",
    "BatchResult",
    "CardCollection",

    # Enums
    "ItemDifficulty",
    "LearningState",
]
