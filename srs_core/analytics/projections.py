"""
Forward-looking projections: retention forecast, expected workload and
mastery timeline.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Sequence

from srs_core.analytics.constants import (
    DEFAULT_REVIEWS_TO_MASTERY,
    FORECAST_HORIZONS,
    MASTERY_SAMPLE_SIZE,
    MAX_MASTERY_CONFIDENCE,
    RECENT_RATE_DAYS,
    WORKLOAD_HORIZONS,
)
from srs_core.analytics.metrics import round2
from srs_core.analytics.queries import reviews_between
from srs_core.analytics.types import MasteryProjection
from srs_core.scheduling.constants import LearningState
from srs_core.scheduling.decay import project_strength
from srs_core.scheduling.memory_state import ReviewCard, ReviewEvent, add_days, ensure_utc


def horizon_key(days: int) -> str:
    return f"{days}d"


def compute_retention_forecast(
    cards: Sequence[ReviewCard],
    current_time: datetime,
    horizons: Sequence[int] = FORECAST_HORIZONS
) -> dict[str, float]:
    """
    Average projected strength per horizon over cards that have been reviewed.

    Empty input gives 0 for every horizon.
    """
    reviewed = [card for card in cards if card.memory.last_reviewed is not None]
    forecast = {}
    for days in horizons:
        if not reviewed:
            forecast[horizon_key(days)] = 0.0
            continue
        total = sum(project_strength(card, current_time, days) for card in reviewed)
        forecast[horizon_key(days)] = round2(total / len(reviewed))
    return forecast


def compute_expected_workload(
    cards: Sequence[ReviewCard],
    current_time: datetime,
    horizons: Sequence[int] = WORKLOAD_HORIZONS
) -> dict[str, int]:
    """
    Non-suspended cards due within each horizon (overdue cards included).
    """
    workload = {}
    for days in horizons:
        horizon_end = add_days(current_time, days)
        workload[horizon_key(days)] = sum(
            1 for card in cards
            if not card.suspended and ensure_utc(card.memory.next_review) <= horizon_end
        )
    return workload


def compute_mastery_projection(
    cards: Sequence[ReviewCard],
    reviews: Sequence[ReviewEvent],
    current_time: datetime
) -> MasteryProjection:
    """
    Days until NEW/LEARNING cards reach the historical reviews-to-mastery.

    estimated_days = remaining reviews / reviews per day over the last 7 days.
    Confidence grows with the number of graduated cards, saturating at 10.
    """
    learning = [
        card for card in cards
        if card.learning_state in (LearningState.NEW, LearningState.LEARNING)
    ]
    if not learning:
        return MasteryProjection(estimated_days=0, confidence=0.0, remaining_cards=0, reviews_per_day=0.0)

    graduated = [card for card in cards if card.graduated]
    if graduated:
        reviews_to_mastery = sum(card.memory.review_count for card in graduated) / len(graduated)
    else:
        reviews_to_mastery = DEFAULT_REVIEWS_TO_MASTERY

    end = ensure_utc(current_time)
    recent = reviews_between(reviews, end - timedelta(days=RECENT_RATE_DAYS), end)
    reviews_per_day = len(recent) / RECENT_RATE_DAYS

    remaining_reviews = sum(
        max(0.0, reviews_to_mastery - card.memory.review_count) for card in learning
    )
    estimated_days = math.ceil(remaining_reviews / reviews_per_day) if reviews_per_day > 0 else 0

    confidence = MAX_MASTERY_CONFIDENCE * min(1.0, len(graduated) / MASTERY_SAMPLE_SIZE)

    return MasteryProjection(
        estimated_days=int(estimated_days),
        confidence=round2(confidence),
        remaining_cards=len(learning),
        reviews_per_day=round2(reviews_per_day),
    )
