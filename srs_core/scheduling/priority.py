"""
Due-card helpers and review prioritisation.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta
from typing import Optional, Sequence

from srs_core.scheduling.constants import DEFAULT_OPTIMAL_HOURS
from srs_core.scheduling.decay import current_strength
from srs_core.scheduling.memory_state import ReviewCard, days_between, ensure_utc, utc_now


def is_due(card: ReviewCard, now: Optional[datetime] = None) -> bool:
    """Due := not suspended and next_review <= now."""
    now = ensure_utc(now) if now is not None else utc_now()
    return not card.suspended and ensure_utc(card.memory.next_review) <= now


def is_overdue(card: ReviewCard, now: Optional[datetime] = None) -> bool:
    """More than one full day past the scheduled review."""
    now = now or utc_now()
    return not card.suspended and days_between(card.memory.next_review, now) > 1


def days_since_review(card: ReviewCard, now: Optional[datetime] = None) -> int:
    """Whole days since the last review (0 if never reviewed)."""
    if card.memory.last_reviewed is None:
        return 0
    return max(0, math.floor(days_between(card.memory.last_reviewed, now or utc_now())))


def days_until_review(card: ReviewCard, now: Optional[datetime] = None) -> int:
    """Days until the next review, rounded up (negative when overdue)."""
    return math.ceil(days_between(now or utc_now(), card.memory.next_review))


def priority_score(card: ReviewCard, now: Optional[datetime] = None) -> float:
    """
    Urgency of a card (higher = review sooner).

    score = (1 - strength) * 10 + min(10, 2 * overdue_days) + difficulty + 0.5 * lapses
    """
    now = now or utc_now()
    strength = current_strength(card, now)
    overdue_days = max(0.0, days_between(card.memory.next_review, now))

    return (
        (1.0 - strength) * 10.0
        + min(10.0, overdue_days * 2.0)
        + card.memory.difficulty_factor
        + card.performance.lapses * 0.5
    )


def optimal_review_time(
    card: ReviewCard,
    optimal_hours: Sequence[int] = DEFAULT_OPTIMAL_HOURS,
    now: Optional[datetime] = None
) -> datetime:
    """
    Move a card's due time to the nearest preferred hour of day (UTC).

    If that moment has already passed, the same hour on the next day is used.
    Due times already inside a preferred hour are returned unchanged.
    """
    now = ensure_utc(now) if now is not None else utc_now()
    due = ensure_utc(card.memory.next_review)
    if not optimal_hours or due.hour in optimal_hours:
        return due

    nearest = min(optimal_hours, key=lambda h: (abs(h - due.hour), h))
    suggested = due.replace(hour=nearest, minute=0, second=0, microsecond=0)
    if suggested <= now:
        suggested += timedelta(days=1)
    return suggested
