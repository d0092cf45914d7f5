"""
Memory State - Review Card and Review Event

Defines the per-(user, item) card the scheduler operates on and the
append-only review event produced by each attempt.

Key concepts:
- Strength: estimated retrievability at the last update (0-1)
- Ease factor: multiplier for interval growth after a success
- Stability factor: resistance to decay, grows with successful reviews
- Interval: days until the next scheduled review
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Optional

from srs_core.config import SchedulerParams
from srs_core.scheduling import constants as c
from srs_core.scheduling.constants import LearningState
from srs_core.scheduling.schemas import ReviewOutcome

SECONDS_PER_DAY = 86400.0


# ---- Time helpers ----

def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def days_between(start: datetime, end: datetime) -> float:
    """Fractional days from start to end (negative if end is earlier)."""
    return (ensure_utc(end) - ensure_utc(start)).total_seconds() / SECONDS_PER_DAY


def add_days(moment: datetime, days: float) -> datetime:
    return ensure_utc(moment) + timedelta(days=days)


def _parse_datetime(value) -> Optional[datetime]:
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    return ensure_utc(datetime.fromisoformat(str(value).replace("Z", "+00:00")))


def _format_datetime(value: Optional[datetime]) -> Optional[str]:
    return ensure_utc(value).isoformat() if value is not None else None


# ---- Card ----

@dataclass
class CardContent:
    """Immutable reference to the studied item."""
    source_text: str = ""
    target_text: str = ""
    pattern: str = ""
    level: int = 1
    item_type: str = "sentence"  # sentence, pattern, vocabulary


@dataclass
class MemoryState:
    """Memory parameters of a card."""
    strength: float = c.INITIAL_STRENGTH
    ease_factor: float = c.INITIAL_EASE
    stability_factor: float = c.INITIAL_STABILITY
    interval: float = c.INITIAL_INTERVAL  # days, always > 0
    review_count: int = 0
    last_reviewed: Optional[datetime] = None
    next_review: datetime = field(default_factory=utc_now)

    # Slow answers push this up; feeds the review priority score
    difficulty_factor: float = 1.0
    average_response_time: float = 0.0  # ms, over responses > 0


@dataclass
class Performance:
    streak: int = 0   # Consecutive successful reviews
    lapses: int = 0   # Failures after graduation


@dataclass
class ReviewCard:
    """
    Memory and performance state for one (user, item) pair.

    A card is created once in state NEW, updated by every review through
    scheduler.process_review, and never deleted (only suspended).
    """
    id: str
    user_id: str
    content: CardContent = field(default_factory=CardContent)
    memory: MemoryState = field(default_factory=MemoryState)
    performance: Performance = field(default_factory=Performance)
    learning_state: LearningState = LearningState.NEW
    graduated: bool = False
    suspended: bool = False
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def __post_init__(self):
        """Accept plain strings for the learning state."""
        if not isinstance(self.learning_state, LearningState):
            self.learning_state = LearningState(self.learning_state)

    def to_dict(self) -> dict:
        """Plain-dict form with ISO-8601 timestamps (for the persistence collaborator)."""
        data = asdict(self)
        data["learning_state"] = self.learning_state.value
        data["created_at"] = _format_datetime(self.created_at)
        data["updated_at"] = _format_datetime(self.updated_at)
        data["memory"]["last_reviewed"] = _format_datetime(self.memory.last_reviewed)
        data["memory"]["next_review"] = _format_datetime(self.memory.next_review)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewCard":
        memory = dict(data.get("memory") or {})
        memory["last_reviewed"] = _parse_datetime(memory.get("last_reviewed"))
        if memory.get("next_review") is not None:
            memory["next_review"] = _parse_datetime(memory["next_review"])
        else:
            memory.pop("next_review", None)

        kwargs = {
            "id": data["id"],
            "user_id": data.get("user_id", ""),
            "content": CardContent(**(data.get("content") or {})),
            "memory": MemoryState(**memory),
            "performance": Performance(**(data.get("performance") or {})),
            "learning_state": LearningState(data.get("learning_state", LearningState.NEW.value)),
            "graduated": bool(data.get("graduated", False)),
            "suspended": bool(data.get("suspended", False)),
        }
        for key in ("created_at", "updated_at"):
            if data.get(key) is not None:
                kwargs[key] = _parse_datetime(data[key])
        return cls(**kwargs)


def initialize_new_card(
    user_id: str,
    content: Optional[CardContent] = None,
    card_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
    params: Optional[SchedulerParams] = None,
) -> ReviewCard:
    """
    Create the card for an item entering the learner's curriculum.

    The card starts in NEW, due immediately, with params.initial_ease
    (defaults when params is omitted).
    """
    params = params or SchedulerParams()
    now = ensure_utc(created_at) if created_at is not None else utc_now()
    return ReviewCard(
        id=card_id or str(uuid.uuid4()),
        user_id=user_id,
        content=content or CardContent(),
        memory=MemoryState(ease_factor=params.initial_ease, next_review=now),
        created_at=now,
        updated_at=now,
    )


# ---- Review events ----

@dataclass(frozen=True)
class ReviewEvent:
    """
    Log entry for a single review attempt (append-only).
    """
    card_id: str
    reviewed_at: datetime
    quality: float             # 0-5, >= 3 counts as correct
    response_time: float = 0.0  # ms
    user_id: Optional[str] = None

    @property
    def is_correct(self) -> bool:
        return self.quality >= c.PASSING_GRADE

    def to_dict(self) -> dict:
        data = asdict(self)
        data["reviewed_at"] = _format_datetime(self.reviewed_at)
        return data

    @classmethod
    def from_outcome(cls, card: ReviewCard, outcome: ReviewOutcome, reviewed_at: datetime) -> "ReviewEvent":
        """Event for a validated outcome applied to `card` at `reviewed_at`."""
        return cls(
            card_id=card.id,
            reviewed_at=ensure_utc(reviewed_at),
            quality=outcome.quality,
            response_time=outcome.response_time,
            user_id=card.user_id,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "ReviewEvent":
        return cls(
            card_id=data["card_id"],
            reviewed_at=_parse_datetime(data["reviewed_at"]),
            quality=data["quality"],
            response_time=data.get("response_time") or 0.0,
            user_id=data.get("user_id"),
        )
