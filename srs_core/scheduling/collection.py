"""
Caller-owned card collection.

An in-memory arena of cards keyed by id. The caller loads cards from its
store, reviews them through the collection and persists whatever comes back.
The collection holds no global state; create one per user/session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, Iterator, Optional, Sequence, Tuple

from srs_core.config import SchedulerParams
from srs_core.errors import NotFoundError, SchedulingError, ValidationError
from srs_core.scheduling.constants import DEFAULT_DUE_LIMIT, MAX_BATCH_SIZE, MAX_DUE_LIMIT, LearningState
from srs_core.scheduling.memory_state import ReviewCard, ensure_utc, utc_now
from srs_core.scheduling.priority import is_due, priority_score
from srs_core.scheduling.scheduler import process_review
from srs_core.scheduling.schemas import OutcomeInput

logger = logging.getLogger(__name__)

SORT_KEYS = ("priority", "due_date", "difficulty")


@dataclass
class BatchFailure:
    card_id: str
    error: str


@dataclass
class BatchResult:
    """Outcome of process_batch. Every input item appears in exactly one list."""
    updated: list[ReviewCard] = field(default_factory=list)
    failures: list[BatchFailure] = field(default_factory=list)

    @property
    def processed(self) -> int:
        return len(self.updated)


class CardCollection:
    """
    Cards of one caller, looked up by id.

    Reviews replace the stored card with the new one returned by the
    scheduler; the previous card object is never modified.
    """

    def __init__(self, cards: Iterable[ReviewCard] = ()):
        self._cards: dict[str, ReviewCard] = {}
        for card in cards:
            self.add(card)

    def __len__(self) -> int:
        return len(self._cards)

    def __iter__(self) -> Iterator[ReviewCard]:
        return iter(self._cards.values())

    def __contains__(self, card_id: str) -> bool:
        return card_id in self._cards

    def add(self, card: ReviewCard) -> None:
        if card.id in self._cards:
            raise ValidationError(f"Duplicate card id: {card.id}", field="id")
        self._cards[card.id] = card

    def get(self, card_id: str) -> ReviewCard:
        try:
            return self._cards[card_id]
        except KeyError:
            logger.warning("Card %s is not in the collection", card_id)
            raise NotFoundError(card_id) from None

    def replace(self, card: ReviewCard) -> None:
        if card.id not in self._cards:
            raise NotFoundError(card.id)
        self._cards[card.id] = card

    def cards(self) -> list[ReviewCard]:
        return list(self._cards.values())

    def cards_for_user(self, user_id: str) -> list[ReviewCard]:
        return [card for card in self._cards.values() if card.user_id == user_id]

    def review(
        self,
        card_id: str,
        outcome: OutcomeInput,
        params: Optional[SchedulerParams] = None
    ) -> ReviewCard:
        """
        Review a card by id and store the result.

        Raises:
            NotFoundError: unknown card id
            ValidationError: invalid outcome (collection unchanged)
        """
        card = self.get(card_id)
        updated = process_review(card, outcome, params)
        self._cards[card_id] = updated
        return updated

    def due_cards(
        self,
        now: Optional[datetime] = None,
        limit: int = DEFAULT_DUE_LIMIT,
        include_new: bool = True,
        sort_by: str = "priority"
    ) -> list[ReviewCard]:
        """
        Cards due for review.

        Args:
            now: Reference time (defaults to now)
            limit: Maximum number of cards (1-100)
            include_new: Whether NEW cards are included
            sort_by: "priority" (most urgent first), "due_date" (earliest first)
                or "difficulty" (hardest first)

        Raises:
            ValidationError: limit or sort_by out of range
        """
        if not 1 <= limit <= MAX_DUE_LIMIT:
            raise ValidationError(f"limit must be between 1 and {MAX_DUE_LIMIT}", field="limit")
        if sort_by not in SORT_KEYS:
            raise ValidationError(f"sort_by must be one of {', '.join(SORT_KEYS)}", field="sort_by")

        now = ensure_utc(now) if now is not None else utc_now()
        due = [
            card for card in self._cards.values()
            if is_due(card, now) and (include_new or card.learning_state != LearningState.NEW)
        ]

        if sort_by == "priority":
            due.sort(key=lambda card: (-priority_score(card, now), card.id))
        elif sort_by == "due_date":
            due.sort(key=lambda card: (ensure_utc(card.memory.next_review), card.id))
        else:
            due.sort(key=lambda card: (-card.memory.difficulty_factor, card.id))

        return due[:limit]

    def process_batch(
        self,
        items: Sequence[Tuple[str, OutcomeInput]],
        params: Optional[SchedulerParams] = None
    ) -> BatchResult:
        """
        Review several cards, one (card_id, outcome) pair at a time.

        A failing item is recorded in BatchResult.failures and leaves its card
        untouched; the other items are still applied.

        Raises:
            ValidationError: empty batch or more than 100 items
        """
        if not 1 <= len(items) <= MAX_BATCH_SIZE:
            raise ValidationError(f"Batch must contain between 1 and {MAX_BATCH_SIZE} reviews", field="items")

        result = BatchResult()
        for card_id, outcome in items:
            try:
                result.updated.append(self.review(card_id, outcome, params))
            except SchedulingError as exc:
                result.failures.append(BatchFailure(card_id=card_id, error=str(exc)))

        logger.info(
            "Processed review batch: %d updated, %d failed", result.processed, len(result.failures)
        )
        return result
