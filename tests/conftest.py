"""
Shared fixtures for scheduling and analytics tests.

All tests run against a fixed reference time so results are reproducible.
"""

from datetime import datetime, timedelta, timezone

import pytest

from srs_core.scheduling import (
    CardContent,
    LearningState,
    MemoryState,
    Performance,
    ReviewCard,
    ReviewEvent,
)


NOW = datetime(2024, 3, 30, 12, 0, tzinfo=timezone.utc)


# ============================================================================
# Factories
# ============================================================================

def build_card(
    card_id="card-1",
    user_id="user-1",
    state=LearningState.NEW,
    strength=0.5,
    ease=2.5,
    stability=1.0,
    interval=10 / 1440,
    review_count=0,
    last_reviewed=None,
    next_review=None,
    streak=0,
    lapses=0,
    graduated=False,
    suspended=False,
    difficulty_factor=1.0,
):
    return ReviewCard(
        id=card_id,
        user_id=user_id,
        content=CardContent(source_text="Ik heb honger", target_text="I am hungry", pattern="hebben + noun"),
        memory=MemoryState(
            strength=strength,
            ease_factor=ease,
            stability_factor=stability,
            interval=interval,
            review_count=review_count,
            last_reviewed=last_reviewed,
            next_review=next_review or NOW,
            difficulty_factor=difficulty_factor,
        ),
        performance=Performance(streak=streak, lapses=lapses),
        learning_state=state,
        graduated=graduated,
        suspended=suspended,
        created_at=NOW - timedelta(days=60),
        updated_at=NOW - timedelta(days=60),
    )


def build_review(card_id="card-1", reviewed_at=None, quality=4, response_time=3000.0):
    return ReviewEvent(
        card_id=card_id,
        reviewed_at=reviewed_at or NOW,
        quality=quality,
        response_time=response_time,
        user_id="user-1",
    )


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def now():
    """Fixed reference time (2024-03-30 12:00 UTC)."""
    return NOW


@pytest.fixture
def make_card():
    """Factory for cards with sensible defaults."""
    return build_card


@pytest.fixture
def make_review():
    """Factory for review events."""
    return build_review


@pytest.fixture
def new_card():
    return build_card()


@pytest.fixture
def review_card():
    """A graduated card in regular review, due now."""
    return build_card(
        card_id="review-1",
        state=LearningState.REVIEW,
        strength=0.8,
        ease=2.5,
        stability=2.0,
        interval=20.0,
        review_count=6,
        last_reviewed=NOW - timedelta(days=20),
        next_review=NOW,
        streak=6,
        graduated=True,
    )
