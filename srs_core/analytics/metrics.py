"""
Metric computations for analytics reports.

Every function is pure: same cards/events/time in, same values out.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Sequence

import pandas as pd

from srs_core.analytics.constants import (
    GOOD_STRENGTH,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    STRONG_STRENGTH,
    WEAK_STRENGTH,
)
from srs_core.analytics.types import BasicStats, LearningEfficiency, MemoryDistribution, TrendPoint
from srs_core.scheduling.constants import LearningState
from srs_core.scheduling.decay import current_strength
from srs_core.scheduling.memory_state import ReviewCard, ensure_utc


def round2(value: float) -> float:
    return float(round(float(value), 2))


def compute_state_distribution(cards: Sequence[ReviewCard]) -> dict[str, int]:
    """
    Card counts per learning state; every state is present.
    """
    counts = {state.value: 0 for state in LearningState}
    for card in cards:
        counts[card.learning_state.value] += 1
    return counts


def compute_quality_distribution(events_df: pd.DataFrame) -> dict[int, int]:
    """
    Review counts per integer quality bucket (floor), sorted by bucket.
    """
    if events_df.empty:
        return {}
    buckets = events_df["quality"].apply(lambda q: int(q // 1))
    counts = buckets.value_counts().sort_index()
    return {int(bucket): int(count) for bucket, count in counts.items()}


def successful_days(events_df: pd.DataFrame) -> list[date]:
    """Sorted UTC days with at least one correct review."""
    if events_df.empty:
        return []
    days = events_df.loc[events_df["correct"], "day_utc"].unique()
    return sorted(date.fromisoformat(day) for day in days)


def compute_current_streak(days: Sequence[date], today: date) -> int:
    """
    Consecutive successful days ending today.

    If today has no successful review yet, the run may end yesterday (the day
    is not over). Any earlier gap means the streak is 0.
    """
    day_set = set(days)
    if today in day_set:
        cursor = today
    elif today - timedelta(days=1) in day_set:
        cursor = today - timedelta(days=1)
    else:
        return 0

    streak = 0
    while cursor in day_set:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def compute_longest_streak(days: Sequence[date]) -> int:
    """
    Longest run of consecutive successful days.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0

    longest = current = 1
    for previous, day in zip(ordered, ordered[1:]):
        if (day - previous).days == 1:
            current += 1
        else:
            current = 1
        longest = max(longest, current)
    return longest


def compute_basic_stats(
    cards: Sequence[ReviewCard],
    events_df: pd.DataFrame,
    current_time: datetime
) -> BasicStats:
    """
    Counts, quality, accuracy, streaks and response time for the window.
    """
    states = compute_state_distribution(cards)
    total_reviews = int(len(events_df))

    if total_reviews:
        average_quality = events_df["quality"].mean()
        accuracy = events_df["correct"].mean()
    else:
        average_quality = accuracy = 0.0

    timed = events_df.loc[events_df["response_time"] > 0, "response_time"]
    avg_response_time = timed.mean() if not timed.empty else 0.0

    days = successful_days(events_df)
    today = ensure_utc(current_time).date()

    return BasicStats(
        total_cards=len(cards),
        total_reviews=total_reviews,
        state_distribution=states,
        average_quality=round2(average_quality),
        accuracy=round2(accuracy),
        quality_distribution=compute_quality_distribution(events_df),
        current_streak=compute_current_streak(days, today),
        longest_streak=compute_longest_streak(days),
        avg_response_time=round2(avg_response_time),
        mastered_cards=states[LearningState.REVIEW.value],
        learning_cards=states[LearningState.LEARNING.value] + states[LearningState.RELEARNING.value],
        new_cards=states[LearningState.NEW.value],
    )


def compute_trends(events_df: pd.DataFrame, day_keys: list[str]) -> list[TrendPoint]:
    """
    One point per day in day_keys (oldest first); days without reviews are zero.
    """
    if events_df.empty:
        return [TrendPoint(date=day, reviews=0, quality=0.0, accuracy=0.0, response_time=0.0) for day in day_keys]

    grouped = events_df.groupby("day_utc")
    reviews = grouped.size().reindex(day_keys, fill_value=0)
    quality = grouped["quality"].mean().reindex(day_keys, fill_value=0.0)
    accuracy = grouped["correct"].mean().reindex(day_keys, fill_value=0.0)

    timed = events_df[events_df["response_time"] > 0]
    if timed.empty:
        response_time = pd.Series(0.0, index=day_keys)
    else:
        response_time = timed.groupby("day_utc")["response_time"].mean().reindex(day_keys, fill_value=0.0)

    return [
        TrendPoint(
            date=day,
            reviews=int(reviews[day]),
            quality=round2(quality[day]),
            accuracy=round2(accuracy[day]),
            response_time=round2(response_time[day]),
        )
        for day in day_keys
    ]


def classify_strength(strength: float) -> str:
    if strength < WEAK_STRENGTH:
        return "critical"
    if strength < GOOD_STRENGTH:
        return "weak"
    if strength < STRONG_STRENGTH:
        return "good"
    return "strong"


def compute_memory_distribution(cards: Sequence[ReviewCard], current_time: datetime) -> MemoryDistribution:
    """
    Non-suspended cards bucketed by current strength.
    """
    counts = {"critical": 0, "weak": 0, "good": 0, "strong": 0}
    for card in cards:
        if card.suspended:
            continue
        counts[classify_strength(current_strength(card, current_time))] += 1
    return MemoryDistribution(**counts)


def compute_learning_efficiency(cards: Sequence[ReviewCard], events_df: pd.DataFrame) -> LearningEfficiency:
    """
    Mastery rate, reviews to mastery, lapse rate and answer speed.

    Study time is the sum of measured response times in the window.
    """
    graduated = [card for card in cards if card.graduated]
    total_time_ms = float(events_df["response_time"].sum()) if not events_df.empty else 0.0
    study_hours = total_time_ms / MS_PER_HOUR
    study_minutes = total_time_ms / MS_PER_MINUTE

    mastery_rate = len(graduated) / study_hours if study_hours > 0 else 0.0
    avg_reviews = (
        sum(card.memory.review_count for card in graduated) / len(graduated) if graduated else 0.0
    )
    total_lapses = sum(card.performance.lapses for card in cards)
    lapse_rate = total_lapses / len(graduated) if graduated else 0.0

    correct_answers = int(events_df["correct"].sum()) if not events_df.empty else 0
    answers_per_minute = correct_answers / study_minutes if study_minutes > 0 else 0.0

    return LearningEfficiency(
        mastery_rate=round2(mastery_rate),
        avg_reviews_to_mastery=float(round(avg_reviews, 1)),
        lapse_rate=round2(lapse_rate),
        answers_per_minute=round2(answers_per_minute),
        total_study_time_ms=float(round(total_time_ms)),
        total_study_hours=float(round(study_hours, 1)),
    )
