"""
Data-preparation helpers for analytics.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Iterable, Sequence

import pandas as pd

from srs_core.scheduling.constants import PASSING_GRADE
from srs_core.scheduling.memory_state import ReviewEvent, ensure_utc

EVENT_COLUMNS = ["card_id", "reviewed_at", "day_utc", "quality", "correct", "response_time"]


def window_bounds(current_time: datetime, days: int) -> tuple[datetime, datetime]:
    """
    Start and end of a trailing window of `days` calendar days (UTC).

    The window starts at midnight of the first day and ends at current_time.
    """
    end = ensure_utc(current_time)
    today = end.replace(hour=0, minute=0, second=0, microsecond=0)
    start = today - timedelta(days=days - 1)
    return start, end


def reviews_between(
    reviews: Iterable[ReviewEvent],
    start: datetime,
    end: datetime
) -> list[ReviewEvent]:
    """Reviews with start <= reviewed_at <= end, in input order."""
    return [r for r in reviews if start <= ensure_utc(r.reviewed_at) <= end]


def build_day_keys(current_time: datetime, days: int) -> list[str]:
    """
    Dense list of YYYY-MM-DD keys for the window, oldest first.
    """
    start, _ = window_bounds(current_time, days)
    day_index = pd.date_range(start=start, periods=days, freq="D")
    return [str(key) for key in day_index.strftime("%Y-%m-%d")]


def load_review_events_df(reviews: Sequence[ReviewEvent]) -> pd.DataFrame:
    """
    Review events as a dataframe sorted by time (ties broken by card id).

    Negative response times are treated as "not measured" (0).
    """
    if not reviews:
        return pd.DataFrame(
            {
                "card_id": pd.Series(dtype="object"),
                "reviewed_at": pd.Series(dtype="object"),
                "day_utc": pd.Series(dtype="object"),
                "quality": pd.Series(dtype="float64"),
                "correct": pd.Series(dtype="bool"),
                "response_time": pd.Series(dtype="float64"),
            },
            columns=EVENT_COLUMNS,
        )

    rows = []
    for review in reviews:
        reviewed_at = ensure_utc(review.reviewed_at)
        rows.append({
            "card_id": review.card_id,
            "reviewed_at": reviewed_at,
            "day_utc": reviewed_at.date().isoformat(),
            "quality": float(review.quality),
            "correct": review.quality >= PASSING_GRADE,
            "response_time": max(0.0, float(review.response_time or 0.0)),
        })

    df = pd.DataFrame(rows, columns=EVENT_COLUMNS)
    df = df.sort_values(["reviewed_at", "card_id"], kind="mergesort").reset_index(drop=True)
    return df
