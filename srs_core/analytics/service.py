"""
Service layer to assemble a performance report for one user.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Sequence, Union

from pydantic import ValidationError as PydanticValidationError

from srs_core.analytics.insights import generate_insights, generate_recommendations
from srs_core.analytics.metrics import (
    compute_basic_stats,
    compute_learning_efficiency,
    compute_memory_distribution,
    compute_trends,
)
from srs_core.analytics.projections import (
    compute_expected_workload,
    compute_mastery_projection,
    compute_retention_forecast,
)
from srs_core.analytics.queries import (
    build_day_keys,
    load_review_events_df,
    reviews_between,
    window_bounds,
)
from srs_core.analytics.types import AnalyticsOptions, AnalyticsReport, Projections, ReportPeriod
from srs_core.errors import ValidationError
from srs_core.scheduling.memory_state import ReviewCard, ReviewEvent, ensure_utc, utc_now

logger = logging.getLogger(__name__)


def _resolve_options(options: Union[AnalyticsOptions, Mapping[str, Any], None], overrides: dict) -> AnalyticsOptions:
    if isinstance(options, AnalyticsOptions):
        if not overrides:
            return options
        data = {**options.model_dump(), **overrides}
    elif options is None:
        data = dict(overrides)
    elif isinstance(options, Mapping):
        data = {**options, **overrides}
    else:
        raise ValidationError(f"Options must be AnalyticsOptions or a mapping, got {type(options).__name__}")

    try:
        return AnalyticsOptions.model_validate(data)
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(f"Invalid analytics options: {first.get('msg')}", field=field_name) from exc


def _build_projections(
    cards: Sequence[ReviewCard],
    reviews: Sequence[ReviewEvent],
    current_time
) -> Projections:
    return Projections(
        retention_forecast=compute_retention_forecast(cards, current_time),
        expected_workload=compute_expected_workload(cards, current_time),
        mastery_projection=compute_mastery_projection(cards, reviews, current_time),
    )


def calculate_user_performance(
    cards: Sequence[ReviewCard],
    reviews: Sequence[ReviewEvent],
    options: Union[AnalyticsOptions, Mapping[str, Any], None] = None,
    **overrides: Any,
) -> AnalyticsReport:
    """
    Build the performance report for one user's cards and review history.

    Pure: nothing passed in is modified, and the same inputs with the same
    current_time give an identical report.

    Args:
        cards: The user's cards (any state, suspended included)
        reviews: Review events for those cards, in any order
        options: AnalyticsOptions or mapping with days, include_projections
            and current_time; keyword overrides win over it

    Returns:
        AnalyticsReport

    Raises:
        ValidationError: days outside [1, 365] or unknown option
    """
    opts = _resolve_options(options, overrides)
    current_time = ensure_utc(opts.current_time) if opts.current_time is not None else utc_now()

    start, end = window_bounds(current_time, opts.days)
    window_reviews = reviews_between(reviews, start, end)
    events_df = load_review_events_df(window_reviews)
    day_keys = build_day_keys(current_time, opts.days)

    stats = compute_basic_stats(cards, events_df, current_time)
    efficiency = compute_learning_efficiency(cards, events_df)

    projections: Optional[Projections] = None
    if opts.include_projections:
        projections = _build_projections(cards, reviews, current_time)

    user_id = cards[0].user_id if cards else None

    logger.info(
        "Analytics for user %s: %d cards, %d reviews in %d-day window",
        user_id,
        stats.total_cards,
        stats.total_reviews,
        opts.days,
    )

    return AnalyticsReport(
        user_id=user_id,
        period=ReportPeriod(days=opts.days, start=start, end=end),
        stats=stats,
        trends=compute_trends(events_df, day_keys),
        distribution=compute_memory_distribution(cards, current_time),
        efficiency=efficiency,
        insights=generate_insights(stats, efficiency),
        recommendations=generate_recommendations(stats, efficiency),
        projections=projections,
    )
