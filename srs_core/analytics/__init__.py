"""
Analytics - performance reports over cards and review history

Quick start:
    from srs_core.analytics import calculate_user_performance

    report = calculate_user_performance(cards, reviews, days=30)
    report.to_dict()
"""

from srs_core.analytics.service import calculate_user_performance

from srs_core.analytics.types import (
    AnalyticsOptions,
    AnalyticsReport,
    BasicStats,
    Insight,
    LearningEfficiency,
    MasteryProjection,
    MemoryDistribution,
    Projections,
    Recommendation,
    ReportPeriod,
    TrendPoint,
)


__all__ = [
    # Service
    "calculate_user_performance",

    # Report types
    "AnalyticsOptions",
    "AnalyticsReport",
    "BasicStats",
    "Insight",
    "LearningEfficiency",
    "MasteryProjection",
    "MemoryDistribution",
    "Projections",
    "Recommendation",
    "ReportPeriod",
    "TrendPoint",
]
