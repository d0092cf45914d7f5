"""
Types for analytics reports.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from srs_core.analytics.constants import DEFAULT_WINDOW_DAYS, MAX_WINDOW_DAYS


InsightType = Literal["positive", "warning", "suggestion"]
Priority = Literal["high", "medium", "low"]


class AnalyticsOptions(BaseModel):
    """
    Options for calculate_user_performance.

    days: trailing window in calendar days, ending on the UTC day of current_time
    include_projections: add retention forecast, workload and mastery projection
    current_time: reference time; defaults to now (pass it for reproducible reports)
    """
    model_config = ConfigDict(frozen=True, extra="forbid")

    days: int = Field(default=DEFAULT_WINDOW_DAYS, ge=1, le=MAX_WINDOW_DAYS)
    include_projections: bool = True
    current_time: Optional[datetime] = None


@dataclass(frozen=True)
class ReportPeriod:
    days: int
    start: datetime
    end: datetime


@dataclass(frozen=True)
class BasicStats:
    total_cards: int
    total_reviews: int
    state_distribution: dict[str, int]
    average_quality: float
    accuracy: float
    quality_distribution: dict[int, int]
    current_streak: int
    longest_streak: int
    avg_response_time: float  # ms
    mastered_cards: int
    learning_cards: int
    new_cards: int


@dataclass(frozen=True)
class TrendPoint:
    """Activity of one calendar day (UTC)."""
    date: str
    reviews: int
    quality: float
    accuracy: float
    response_time: float


@dataclass(frozen=True)
class MemoryDistribution:
    critical: int = 0  # < 0.2
    weak: int = 0      # [0.2, 0.5)
    good: int = 0      # [0.5, 0.8)
    strong: int = 0    # >= 0.8


@dataclass(frozen=True)
class LearningEfficiency:
    mastery_rate: float          # graduated cards per study hour
    avg_reviews_to_mastery: float
    lapse_rate: float
    answers_per_minute: float
    total_study_time_ms: float
    total_study_hours: float


@dataclass(frozen=True)
class MasteryProjection:
    estimated_days: int
    confidence: float
    remaining_cards: int
    reviews_per_day: float


@dataclass(frozen=True)
class Projections:
    retention_forecast: dict[str, float]
    expected_workload: dict[str, int]
    mastery_projection: MasteryProjection


@dataclass(frozen=True)
class Insight:
    type: InsightType
    category: str
    message: str


@dataclass(frozen=True)
class Recommendation:
    type: str
    priority: Priority
    title: str
    description: str


@dataclass(frozen=True)
class AnalyticsReport:
    """
    Everything a dashboard needs for one user and window.
    """
    user_id: Optional[str]
    period: ReportPeriod
    stats: BasicStats
    trends: list[TrendPoint]
    distribution: MemoryDistribution
    efficiency: LearningEfficiency
    insights: list[Insight] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)
    projections: Optional[Projections] = None

    def to_dict(self) -> dict:
        """Plain, JSON-serialisable dict (timestamps as ISO-8601 strings)."""
        data = asdict(self)
        data["period"]["start"] = self.period.start.isoformat()
        data["period"]["end"] = self.period.end.isoformat()
        data["stats"]["quality_distribution"] = {
            str(bucket): count for bucket, count in self.stats.quality_distribution.items()
        }
        return data
