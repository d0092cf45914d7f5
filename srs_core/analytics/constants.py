"""
Constants for analytics windows, horizons and rule thresholds.
"""

from __future__ import annotations

from typing import Final


DEFAULT_WINDOW_DAYS: Final[int] = 30
MAX_WINDOW_DAYS: Final[int] = 365

FORECAST_HORIZONS: Final[tuple[int, ...]] = (1, 7, 30, 90)
WORKLOAD_HORIZONS: Final[tuple[int, ...]] = (1, 7, 30)

# Memory distribution bucket lower edges (strength)
WEAK_STRENGTH: Final[float] = 0.2
GOOD_STRENGTH: Final[float] = 0.5
STRONG_STRENGTH: Final[float] = 0.8

# Mastery projection
RECENT_RATE_DAYS: Final[int] = 7
DEFAULT_REVIEWS_TO_MASTERY: Final[float] = 5.0
MASTERY_SAMPLE_SIZE: Final[int] = 10
MAX_MASTERY_CONFIDENCE: Final[float] = 0.8

# Quality thresholds (0-5 scale)
EXCELLENT_QUALITY: Final[float] = 4.5
POOR_QUALITY: Final[float] = 2.5
LOW_QUALITY_RECOMMENDATION: Final[float] = 3.0

# Streak thresholds (days)
EXCELLENT_STREAK: Final[int] = 21
HABIT_STREAK: Final[int] = 3

# Response time thresholds (ms)
FAST_RESPONSE_MS: Final[float] = 3000.0
SLOW_RESPONSE_MS: Final[float] = 15000.0

HIGH_LAPSE_RATE: Final[float] = 0.3
LOW_ANSWERS_PER_MINUTE: Final[float] = 2.0
HIGH_NEW_CARD_RATIO: Final[float] = 0.5

PRIORITY_ORDER: Final[dict[str, int]] = {"high": 0, "medium": 1, "low": 2}

MS_PER_MINUTE: Final[float] = 60_000.0
MS_PER_HOUR: Final[float] = 3_600_000.0
