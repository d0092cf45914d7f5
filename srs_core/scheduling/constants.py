"""
Scheduler Constants and Parameters

All tunable parameters for the SM-2 style scheduler in one place.
The numeric values are starting points, not requirements: they can be
overridden per call through config.SchedulerParams.
"""

from enum import Enum


# ---- Learning States ----

class LearningState(str, Enum):
    """Lifecycle stage of a card."""
    NEW = "NEW"                 # Never reviewed
    LEARNING = "LEARNING"       # Short intervals, not yet in long-term review
    REVIEW = "REVIEW"           # Regular spaced review
    RELEARNING = "RELEARNING"   # Failed a review, back on short intervals


class ItemDifficulty(str, Enum):
    """Difficulty label the session attaches to a review outcome."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# ---- Grades ----

MIN_QUALITY = 0
MAX_QUALITY = 5
PASSING_GRADE = 3  # quality >= 3 counts as a correct answer


# ---- Ease Factor ----

MIN_EASE = 1.3
MAX_EASE = 3.5
INITIAL_EASE = 2.5
EASE_BONUS = 0.10               # Max increase on a perfect answer
EASE_PENALTY = 0.20             # Decrease on a failed answer
HARD_SUCCESS_EASE_PENALTY = 0.05  # "hard" items shrink ease even when correct

# Scales the size of an ease change by item difficulty
EASE_BONUS_MULTIPLIER = {
    ItemDifficulty.EASY: 1.5,
    ItemDifficulty.MEDIUM: 1.0,
    ItemDifficulty.HARD: 0.0,   # replaced by HARD_SUCCESS_EASE_PENALTY
}
EASE_PENALTY_MULTIPLIER = {
    ItemDifficulty.EASY: 0.5,
    ItemDifficulty.MEDIUM: 1.0,
    ItemDifficulty.HARD: 1.5,
}


# ---- Memory Strength ----

INITIAL_STRENGTH = 0.5
STRENGTH_GAIN = 0.6             # Share of the gap to 1.0 closed by a perfect answer
FAILURE_STRENGTH_CAP = 0.3      # Strength after a failure never exceeds this
FAILURE_STRENGTH_DECAY = 0.5
MIN_DECAY_STRENGTH = 0.05       # Bounds reported by the decay model
MAX_DECAY_STRENGTH = 0.95


# ---- Stability ----

INITIAL_STABILITY = 1.0
STABILITY_GROWTH = 0.15         # +15% at quality 5
FAILURE_STABILITY_DECAY = 0.8
MIN_STABILITY = 0.5
MAX_STABILITY = 100.0


# ---- Intervals (days) ----

MINUTES_PER_DAY = 24 * 60
RELEARNING_INTERVAL_MINUTES = 10
INITIAL_INTERVAL = RELEARNING_INTERVAL_MINUTES / MINUTES_PER_DAY
MIN_SUCCESS_INTERVAL = 1.0      # At least one day after any success
REVIEW_THRESHOLD = 2.0          # LEARNING -> REVIEW once interval exceeds this
GRADUATION_INTERVAL = 14.0      # graduated once interval exceeds this
MAX_INTERVAL = 36500.0


# ---- Response Time / History Adjustments ----

FAST_RESPONSE_RATIO = 0.5
SLOW_RESPONSE_RATIO = 2.0
FAST_RESPONSE_BONUS = 1.1
FAST_RESPONSE_STRENGTH_BONUS = 0.05
SLOW_RESPONSE_DIFFICULTY_STEP = 0.1
MAX_DIFFICULTY_FACTOR = 2.0

STREAK_BONUS_START = 5          # Streaks longer than this earn longer intervals
STREAK_BONUS_STEP = 0.05
MAX_STREAK_BONUS = 0.3
LAPSE_PENALTY_STEP = 0.1        # Each lapse removes 10% of the interval growth
MAX_LAPSE_PENALTY = 0.5


# ---- Due-Card Queries ----

DEFAULT_DUE_LIMIT = 20
MAX_DUE_LIMIT = 100
MAX_BATCH_SIZE = 100
DEFAULT_OPTIMAL_HOURS = (9, 10, 19, 20)
