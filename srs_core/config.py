"""
Scheduler configuration.

SchedulerParams bundles the tunable constants from scheduling.constants into
one explicit, immutable object. Defaults come from the constants module;
overrides can be applied per call (SchedulerParams.updated) or read from
SRS_* environment variables (load_params_from_env).
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from typing import Optional

from dotenv import find_dotenv, load_dotenv

from srs_core.errors import ValidationError
from srs_core.scheduling import constants as c

logger = logging.getLogger(__name__)

ENV_PREFIX = "SRS_"


@dataclass(frozen=True)
class SchedulerParams:
    """Tunable scheduler parameters (ease, strength, intervals)."""
    min_ease: float = c.MIN_EASE
    max_ease: float = c.MAX_EASE
    initial_ease: float = c.INITIAL_EASE
    ease_bonus: float = c.EASE_BONUS
    ease_penalty: float = c.EASE_PENALTY
    hard_success_ease_penalty: float = c.HARD_SUCCESS_EASE_PENALTY
    passing_grade: float = c.PASSING_GRADE
    strength_gain: float = c.STRENGTH_GAIN
    failure_strength_cap: float = c.FAILURE_STRENGTH_CAP
    stability_growth: float = c.STABILITY_GROWTH
    relearning_interval_minutes: float = c.RELEARNING_INTERVAL_MINUTES
    review_threshold: float = c.REVIEW_THRESHOLD
    graduation_interval: float = c.GRADUATION_INTERVAL
    max_interval: float = c.MAX_INTERVAL

    @property
    def relearning_interval(self) -> float:
        """Relearning interval in days."""
        return self.relearning_interval_minutes / c.MINUTES_PER_DAY

    def updated(self, **overrides) -> "SchedulerParams":
        """
        Return a copy with the given fields replaced.

        Raises:
            ValidationError: unknown field or value outside its allowed range
        """
        for name, value in overrides.items():
            _check_param(name, value)
        params = replace(self, **overrides)
        if params.min_ease > params.max_ease:
            raise ValidationError("min_ease must not exceed max_ease", field="min_ease")
        if not params.min_ease <= params.initial_ease <= params.max_ease:
            raise ValidationError("initial_ease must lie within [min_ease, max_ease]", field="initial_ease")
        return params

    def to_dict(self) -> dict:
        return asdict(self)


# Allowed ranges for overrides (inclusive)
PARAM_BOUNDS: dict[str, tuple[float, float]] = {
    "min_ease": (1.0, 2.0),
    "max_ease": (2.5, 5.0),
    "initial_ease": (1.5, 3.0),
    "ease_bonus": (0.0, 0.5),
    "ease_penalty": (0.0, 0.5),
    "hard_success_ease_penalty": (0.0, 0.5),
    "passing_grade": (2, 4),
    "strength_gain": (0.0, 1.0),
    "failure_strength_cap": (0.0, 0.5),
    "stability_growth": (0.0, 1.0),
    "relearning_interval_minutes": (1, 1439),
    "review_threshold": (1.0, 10.0),
    "graduation_interval": (2.0, 60.0),
    "max_interval": (100, 36500),
}


def _check_param(name: str, value) -> None:
    if name not in PARAM_BOUNDS:
        raise ValidationError(f"Unknown scheduler parameter: {name}", field=name)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be a number", field=name)
    low, high = PARAM_BOUNDS[name]
    if not low <= value <= high:
        raise ValidationError(f"{name} must be between {low} and {high}, got {value}", field=name)


def load_params_from_env(base: Optional[SchedulerParams] = None) -> SchedulerParams:
    """
    Build SchedulerParams from SRS_* environment variables.

    A .env file in the working directory is loaded first (python-dotenv).
    Variables that are not set keep the value from `base` (or the defaults).

    Example:
        SRS_GRADUATION_INTERVAL=21 SRS_EASE_PENALTY=0.15
    """
    load_dotenv(find_dotenv(usecwd=True))
    base = base or SchedulerParams()

    overrides = {}
    for f in fields(SchedulerParams):
        raw = os.getenv(ENV_PREFIX + f.name.upper())
        if raw is None or raw.strip() == "":
            continue
        try:
            overrides[f.name] = float(raw)
        except ValueError as exc:
            raise ValidationError(
                f"{ENV_PREFIX}{f.name.upper()} must be a number, got {raw!r}", field=f.name
            ) from exc

    if overrides:
        logger.info("Scheduler parameters overridden from environment: %s", sorted(overrides))
    return base.updated(**overrides)
