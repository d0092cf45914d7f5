"""
Pydantic models for review outcomes.

A ReviewOutcome is what the session driver reports for one displayed item.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from srs_core.errors import ValidationError
from srs_core.scheduling.constants import MAX_QUALITY, MIN_QUALITY, ItemDifficulty


class ReviewOutcome(BaseModel):
    """Result of one review attempt."""
    model_config = ConfigDict(frozen=True)

    quality: float = Field(..., ge=MIN_QUALITY, le=MAX_QUALITY, description="Recall quality, 0-5")
    is_correct: Optional[bool] = Field(
        default=None,
        description="Explicit pass/fail; derived from quality when omitted",
    )
    response_time: float = Field(default=0.0, ge=0, description="Response time in ms")
    difficulty: ItemDifficulty = ItemDifficulty.MEDIUM
    reviewed_at: Optional[datetime] = Field(
        default=None,
        description="When the review happened; defaults to now",
    )

    @field_validator("response_time", mode="before")
    @classmethod
    def _none_response_time(cls, value):
        return 0.0 if value is None else value

    def passed(self, passing_grade: float) -> bool:
        if self.is_correct is not None:
            return self.is_correct
        return self.quality >= passing_grade


OutcomeInput = Union[ReviewOutcome, Mapping[str, Any]]


def validate_outcome(outcome: OutcomeInput) -> ReviewOutcome:
    """
    Coerce a mapping (or pass through a ReviewOutcome) into a validated outcome.

    Raises:
        ValidationError: quality outside [0, 5], negative response time,
            unknown difficulty label, or a missing quality
    """
    if isinstance(outcome, ReviewOutcome):
        return outcome
    if not isinstance(outcome, Mapping):
        raise ValidationError(f"Outcome must be a ReviewOutcome or mapping, got {type(outcome).__name__}")
    try:
        return ReviewOutcome.model_validate(dict(outcome))
    except PydanticValidationError as exc:
        first = exc.errors()[0]
        field_name = ".".join(str(part) for part in first.get("loc", ())) or None
        raise ValidationError(f"Invalid review outcome: {first.get('msg')}", field=field_name) from exc
