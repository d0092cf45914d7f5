"""
Error types raised by the scheduling and analytics core.

Statistics over empty input are not errors: they come back as zeros.
"""

from __future__ import annotations


class SchedulingError(Exception):
    """Base class for errors raised by srs_core."""


class ValidationError(SchedulingError, ValueError):
    """Rejected input. Nothing was modified."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(SchedulingError, LookupError):
    """A card id is not present in the supplied collection."""

    def __init__(self, card_id: str):
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id
