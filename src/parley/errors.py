"""Application-level exception types for parley."""

from __future__ import annotations


class ParleyError(Exception):
    """Base exception for parley."""


class InvalidTurnError(ParleyError, ValueError):
    """Raised when a turn is missing its activity or the activity has no type."""


class ActivityFormatError(ParleyError, ValueError):
    """Raised when serialized input cannot be read as an activity."""

    def __init__(self, source: str, reason: str) -> None:
        super().__init__(f"{source}: {reason}")
        self.source = source
        self.reason = reason
