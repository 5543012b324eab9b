"""Exceptions raised by the quiz core."""

from __future__ import annotations

__all__ = [
    "QuizError",
    "InsufficientPoolError",
    "InvalidStateError",
]


class QuizError(RuntimeError):
    """Base class for quiz session failures."""


class InsufficientPoolError(QuizError):
    """Raised when the face pool cannot supply the requested items.

    This signals a misconfigured asset pool; callers abort the session instead
    of retrying.
    """

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"Face pool has {available} item(s) but {requested} are required."
        )
        self.requested = requested
        self.available = available


class InvalidStateError(QuizError):
    """Raised when an operation is invoked in a phase that forbids it."""
