"""Exceptions for aiochain."""

from typing import Self


class AiochainError(Exception):
    """Base aiochain error."""


class EmptySequenceError(AiochainError, ValueError):
    """Sequence has no element that qualifies for the requested operation."""

    def __init__(self, message: str = "Sequence contains no elements") -> None:
        """Initialize the empty sequence error."""
        super().__init__(message)

    @classmethod
    def no_matching_element(cls) -> Self:
        """Create the error raised when elements exist but none satisfies the predicate."""
        return cls("Sequence contains no matching element")


class StageReentryError(AiochainError, RuntimeError):
    """Stage iterator was pulled while a previous pull was still in progress."""

    def __init__(self, message: str) -> None:
        """Initialize the stage reentry error."""
        super().__init__(message)
