"""Exceptions raised by StrideLog."""

from collections.abc import Iterable


class StrideLogError(Exception):
    """Base class for StrideLog errors."""


class ValidationError(StrideLogError, ValueError):
    """Raised when activity inputs fail validation.

    Attributes:
        fields: Names of the fields that failed, in the order checked.
    """

    def __init__(self, fields: Iterable[str], message: str | None = None) -> None:
        self.fields = tuple(fields)
        if message is None:
            message = f"Inputs have to be positive numbers, check: {', '.join(self.fields)}"
        super().__init__(message)


class RecordNotFound(StrideLogError, LookupError):
    """Raised when no record matches an id."""

    def __init__(self, record_id: str) -> None:
        self.record_id = record_id
        super().__init__(f"No activity with id '{record_id}'")
