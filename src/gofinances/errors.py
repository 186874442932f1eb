"""Exceptions raised by gofinances."""

from typing import Optional


class GoFinancesError(Exception):
    """Base class for all gofinances errors."""


class StoreUnavailableError(GoFinancesError):
    """The transaction store could not be read."""


class MalformedRecordError(GoFinancesError):
    """Stored data could not be parsed into transactions."""


class InvalidRecordError(MalformedRecordError):
    """A single transaction record has an invalid field."""

    def __init__(self, message: str, index: Optional[int] = None, field: str = ""):
        self.index = index
        self.field = field
        if index is not None:
            message = f"record {index}: {message}"
        super().__init__(message)


class UnknownLocaleError(GoFinancesError):
    """No formatting preset exists for the requested locale code."""
