"""Exceptions raised by the statement parser."""
from __future__ import annotations



class StatementParseError(ValueError):
    """Base class for everything the parser refuses to guess about."""


class DialectError(StatementParseError):
    """A statement dialect definition is incomplete or inconsistent."""


class DateAnchorError(StatementParseError):
    """A date-shaped anchor could not be turned into a calendar date."""

    def __init__(self, message: str, index: int | None = None):
        super().__init__(message)
        self.index = index


class UnknownMonthError(DateAnchorError):
    """The month token looks like a month but is not in the month table."""

    def __init__(self, month: str, index: int | None = None):
        super().__init__(f"Unknown month name: {month!r}", index)
        self.month = month
