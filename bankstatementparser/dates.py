# -*- coding: utf-8 -*-
"""dates.py
Recognition of calendar dates spread over several physical lines.

The text extractor flattens the date column of the ledger in one of two ways,
depending on page geometry::

    two-line layout            three-line layout
    ---------------            -----------------
    09 Juli                    1
    2021 Erträge ...           Feb.
                               2021

``try_parse_date`` is a pure function of ``(lines, index)``; it never
consumes a line that does not belong to a date.
"""
from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from .dialect import TRADE_REPUBLIC, StatementDialect
from .errors import DateAnchorError, UnknownMonthError
from .models import DateAnchor


def to_date(year: str, month: str, day: str, dialect: StatementDialect = TRADE_REPUBLIC,
            index: Optional[int] = None) -> date:
    """Build a ``date`` from the three raw tokens.

    Raises ``UnknownMonthError`` when the month is not in the month table and
    ``DateAnchorError`` for an impossible day such as 31 Feb.
    """
    ordinal = dialect.month_ordinal(month)
    if ordinal is None:
        raise UnknownMonthError(month, index)
    try:
        return date(int(year), ordinal + 1, int(day))
    except ValueError as exc:
        raise DateAnchorError(f"Invalid date {day} {month} {year}: {exc}", index) from exc


def try_parse_date(lines: Sequence[str], index: int,
                   dialect: StatementDialect = TRADE_REPUBLIC) -> Optional[DateAnchor]:
    """Return the date anchor starting at ``lines[index]`` or ``None``."""
    if index >= len(lines):
        return None

    parts = lines[index].split()
    if not parts or not dialect.day_pattern.match(parts[0]):
        return None
    day = parts[0]

    # "Day Month" on this line, year first on the next one
    if len(parts) == 2 and dialect.month_pattern.match(parts[1]) and index + 1 < len(lines):
        next_parts = lines[index + 1].split()
        if next_parts and dialect.year_pattern.match(next_parts[0]):
            rest = " ".join(next_parts[1:])
            return DateAnchor(
                date=to_date(next_parts[0], parts[1], day, dialect, index),
                index=index,
                next_index=index + 2,
                rest=rest or None,
            )

    # Day, month and year each on their own line
    if len(parts) == 1 and index + 2 < len(lines):
        month = lines[index + 1].strip()
        year = lines[index + 2].strip()
        if dialect.month_pattern.match(month) and dialect.year_pattern.match(year):
            return DateAnchor(
                date=to_date(year, month, day, dialect, index),
                index=index,
                next_index=index + 3,
            )

    return None
