# -*- coding: utf-8 -*-
"""segment.py
Turns the text between two date anchors into a ``TransactionRecord``.

A ledger row always ends with ``... amount balance``; any money substring
printed earlier belongs to the description (embedded prices and the like).
The parser never raises for row content it cannot classify: it returns the
best record it can and logs what looked wrong.
"""
from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional, Tuple

from .amounts import find_amounts, parse_amount
from .dialect import TRADE_REPUBLIC, StatementDialect
from .direction import determine_direction
from .models import FlowDirection, TransactionRecord

logger = logging.getLogger(__name__)


def find_category(segment: str, dialect: StatementDialect = TRADE_REPUBLIC) -> Tuple[Optional[str], bool]:
    """Return ``(category, known)`` for the token the segment starts with.

    A vocabulary entry only matches when it ends on a whitespace boundary, so
    "Handelsplatz" is not read as "Handel".  Without a match the first word
    is used and reported, since it means either a new category or a parser
    that lost its place.
    """
    for category in dialect.categories:
        if segment == category or segment.startswith(category) and segment[len(category)].isspace():
            return category, True

    words = segment.split()
    if not words:
        logger.warning("Empty transaction segment", extra={"category": None, "segment": segment})
        return None, False
    logger.warning(
        f"Unknown transaction category {words[0]!r}",
        extra={"category": words[0], "segment": segment},
    )
    return words[0], False


def extract_description(segment: str, category: Optional[str], amounts: List[str]) -> str:
    description = segment
    if category and description.startswith(category):
        description = description[len(category):]
    for amount in amounts:
        description = description.replace(amount, "", 1)
    return re.sub(r"\s+", " ", description).strip()


def parse_transaction_segment(segment: str, txn_date: date,
                              previous_balance: Optional[float] = None,
                              dialect: StatementDialect = TRADE_REPUBLIC,
                              line_index: int = 0) -> TransactionRecord:
    segment = segment.strip()
    amounts = find_amounts(segment, dialect)
    category, _ = find_category(segment, dialect)
    description = extract_description(segment, category, amounts) or None

    if len(amounts) < 2:
        logger.warning(
            f"Transaction segment on {txn_date} has {len(amounts)} money value(s), expected 2: {segment!r}",
            extra={"segment": segment},
        )
        return TransactionRecord(
            date=txn_date,
            category=category,
            description=description,
            received=None,
            spent=None,
            balance=None,
            line_index=line_index,
        )

    balance = parse_amount(amounts[-1], dialect)
    amount = parse_amount(amounts[-2], dialect)
    received = spent = None
    if amount is not None:
        direction = determine_direction(previous_balance, balance, category, dialect)
        if direction is FlowDirection.IN:
            received = abs(amount)
        else:
            spent = abs(amount)

    return TransactionRecord(
        date=txn_date,
        category=category,
        description=description,
        received=received,
        spent=spent,
        balance=balance,
        line_index=line_index,
    )
