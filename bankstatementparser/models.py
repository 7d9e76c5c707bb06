# -*- coding: utf-8 -*-
"""Value objects shared by the parsing stages."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class FlowDirection(Enum):
    IN = "in"
    OUT = "out"


class TransactionType(Enum):
    BUY = "buy"
    SELL = "sell"
    DIVIDEND = "dividend"
    INTEREST = "interest"
    FEE = "fee"
    TAX = "tax"
    PAYMENT = "payment"
    TRANSFER = "transfer"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    GIFT = "gift"


@dataclass(frozen=True)
class DateAnchor:
    """A calendar date recognised at ``index`` in a line stream.

    ``next_index`` is where the transaction body starts.  ``rest`` holds the
    text that shared the year's physical line, if any.
    """

    date: date
    index: int
    next_index: int
    rest: Optional[str] = None


@dataclass
class Chapter:
    name: str
    lines: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TransactionRecord:
    """One row of the transaction ledger, exactly as the statement printed it."""

    date: date
    category: Optional[str]
    description: Optional[str]
    received: Optional[float]
    spent: Optional[float]
    balance: Optional[float]
    line_index: int = 0

    @property
    def amount(self) -> Optional[float]:
        """Signed cash effect: received is positive, spent negative."""
        if self.received is not None:
            return self.received
        if self.spent is not None:
            return -self.spent
        return None

    @property
    def direction(self) -> Optional[FlowDirection]:
        if self.received is not None:
            return FlowDirection.IN
        if self.spent is not None:
            return FlowDirection.OUT
        return None


@dataclass(frozen=True)
class AccountSummary:
    product: str
    opening: Optional[float]
    received: Optional[float]
    spent: Optional[float]
    closing: Optional[float]


@dataclass(frozen=True)
class LedgerEntry:
    """Normalized transaction handed to downstream formatters."""

    type: TransactionType
    date: date
    name: Optional[str]
    amount: float
    currency: str
    isin: Optional[str] = None
    category: Optional[str] = None
    source: Optional[str] = None


@dataclass
class ParsedStatement:
    transactions: List[TransactionRecord] = field(default_factory=list)
    summaries: List[AccountSummary] = field(default_factory=list)
