"""
Bank Statement Parser Package

Recovers the transaction ledger, with verified running balances, from the
flattened page text of a brokerage account statement.
"""

from .dialect import TRADE_REPUBLIC, StatementDialect, load_dialect
from .errors import DateAnchorError, DialectError, StatementParseError, UnknownMonthError
from .models import FlowDirection, LedgerEntry, TransactionRecord, TransactionType
from .reader import StatementReader

__version__ = "1.0.0"

__all__ = [
    "StatementReader",
    "StatementDialect",
    "TRADE_REPUBLIC",
    "load_dialect",
    "TransactionRecord",
    "LedgerEntry",
    "FlowDirection",
    "TransactionType",
    "StatementParseError",
    "DialectError",
    "DateAnchorError",
    "UnknownMonthError",
]
