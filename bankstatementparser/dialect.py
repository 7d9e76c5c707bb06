# -*- coding: utf-8 -*-
"""dialect.py
Closed vocabularies describing one family of statement layouts.

Nothing in the parsing stages knows about a particular bank: chapter
headings, repeated table headers, letterhead lines, footer patterns, month
spellings, the money pattern and the category tables are all read from a
``StatementDialect``.  ``TRADE_REPUBLIC`` is the built-in German dialect;
other dialects can be loaded from JSON with ``load_dialect``.
"""
from __future__ import annotations

import json
import re
from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet, Optional, Tuple

from .errors import DialectError
from .models import FlowDirection, TransactionType

# ---------------------------------------------------------------------------
# Built-in German vocabulary
# ---------------------------------------------------------------------------
CHAPTER_ACCOUNT_HOLDER = "KONTOINHABER"
CHAPTER_ACCOUNT_OVERVIEW = "KONTOÜBERSICHT"
CHAPTER_TRANSACTIONS_OVERVIEW = "UMSATZÜBERSICHT"
CHAPTER_CASH_OVERVIEW = "BARMITTELÜBERSICHT"
CHAPTER_TRANSACTION_OVERVIEW = "TRANSAKTIONSÜBERSICHT"
CHAPTER_NOTES = "HINWEISE ZUM KONTOAUSZUG"

HEADER_ACCOUNT = "PRODUKT ANFANGSSALDO ZAHLUNGSEINGANG ZAHLUNGSAUSGANG ENDSALDO"
HEADER_TRANSACTIONS = "DATUM TYP BESCHREIBUNG ZAHLUNGSEINGANG ZAHLUNGSAUSGANG SALDO"
HEADER_CASH = "DATUM ZAHLUNGSART GELDMARKTFONDS STÜCK KURS PRO STÜCK BETRAG"

BOILERPLATE_LINES = frozenset({
    "TRADE REPUBLIC BANK GMBH BRUNNENSTRASSE 19-21 10119 BERLIN",
    "Trade Republic Bank GmbH",
    "Brunnenstraße 19-21",
    "10119 Berlin",
    "www.traderepublic.com Sitz der Gesellschaft: Berlin",
    "AG Charlottenburg HRB 244347 B",
    "Umsatzsteuer-ID DE307510626",
    "Geschäftsführer",
    "Andreas Torner",
    "Gernot Mittendorfer",
    "Christian Hecker",
    "Thomas Pischke",
})

# "Erstellt am 06.11.2025, 18:01:02 Seite 5 von 10"
FOOTER_PATTERNS = (
    r"^Erstellt am \d{2}\.\d{2}\.\d{4}, \d{2}:\d{2}:\d{2} Seite \d+ von \d+$",
)

# Spellings without the trailing period; lookup strips one period first.
GERMAN_MONTHS = {
    "Jan": 0,
    "Feb": 1,
    "März": 2,
    "Mär": 2,
    "Apr": 3,
    "Mai": 4,
    "Jun": 5,
    "Juni": 5,
    "Jul": 6,
    "Juli": 6,
    "Aug": 7,
    "Sep": 8,
    "Sept": 8,
    "Okt": 9,
    "Nov": 10,
    "Dez": 11,
}

CATEGORY_DIRECTIONS = {
    "Erträge": FlowDirection.IN,
    "Überweisung": FlowDirection.IN,
    "Zinszahlung": FlowDirection.IN,
    "Prämie": FlowDirection.IN,
    "Steuern": FlowDirection.IN,
    "Empfehlung": FlowDirection.IN,
    "Handel": FlowDirection.OUT,
    "Kartentransaktion": FlowDirection.OUT,
    "Geschenk": FlowDirection.OUT,
}

CATEGORY_TYPES = {
    "Erträge": TransactionType.DIVIDEND,
    "Überweisung": TransactionType.DEPOSIT,
    "Zinszahlung": TransactionType.INTEREST,
    "Prämie": TransactionType.DEPOSIT,
    "Steuern": TransactionType.TAX,
    "Empfehlung": TransactionType.DEPOSIT,
    "Kartentransaktion": TransactionType.PAYMENT,
    "Geschenk": TransactionType.GIFT,
}

# Categories whose type depends on the direction (sale vs purchase)
TRADE_CATEGORIES = frozenset({"Handel"})

DAY_RE = r"^\d{1,2}$"
MONTH_RE = r"^[A-ZÄÖÜ][a-zäöüß]{2,3}\.?$"
YEAR_RE = r"^\d{4}$"
MONEY_RE = r"-?\d+(?:\.\d{3})*(?:,\d{2})?\s*€"
ISIN_RE = r"\b[A-Z]{2}[A-Z0-9]{9}\d\b"

BALANCE_EPSILON = 0.01


def _compile(pattern) -> re.Pattern:
    if isinstance(pattern, re.Pattern):
        return pattern
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise DialectError(f"Invalid pattern {pattern!r}: {exc}") from exc


@dataclass(frozen=True)
class StatementDialect:
    """Everything the parser needs to know about one statement layout."""

    name: str
    holder_chapter: str
    ledger_chapter: str
    summary_chapter: Optional[str]
    chapters: FrozenSet[str]
    table_headers: FrozenSet[str]
    ledger_header: str
    boilerplate_lines: FrozenSet[str]
    footer_patterns: Tuple[re.Pattern, ...]
    months: Dict[str, int]
    categories: Dict[str, FlowDirection]
    category_types: Dict[str, TransactionType] = field(default_factory=dict)
    trade_categories: FrozenSet[str] = frozenset()
    day_pattern: re.Pattern = field(default_factory=lambda: re.compile(DAY_RE))
    month_pattern: re.Pattern = field(default_factory=lambda: re.compile(MONTH_RE))
    year_pattern: re.Pattern = field(default_factory=lambda: re.compile(YEAR_RE))
    money_pattern: re.Pattern = field(default_factory=lambda: re.compile(MONEY_RE))
    isin_pattern: re.Pattern = field(default_factory=lambda: re.compile(ISIN_RE))
    thousands_separator: str = "."
    decimal_separator: str = ","
    currency_mark: str = "€"
    currency: str = "EUR"
    balance_epsilon: float = BALANCE_EPSILON

    def __post_init__(self):
        if self.ledger_chapter not in self.chapters:
            raise DialectError(f"Ledger chapter {self.ledger_chapter!r} is not a chapter heading")
        if self.summary_chapter and self.summary_chapter not in self.chapters:
            raise DialectError(f"Summary chapter {self.summary_chapter!r} is not a chapter heading")
        for month, ordinal in self.months.items():
            if not 0 <= ordinal <= 11:
                raise DialectError(f"Month {month!r} maps to {ordinal}, expected 0-11")

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------
    def month_ordinal(self, token: str) -> Optional[int]:
        """Return 0-11 for a month spelling, with or without a trailing period."""
        token = token.strip()
        if token in self.months:
            return self.months[token]
        if token.endswith("."):
            return self.months.get(token[:-1])
        return None

    def direction_for(self, category: Optional[str]) -> FlowDirection:
        # Categories outside the table count as outgoing.
        return self.categories.get(category, FlowDirection.OUT)

    @property
    def incoming_categories(self) -> Tuple[str, ...]:
        return tuple(c for c, d in self.categories.items() if d is FlowDirection.IN)

    @property
    def outgoing_categories(self) -> Tuple[str, ...]:
        return tuple(c for c, d in self.categories.items() if d is FlowDirection.OUT)

    # ------------------------------------------------------------------
    # JSON support
    # ------------------------------------------------------------------
    @classmethod
    def from_dict(cls, data: dict, base: Optional["StatementDialect"] = None) -> "StatementDialect":
        """Build a dialect from plain JSON data.

        Keys that are missing keep the value of ``base`` (the built-in
        dialect by default).  Patterns are given as strings, directions as
        ``"in"``/``"out"`` and transaction types by their value.
        """
        base = base or TRADE_REPUBLIC
        changes = {}

        for key in ("name", "holder_chapter", "ledger_chapter", "summary_chapter",
                    "ledger_header", "thousands_separator", "decimal_separator",
                    "currency_mark", "currency"):
            if key in data:
                changes[key] = data[key]
        for key in ("chapters", "table_headers", "boilerplate_lines", "trade_categories"):
            if key in data:
                changes[key] = frozenset(data[key])
        if "footer_patterns" in data:
            changes["footer_patterns"] = tuple(_compile(p) for p in data["footer_patterns"])
        for key in ("day_pattern", "month_pattern", "year_pattern", "money_pattern", "isin_pattern"):
            if key in data:
                changes[key] = _compile(data[key])
        if "months" in data:
            changes["months"] = {str(k): int(v) for k, v in data["months"].items()}
        if "balance_epsilon" in data:
            changes["balance_epsilon"] = float(data["balance_epsilon"])

        if "categories" in data:
            try:
                changes["categories"] = {k: FlowDirection(v) for k, v in data["categories"].items()}
            except ValueError as exc:
                raise DialectError(f"Invalid flow direction in categories: {exc}") from exc
        if "category_types" in data:
            try:
                changes["category_types"] = {k: TransactionType(v) for k, v in data["category_types"].items()}
            except ValueError as exc:
                raise DialectError(f"Invalid transaction type in category_types: {exc}") from exc

        return replace(base, **changes)


def load_dialect(path: str) -> StatementDialect:
    """Read a dialect definition from a JSON file."""
    with open(path, encoding="utf-8") as fh:
        try:
            data = json.load(fh)
        except json.JSONDecodeError as exc:
            raise DialectError(f"{path}: not valid JSON ({exc})") from exc
    if not isinstance(data, dict):
        raise DialectError(f"{path}: expected a JSON object")
    return StatementDialect.from_dict(data)


TRADE_REPUBLIC = StatementDialect(
    name="trade-republic",
    holder_chapter=CHAPTER_ACCOUNT_HOLDER,
    ledger_chapter=CHAPTER_TRANSACTIONS_OVERVIEW,
    summary_chapter=CHAPTER_ACCOUNT_OVERVIEW,
    chapters=frozenset({
        CHAPTER_ACCOUNT_OVERVIEW,
        CHAPTER_TRANSACTIONS_OVERVIEW,
        CHAPTER_CASH_OVERVIEW,
        CHAPTER_TRANSACTION_OVERVIEW,
        CHAPTER_NOTES,
    }),
    table_headers=frozenset({HEADER_ACCOUNT, HEADER_TRANSACTIONS, HEADER_CASH}),
    ledger_header=HEADER_TRANSACTIONS,
    boilerplate_lines=BOILERPLATE_LINES,
    footer_patterns=tuple(_compile(p) for p in FOOTER_PATTERNS),
    months=GERMAN_MONTHS,
    categories=CATEGORY_DIRECTIONS,
    category_types=CATEGORY_TYPES,
    trade_categories=TRADE_CATEGORIES,
)
