"""Locale-aware money substrings."""
from __future__ import annotations

import logging
from typing import List, Optional

from .dialect import TRADE_REPUBLIC, StatementDialect

logger = logging.getLogger(__name__)


def find_amounts(text: str, dialect: StatementDialect = TRADE_REPUBLIC) -> List[str]:
    """All money substrings (amount plus currency mark) in order of appearance."""
    return [m.group(0) for m in dialect.money_pattern.finditer(text)]


def parse_amount(text: Optional[str], dialect: StatementDialect = TRADE_REPUBLIC) -> Optional[float]:
    """Convert e.g. ``"1.101,46 €"`` to ``1101.46``.

    Returns ``None`` for empty input and for literals that do not form a
    number, the latter with a warning.
    """
    if text is None:
        return None
    cleaned = "".join(text.replace(dialect.currency_mark, "").replace("+", "").split())
    if not cleaned:
        return None
    if dialect.thousands_separator:
        cleaned = cleaned.replace(dialect.thousands_separator, "")
    cleaned = cleaned.replace(dialect.decimal_separator, ".")
    try:
        return float(cleaned)
    except ValueError:
        logger.warning(f"Malformed amount {text!r}", extra={"amount": text})
        return None
