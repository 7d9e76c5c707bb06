# -*- coding: utf-8 -*-
"""ledger.py
Transaction table processor for the ledger chapter.

Walks the chapter's lines looking for date anchors.  Everything between two
anchors is one transaction segment; its lines are joined with single spaces
because the extractor wraps rows at arbitrary points.  The running balance is
carried from row to row so that the direction of each amount can be read
from the balance movement and the arithmetic can be checked.
"""
from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .dates import try_parse_date
from .dialect import TRADE_REPUBLIC, StatementDialect
from .direction import validate_balance
from .errors import DateAnchorError
from .models import DateAnchor, TransactionRecord
from .segment import parse_transaction_segment

logger = logging.getLogger(__name__)


def process_transactions(lines: Sequence[str],
                         dialect: StatementDialect = TRADE_REPUBLIC) -> List[TransactionRecord]:
    """Extract the ledger rows of one chapter, in statement order.

    A date-shaped anchor that is not a valid date (unknown month, impossible
    day) ends the chapter: the segment in progress is closed at that line and
    everything parsed so far is returned.
    """
    start = 1 if lines and lines[0] == dialect.ledger_header else 0

    transactions: List[TransactionRecord] = []
    previous_balance: Optional[float] = None
    failure: Optional[DateAnchorError] = None
    i = start

    while i < len(lines) and failure is None:
        try:
            anchor = try_parse_date(lines, i, dialect)
        except DateAnchorError as exc:
            failure = exc
            break
        if anchor is None:
            # Stray line outside any segment
            i += 1
            continue

        body: List[str] = [anchor.rest] if anchor.rest else []
        j = anchor.next_index
        while j < len(lines):
            try:
                next_anchor: Optional[DateAnchor] = try_parse_date(lines, j, dialect)
            except DateAnchorError as exc:
                failure = exc
                break
            if next_anchor is not None:
                break
            body.append(lines[j])
            j += 1

        transaction = parse_transaction_segment(
            " ".join(body), anchor.date, previous_balance, dialect, line_index=anchor.index
        )
        validate_balance(transaction, previous_balance, dialect.balance_epsilon)
        transactions.append(transaction)
        previous_balance = transaction.balance
        i = j

    if failure is not None:
        logger.error(
            f"Aborting ledger chapter at line {failure.index}: {failure}; "
            f"keeping {len(transactions)} transaction(s) parsed so far",
            extra={"index": failure.index},
        )

    logger.info(f"Extracted {len(transactions)} transaction(s) from ledger chapter")
    return transactions
