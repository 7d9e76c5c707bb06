"""Account overview rows and their reconciliation against the ledger."""
from __future__ import annotations

import logging
from typing import List, Sequence

from .amounts import find_amounts, parse_amount
from .dialect import TRADE_REPUBLIC, StatementDialect
from .models import AccountSummary, TransactionRecord

logger = logging.getLogger(__name__)


def parse_account_summary(lines: Sequence[str],
                          dialect: StatementDialect = TRADE_REPUBLIC) -> List[AccountSummary]:
    """Read ``<product> <opening> <in> <out> <closing>`` rows."""
    summaries: List[AccountSummary] = []
    for line in lines:
        if line in dialect.table_headers:
            continue
        amounts = find_amounts(line, dialect)
        if len(amounts) < 4:
            continue
        product = line[: line.find(amounts[-4])].strip()
        opening, received, spent, closing = (parse_amount(a, dialect) for a in amounts[-4:])
        summaries.append(AccountSummary(product, opening, received, spent, closing))
    return summaries


def reconcile_summary(summary: AccountSummary, transactions: Sequence[TransactionRecord],
                      epsilon: float = TRADE_REPUBLIC.balance_epsilon) -> bool:
    """Compare the overview's opening/closing balances with the ledger ends.

    Returns True when both ends agree; each disagreement is logged.
    """
    if not transactions:
        return True

    ok = True
    first, last = transactions[0], transactions[-1]
    if summary.opening is not None and first.balance is not None:
        expected = summary.opening + (first.received or 0) - (first.spent or 0)
        if abs(expected - first.balance) > epsilon:
            ok = False
            logger.warning(
                f"{summary.product}: opening balance {summary.opening:.2f} does not lead to "
                f"first ledger balance {first.balance:.2f} (expected {expected:.2f})",
                extra={"expected": expected, "actual": first.balance},
            )
    if summary.closing is not None and last.balance is not None:
        if abs(summary.closing - last.balance) > epsilon:
            ok = False
            logger.warning(
                f"{summary.product}: closing balance {summary.closing:.2f} differs from "
                f"last ledger balance {last.balance:.2f}",
                extra={"expected": summary.closing, "actual": last.balance},
            )
    return ok
