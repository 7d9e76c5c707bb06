# -*- coding: utf-8 -*-
"""direction.py
Inflow/outflow decision and running-balance continuity check.

The printed balance movement is the authoritative signal: a trade category
can be a purchase or a sale, so the category table is only consulted when
there is no previous balance to compare against.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .dialect import BALANCE_EPSILON, TRADE_REPUBLIC, StatementDialect
from .models import FlowDirection, TransactionRecord

logger = logging.getLogger(__name__)


def determine_direction(previous_balance: Optional[float], balance: Optional[float],
                        category: Optional[str],
                        dialect: StatementDialect = TRADE_REPUBLIC) -> FlowDirection:
    if previous_balance is not None and balance is not None:
        # An unchanged balance counts as outflow; the validator reports it.
        return FlowDirection.IN if balance > previous_balance else FlowDirection.OUT
    return dialect.direction_for(category)


@dataclass(frozen=True)
class BalanceMismatch:
    transaction: TransactionRecord
    previous: float
    expected: float
    actual: float


def validate_balance(transaction: TransactionRecord, previous_balance: Optional[float],
                     epsilon: float = BALANCE_EPSILON) -> Optional[BalanceMismatch]:
    """Check ``previous + received - spent == balance`` within ``epsilon``.

    Nothing to check for the opening row.  A mismatch is logged as a warning
    and returned; it never interrupts processing.
    """
    if previous_balance is None or transaction.balance is None:
        return None

    expected = previous_balance + (transaction.received or 0) - (transaction.spent or 0)
    if abs(expected - transaction.balance) <= epsilon:
        return None

    if transaction.received is not None:
        movement = f"+ {transaction.received:.2f}"
    else:
        movement = f"- {(transaction.spent or 0):.2f}"
    logger.warning(
        f"Balance calculation error on {transaction.date}: {previous_balance:.2f} {movement} "
        f"= {expected:.2f}, but statement balance is {transaction.balance:.2f}",
        extra={"transaction": transaction, "expected": expected, "actual": transaction.balance},
    )
    return BalanceMismatch(transaction, previous_balance, expected, transaction.balance)
