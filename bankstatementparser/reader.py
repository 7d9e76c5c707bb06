# -*- coding: utf-8 -*-
"""reader.py
Statement reader: raw page texts in, transaction records out.

Stages, leaves first::

    remove_boilerplate -> iter_chapters -> process_transactions
                                        -> parse_account_summary

``StatementReader`` wires the stages together for one dialect and adds the
normalized ``LedgerEntry`` view and the DataFrame/CSV/Excel export used by
the command line.  A reader keeps no state between calls, so one instance
can be reused for any number of statements.
"""
from __future__ import annotations

import logging
import os
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd

from .chapters import iter_chapters
from .dialect import TRADE_REPUBLIC, StatementDialect
from .extract import extract_pages
from .ledger import process_transactions
from .models import LedgerEntry, ParsedStatement, TransactionRecord, TransactionType
from .sanitizer import Pages, remove_boilerplate
from .summary import parse_account_summary, reconcile_summary

logger = logging.getLogger(__name__)

HeaderList = ["Date", "Type", "Description", "Money in", "Money out", "Balance", "Amount", "Currency"]

# Types that downstream portfolio tools can only book against a security
SECURITY_TYPES = {TransactionType.BUY, TransactionType.SELL, TransactionType.DIVIDEND}


class StatementReader:
    def __init__(self, dialect: StatementDialect = TRADE_REPUBLIC, source: str = "trade-republic-pdf"):
        self.dialect = dialect
        self.source = source

    # ------------------------------------------------------------------
    # Parsing
    # ------------------------------------------------------------------
    def parse(self, pages: Pages) -> ParsedStatement:
        """Parse one statement given as page texts (or a single string)."""
        result = ParsedStatement()
        for chapter in iter_chapters(remove_boilerplate(pages, self.dialect), self.dialect):
            if chapter.name == self.dialect.ledger_chapter:
                result.transactions.extend(process_transactions(chapter.lines, self.dialect))
            elif chapter.name == self.dialect.summary_chapter:
                result.summaries.extend(parse_account_summary(chapter.lines, self.dialect))

        if result.summaries and result.transactions:
            reconcile_summary(result.summaries[0], result.transactions, self.dialect.balance_epsilon)
        return result

    def read_transactions(self, pages: Pages) -> List[LedgerEntry]:
        """Parse and normalize; entries failing validation are dropped."""
        entries = []
        for record in self.parse(pages).transactions:
            entry = self.to_entry(record)
            if self._is_valid(entry):
                entries.append(entry)
        logger.info(f"Successfully parsed {len(entries)} transactions")
        return entries

    # ------------------------------------------------------------------
    # Normalization
    # ------------------------------------------------------------------
    def classify(self, record: TransactionRecord) -> TransactionType:
        """Map a statement category onto a ``TransactionType``.

        Trade categories depend on the direction: money received means a
        sale, anything else a purchase.
        """
        category = record.category
        if not category:
            return TransactionType.FEE
        if category in self.dialect.category_types:
            return self.dialect.category_types[category]
        if category in self.dialect.trade_categories:
            return TransactionType.SELL if record.received else TransactionType.BUY

        logger.warning(f"Unmapped transaction category {category!r}, defaulting to fee",
                       extra={"category": category})
        return TransactionType.FEE

    def find_isin(self, text: Optional[str]) -> Optional[str]:
        if not text:
            return None
        m = self.dialect.isin_pattern.search(text)
        return m.group(0) if m else None

    def to_entry(self, record: TransactionRecord) -> LedgerEntry:
        amount = record.amount
        return LedgerEntry(
            type=self.classify(record),
            date=record.date,
            name=record.description,
            amount=amount if amount is not None else 0.0,
            currency=self.dialect.currency,
            isin=self.find_isin(record.description),
            category=record.category,
            source=self.source,
        )

    def _is_valid(self, entry: LedgerEntry) -> bool:
        if entry.type in SECURITY_TYPES and not entry.isin:
            logger.error(f"Missing ISIN for {entry.type.value} on {entry.date}: {entry.name!r}",
                         extra={"entry": entry})
            return False
        return True

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------
    def to_dataframe(self, records: Iterable[TransactionRecord]) -> pd.DataFrame:
        rows = []
        for record in records:
            rows.append({
                "Date": record.date,
                "Type": self.classify(record).value,
                "Description": record.description,
                "Money in": record.received,
                "Money out": record.spent,
                "Balance": record.balance,
                "Currency": self.dialect.currency,
            })

        df = pd.DataFrame(rows, columns=HeaderList)
        money_in = pd.to_numeric(df["Money in"], errors="coerce")
        money_out = pd.to_numeric(df["Money out"], errors="coerce")
        df["Amount"] = np.where(
            money_in.isna() & money_out.isna(),
            np.nan,
            money_in.fillna(0.0) - money_out.fillna(0.0),
        )
        return df

    def convert(self, pdf_paths: List[str], output_path: str) -> pd.DataFrame:
        """Parse several statement PDFs and write one CSV or Excel file."""
        frames = []
        for path in pdf_paths:
            logger.info(f"Reading PDF from: {path}")
            parsed = self.parse(extract_pages(path))
            df = self.to_dataframe(parsed.transactions)
            df["Source file"] = os.path.basename(path)
            frames.append(df)

        if frames:
            combined = pd.concat(frames, ignore_index=True)
        else:
            combined = pd.DataFrame(columns=HeaderList + ["Source file"])

        if output_path.lower().endswith(".xlsx"):
            with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
                combined.to_excel(writer, sheet_name="Transactions", index=False)
        else:
            combined.to_csv(output_path, index=False)
        logger.info(f"Wrote {len(combined)} row(s) to {output_path}")
        return combined
