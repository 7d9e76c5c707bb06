# -*- coding: utf-8 -*-
"""chapters.py
Single-pass segmentation of a statement into named chapters.

Pages are flattened into one line stream first because chapters and table
rows routinely straddle page breaks.  The column header of a table is
reprinted on every page; only its first occurrence inside a chapter is kept.
"""
from __future__ import annotations

from typing import Iterator, List

from .dialect import TRADE_REPUBLIC, StatementDialect
from .models import Chapter
from .sanitizer import Pages, as_pages


def iter_lines(pages: Pages) -> Iterator[str]:
    """Yield the trimmed, non-empty lines of all pages in document order."""
    for page in as_pages(pages):
        for line in page.split("\n"):
            line = line.strip()
            if line:
                yield line


def iter_chapters(pages: Pages, dialect: StatementDialect = TRADE_REPUBLIC) -> Iterator[Chapter]:
    """Lazily yield ``Chapter`` objects; empty chapters are never emitted."""
    current = Chapter(dialect.holder_chapter)
    header_seen = False

    for line in iter_lines(pages):
        if line in dialect.chapters:
            if current.lines:
                yield current
            current = Chapter(line)
            header_seen = False
        elif line in dialect.table_headers:
            if not header_seen:
                current.lines.append(line)
                header_seen = True
        else:
            current.lines.append(line)

    if current.lines:
        yield current


def split_chapters(pages: Pages, dialect: StatementDialect = TRADE_REPUBLIC) -> List[Chapter]:
    return list(iter_chapters(pages, dialect))
