"""Removal of letterhead, legal footer and pagination lines."""
from __future__ import annotations

from typing import List, Sequence, Union

from .dialect import TRADE_REPUBLIC, StatementDialect

Pages = Union[str, Sequence[str]]


def as_pages(pages: Pages) -> List[str]:
    """A single page string is the one-element page sequence."""
    if isinstance(pages, str):
        return [pages]
    return list(pages)


def is_boilerplate(line: str, dialect: StatementDialect = TRADE_REPUBLIC) -> bool:
    trimmed = line.strip()
    if trimmed in dialect.boilerplate_lines:
        return True
    return any(p.match(trimmed) for p in dialect.footer_patterns)


def remove_boilerplate(pages: Pages, dialect: StatementDialect = TRADE_REPUBLIC) -> List[str]:
    """Drop known boilerplate lines from every page, page by page.

    The page structure is preserved, so the result can be fed back in
    unchanged.
    """
    return [
        "\n".join(line for line in page.split("\n") if not is_boilerplate(line, dialect))
        for page in as_pages(pages)
    ]
