"""Per-page text extraction from statement PDFs."""
from __future__ import annotations

import logging
import os
from typing import List

import pdfplumber

logger = logging.getLogger(__name__)


def extract_pages(pdf_path: str) -> List[str]:
    """Return one text blob per page, in document order."""
    if not os.path.exists(pdf_path):
        raise FileNotFoundError(f"File not found: {pdf_path}")

    pages: List[str] = []
    with pdfplumber.open(pdf_path) as pdf:
        for page in pdf.pages:
            pages.append(page.extract_text() or "")
    logger.info(f"Extracted {len(pages)} page(s) from {os.path.basename(pdf_path)}")
    return pages
