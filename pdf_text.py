"""Page text provider: turns an export file into RawPageText values.

PDF exports are read through pdfplumber. Their text items are frequently
emitted out of visual order, so rows are rebuilt from page.chars: characters
whose tops lie within a small tolerance share a row, rows run top to bottom,
characters left to right, and a horizontal gap wider than the surrounding
glyphs becomes a space.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path

import pdfplumber

from settings_models import RawPageText

logging.getLogger("pdfminer").setLevel(logging.ERROR)
warnings.filterwarnings("ignore", module="pdfminer")

logger = logging.getLogger(__name__)

_ROW_TOLERANCE = 3.0
_GAP_FACTOR = 1.5
_MIN_GAP = 4.0
_PAGE_BREAK = "\f"


def chars_to_rows(chars: list[dict], y_tolerance: float = _ROW_TOLERANCE) -> list[str]:
    """Group pdfplumber character dicts into visual text rows."""
    rows: list[list[dict]] = []
    row_top = 0.0
    for c in sorted(chars, key=lambda c: (c["top"], c["x0"])):
        if rows and c["top"] - row_top <= y_tolerance:
            rows[-1].append(c)
        else:
            rows.append([c])
            row_top = c["top"]

    texts = (_row_text(row) for row in rows)
    return [t for t in texts if t]


def _row_text(row: list[dict]) -> str:
    text = ""
    prev: dict | None = None
    for c in sorted(row, key=lambda c: c["x0"]):
        if prev is not None and text and not text.endswith(" "):
            width = prev["x1"] - prev["x0"]
            if c["x0"] - prev["x1"] > max(width * _GAP_FACTOR, _MIN_GAP):
                text += " "
        text += c["text"]
        prev = c
    return text.strip()


def read_pdf_pages(path: str | Path) -> list[RawPageText]:
    """Return one RawPageText per page of the PDF at *path*.

    Pages without a text layer (scans) come back with empty text.
    """
    pages: list[RawPageText] = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            rows = chars_to_rows(page.chars)
            if not rows:
                logger.info("page %d has no extractable text", page.page_number)
            pages.append(RawPageText(page_index=page.page_number, text="\n".join(rows)))
    return pages


def read_text_pages(path: str | Path) -> list[RawPageText]:
    """Read a plain-text export: one page, or one per form-feed separated chunk."""
    content = Path(path).read_text(encoding="utf-8", errors="replace")
    return [
        RawPageText(page_index=i, text=chunk)
        for i, chunk in enumerate(content.split(_PAGE_BREAK), 1)
    ]


def load_pages(path: str | Path) -> list[RawPageText]:
    """Dispatch on the file suffix: PDFs through pdfplumber, anything else as text."""
    if Path(path).suffix.lower() == ".pdf":
        return read_pdf_pages(path)
    return read_text_pages(path)
