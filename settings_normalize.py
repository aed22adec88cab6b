"""Turn raw page text into one logical record per line.

Some export tools emit a whole settings table as a single physical line, e.g.::

    1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts ...

Such blobs are recognised by shape and split after each field terminator so
that the line-oriented strategies see one record per line.
"""

from __future__ import annotations

import re
from typing import Sequence

NormalizedText = tuple[str, ...]

_LINE_ENDING_RE = re.compile(r"\r\n?")
_HSPACE_RE = re.compile(r"[^\S\n]+")
_DIGIT_THEN_WORD_RE = re.compile(r"\d+ ?[A-Za-z]+")

_BLOB_MAX_LINES = 3
_BLOB_MIN_LENGTH = 100
_BLOB_MARKER = "Cnts"

# (pattern, replacement) applied in order; every rule only consumes the single
# space that separates two records, so a second pass finds nothing to split.
_RECORD_SPLITS: list[tuple[re.Pattern, str]] = [
    (re.compile(r"\b(Cnts|Units) "), r"\1\n"),
    (re.compile(r"% ?(?=\d)"), "%\n"),
    (re.compile(r"\b(A|V|[Mm][Pp][Hh]) (?=\d)"), r"\1\n"),
    (re.compile(r" (?=F\.(?:No\.)? ?\d)"), "\n"),
]


def collapse_whitespace(text: str) -> str:
    """Normalise line endings and squeeze horizontal whitespace runs to one space."""
    return _HSPACE_RE.sub(" ", _LINE_ENDING_RE.sub("\n", text))


def is_single_line_blob(text: str) -> bool:
    """Return True if *text* looks like several records concatenated on few lines."""
    if text.count("\n") + 1 > _BLOB_MAX_LINES:
        return False
    if len(text) <= _BLOB_MIN_LENGTH:
        return False
    if _BLOB_MARKER not in text:
        return False
    return len(_DIGIT_THEN_WORD_RE.findall(text)) > 1


def split_records(text: str) -> str:
    """Insert a line break at every recognised record boundary in *text*."""
    for pattern, replacement in _RECORD_SPLITS:
        text = pattern.sub(replacement, text)
    return text


def normalize(text: str | Sequence[str] | None) -> NormalizedText:
    """Return the non-empty, trimmed logical lines of *text*.

    Accepts an already normalized line sequence as well, which makes
    ``normalize(normalize(x)) == normalize(x)`` hold. Never raises; anything
    that is not text yields an empty result.
    """
    if text is None:
        return ()
    if not isinstance(text, str):
        try:
            text = "\n".join(str(line) for line in text)
        except TypeError:
            return ()

    lines = _clean_lines(collapse_whitespace(text))
    joined = "\n".join(lines)
    if is_single_line_blob(joined):
        lines = _clean_lines(split_records(joined))
    return lines


def _clean_lines(text: str) -> NormalizedText:
    return tuple(line.strip() for line in text.split("\n") if line.strip())
