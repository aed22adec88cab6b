"""Extraction strategies, listed in the order the cascade trusts them.

Every strategy maps normalized lines to a list of unvalidated candidates. None
of them consults another strategy or keeps state between calls; precedence
between them is decided later, when candidates are merged.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Iterable

from settings_models import Candidate
from settings_normalize import NormalizedText

# "F.No. 12", "F.12", "F 12", "F12"
_FN_PREFIX = r"\b[Ff]\.?\s*(?:[Nn][Oo]\.?)?\s*"
_UNIT_TOKENS = r"(?:Cnts|Counts|Units|Amps|Volts|[Mm][Pp][Hh]|A|V|%)"

# Digit runs longer than this are never converted to int.
_MAX_DIGITS = 6


class ExtractionStrategy(ABC):
    """One way of reading function/value pairs out of normalized text."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Stable identifier recorded on every candidate."""

    @abstractmethod
    def extract(self, lines: NormalizedText) -> list[Candidate]:
        """Return candidates found in *lines*; an empty list when nothing matches."""

    def _candidate(self, function_text: str, value_text: str, evidence: str) -> Candidate | None:
        """Build a candidate, or None when either number is too long to be a setting."""
        if len(function_text) > _MAX_DIGITS or len(value_text) > _MAX_DIGITS:
            return None
        return Candidate(
            function_number=int(function_text),
            value=int(value_text),
            strategy=self.name,
            evidence=evidence.strip(),
        )


# ---------------------------------------------------------------------------
# 1. Structured table
# ---------------------------------------------------------------------------

_LABELLED_ROW_RE = re.compile(
    _FN_PREFIX
    + r"(\d+)\b\s*[:\-]?\s*((?:(?!" + _FN_PREFIX + r"\d).)*?)\s*\bCounts?\b\s*[:=]?\s*(\d+)"
    + r"(?:\s*\bValue\b\s*[:=]?\s*(\d+))?",
    re.IGNORECASE,
)
_TABLE_HEADER_RE = re.compile(r"F\.?\s*No\b.*\b(?:Counts|Cnts)\b", re.IGNORECASE)
_TABLE_ROW_RE = re.compile(
    r"^(?:" + _FN_PREFIX + r")?(\d+)\s+([A-Za-z(][^\n]*?)\s+(\d+)(?:\s+(\d+))?"
    + r"(?:\s*(?:Cnts|Counts|Units))?$",
    re.IGNORECASE,
)


class StructuredTableStrategy(ExtractionStrategy):
    """Rows carrying a function number, a description, counts and a value.

    Two shapes are recognised: self-labelled rows
    (``F.No.1 MPH Scaling Counts: 100 Value: 100``) anywhere on the page,
    and bare rows (``1 MPH Scaling 100 100``) below a header line naming
    both ``F.No`` and ``Counts``. The trailing value figure wins over the
    counts figure when a row shows both.
    """

    name = "structured_table"

    def extract(self, lines: NormalizedText) -> list[Candidate]:
        found: list[Candidate] = []
        in_table = False
        for line in lines:
            labelled = list(_LABELLED_ROW_RE.finditer(line))
            if labelled:
                for m in labelled:
                    candidate = self._candidate(m.group(1), m.group(4) or m.group(3), m.group(0))
                    if candidate is not None:
                        found.append(candidate)
                continue

            if _TABLE_HEADER_RE.search(line):
                in_table = True
                continue

            if in_table:
                m = _TABLE_ROW_RE.match(line)
                if not m:
                    continue
                candidate = self._candidate(m.group(1), m.group(4) or m.group(3), line)
                if candidate is not None:
                    found.append(candidate)
        return found


# ---------------------------------------------------------------------------
# 2. Simple key/value
# ---------------------------------------------------------------------------

_KEY_VALUE_PATTERNS: tuple[tuple[str, re.Pattern], ...] = (
    ("colon", re.compile(_FN_PREFIX + r"(\d+)\s*:\s*(\d+)\b")),
    ("equals", re.compile(_FN_PREFIX + r"(\d+)\s*=\s*(\d+)\b")),
    ("dash", re.compile(_FN_PREFIX + r"(\d+)\s*-\s*(\d+)\b")),
    ("space", re.compile(_FN_PREFIX + r"(\d+)\s+(\d+)\b")),
    # Sentry-style export: "Function 4 - Max Armature Current: 260"
    ("function_label", re.compile(r"\bFunction\s+(\d+)\s*-\s*[^:\n]+?:\s*(\d+)\b", re.IGNORECASE)),
    # short Sentry form: "F4 - Max Armature Current: 260"
    ("function_short", re.compile(r"\bF\.?(\d+)\s*-\s*[^:\n]+?:\s*(\d+)\b")),
    # Curtis-style programmer: "Parameter 4 (Max Armature Current): 260"
    ("parameter_label", re.compile(r"\bParameter\s+(\d+)\s*\([^)\n]*\)\s*:\s*(\d+)\b", re.IGNORECASE)),
    # "P4 - Max Armature Current: 260"
    ("parameter_short", re.compile(r"\bP(\d+)\s*-\s*[^:\n]+?:\s*(\d+)\b")),
)

# Tuning comparisons, "Original: 100 Optimized: 120"; the second figure is kept.
_COMPARISON_PATTERNS: tuple[tuple[str, re.Pattern], ...] = tuple(
    (f"{old.lower()}_{new.lower()}", re.compile(
        rf"\b{old}\s*[:=]?\s*(\d+)\s*{new}\b\s*[:=]?\s*(\d+)\b", re.IGNORECASE,
    ))
    for old, new in (("Original", "Optimized"), ("Before", "After"), ("Factory", "Modified"))
)
_FN_MARKER_RE = re.compile(_FN_PREFIX + r"(\d+)")


class KeyValueStrategy(ExtractionStrategy):
    """``F.No. N <sep> V`` style pairs, tried sub-pattern by sub-pattern.

    Comparison rows (``Original/Optimized``, ``Before/After``,
    ``Factory/Modified``) come first. They carry no function number of their
    own and take it from the last function marker on or above the row.

    A function number claimed by an earlier sub-pattern is never reassigned by
    a later one, so ``F.3: 20`` beats a stray ``F.3 21`` elsewhere on the page.
    """

    name = "key_value"

    def extract(self, lines: NormalizedText) -> list[Candidate]:
        claimed: set[int] = set()
        found: list[Candidate] = []

        def claim(candidate: Candidate | None) -> None:
            if candidate is None or candidate.function_number in claimed:
                return
            claimed.add(candidate.function_number)
            found.append(candidate)

        for _label, pattern in _COMPARISON_PATTERNS:
            for candidate in self._comparisons(pattern, lines):
                claim(candidate)
        for _label, pattern in _KEY_VALUE_PATTERNS:
            for line in lines:
                for m in pattern.finditer(line):
                    claim(self._candidate(m.group(1), m.group(2), m.group(0)))
        return found

    def _comparisons(self, pattern: re.Pattern, lines: NormalizedText) -> list[Candidate | None]:
        found: list[Candidate | None] = []
        function_text = None
        for line in lines:
            m = pattern.search(line)
            markers = list(_FN_MARKER_RE.finditer(line, 0, m.start() if m else len(line)))
            if markers:
                function_text = markers[-1].group(1)
            if m and function_text is not None:
                found.append(self._candidate(function_text, m.group(2), line))
                function_text = None
        return found


# ---------------------------------------------------------------------------
# 3. Vendor identical-value rows
# ---------------------------------------------------------------------------

_VENDOR_ROW_RE = re.compile(
    r"(?:" + _FN_PREFIX + r"|(?<![\w.]))(?P<fn>\d+)\s+(?P<desc>[A-Za-z(][^\d\n]*?)\s+"
    r"(?P<value>\d+)\s+(?P=value)\s*(?:Cnts|Counts|Units)\b"
)


class VendorIdenticalStrategy(ExtractionStrategy):
    """``N <description> V V Cnts`` rows whose two numeric fields agree.

    Vendor exports repeat the final figure next to the raw one when no
    scaling applies; demanding equality keeps this match high-confidence.
    """

    name = "vendor_identical"

    def extract(self, lines: NormalizedText) -> list[Candidate]:
        found: list[Candidate] = []
        for line in lines:
            for m in _VENDOR_ROW_RE.finditer(line):
                candidate = self._candidate(m.group("fn"), m.group("value"), m.group(0))
                if candidate is not None:
                    found.append(candidate)
        return found


# ---------------------------------------------------------------------------
# 4. Inline delimited groups
# ---------------------------------------------------------------------------

_INLINE_GROUP_RE = re.compile(
    r"(?:" + _FN_PREFIX + r"|(?<![\w.%]))(?P<fn>\d+)\s+(?P<desc>[A-Za-z(][^\d\n]*?)\s+"
    r"(?P<first>\d+)(?:\s+(?P<second>\d+))?\s*" + _UNIT_TOKENS + r"(?![A-Za-z])"
)


class InlineDelimitedStrategy(ExtractionStrategy):
    """``N <description> V1 [V2] <unit>`` groups on a single line.

    When two figures appear the later one is taken. This assumes the export
    prints a provisional figure before the final one; it is a best-effort
    tie-break, not a documented format rule.
    """

    name = "inline_delimited"

    def extract(self, lines: NormalizedText) -> list[Candidate]:
        found: list[Candidate] = []
        for line in lines:
            for m in _INLINE_GROUP_RE.finditer(line):
                value = m.group("second") or m.group("first")
                candidate = self._candidate(m.group("fn"), value, m.group(0))
                if candidate is not None:
                    found.append(candidate)
        return found


# ---------------------------------------------------------------------------
# 5. Loose fallback pairs
# ---------------------------------------------------------------------------

_LOOSE_PAIR_RE = re.compile(r"(?<![\d.])(\d{1,3})(?: ?[:=,\-] ?| )(\d{1,3})(?![\d.])")

# Spans the stricter strategies recognise; their numbers are not re-paired.
_STRICT_SPANS: tuple[re.Pattern, ...] = (
    _LABELLED_ROW_RE,
    _TABLE_ROW_RE,
    *(p for _, p in _COMPARISON_PATTERNS),
    *(p for _, p in _KEY_VALUE_PATTERNS),
    _VENDOR_ROW_RE,
    _INLINE_GROUP_RE,
)


def _blank(m: re.Match) -> str:
    return " " * len(m.group(0))


class LoosePairsStrategy(ExtractionStrategy):
    """Any two adjacent small integers joined by a space or light delimiter.

    Spans shaped like a record of one of the stricter strategies are blanked
    out first, so ``1 MPH Scaling 100 100 Cnts`` does not also read as
    function 100. Everything else on the line is fair game.
    """

    name = "loose_pairs"

    def extract(self, lines: NormalizedText) -> list[Candidate]:
        found: list[Candidate] = []
        for line in lines:
            for pattern in _STRICT_SPANS:
                line = pattern.sub(_blank, line)
            for m in _LOOSE_PAIR_RE.finditer(line):
                candidate = self._candidate(m.group(1), m.group(2), m.group(0))
                if candidate is not None:
                    found.append(candidate)
        return found


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------

CASCADE: tuple[ExtractionStrategy, ...] = (
    StructuredTableStrategy(),
    KeyValueStrategy(),
    VendorIdenticalStrategy(),
    InlineDelimitedStrategy(),
    LoosePairsStrategy(),
)

_BY_NAME: dict[str, ExtractionStrategy] = {s.name: s for s in CASCADE}


def list_strategies() -> list[str]:
    """Strategy names in precedence order."""
    return [s.name for s in CASCADE]


def get_strategy(name: str) -> ExtractionStrategy:
    if name not in _BY_NAME:
        raise ValueError(f"Unknown strategy: {name!r}. Available: {list_strategies()}")
    return _BY_NAME[name]


def select_strategies(names: Iterable[str] | None) -> tuple[ExtractionStrategy, ...]:
    """Resolve *names* to strategies, always returned in cascade order."""
    if names is None:
        return CASCADE
    wanted = {get_strategy(n).name for n in names}
    return tuple(s for s in CASCADE if s.name in wanted)
