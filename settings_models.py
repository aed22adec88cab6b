from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawPageText:
    """Text of one document page as handed over by the text provider."""

    page_index: int
    text: str


@dataclass(frozen=True)
class Candidate:
    """An unvalidated (function, value) pair proposed by one strategy."""

    function_number: int
    value: int
    strategy: str
    evidence: str = ""


@dataclass(frozen=True)
class FunctionDefinition:
    """Static description of one numbered controller function."""

    number: int
    name: str
    description: str
    expected_range: tuple[int, int]


@dataclass
class MergeOutcome:
    """Settings map after folding one batch of candidates into it."""

    settings: dict[int, int]
    sources: dict[int, str] = field(default_factory=dict)
    valid_count: int = 0
    invalid_count: int = 0
    duplicate_count: int = 0
    rejections: list[str] = field(default_factory=list)


@dataclass
class PageExtraction:
    """Cascade outcome for a single page, before the document-level fold."""

    page_index: int
    settings: dict[int, int]
    sources: dict[int, str]
    valid_count: int
    invalid_count: int
    duplicate_count: int
    rejections: list[str]
    strategies_run: list[str]


@dataclass
class ExtractionResult:
    """Durable output of one parse call."""

    settings: dict[int, int]
    valid_count: int
    invalid_count: int
    confidence: float
    duplicate_count: int = 0
    strategies_used: list[str] = field(default_factory=list)
    rejections: list[str] = field(default_factory=list)
    sources: dict[int, str] = field(default_factory=dict)
    page_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.settings


@dataclass(frozen=True)
class PreviewRow:
    """One settings entry decorated with its registry metadata."""

    function_number: int
    name: str
    value: int
    description: str
    expected_range: tuple[int, int]
    in_range: bool
