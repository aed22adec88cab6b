"""Run the strategy cascade over document pages and fold them into one result.

Per page:
  1. normalize         – whitespace collapse and single-line blob splitting
  2. cascade           – strategies in precedence order; after each one the
                         sufficiency gate decides whether the noisier ones
                         further down still need to run
  3. merge             – validation plus first-contributor-wins admission

Per document:
  4. page fold         – pages in ascending page_index, first page wins
  5. confidence        – share of valid candidates plus volume bonuses
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Iterable, Sequence

from settings_confidence import compute_confidence
from settings_merge import merge
from settings_models import Candidate, ExtractionResult, PageExtraction, RawPageText
from settings_normalize import normalize
from settings_strategies import ExtractionStrategy, list_strategies, select_strategies

logger = logging.getLogger(__name__)

DEFAULT_SUFFICIENCY_THRESHOLD = 5


@dataclass(frozen=True)
class ExtractionConfig:
    """Knobs for one extraction run."""

    sufficiency_threshold: int = DEFAULT_SUFFICIENCY_THRESHOLD
    strategies: tuple[str, ...] | None = None
    max_workers: int = 1

    def __post_init__(self) -> None:
        if self.sufficiency_threshold < 1:
            raise ValueError(
                f"sufficiency_threshold must be >= 1, got {self.sufficiency_threshold}"
            )
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")
        if self.strategies is not None:
            # resolves names eagerly so a typo fails here, not mid-document
            select_strategies(self.strategies)

    def cascade(self) -> tuple[ExtractionStrategy, ...]:
        return select_strategies(self.strategies)


def _run_strategy(strategy: ExtractionStrategy, lines: tuple[str, ...]) -> list[Candidate]:
    try:
        return strategy.extract(lines)
    except Exception:
        logger.warning("strategy %s failed; continuing without it", strategy.name, exc_info=True)
        return []


def extract_page(page: RawPageText, config: ExtractionConfig | None = None) -> PageExtraction:
    """Normalize one page and run the cascade over it."""
    config = config or ExtractionConfig()
    lines = normalize(page.text)

    settings: dict[int, int] = {}
    sources: dict[int, str] = {}
    valid = invalid = duplicates = 0
    rejections: list[str] = []
    strategies_run: list[str] = []

    for strategy in config.cascade():
        if len(settings) >= config.sufficiency_threshold:
            logger.debug(
                "page %d: %d settings found, skipping %s and later strategies",
                page.page_index, len(settings), strategy.name,
            )
            break

        candidates = _run_strategy(strategy, lines)
        strategies_run.append(strategy.name)
        logger.debug("page %d: %s proposed %d candidates", page.page_index, strategy.name, len(candidates))

        outcome = merge(settings, candidates, sources)
        settings, sources = outcome.settings, outcome.sources
        valid += outcome.valid_count
        invalid += outcome.invalid_count
        duplicates += outcome.duplicate_count
        rejections.extend(outcome.rejections)

    return PageExtraction(
        page_index=page.page_index,
        settings=settings,
        sources=sources,
        valid_count=valid,
        invalid_count=invalid,
        duplicate_count=duplicates,
        rejections=rejections,
        strategies_run=strategies_run,
    )


def fold_pages(pages: Iterable[PageExtraction]) -> ExtractionResult:
    """Combine per-page results; a function found on an earlier page is kept."""
    ordered = sorted(pages, key=lambda p: p.page_index)

    settings: dict[int, int] = {}
    sources: dict[int, str] = {}
    invalid = duplicates = 0
    rejections: list[str] = []

    for page in ordered:
        carried = [
            Candidate(fn, value, page.sources.get(fn, ""), evidence=f"page {page.page_index}")
            for fn, value in page.settings.items()
        ]
        outcome = merge(settings, carried, sources)
        if outcome.duplicate_count:
            logger.debug(
                "page %d: %d functions already set by an earlier page",
                page.page_index, outcome.duplicate_count,
            )
        settings, sources = outcome.settings, outcome.sources
        invalid += page.invalid_count
        duplicates += page.duplicate_count + outcome.duplicate_count
        rejections.extend(f"page {page.page_index}: {r}" for r in page.rejections)

    contributing = set(sources.values())
    return ExtractionResult(
        settings=settings,
        valid_count=len(settings),
        invalid_count=invalid,
        confidence=compute_confidence(len(settings), invalid),
        duplicate_count=duplicates,
        strategies_used=[name for name in list_strategies() if name in contributing],
        rejections=rejections,
        sources=sources,
        page_count=len(ordered),
    )


def extract_document(
    pages: Sequence[RawPageText],
    config: ExtractionConfig | None = None,
) -> ExtractionResult:
    """Extract settings from every page of a document.

    Pages are independent, so with ``max_workers > 1`` they are extracted on a
    thread pool; the fold afterwards is always in ascending page order.
    """
    config = config or ExtractionConfig()
    if config.max_workers > 1 and len(pages) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            extracted = list(pool.map(lambda p: extract_page(p, config), pages))
    else:
        extracted = [extract_page(p, config) for p in pages]

    result = fold_pages(extracted)
    logger.debug(
        "document: %d pages, %d settings, %d invalid, confidence %.2f",
        result.page_count, result.valid_count, result.invalid_count, result.confidence,
    )
    return result


def extract_text(text: str, config: ExtractionConfig | None = None) -> ExtractionResult:
    """Extract settings from a single block of text, treated as page 1."""
    return extract_document([RawPageText(page_index=1, text=text)], config)
