from __future__ import annotations

import logging
from typing import Iterable, Mapping

from settings_models import Candidate, MergeOutcome
from settings_validate import describe_rejection, is_valid_candidate

logger = logging.getLogger(__name__)


def merge(
    existing: Mapping[int, int],
    candidates: Iterable[Candidate],
    sources: Mapping[int, str] | None = None,
) -> MergeOutcome:
    """Fold *candidates* into a copy of *existing* under first-contributor-wins.

    A candidate is admitted only if it validates and its function number is
    not yet present. Values already in the map are never replaced, whatever
    a later candidate says. Tallies on the outcome cover *candidates* only.
    """
    outcome = MergeOutcome(settings=dict(existing), sources=dict(sources or {}))

    for candidate in candidates:
        if not is_valid_candidate(candidate):
            outcome.invalid_count += 1
            outcome.rejections.append(describe_rejection(candidate))
            continue

        fn = candidate.function_number
        if fn in outcome.settings:
            outcome.duplicate_count += 1
            if outcome.settings[fn] != candidate.value:
                logger.debug(
                    "F.%d = %d from %s ignored; keeping %d from %s",
                    fn, candidate.value, candidate.strategy,
                    outcome.settings[fn], outcome.sources.get(fn, "?"),
                )
            continue

        outcome.settings[fn] = candidate.value
        outcome.sources[fn] = candidate.strategy
        outcome.valid_count += 1

    return outcome
