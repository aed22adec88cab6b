from __future__ import annotations

from settings_functions import MAX_FUNCTION, MIN_FUNCTION
from settings_models import Candidate

MIN_VALUE = 0
MAX_VALUE = 999


def _is_int(x: object) -> bool:
    # bool is an int subclass but never a meaningful count
    return isinstance(x, int) and not isinstance(x, bool)


def is_valid_function_number(n: object) -> bool:
    """Return True if *n* is an integer function number in 1-128."""
    return _is_int(n) and MIN_FUNCTION <= n <= MAX_FUNCTION


def is_valid_value(v: object) -> bool:
    """Return True if *v* is an integer setting value in 0-999."""
    return _is_int(v) and MIN_VALUE <= v <= MAX_VALUE


def is_valid_candidate(candidate: Candidate) -> bool:
    return is_valid_function_number(candidate.function_number) and is_valid_value(candidate.value)


def is_value_in_range(value: int, expected_range: tuple[int, int] | None) -> bool:
    """Return True if *value* lies inside the inclusive *expected_range*.

    A missing or malformed range does not flag anything.
    """
    if not expected_range or len(expected_range) != 2:
        return True
    low, high = expected_range
    return low <= value <= high


def describe_rejection(candidate: Candidate) -> str:
    return (
        f"Invalid function F.{candidate.function_number} = {candidate.value}"
        f" ({candidate.strategy})"
    )
