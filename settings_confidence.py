"""Confidence scoring for deciding between the automatic result and manual entry."""

from __future__ import annotations

from typing import Literal

ConfidenceLevel = Literal["HIGH", "MEDIUM", "LOW"]

# Bonus thresholds carried over unchanged from the settings importer.
_MANY_SETTINGS = 20
_MOST_SETTINGS = 50
_BONUS = 0.1


def compute_confidence(valid_count: int, invalid_count: int) -> float:
    """Return the 0-1 trust score for one parse.

    The base score is the share of processed candidates that validated.
    Finding more than 20, and again more than 50, settings adds 0.1 each.
    """
    total = valid_count + invalid_count
    if total <= 0:
        return 0.0

    confidence = valid_count / total
    if valid_count > _MANY_SETTINGS:
        confidence += _BONUS
    if valid_count > _MOST_SETTINGS:
        confidence += _BONUS
    return min(confidence, 1.0)


def confidence_level(confidence: float) -> ConfidenceLevel:
    if confidence >= 0.8:
        return "HIGH"
    elif confidence >= 0.5:
        return "MEDIUM"
    else:
        return "LOW"
