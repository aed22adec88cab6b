from __future__ import annotations

from typing import Mapping

from settings_functions import get_definition
from settings_models import PreviewRow
from settings_validate import is_value_in_range


def build_preview(settings: Mapping[int, int]) -> list[PreviewRow]:
    """Decorate *settings* with registry metadata, sorted by function number."""
    rows: list[PreviewRow] = []
    for fn in sorted(settings):
        definition = get_definition(fn)
        value = settings[fn]
        rows.append(
            PreviewRow(
                function_number=fn,
                name=definition.name,
                value=value,
                description=definition.description,
                expected_range=definition.expected_range,
                in_range=is_value_in_range(value, definition.expected_range),
            )
        )
    return rows


def out_of_range(rows: list[PreviewRow]) -> list[PreviewRow]:
    """Rows whose value falls outside the function's expected range."""
    return [row for row in rows if not row.in_range]
