import pytest

from settings_functions import (
    BATTERY_VOLTS_FUNCTION,
    FUNCTION_DEFINITIONS,
    MAX_FUNCTION,
    get_definition,
)
from settings_preview import build_preview, out_of_range


class TestFunctionRegistry:
    def test_covers_every_function_number(self):
        assert sorted(FUNCTION_DEFINITIONS) == list(range(1, MAX_FUNCTION + 1))

    def test_documented_function(self):
        definition = get_definition(1)
        assert definition.name == "MPH Scaling"
        assert definition.expected_range == (15, 200)

    def test_battery_volts_entry(self):
        assert get_definition(BATTERY_VOLTS_FUNCTION).name == "Battery Volts"

    def test_extended_functions_share_placeholder(self):
        definition = get_definition(100)
        assert definition.name == "Function 100"
        assert definition.expected_range == (0, 255)

    def test_unknown_number_gets_generic_entry(self):
        definition = get_definition(500)
        assert definition.number == 500
        assert definition.name == "Function 500"

    def test_registry_is_read_only(self):
        with pytest.raises(TypeError):
            FUNCTION_DEFINITIONS[1] = None


class TestBuildPreview:
    def test_sorted_by_function_number(self):
        rows = build_preview({15: 72, 1: 100, 3: 15})
        assert [r.function_number for r in rows] == [1, 3, 15]

    def test_rows_carry_registry_metadata(self):
        [row] = build_preview({4: 260})
        assert row.name == "Max Armature Current Limit"
        assert row.description == "Maximum motor current"
        assert row.expected_range == (180, 400)
        assert row.value == 260
        assert row.in_range

    def test_out_of_range_value_flagged(self):
        [row] = build_preview({2: 50})
        assert not row.in_range

    def test_valid_value_above_extended_range_is_flagged(self):
        # 300 passes validation (0-999) but exceeds the 0-255 placeholder range
        [row] = build_preview({40: 300})
        assert not row.in_range

    def test_empty_settings(self):
        assert build_preview({}) == []

    def test_out_of_range_filter(self):
        rows = build_preview({1: 100, 2: 50, 40: 300})
        assert [r.function_number for r in out_of_range(rows)] == [2, 40]
