"""Registry of the controller's numbered functions.

Functions 1-26 are the documented controller parameters. 27-128 exist on the
controller but carry no published meaning, so they share a placeholder entry
whose expected range (0-255) is narrower than what the validator accepts.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping

from settings_models import FunctionDefinition

MIN_FUNCTION = 1
MAX_FUNCTION = 128

_EXTENDED_RANGE = (0, 255)

_KNOWN_FUNCTIONS: list[tuple[int, str, tuple[int, int], str]] = [
    (1, "MPH Scaling", (15, 200), "Controls top speed scaling"),
    (2, "Creep Speed", (0, 10), "Speed when barely pressing pedal"),
    (3, "Controlled Acceleration", (8, 40), "Acceleration rate control"),
    (4, "Max Armature Current Limit", (180, 400), "Maximum motor current"),
    (5, "Plug Current", (50, 300), "Plug braking current"),
    (6, "Armature Acceleration Rate", (30, 100), "Motor acceleration rate"),
    (7, "Minimum Field Current", (51, 120), "Minimum field current for motor protection"),
    (8, "Maximum Field Current", (200, 400), "Maximum field current"),
    (9, "Regen Armature Current", (150, 350), "Regenerative braking current"),
    (10, "Regen Maximum Field Current", (51, 300), "Max field current during regen"),
    (11, "Turf Speed Limit", (100, 170), "Speed limit in turf mode"),
    (12, "Reverse Speed Limit", (120, 170), "Maximum reverse speed"),
    (13, "Reserved", (0, 255), "Reserved function"),
    (14, "IR Compensation", (2, 20), "Internal resistance compensation"),
    (15, "Battery Volts", (48, 96), "Nominal battery voltage"),
    (16, "Low Battery Volts", (40, 80), "Low voltage cutoff"),
    (17, "Pack Over Temp", (0, 255), "Battery pack over-temperature limit"),
    (18, "Reserved", (0, 255), "Reserved function"),
    (19, "Field Ramp Rate Plug/Regen", (5, 30), "Field current ramp rate"),
    (20, "MPH Overspeed", (25, 50), "Overspeed protection threshold"),
    (21, "Arm Current Ramp (Handbrake)", (20, 80), "Armature current ramp rate"),
    (22, "Odometer Calibration", (80, 180), "Odometer calibration factor"),
    (23, "Error Compensation", (0, 20), "Error detection compensation"),
    (24, "Field Weakening Start", (25, 85), "Field weakening start point"),
    (25, "Pedal Enable", (0, 1), "Pedal enable/disable"),
    (26, "Ratio of Field to Arm", (1, 8), "Field to armature current ratio"),
]

# Function read elsewhere as the pack voltage indicator.
BATTERY_VOLTS_FUNCTION = 15


def _build_registry() -> Mapping[int, FunctionDefinition]:
    table: dict[int, FunctionDefinition] = {
        number: FunctionDefinition(number, name, description, expected)
        for number, name, expected, description in _KNOWN_FUNCTIONS
    }
    for number in range(len(_KNOWN_FUNCTIONS) + 1, MAX_FUNCTION + 1):
        table[number] = FunctionDefinition(
            number=number,
            name=f"Function {number}",
            description=f"Extended controller function {number}",
            expected_range=_EXTENDED_RANGE,
        )
    return MappingProxyType(table)


FUNCTION_DEFINITIONS: Mapping[int, FunctionDefinition] = _build_registry()


def get_definition(number: int) -> FunctionDefinition:
    """Return the registry entry for *number*, or a generic one outside 1-128."""
    definition = FUNCTION_DEFINITIONS.get(number)
    if definition is not None:
        return definition
    return FunctionDefinition(
        number=number,
        name=f"Function {number}",
        description="",
        expected_range=_EXTENDED_RANGE,
    )
