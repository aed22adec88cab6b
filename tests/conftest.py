"""Shared test fixtures."""
import pytest


@pytest.fixture
def reference_table_text():
    return """
    GE Controller Reference Guide
    F.No.   Description                  Counts   Value
    1       MPH Scaling                  100      100
    3       Controlled Acceleration      15       15
    4       Max Armature Current Limit   245      260
    5       Plug Current                 200      200
    7       Minimum Field Current        70       70
    15      Battery Volts                72       72
    """


@pytest.fixture
def vendor_blob_text():
    # one physical line, as some export tools emit it
    return (
        "1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts "
        "4 Max Armature Current Limit 260 260 Cnts 7 Minimum Field Current 70 70 Cnts"
    )


@pytest.fixture
def sentry_export_text():
    return "\n".join([
        "Sentry Export - Controller Settings",
        "Function 1 - MPH Scaling: 100",
        "Function 3 - Controlled Acceleration: 15",
        "Function 4 - Max Armature Current: 260",
    ])
