import pytest

from settings_normalize import collapse_whitespace, is_single_line_blob, normalize, split_records


class TestCollapseWhitespace:
    def test_runs_of_spaces_and_tabs_become_one_space(self):
        assert collapse_whitespace("F.1 \t   100") == "F.1 100"

    def test_line_breaks_preserved(self):
        assert collapse_whitespace("a  b\nc   d") == "a b\nc d"

    def test_windows_line_endings_converted(self):
        assert collapse_whitespace("a\r\nb\rc") == "a\nb\nc"


class TestNormalize:
    def test_trims_and_drops_empty_lines(self):
        assert normalize("  F.1 100  \n\n   \n F.2 5 ") == ("F.1 100", "F.2 5")

    def test_empty_text(self):
        assert normalize("") == ()

    def test_none_yields_empty(self):
        assert normalize(None) == ()

    def test_text_without_delimiters_passes_through(self):
        text = "GE Controller Reference Guide"
        assert normalize(text) == (text,)

    def test_accepts_line_sequence(self):
        assert normalize(["  F.1 100", "", "F.2 5"]) == ("F.1 100", "F.2 5")

    def test_short_blob_is_not_split(self):
        text = "1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts"
        assert len(text) <= 100
        assert normalize(text) == (text,)

    def test_long_blob_split_into_records(self, vendor_blob_text):
        assert normalize(vendor_blob_text) == (
            "1 MPH Scaling 100 100 Cnts",
            "3 Controlled Acceleration 15 15 Cnts",
            "4 Max Armature Current Limit 260 260 Cnts",
            "7 Minimum Field Current 70 70 Cnts",
        )

    def test_multi_line_text_is_never_split(self, reference_table_text):
        lines = normalize(reference_table_text)
        assert "1 MPH Scaling 100 100" in lines
        assert len(lines) == 8


class TestBlobDetection:
    def test_requires_unit_marker(self):
        text = "1 MPH Scaling 100 100 Units 3 Controlled Acceleration 15 15 Units " * 2
        assert not is_single_line_blob(text)

    def test_requires_few_lines(self):
        text = "\n".join(["1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts"] * 4)
        assert not is_single_line_blob(text)

    def test_requires_multiple_records(self):
        text = "x" * 120 + " 5 Cnts"
        assert not is_single_line_blob(text)

    def test_detects_concatenated_records(self, vendor_blob_text):
        assert is_single_line_blob(vendor_blob_text)


class TestSplitRecords:
    def test_breaks_after_cnts_and_units(self):
        assert split_records("1 A 5 Cnts 2 B 6 Units 3 C") == "1 A\n5 Cnts\n2 B 6 Units\n3 C"

    def test_breaks_after_percent_followed_by_digit(self):
        assert split_records("24 Field Weakening 50 %25 Start") == "24 Field Weakening 50 %\n25 Start"

    def test_breaks_after_unit_letter_followed_by_digit(self):
        assert split_records("4 Armature 260 A 5 Plug 200 A") == "4 Armature 260 A\n5 Plug 200 A"
        assert split_records("20 Overspeed 32 mph 21 Ramp") == "20 Overspeed 32 mph\n21 Ramp"

    def test_breaks_before_function_marker(self):
        assert split_records("F.1 100 F.No.2 5") == "F.1 100\nF.No.2 5"


@pytest.mark.parametrize(
    "text",
    [
        "",
        "no digits here at all",
        "  F.1 100  \n\n F.2 5",
        "1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts",
        "1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts "
        "4 Max Armature Current Limit 260 A 5 Plug Current 200 % 6 Rate 50 Units",
        "a\n\n\n\nb 1 MPH Scaling 100 100 Cnts 3 Controlled Acceleration 15 15 Cnts 9 x 9 Cnts",
        "F.No.1 MPH Scaling Counts: 100 Value: 100 F.No.2 Creep Speed Counts: 5 Cnts 3 x",
    ],
)
def test_normalize_is_idempotent(text):
    once = normalize(text)
    assert normalize(once) == once
