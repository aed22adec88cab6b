import pytest

from settings_confidence import compute_confidence, confidence_level


class TestComputeConfidence:
    def test_nothing_processed(self):
        assert compute_confidence(0, 0) == 0.0

    def test_only_invalid(self):
        assert compute_confidence(0, 3) == 0.0

    def test_ratio_without_bonus(self):
        assert compute_confidence(3, 1) == pytest.approx(0.75)
        assert compute_confidence(20, 0) == pytest.approx(1.0)

    def test_bonus_above_twenty(self):
        # 21 / 30 + 0.1
        assert compute_confidence(21, 9) == pytest.approx(0.8)

    def test_second_bonus_above_fifty(self):
        # 51 / 102 + 0.2
        assert compute_confidence(51, 51) == pytest.approx(0.7)

    def test_clamped_to_one(self):
        assert compute_confidence(60, 0) == 1.0
        assert compute_confidence(25, 1) == 1.0

    def test_more_valid_never_lowers_score(self):
        scores = [compute_confidence(v, 10) for v in range(0, 80)]
        assert scores == sorted(scores)

    def test_more_invalid_never_raises_score(self):
        scores = [compute_confidence(30, i) for i in range(0, 40)]
        assert scores == sorted(scores, reverse=True)


class TestConfidenceLevel:
    @pytest.mark.parametrize(
        "confidence, expected",
        [(1.0, "HIGH"), (0.8, "HIGH"), (0.79, "MEDIUM"), (0.5, "MEDIUM"), (0.49, "LOW"), (0.0, "LOW")],
    )
    def test_levels(self, confidence, expected):
        assert confidence_level(confidence) == expected
