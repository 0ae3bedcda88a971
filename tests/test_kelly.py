"""
Tests for core/kelly.py

Run with: pytest tests/test_kelly.py -v
"""

import pytest

from gridiron_odds.core.kelly import (
    DEFAULT_KELLY_FRACTION,
    calculate_fractional_kelly,
    calculate_kelly,
    calculate_kelly_from_odds,
)


class TestFullKelly:
    """Test the full Kelly fraction."""

    def test_even_money_edge(self):
        # b=1, p=0.55 → f* = 0.10
        assert calculate_kelly(100, 55) == pytest.approx(10.0)

    def test_standard_juice(self):
        assert calculate_kelly(-110, 55) == pytest.approx(5.5, abs=0.01)

    def test_negative_edge_is_zero_not_negative(self):
        assert calculate_kelly(-110, 45) == 0.0

    def test_certain_win_bets_everything(self):
        assert calculate_kelly(100, 100) == pytest.approx(100.0)

    def test_certain_loss(self):
        assert calculate_kelly(250, 0) == 0.0

    @pytest.mark.parametrize("odds", [-500, -110, 100, 150, 400])
    @pytest.mark.parametrize("prob", [0, 10, 33.3, 50, 62.5, 90, 100])
    def test_never_negative(self, odds, prob):
        assert calculate_kelly(odds, prob) >= 0.0

    @pytest.mark.parametrize("odds, prob", [(0, 55), (None, 55), (-110, 101), (-110, -1), (-110, None)])
    def test_invalid(self, odds, prob):
        assert calculate_kelly(odds, prob) is None


class TestKellyFromOdds:
    """Kelly with the fair price standing in for the win probability."""

    def test_positive_edge(self):
        assert calculate_kelly_from_odds(110, 100) == pytest.approx(4.545, abs=0.001)

    def test_at_fair_price(self):
        assert calculate_kelly_from_odds(-110, -110) == pytest.approx(0.0, abs=1e-9)

    def test_invalid_fair(self):
        assert calculate_kelly_from_odds(110, 0) is None


class TestFractionalKelly:
    """Test fractional Kelly scaling."""

    def test_default_is_half(self):
        assert DEFAULT_KELLY_FRACTION == 0.5
        assert calculate_fractional_kelly(100, 55) == pytest.approx(5.0)

    def test_custom_fraction(self):
        assert calculate_fractional_kelly(100, 55, 0.25) == pytest.approx(2.5)

    def test_zero_edge_stays_zero(self):
        assert calculate_fractional_kelly(-110, 45, 0.5) == 0.0

    @pytest.mark.parametrize("fraction", [-0.5, None, "half"])
    def test_invalid_fraction(self, fraction):
        assert calculate_fractional_kelly(100, 55, fraction) is None

    def test_invalid_odds(self):
        assert calculate_fractional_kelly(0, 55) is None


class TestKellyExtremeOdds:
    """Prices too extreme to convert give no stake instead of raising."""

    @pytest.mark.parametrize("odds", [-1e18, -1e300, 1e-20, -1e-307])
    def test_full_and_fractional(self, odds):
        assert calculate_kelly(odds, 50) is None
        assert calculate_fractional_kelly(odds, 50) is None

    def test_extreme_fair_odds(self):
        assert calculate_kelly_from_odds(-110, -1e18) is None

    def test_long_shot_still_sized(self):
        # b is huge, so f* ≈ p
        assert calculate_kelly(1e300, 50) == pytest.approx(50.0)
