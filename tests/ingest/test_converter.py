"""
Unit Tests for Score Conversion

Tests for round_half_up, convert and parse_raw_score.
"""

import math
import pytest

from marks_toolkit.ingest.converter import convert, parse_raw_score, round_half_up


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    @pytest.mark.parametrize("value, places, expected", [
        (2.675, 2, 2.68),    # binary float 2.67499999... still rounds up
        (0.125, 2, 0.13),
        (7.5, 0, 8.0),
        (12.345, 1, 12.3),
        (-2.5, 0, -3.0),     # halves away from zero
    ])
    def test_round_when_half_then_rounds_up(self, value, places, expected):
        assert round_half_up(value, places) == expected

    def test_round_when_not_finite_then_unchanged(self):
        assert math.isinf(round_half_up(math.inf, 2))
        assert math.isnan(round_half_up(math.nan, 2))


class TestConvert:
    """Tests for raw to converted score conversion."""

    def test_convert_when_worked_example_then_matches(self):
        assert convert(40, 50, 15) == 12.0
        assert convert(25, 50, 15) == 7.5

    def test_convert_when_repeating_fraction_then_two_decimals(self):
        assert convert(1, 3, 10) == 3.33
        assert convert(2, 3, 10) == 6.67

    def test_convert_when_max_raw_zero_then_zero(self):
        assert convert(40, 0, 15) == 0.0

    def test_convert_when_raw_exceeds_max_then_not_capped(self):
        """Range is not enforced; over-range input scales proportionally."""
        assert convert(60, 50, 15) == 18.0

    def test_convert_when_formula_then_matches_round_half_up(self):
        for raw in (0, 1, 7, 13.5, 33, 49.5, 50):
            assert convert(raw, 60, 20) == round_half_up(raw / 60 * 20, 2)


class TestParseRawScore:
    """Tests for typed score parsing."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_parse_when_blank_then_none(self, value):
        assert parse_raw_score(value) is None

    @pytest.mark.parametrize("value, expected", [
        (40, 40.0),
        ("25", 25.0),
        (" 12.5 ", 12.5),
        (0, 0.0),
        ("-3", -3.0),
    ])
    def test_parse_when_numeric_then_float(self, value, expected):
        assert parse_raw_score(value) == expected

    @pytest.mark.parametrize("value", ["abc", "12a", "nan", "inf", True, math.inf])
    def test_parse_when_not_finite_number_then_raises_error(self, value):
        with pytest.raises(ValueError, match="Invalid raw score"):
            parse_raw_score(value)
