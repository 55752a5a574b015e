"""Tests for amount parsing utilities."""

from decimal import Decimal

import pytest

from offerbook.utils.amount_parser import coerce_amount, parse_amount


class TestParseAmount:
    """Tests for strict amount parsing."""

    def test_plain_integer(self):
        assert parse_amount("250") == Decimal("250")

    def test_grouping_commas_and_whitespace(self):
        assert parse_amount(" 1,234.56 ") == Decimal("1234.56")

    def test_zero_is_allowed(self):
        assert parse_amount("0") == Decimal("0")

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "12abc", "-5", "NaN", "Infinity"])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_amount(raw)


class TestCoerceAmount:
    """Tests for lenient amount parsing used while editing entries."""

    def test_strips_suffix_and_grouping(self):
        assert coerce_amount("1,250.50abc") == Decimal("1250.50")

    def test_non_numeric_becomes_zero(self):
        assert coerce_amount("abc") == Decimal("0")

    def test_empty_becomes_zero(self):
        assert coerce_amount("") == Decimal("0")

    def test_multiple_points_become_zero(self):
        assert coerce_amount("1.2.3") == Decimal("0")

    def test_minus_sign_is_dropped(self):
        assert coerce_amount("-40") == Decimal("40")
