#!/usr/bin/env python3
"""Tests for core currency utilities."""

from decimal import Decimal

import pytest

from finboard.core.currency import (
    cents_to_dollars_str,
    format_cents,
    parse_dollars_to_cents,
    percentage,
    safe_currency_to_cents,
    to_cents,
)


class TestCurrencyConversions:
    """Test core currency conversion functions."""

    @pytest.mark.currency
    def test_cents_to_dollars_str(self):
        """Test formatting cents as dollar strings."""
        assert cents_to_dollars_str(4599) == "45.99"
        assert cents_to_dollars_str(100) == "1.00"
        assert cents_to_dollars_str(0) == "0.00"
        assert cents_to_dollars_str(5) == "0.05"
        assert cents_to_dollars_str(-4599) == "-45.99"

    @pytest.mark.currency
    def test_parse_dollars_to_cents(self):
        """Test detailed dollar string parsing."""
        assert parse_dollars_to_cents("12.34") == 1234
        assert parse_dollars_to_cents("$12.34") == 1234
        assert parse_dollars_to_cents("1,234.56") == 123456
        assert parse_dollars_to_cents("12") == 1200
        assert parse_dollars_to_cents("12.5") == 1250
        assert parse_dollars_to_cents(".5") == 50
        assert parse_dollars_to_cents("-12.34") == -1234

    @pytest.mark.currency
    @pytest.mark.parametrize("text", ["", "   ", "abc", "1.2.3", "12a", ".", "$"])
    def test_parse_dollars_rejects_garbage(self, text):
        with pytest.raises(ValueError):
            parse_dollars_to_cents(text)

    @pytest.mark.currency
    def test_to_cents_by_type(self):
        """Test ints are whole dollars and floats/Decimals round half up."""
        assert to_cents(12) == 1200
        assert to_cents(0.1 + 0.2) == 30
        assert to_cents(Decimal("2.675")) == 268
        assert to_cents("2.675") == 268

    @pytest.mark.currency
    def test_text_and_numbers_round_alike(self):
        """Test strings past the cent round the same way as floats."""
        assert to_cents("10.999") == to_cents(10.999) == 1100
        assert to_cents("$1,234.565") == to_cents(Decimal("1234.565")) == 123457
        assert to_cents("0.005") == 1
        assert to_cents("-0.125") == to_cents(-0.125) == -13

    @pytest.mark.currency
    def test_to_cents_rejects_bool_and_nan(self):
        with pytest.raises(ValueError):
            to_cents(True)
        with pytest.raises(ValueError):
            to_cents(Decimal("NaN"))

    @pytest.mark.currency
    def test_safe_currency_to_cents(self):
        """Test safe currency string parsing."""
        assert safe_currency_to_cents("$45.99") == 4599
        assert safe_currency_to_cents("45.99") == 4599
        assert safe_currency_to_cents("") == 0
        assert safe_currency_to_cents("FREE") == 0
        assert safe_currency_to_cents(None) == 0
        assert safe_currency_to_cents(45.99) == 4599


class TestPercentage:
    """Test ratio rounding."""

    @pytest.mark.currency
    def test_rounds_half_up_to_one_decimal(self):
        assert percentage(60, 100) == 60.0
        assert percentage(1, 3) == 33.3
        assert percentage(2, 3) == 66.7
        assert percentage(1, 8) == 12.5

    @pytest.mark.currency
    def test_zero_denominator(self):
        assert percentage(100, 0) == 0.0

    @pytest.mark.currency
    def test_negative_numerator(self):
        assert percentage(-50, 100) == -50.0


class TestFormatting:
    @pytest.mark.currency
    @pytest.mark.parametrize(
        "cents,expected",
        [(0, "$0.00"), (123456, "$1,234.56"), (-500, "-$5.00"), (100_000_000, "$1,000,000.00")],
    )
    def test_format_cents(self, cents, expected):
        assert format_cents(cents) == expected
