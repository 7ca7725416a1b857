"""Tests for amount parsing and formatting."""

import pytest
from decimal import Decimal

from homeledger.utils.amount_parser import format_amount, parse_amount


def test_parse_plain_amounts():
    """Test parsing plain and comma-grouped amounts."""
    assert parse_amount("1200.00") == Decimal("1200.00")
    assert parse_amount("1,200.00") == Decimal("1200.00")
    assert parse_amount("  42 ") == Decimal("42")


def test_parse_indian_grouping():
    """Test parsing lakh-style grouping."""
    assert parse_amount("1,23,456.78") == Decimal("123456.78")


def test_parse_currency_markers():
    """Test that currency symbols and codes are stripped."""
    assert parse_amount("₹1,200.50") == Decimal("1200.50")
    assert parse_amount("Rs. 999") == Decimal("999")
    assert parse_amount("INR 1,000") == Decimal("1000")
    assert parse_amount("$12.50") == Decimal("12.50")
    assert parse_amount("€7") == Decimal("7")


class TestNegativeAmounts:
    """Sign conventions used by bank exports."""

    def test_leading_minus(self):
        assert parse_amount("-50.00") == Decimal("-50.00")

    def test_trailing_minus(self):
        assert parse_amount("50.00-") == Decimal("-50.00")

    def test_parentheses(self):
        assert parse_amount("(1,250.00)") == Decimal("-1250.00")

    def test_dr_suffix(self):
        assert parse_amount("1,200.00 Dr") == Decimal("-1200.00")
        assert parse_amount("1200.00DR") == Decimal("-1200.00")

    def test_cr_suffix(self):
        assert parse_amount("1,200.00 Cr") == Decimal("1200.00")
        assert parse_amount("1200.00Cr.") == Decimal("1200.00")

    def test_suffix_wins_over_minus(self):
        assert parse_amount("-300.00 Dr") == Decimal("-300.00")


@pytest.mark.parametrize("value", ["", "   ", "abc", "12.3.4", "NaN", "Infinity"])
def test_parse_invalid(value):
    """Test that unparseable amounts raise ValueError."""
    with pytest.raises(ValueError):
        parse_amount(value)


def test_parse_none():
    with pytest.raises(ValueError):
        parse_amount(None)


def test_format_indian_grouping():
    """Test default formatting with rupee symbol and lakh grouping."""
    assert format_amount(Decimal("123456.78")) == "₹1,23,456.78"
    assert format_amount(Decimal("999")) == "₹999.00"
    assert format_amount(Decimal("10000000")) == "₹1,00,00,000.00"


def test_format_western_grouping():
    assert format_amount(Decimal("123456.78"), symbol="$", grouping="western") == "$123,456.78"


def test_format_negative_and_rounding():
    assert format_amount(Decimal("-1500.5")) == "-₹1,500.50"
    assert format_amount(Decimal("0.004"), symbol="") == "0.00"


@pytest.mark.parametrize(
    "amount,symbol,grouping",
    [
        (Decimal("1234567.89"), "₹", "indian"),
        (Decimal("1234567.89"), "$", "western"),
        (Decimal("-98765.40"), "€", "western"),
        (Decimal("0.01"), "", "indian"),
    ],
)
def test_format_then_parse_keeps_value(amount, symbol, grouping):
    """Formatting then reparsing gives back the same value."""
    assert parse_amount(format_amount(amount, symbol=symbol, grouping=grouping)) == amount
