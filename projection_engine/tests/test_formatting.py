import pytest

from projection_engine.core.formatting import (
    NumberFormat,
    format_compact,
    format_currency,
    format_indian_number,
    format_percent,
    format_tenure,
)

USD = NumberFormat(currency="USD", locale="en-US")


@pytest.mark.parametrize(
    "amount, expected",
    [(0, "0"), (999, "999"), (1000, "1,000"), (123456, "1,23,456"), (1234567, "12,34,567"), (-1234567, "-12,34,567")],
)
def test_indian_grouping(amount, expected):
    assert format_indian_number(amount) == expected


def test_format_currency():
    assert format_currency(1234567) == "₹12,34,567"
    assert format_currency(1234567, USD) == "$1,234,567"
    assert format_currency(-500.6, USD) == "-$501"
    assert format_currency(1000, NumberFormat(currency="EUR", locale="en-GB")) == "€1,000"


def test_format_percent():
    assert format_percent(14.86984) == "14.87%"
    assert format_percent(72.09, decimals=1) == "72.1%"


def test_format_compact():
    assert format_compact(12345678) == "₹1.23Cr"
    assert format_compact(250000) == "₹2.50L"
    assert format_compact(1234567, USD) == "$1.23M"
    assert format_compact(2500, USD) == "$2.50K"
    assert format_compact(500) == "₹500"


@pytest.mark.parametrize(
    "months, expected",
    [(1, "1 month"), (11, "11 months"), (12, "1 year"), (24, "2 years"), (30, "2y 6m")],
)
def test_format_tenure(months, expected):
    assert format_tenure(months) == expected


def test_display_rounding_matches_result_rounding():
    assert format_indian_number(1552923.5) == "15,52,924"
    assert format_currency(-2.5, USD) == "-$3"
    assert format_currency(2.4999) == "₹2"
