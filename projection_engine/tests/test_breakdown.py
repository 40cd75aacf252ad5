import pytest

from projection_engine.core.breakdown import (
    PRIMARY_COLOR,
    SECONDARY_COLOR,
    chart_buckets,
    money_metric,
    percent_metric,
    roll_up_years,
    round_currency,
    yearly_row,
)
from projection_engine.core.formatting import NumberFormat
from projection_engine.schemas.results import PeriodRow


@pytest.mark.parametrize(
    "amount, expected",
    [(2.5, 3), (2.4999, 2), (-2.5, -3), (-2.4, -2), (0.0, 0), (1552923.6, 1552924)],
)
def test_round_currency_half_away_from_zero(amount, expected):
    assert round_currency(amount) == expected


def test_chart_buckets_round_and_colour():
    buckets = chart_buckets("Invested", 1200000.4, "Returns", 1123390.6)

    assert [(b.label, b.value, b.color) for b in buckets] == [
        ("Invested", 1200000, PRIMARY_COLOR),
        ("Returns", 1123391, SECONDARY_COLOR),
    ]


def test_yearly_row_keeps_total_consistent():
    # both sides round up, returns is derived rather than rounded separately
    row = yearly_row(3, 100.5, 201.5)

    assert row.invested == 101
    assert row.total == 202
    assert row.returns == 101
    assert row.invested + row.returns == row.total


def test_money_metric_uses_requested_format():
    metric = money_metric("Maturity", 1234567.4, NumberFormat(currency="USD", locale="en-US"))

    assert metric.value == 1234567
    assert metric.formatted == "$1,234,567"


def test_money_metric_defaults_to_rupees():
    assert money_metric("EMI", 5975.39).formatted == "₹5,975"


def test_percent_metric_suffix():
    metric = percent_metric("Effective Rate", 7.7136, suffix=" p.a.")
    assert metric.formatted == "7.71% p.a."


def _row(month, balance):
    return PeriodRow(month=month, year=(month - 1) // 12 + 1, emi=100, principal=90, interest=10, balance=balance)


def test_roll_up_years_closes_each_year_and_the_last_partial_one():
    rows = [_row(month, max(0, 1400 - 90 * month)) for month in range(1, 16)]

    yearly = roll_up_years(rows)

    assert [row.year for row in yearly] == [1, 2]
    assert yearly[0].principal == 1080
    assert yearly[0].interest == 120
    assert yearly[1].principal == 270
    assert yearly[-1].balance == rows[-1].balance


def test_roll_up_years_prefers_exact_parts():
    rows = [_row(month, 0) for month in range(1, 13)]
    exact = [(90.4, 9.6)] * 12

    yearly = roll_up_years(rows, exact)

    assert yearly[0].principal == 1085
    assert yearly[0].interest == 115
