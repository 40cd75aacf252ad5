from math import isclose

import pytest

from projection_engine.core.compounding import annuity_due_factor, annuity_factor, growth_factor
from projection_engine.core.rates import (
    monthly_rate,
    period_rate,
    periods_per_year,
    tenure_in_days,
    tenure_in_months,
    tenure_in_years,
)
from projection_engine.domain.errors import DomainError


def test_monthly_rate_divides_annual_percentage():
    assert isclose(monthly_rate(12), 0.01)
    assert isclose(period_rate(7.5, 4), 0.01875)


@pytest.mark.parametrize(
    "frequency, expected",
    [("monthly", 12), ("quarterly", 4), ("halfYearly", 2), ("yearly", 1), ("daily", 365)],
)
def test_periods_per_year(frequency, expected):
    assert periods_per_year(frequency) == expected


def test_unknown_frequency_is_a_domain_error():
    with pytest.raises(DomainError):
        periods_per_year("weekly")


def test_tenure_conversions():
    assert tenure_in_months(12, "years") == 144
    assert tenure_in_months(18, "months") == 18
    assert isclose(tenure_in_years(18, "months"), 1.5)
    assert isclose(tenure_in_years(730, "days"), 2.0)
    # 30-day months, 365-day years
    assert tenure_in_days(12, "months") == 360
    assert tenure_in_days(2, "years") == 730


def test_zero_tenure_is_rejected():
    with pytest.raises(DomainError):
        tenure_in_months(0, "years")


def test_growth_factor_zero_rate_is_exactly_one():
    assert growth_factor(0, 0) == 1.0
    assert growth_factor(0, 480) == 1.0


def test_growth_factor_compounds():
    assert isclose(growth_factor(0.01, 12), 1.01 ** 12)
    assert isclose(growth_factor(0.1, 0.5), 1.1 ** 0.5)


def test_growth_factor_rejects_negative_periods():
    with pytest.raises(DomainError):
        growth_factor(0.01, -1)


def test_annuity_factors_degenerate_to_period_count_at_zero_rate():
    assert annuity_factor(0, 120) == 120
    assert annuity_due_factor(0, 120) == 120


def test_annuity_due_is_one_period_ahead():
    ordinary = annuity_factor(0.01, 120)
    assert isclose(annuity_due_factor(0.01, 120), ordinary * 1.01)
