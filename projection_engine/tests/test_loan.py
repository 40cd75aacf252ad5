from math import isclose

import pytest
from pydantic import ValidationError

from projection_engine.core.loan import (
    affordable_principal,
    amortization_schedule,
    calculate_loan,
    monthly_installment,
    required_tenure,
)
from projection_engine.domain.errors import DomainError
from projection_engine.models import LoanInput, Prepayment


def home_loan(**overrides) -> LoanInput:
    values = {"principal": 500000, "annualRatePercent": 10, "tenure": 12, "tenureUnit": "years"}
    values.update(overrides)
    return LoanInput(**values)


def test_emi_for_twelve_year_loan():
    result = calculate_loan(home_loan())

    assert result.emi == 5975
    assert result.totalInterest == 360456
    assert result.totalPayment == 860456
    assert result.primary.label == "Monthly EMI"
    assert result.primary.value == 5975
    assert len(result.breakdown) == 144


def test_schedule_ends_at_zero_and_repays_principal():
    result = calculate_loan(home_loan())

    assert result.breakdown[-1].balance == 0
    # yearly rows sum unrounded monthly parts, so only 12 roundings separate them from P
    repaid = sum(row.principal for row in result.yearlyBreakdown)
    assert abs(repaid - 500000) <= 12


def test_balance_never_increases():
    rows = calculate_loan(home_loan(annualRatePercent=14.5, tenure=20)).breakdown
    balances = [row.balance for row in rows]
    assert all(later <= earlier for earlier, later in zip(balances, balances[1:]))


def test_rows_carry_derived_year():
    rows = calculate_loan(home_loan(tenure=30, tenureUnit="months")).breakdown
    assert [row.year for row in rows[10:14]] == [1, 1, 2, 2]
    assert rows[-1].year == 3


def test_zero_rate_is_plain_division():
    result = calculate_loan(home_loan(principal=120000, annualRatePercent=0, tenure=12, tenureUnit="months"))

    assert result.emi == 10000
    assert result.totalInterest == 0
    assert all(row.interest == 0 for row in result.breakdown)
    assert [row.balance for row in result.breakdown[:3]] == [110000, 100000, 90000]
    assert result.breakdown[-1].balance == 0


def test_one_month_loan():
    assert isclose(monthly_installment(100000, 12, 1), 101000)


def test_yearly_roll_up():
    result = calculate_loan(home_loan())

    assert len(result.yearlyBreakdown) == 12
    assert result.yearlyBreakdown[-1].balance == 0
    assert result.yearlyBreakdown[0].interest > result.yearlyBreakdown[-1].interest


def test_chart_splits_principal_and_interest():
    result = calculate_loan(home_loan())

    assert [bucket.label for bucket in result.chartData] == ["Principal", "Interest"]
    assert result.chartData[0].value == 500000
    assert result.chartData[1].value == 360456


def test_prepayment_shortens_the_loan():
    result = calculate_loan(home_loan(prepayments=[Prepayment(year=2, amount=100000)]))
    summary = result.prepayment

    assert summary is not None
    assert summary.newTenureMonths == 106
    assert summary.monthsSaved == 38
    assert summary.interestSaved > 0
    assert summary.newTotalInterest < result.totalInterest
    assert summary.yearlyBreakdown[-1].balance == 0


def test_no_prepayment_summary_by_default():
    assert calculate_loan(home_loan()).prepayment is None


def test_prepayment_after_loan_end_is_rejected():
    with pytest.raises(ValidationError):
        home_loan(prepayments=[{"year": 20, "amount": 1000}])


def test_prepayment_in_final_partial_year_is_rejected():
    # an 18-month loan ends at month 18, before the year-2 prepayment date
    with pytest.raises(ValidationError):
        home_loan(tenure=18, tenureUnit="months", prepayments=[{"year": 2, "amount": 100000}])


def test_prepayment_on_the_final_month_is_rejected():
    with pytest.raises(ValidationError):
        home_loan(prepayments=[{"year": 12, "amount": 1000}])
    assert home_loan(prepayments=[{"year": 11, "amount": 1000}]).prepayments[0].year == 11


def test_prepayment_in_short_loan_takes_effect():
    result = calculate_loan(
        home_loan(tenure=18, tenureUnit="months", prepayments=[Prepayment(year=1, amount=100000)])
    )
    summary = result.prepayment

    assert summary.newTenureMonths == 15
    assert summary.monthsSaved == 3
    assert summary.interestSaved > 0
    assert [row.year for row in summary.yearlyBreakdown] == [1, 2]
    assert summary.yearlyBreakdown[-1].balance == 0


def test_affordable_principal_round_trip():
    emi = monthly_installment(500000, 10, 144)
    assert affordable_principal(emi, 10, 144) == 500000


def test_affordable_principal_zero_rate():
    assert affordable_principal(10000, 0, 12) == 120000


def test_required_tenure_inverts_the_emi():
    emi = monthly_installment(500000, 10, 144)
    assert required_tenure(500000, emi, 10) == 144


def test_required_tenure_rounds_up_partial_months():
    assert required_tenure(500000, 10000, 10) == 65


def test_required_tenure_zero_rate():
    assert required_tenure(120000, 10000, 0) == 12
    assert required_tenure(100000, 30000, 0) == 4


@pytest.mark.parametrize("emi", [500, 1000])
def test_required_tenure_when_emi_never_amortizes(emi):
    # monthly interest on 100000 at 12% is exactly 1000
    with pytest.raises(DomainError):
        required_tenure(100000, emi, 12)


@pytest.mark.parametrize(
    "principal, rate, months",
    [(-1, 10, 12), (0, 10, 12), (100000, -1, 12), (100000, 10, 0)],
)
def test_invalid_loan_terms(principal, rate, months):
    with pytest.raises(DomainError):
        monthly_installment(principal, rate, months)


def test_amortization_schedule_computes_emi_when_missing():
    rows = amortization_schedule(120000, 12, 12)
    assert len(rows) == 12
    assert rows[0].interest == 1200
    assert rows[-1].balance == 0


def test_input_rejects_non_positive_principal():
    with pytest.raises(ValidationError):
        home_loan(principal=0)


def test_tenure_is_capped_at_forty_years():
    with pytest.raises(ValidationError):
        home_loan(tenure=41)
    assert home_loan(tenure=480, tenureUnit="months").months == 480
