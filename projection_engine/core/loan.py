"""Amortizing loan (EMI) engine.

EMI = P * r * (1 + r)^n / ((1 + r)^n - 1)

where ``P`` is the principal, ``r`` the monthly rate (annual / 12 / 100) and
``n`` the tenure in months. At a zero rate the formula has a removable
singularity, so the payment is ``P / n`` exactly.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Tuple

from projection_engine.core.breakdown import (
    chart_buckets,
    money_metric,
    percent_metric,
    roll_up_years,
    round_currency,
)
from projection_engine.core.compounding import growth_factor
from projection_engine.core.formatting import NumberFormat
from projection_engine.core.rates import monthly_rate, tenure_in_months
from projection_engine.domain.errors import DomainError
from projection_engine.models import LoanInput, Prepayment
from projection_engine.schemas.results import (
    LoanResult,
    LoanYearRow,
    PeriodRow,
    PrepaymentSummary,
)

logger = logging.getLogger(__name__)

# Residual balances below this are float drift, not money owed.
BALANCE_EPSILON = 0.005


def _check_loan_terms(principal: float, annual_rate: float, months: int) -> None:
    errors = []
    if principal <= 0:
        errors.append("principal must be greater than 0")
    if annual_rate < 0:
        errors.append("interest rate cannot be negative")
    if months < 1:
        errors.append("tenure must be at least 1 month")
    if errors:
        raise DomainError(errors)


def monthly_installment(principal: float, annual_rate: float, months: int) -> float:
    """Return the unrounded equated monthly installment."""
    _check_loan_terms(principal, annual_rate, months)
    rate = monthly_rate(annual_rate)
    if rate == 0:
        return principal / months
    factor = growth_factor(rate, months)
    return principal * rate * factor / (factor - 1)


def _amortize(
    principal: float, annual_rate: float, months: int, emi: float
) -> List[Tuple[int, float, float, float]]:
    """Return unrounded ``(month, principal_part, interest, balance)`` tuples."""
    rate = monthly_rate(annual_rate)
    balance = principal
    rows = []
    for month in range(1, months + 1):
        interest = balance * rate
        principal_part = emi - interest
        balance = max(0.0, balance - principal_part)
        rows.append((month, principal_part, interest, balance))
    return rows


def _period_rows(raw_rows: Iterable[Tuple[int, float, float, float]], emi: float) -> List[PeriodRow]:
    return [
        PeriodRow(
            month=month,
            year=math.ceil(month / 12),
            emi=round_currency(emi),
            principal=round_currency(principal_part),
            interest=round_currency(interest),
            balance=round_currency(balance),
        )
        for month, principal_part, interest, balance in raw_rows
    ]


def amortization_schedule(
    principal: float, annual_rate: float, months: int, emi: Optional[float] = None
) -> List[PeriodRow]:
    """Month-by-month split of each installment into principal and interest."""
    if emi is None:
        emi = monthly_installment(principal, annual_rate, months)
    return _period_rows(_amortize(principal, annual_rate, months, emi), emi)


def _prepayments_by_year(prepayments: Iterable[Prepayment]) -> Dict[int, float]:
    by_year: Dict[int, float] = {}
    for prepayment in sorted(prepayments, key=lambda p: p.year):
        by_year[prepayment.year] = by_year.get(prepayment.year, 0.0) + prepayment.amount
    return by_year


def apply_prepayments(
    principal: float,
    annual_rate: float,
    months: int,
    emi: float,
    prepayments: Iterable[Prepayment],
) -> PrepaymentSummary:
    """Re-run the loan with lump-sum prepayments made at the end of loan years.

    The installment stays the same, so prepayments shorten the tenure rather
    than reduce the EMI.
    """
    rate = monthly_rate(annual_rate)
    by_year = _prepayments_by_year(prepayments)

    balance = principal
    total_interest = 0.0
    year_principal = 0.0
    year_interest = 0.0
    yearly: List[LoanYearRow] = []
    month = 0

    while balance > BALANCE_EPSILON and month < months:
        month += 1
        year = math.ceil(month / 12)

        interest = balance * rate
        principal_paid = min(emi - interest, balance)
        balance = max(0.0, balance - principal_paid)
        total_interest += interest
        year_principal += principal_paid
        year_interest += interest

        if month % 12 == 0 and year in by_year:
            extra = by_year[year]
            year_principal += min(extra, balance)
            balance = max(0.0, balance - extra)

        if balance <= BALANCE_EPSILON:
            balance = 0.0

        if month % 12 == 0 or balance == 0.0:
            yearly.append(
                LoanYearRow(
                    year=year,
                    principal=round_currency(year_principal),
                    interest=round_currency(year_interest),
                    balance=round_currency(balance),
                )
            )
            year_principal = 0.0
            year_interest = 0.0

    original_interest = emi * months - principal
    return PrepaymentSummary(
        newTenureMonths=month,
        newTotalInterest=round_currency(total_interest),
        newTotalPayment=round_currency(principal + total_interest),
        interestSaved=round_currency(original_interest - total_interest),
        monthsSaved=months - month,
        yearlyBreakdown=yearly,
    )


def calculate_loan(loan: LoanInput, number_format: Optional[NumberFormat] = None) -> LoanResult:
    months = tenure_in_months(loan.tenure, loan.tenureUnit)
    emi = monthly_installment(loan.principal, loan.annualRatePercent, months)

    total_payment = emi * months
    total_interest = total_payment - loan.principal

    raw_rows = _amortize(loan.principal, loan.annualRatePercent, months, emi)
    schedule = _period_rows(raw_rows, emi)
    yearly = roll_up_years(
        schedule,
        exact=[(principal_part, interest) for _, principal_part, interest, _ in raw_rows],
    )

    prepayment = None
    if loan.prepayments:
        prepayment = apply_prepayments(
            loan.principal, loan.annualRatePercent, months, emi, loan.prepayments
        )

    logger.debug(
        "EMI for principal=%s rate=%s months=%d: %.2f (interest %.2f)",
        loan.principal,
        loan.annualRatePercent,
        months,
        emi,
        total_interest,
    )

    interest_share = total_interest / loan.principal * 100
    return LoanResult(
        emi=round_currency(emi),
        totalInterest=round_currency(total_interest),
        totalPayment=round_currency(total_payment),
        primary=money_metric("Monthly EMI", emi, number_format),
        secondary=[
            money_metric("Total Interest", total_interest, number_format),
            money_metric("Total Payment", total_payment, number_format),
            percent_metric("Interest %", interest_share, decimals=1),
        ],
        breakdown=schedule,
        yearlyBreakdown=yearly,
        prepayment=prepayment,
        chartData=chart_buckets("Principal", loan.principal, "Interest", total_interest),
    )


def affordable_principal(target_emi: float, annual_rate: float, months: int) -> float:
    """Largest loan a given monthly installment can repay over ``months``."""
    if target_emi <= 0:
        raise DomainError("EMI must be greater than 0")
    if annual_rate < 0:
        raise DomainError("interest rate cannot be negative")
    if months < 1:
        raise DomainError("tenure must be at least 1 month")

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return float(round_currency(target_emi * months))
    factor = growth_factor(rate, months)
    return float(round_currency(target_emi * (factor - 1) / (rate * factor)))


def required_tenure(principal: float, emi: float, annual_rate: float) -> int:
    """Months needed to repay ``principal`` with a fixed ``emi``.

    n = ln(EMI / (EMI - P * r)) / ln(1 + r)
    """
    if principal <= 0:
        raise DomainError("principal must be greater than 0")
    if emi <= 0:
        raise DomainError("EMI must be greater than 0")
    if annual_rate < 0:
        raise DomainError("interest rate cannot be negative")

    rate = monthly_rate(annual_rate)
    if rate == 0:
        return math.ceil(principal / emi - 1e-9)

    first_interest = principal * rate
    if emi <= first_interest:
        raise DomainError(
            f"EMI {emi:.2f} does not cover the first month's interest {first_interest:.2f}; "
            "the loan would never be repaid"
        )
    periods = math.log(emi / (emi - first_interest)) / math.log(1 + rate)
    # float noise can push an exact tenure like 144 to 144.0000000001
    return math.ceil(periods - 1e-9)
