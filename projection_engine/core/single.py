"""One-time investment engines: fixed deposit, lumpsum, compound interest, CAGR.

All of them grow a single principal with the compounding kernel:

    A = P * (1 + r/n)^(n*t)

with ``n`` compounding periods per year and ``t`` the tenure in years.
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional

from projection_engine.core.breakdown import (
    chart_buckets,
    money_metric,
    percent_metric,
    round_currency,
    yearly_row,
)
from projection_engine.core.compounding import annuity_factor, growth_factor
from projection_engine.core.formatting import NumberFormat
from projection_engine.core.rates import (
    period_rate,
    periods_per_year,
    tenure_in_days,
    tenure_in_years,
)
from projection_engine.domain.errors import DomainError
from projection_engine.models import CagrInput, CompoundInput, SingleInvestmentInput
from projection_engine.schemas.results import InvestmentResult, Metric, YearlyRow

logger = logging.getLogger(__name__)

PAYOUTS_PER_YEAR = {
    "monthly": 12,
    "quarterly": 4,
    "yearly": 1,
}


def compound_amount(principal: float, annual_rate: float, years: float, frequency: str) -> float:
    n = periods_per_year(frequency)
    return principal * growth_factor(period_rate(annual_rate, n), n * years)


def _fixed_deposit_breakdown(
    principal: float, annual_rate: float, years: float, frequency: str
) -> List[YearlyRow]:
    """Balance at each year end; the last year may be partial."""
    rows = []
    for year in range(1, math.ceil(years) + 1):
        elapsed = min(float(year), years)
        rows.append(yearly_row(year, principal, compound_amount(principal, annual_rate, elapsed, frequency)))
    return rows


def _simple_payout_breakdown(principal: float, annual_rate: float, years: float) -> List[YearlyRow]:
    rows = []
    for year in range(1, math.ceil(years) + 1):
        elapsed = min(float(year), years)
        rows.append(yearly_row(year, principal, principal + simple_interest(principal, annual_rate, elapsed)))
    return rows


def calculate_fixed_deposit(
    deposit: SingleInvestmentInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    years = tenure_in_years(deposit.tenure, deposit.tenureUnit)
    if years <= 0:
        raise DomainError("tenure must be positive")

    if deposit.interestPayout == "maturity":
        maturity = compound_amount(
            deposit.principal, deposit.annualRatePercent, years, deposit.compoundingFrequency
        )
        breakdown = _fixed_deposit_breakdown(
            deposit.principal, deposit.annualRatePercent, years, deposit.compoundingFrequency
        )
    else:
        # interest is paid out as it accrues, so nothing compounds
        maturity = deposit.principal + simple_interest(deposit.principal, deposit.annualRatePercent, years)
        breakdown = _simple_payout_breakdown(deposit.principal, deposit.annualRatePercent, years)

    interest = maturity - deposit.principal
    effective_rate = (maturity / deposit.principal - 1) / years * 100

    logger.debug(
        "FD maturity for principal=%s rate=%s years=%.4f %s: %.2f",
        deposit.principal,
        deposit.annualRatePercent,
        years,
        deposit.compoundingFrequency,
        maturity,
    )

    secondary = [
        money_metric("Interest Earned", interest, number_format),
        money_metric("Principal", deposit.principal, number_format),
        percent_metric("Effective Rate", effective_rate, suffix=" p.a."),
        _tenure_days_metric(deposit.tenure, deposit.tenureUnit),
    ]
    if deposit.interestPayout != "maturity":
        per_payout = deposit.principal * deposit.annualRatePercent / 100 / PAYOUTS_PER_YEAR[deposit.interestPayout]
        secondary.append(money_metric(f"{deposit.interestPayout.capitalize()} Payout", per_payout, number_format))

    return InvestmentResult(
        maturityValue=round_currency(maturity),
        totalInvested=round_currency(deposit.principal),
        totalReturns=round_currency(interest),
        primary=money_metric("Maturity Amount", maturity, number_format),
        secondary=secondary,
        breakdown=breakdown,
        chartData=chart_buckets("Principal", deposit.principal, "Interest", interest),
    )


def _tenure_days_metric(tenure: float, unit: str) -> Metric:
    days = tenure_in_days(tenure, unit)
    return Metric(label="Tenure", value=days, formatted=f"{days:.0f} days")


def calculate_lumpsum(
    investment: SingleInvestmentInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    """FV = P * (1 + r)^years with annual compounding."""
    years = tenure_in_years(investment.tenure, investment.tenureUnit)
    if years != int(years):
        raise DomainError("lumpsum tenure must be a whole number of years")
    years = int(years)

    rate = investment.annualRatePercent / 100
    principal = investment.principal
    maturity = principal * growth_factor(rate, years)
    returns = maturity - principal

    breakdown = [
        yearly_row(year, principal, principal * growth_factor(rate, year))
        for year in range(1, years + 1)
    ]

    return InvestmentResult(
        maturityValue=round_currency(maturity),
        totalInvested=round_currency(principal),
        totalReturns=round_currency(returns),
        primary=money_metric("Maturity Value", maturity, number_format),
        secondary=[
            money_metric("Total Returns", returns, number_format),
            money_metric("Principal", principal, number_format),
            percent_metric("Absolute Return", returns / principal * 100, decimals=1),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Principal", principal, "Returns", returns),
    )


def calculate_single_investment(
    investment: SingleInvestmentInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    if investment.product == "lumpsum":
        return calculate_lumpsum(investment, number_format)
    return calculate_fixed_deposit(investment, number_format)


def required_deposit(
    target_amount: float,
    annual_rate: float,
    tenure: float,
    tenure_unit: str = "years",
    frequency: str = "quarterly",
) -> float:
    """Principal to deposit today so it grows to ``target_amount``."""
    if target_amount <= 0:
        raise DomainError("target amount must be greater than 0")
    if annual_rate < 0:
        raise DomainError("interest rate cannot be negative")
    years = tenure_in_years(tenure, tenure_unit)
    if years <= 0:
        raise DomainError("tenure must be positive")
    return float(round_currency(target_amount / compound_amount(1.0, annual_rate, years, frequency)))


def simple_interest(principal: float, annual_rate: float, years: float) -> float:
    return principal * annual_rate / 100 * years


def compare_interest(
    principal: float, annual_rate: float, years: float, frequency: str
) -> Dict[str, float]:
    """Compound against simple interest on the same principal."""
    compound = round_currency(compound_amount(principal, annual_rate, years, frequency))
    simple = round_currency(principal + simple_interest(principal, annual_rate, years))
    difference = compound - simple
    return {
        "compound": compound,
        "simple": simple,
        "difference": difference,
        "differencePercent": difference / simple * 100 if simple else 0.0,
    }


def _compound_total(principal: float, monthly_contribution: float, annual_rate: float, years: float, n: int) -> float:
    rate = period_rate(annual_rate, n)
    total = principal * growth_factor(rate, n * years)
    if monthly_contribution > 0:
        # contributions are spread evenly over the compounding periods
        per_period = monthly_contribution * 12 / n
        total += per_period * annuity_factor(rate, n * years)
    return total


def calculate_compound(
    compound: CompoundInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    n = periods_per_year(compound.compoundingFrequency)
    yearly_contribution = compound.monthlyContribution * 12

    final_amount = _compound_total(
        compound.principal, compound.monthlyContribution, compound.annualRatePercent, compound.years, n
    )
    invested = compound.principal + yearly_contribution * compound.years
    interest = final_amount - invested

    breakdown = [
        yearly_row(
            year,
            compound.principal + yearly_contribution * year,
            _compound_total(compound.principal, compound.monthlyContribution, compound.annualRatePercent, year, n),
        )
        for year in range(1, compound.years + 1)
    ]

    effective_rate = (growth_factor(period_rate(compound.annualRatePercent, n), n) - 1) * 100
    comparison = compare_interest(
        compound.principal, compound.annualRatePercent, compound.years, compound.compoundingFrequency
    )

    return InvestmentResult(
        maturityValue=round_currency(final_amount),
        totalInvested=round_currency(invested),
        totalReturns=round_currency(interest),
        primary=money_metric("Total Amount", final_amount, number_format),
        secondary=[
            money_metric("Interest Earned", interest, number_format),
            money_metric("Total Contributions", invested, number_format),
            percent_metric("Effective Annual Rate", effective_rate),
            money_metric("Simple Interest Total", comparison["simple"], number_format),
            money_metric("Compounding Advantage", comparison["difference"], number_format),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Principal", invested, "Interest", interest),
    )


def calculate_cagr(initial_value: float, final_value: float, years: float) -> float:
    """Compound annual growth rate in percent."""
    if initial_value <= 0:
        raise DomainError("initial value must be greater than 0")
    if final_value <= 0:
        raise DomainError("final value must be greater than 0")
    if years <= 0:
        raise DomainError("years must be greater than 0")
    return (growth_factor(final_value / initial_value - 1, 1 / years) - 1) * 100


def calculate_cagr_projection(
    cagr_input: CagrInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    cagr = calculate_cagr(cagr_input.initialValue, cagr_input.finalValue, cagr_input.years)
    rate = cagr / 100
    initial = cagr_input.initialValue
    total_return = cagr_input.finalValue - initial

    breakdown = []
    for year in range(1, math.ceil(cagr_input.years) + 1):
        elapsed = min(float(year), cagr_input.years)
        breakdown.append(yearly_row(year, initial, initial * growth_factor(rate, elapsed)))

    return InvestmentResult(
        maturityValue=round_currency(cagr_input.finalValue),
        totalInvested=round_currency(initial),
        totalReturns=round_currency(total_return),
        primary=percent_metric("CAGR", cagr),
        secondary=[
            money_metric("Total Return", total_return, number_format),
            percent_metric("Total Return %", total_return / initial * 100, decimals=1),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Initial Value", initial, "Growth", total_return),
    )
