"""Recurring-contribution engines: SIP, step-up SIP, recurring deposit, goals.

A standard SIP pays ``A`` at the start of every month, so its value after
``n`` months is an annuity due:

    FV = A * ((1 + r)^n - 1) / r * (1 + r)

A step-up SIP raises the monthly amount by a fixed percentage every year.
That stream has no closed form, so it is valued cohort by cohort: each
year's twelve contributions are projected forward on their own and added to
the running total.
"""

from __future__ import annotations

import logging
import math
from typing import List, NamedTuple, Optional

from projection_engine.core.breakdown import (
    chart_buckets,
    money_metric,
    percent_metric,
    round_currency,
    yearly_row,
)
from projection_engine.core.compounding import annuity_due_factor, growth_factor
from projection_engine.core.formatting import NumberFormat
from projection_engine.core.rates import monthly_rate, period_rate
from projection_engine.domain.errors import DomainError
from projection_engine.models import GoalInput, RecurringDepositInput, RecurringInput
from projection_engine.schemas.results import InvestmentResult, YearlyRow

logger = logging.getLogger(__name__)


class Cohort(NamedTuple):
    """The twelve equal contributions made during one year of a SIP."""

    year: int
    monthly_amount: float

    @property
    def invested(self) -> float:
        return self.monthly_amount * 12

    def year_end_value(self, rate: float) -> float:
        # the contribution in month m compounds for 12 - m + 1 months
        return sum(self.monthly_amount * growth_factor(rate, 12 - month + 1) for month in range(1, 13))


def _standard_breakdown(amount: float, rate: float, years: int) -> List[YearlyRow]:
    return [
        yearly_row(year, amount * year * 12, amount * annuity_due_factor(rate, year * 12))
        for year in range(1, years + 1)
    ]


def step_up_cohorts(amount: float, years: int, step_up_percent: float) -> List[Cohort]:
    step = step_up_percent / 100
    return [Cohort(year=year, monthly_amount=amount * growth_factor(step, year - 1)) for year in range(1, years + 1)]


def step_up_projection(amount: float, rate: float, years: int, step_up_percent: float):
    """Return ``(maturity, invested, breakdown)`` for a stepped-up stream."""
    value = 0.0
    invested = 0.0
    breakdown: List[YearlyRow] = []
    for cohort in step_up_cohorts(amount, years, step_up_percent):
        value = value * growth_factor(rate, 12) + cohort.year_end_value(rate)
        invested += cohort.invested
        breakdown.append(yearly_row(cohort.year, invested, value))
    return value, invested, breakdown


def calculate_recurring(
    sip: RecurringInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    rate = monthly_rate(sip.annualRatePercent)
    months = sip.years * 12

    if sip.annualStepUpPercent > 0:
        maturity, invested, breakdown = step_up_projection(
            sip.periodicAmount, rate, sip.years, sip.annualStepUpPercent
        )
    else:
        maturity = sip.periodicAmount * annuity_due_factor(rate, months)
        invested = sip.periodicAmount * months
        breakdown = _standard_breakdown(sip.periodicAmount, rate, sip.years)

    returns = maturity - invested
    logger.debug(
        "SIP amount=%s rate=%s years=%d step-up=%s: maturity %.2f on %.2f invested",
        sip.periodicAmount,
        sip.annualRatePercent,
        sip.years,
        sip.annualStepUpPercent,
        maturity,
        invested,
    )

    return InvestmentResult(
        maturityValue=round_currency(maturity),
        totalInvested=round_currency(invested),
        totalReturns=round_currency(returns),
        primary=money_metric("Maturity Value", maturity, number_format),
        secondary=[
            money_metric("Total Invested", invested, number_format),
            money_metric("Total Returns", returns, number_format),
            percent_metric("Wealth Gain", returns / invested * 100, decimals=1),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Invested", invested, "Returns", returns),
    )


def required_recurring_contribution(target_amount: float, annual_rate: float, years: int) -> float:
    """Monthly SIP that grows to ``target_amount``, rounded up to a whole unit."""
    if target_amount <= 0:
        raise DomainError("target amount must be greater than 0")
    if annual_rate < 0:
        raise DomainError("interest rate cannot be negative")
    if years <= 0:
        raise DomainError("years must be greater than 0")

    months = years * 12
    return float(math.ceil(target_amount / annuity_due_factor(monthly_rate(annual_rate), months)))


def _deposit_value(deposit: float, quarterly_rate: float, months_elapsed: int) -> float:
    """Value after ``months_elapsed`` months of deposits made at each month start."""
    return sum(
        deposit * growth_factor(quarterly_rate, (months_elapsed - index) / 3)
        for index in range(months_elapsed)
    )


def calculate_recurring_deposit(
    rd: RecurringDepositInput, number_format: Optional[NumberFormat] = None
) -> InvestmentResult:
    """Bank recurring deposit: monthly deposits, interest compounded quarterly."""
    quarterly_rate = period_rate(rd.annualRatePercent, 4)
    maturity = _deposit_value(rd.monthlyDeposit, quarterly_rate, rd.months)
    deposited = rd.monthlyDeposit * rd.months
    interest = maturity - deposited

    breakdown = []
    for year in range(1, math.ceil(rd.months / 12) + 1):
        elapsed = min(year * 12, rd.months)
        breakdown.append(
            yearly_row(year, rd.monthlyDeposit * elapsed, _deposit_value(rd.monthlyDeposit, quarterly_rate, elapsed))
        )

    return InvestmentResult(
        maturityValue=round_currency(maturity),
        totalInvested=round_currency(deposited),
        totalReturns=round_currency(interest),
        primary=money_metric("Maturity Value", maturity, number_format),
        secondary=[
            money_metric("Total Deposit", deposited, number_format),
            money_metric("Total Interest", interest, number_format),
            percent_metric("Effective Return", interest / deposited * 100, decimals=1),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Deposited", deposited, "Interest", interest),
    )


def calculate_goal(goal: GoalInput, number_format: Optional[NumberFormat] = None) -> InvestmentResult:
    """Monthly SIP and lump sum needed today to close the gap to a target."""
    annual_rate = goal.annualRatePercent / 100
    rate = monthly_rate(goal.annualRatePercent)
    months = goal.years * 12

    savings_at_goal = goal.currentSavings * growth_factor(annual_rate, goal.years)
    amount_needed = max(0.0, goal.targetAmount - savings_at_goal)

    if amount_needed > 0:
        monthly = required_recurring_contribution(amount_needed, goal.annualRatePercent, goal.years)
    else:
        monthly = 0.0
    lumpsum_today = amount_needed / growth_factor(annual_rate, goal.years)

    breakdown = [
        yearly_row(
            year,
            goal.currentSavings + monthly * year * 12,
            goal.currentSavings * growth_factor(annual_rate, year) + monthly * annuity_due_factor(rate, year * 12),
        )
        for year in range(1, goal.years + 1)
    ]
    projected = savings_at_goal + monthly * annuity_due_factor(rate, months)
    invested = goal.currentSavings + monthly * months
    returns = projected - invested

    return InvestmentResult(
        maturityValue=round_currency(projected),
        totalInvested=round_currency(invested),
        totalReturns=round_currency(returns),
        primary=money_metric("Monthly SIP Required", monthly, number_format),
        secondary=[
            money_metric("Amount Needed", amount_needed, number_format),
            money_metric("Lumpsum Required Today", lumpsum_today, number_format),
            money_metric("Total Investment", invested, number_format),
            money_metric("Wealth Gained", goal.targetAmount - invested, number_format),
        ],
        breakdown=breakdown,
        chartData=chart_buckets("Invested", invested, "Returns", returns),
    )
