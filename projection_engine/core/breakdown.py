"""Breakdown aggregation shared by all calculators.

Numbers stay unrounded floats until they land in a result record; the helpers
here round them with :func:`~projection_engine.core.formatting.round_currency`.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from projection_engine.core.formatting import (
    DEFAULT_FORMAT,
    NumberFormat,
    format_currency,
    format_percent,
    round_currency,
)
from projection_engine.schemas.results import (
    ChartBucket,
    LoanYearRow,
    Metric,
    PeriodRow,
    YearlyRow,
)

PRIMARY_COLOR = "#2563eb"
SECONDARY_COLOR = "#10b981"


def chart_buckets(
    first_label: str,
    first_value: float,
    second_label: str,
    second_value: float,
) -> List[ChartBucket]:
    return [
        ChartBucket(label=first_label, value=round_currency(first_value), color=PRIMARY_COLOR),
        ChartBucket(label=second_label, value=round_currency(second_value), color=SECONDARY_COLOR),
    ]


def money_metric(
    label: str,
    amount: float,
    number_format: Optional[NumberFormat] = None,
) -> Metric:
    rounded = round_currency(amount)
    return Metric(
        label=label,
        value=rounded,
        formatted=format_currency(rounded, number_format or DEFAULT_FORMAT),
    )


def percent_metric(label: str, value: float, decimals: int = 2, suffix: str = "") -> Metric:
    return Metric(label=label, value=value, formatted=format_percent(value, decimals) + suffix)


def yearly_row(year: int, invested: float, total: float) -> YearlyRow:
    """Round once, then derive returns so that ``total == invested + returns``."""
    invested_rounded = round_currency(invested)
    total_rounded = round_currency(total)
    return YearlyRow(
        year=year,
        invested=invested_rounded,
        returns=total_rounded - invested_rounded,
        total=total_rounded,
    )


def roll_up_years(rows: Iterable[PeriodRow], exact: Optional[Iterable[tuple]] = None) -> List[LoanYearRow]:
    """Collapse monthly loan rows into one row per loan year.

    ``exact`` may carry the unrounded ``(principal, interest)`` pairs for the
    same months so yearly sums do not accumulate per-month rounding.
    """
    rows = list(rows)
    pairs = list(exact) if exact is not None else [(row.principal, row.interest) for row in rows]

    yearly: List[LoanYearRow] = []
    year_principal = 0.0
    year_interest = 0.0
    for index, (row, (principal_part, interest_part)) in enumerate(zip(rows, pairs)):
        year_principal += principal_part
        year_interest += interest_part
        last_row = index == len(rows) - 1
        if row.month % 12 == 0 or last_row:
            yearly.append(
                LoanYearRow(
                    year=row.year,
                    principal=round_currency(year_principal),
                    interest=round_currency(year_interest),
                    balance=row.balance,
                )
            )
            year_principal = 0.0
            year_interest = 0.0
    return yearly
