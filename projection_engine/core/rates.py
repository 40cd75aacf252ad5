"""Rate and tenure normalization shared by every calculator."""

from __future__ import annotations

from projection_engine.domain.errors import DomainError

MONTHS_PER_YEAR = 12
DAYS_PER_YEAR = 365
DAYS_PER_MONTH = 30

PERIODS_PER_YEAR = {
    "daily": 365,
    "monthly": 12,
    "quarterly": 4,
    "halfYearly": 2,
    "yearly": 1,
}


def monthly_rate(annual_percent: float) -> float:
    return annual_percent / MONTHS_PER_YEAR / 100


def period_rate(annual_percent: float, periods: int) -> float:
    return annual_percent / periods / 100


def periods_per_year(frequency: str) -> int:
    try:
        return PERIODS_PER_YEAR[frequency]
    except KeyError:
        raise DomainError(f"unknown compounding frequency {frequency!r}") from None


def tenure_in_months(tenure: int, unit: str) -> int:
    """Loan and recurring engines count whole months."""
    if unit == "years":
        months = tenure * MONTHS_PER_YEAR
    elif unit == "months":
        months = tenure
    else:
        raise DomainError(f"unknown tenure unit {unit!r}")
    if months <= 0:
        raise DomainError("tenure must be at least one month")
    return months


def tenure_in_years(tenure: float, unit: str) -> float:
    if unit == "days":
        return tenure / DAYS_PER_YEAR
    if unit == "months":
        return tenure / MONTHS_PER_YEAR
    if unit == "years":
        return float(tenure)
    raise DomainError(f"unknown tenure unit {unit!r}")


def tenure_in_days(tenure: float, unit: str) -> float:
    # 30-day months and 365-day years, not calendar dates
    if unit == "days":
        return float(tenure)
    if unit == "months":
        return tenure * DAYS_PER_MONTH
    if unit == "years":
        return tenure * DAYS_PER_YEAR
    raise DomainError(f"unknown tenure unit {unit!r}")
