"""Compounding kernel.

Every ``(1 + r) ** n`` in the engine goes through :func:`growth_factor`. The
annuity helpers branch on a zero rate explicitly instead of relying on the
power formula to degenerate, since ``(g - 1) / r`` is 0/0 there.
"""

from __future__ import annotations

from projection_engine.domain.errors import DomainError


def growth_factor(rate_per_period: float, periods: float) -> float:
    """Return ``(1 + rate_per_period) ** periods``.

    ``periods`` may be fractional (an FD of 100 days compounds quarterly for
    ~1.1 periods).
    """
    if periods < 0:
        raise DomainError("period count cannot be negative")
    if rate_per_period == 0:
        return 1.0
    if rate_per_period <= -1:
        raise DomainError("rate per period must be greater than -100%")
    return (1 + rate_per_period) ** periods


def annuity_factor(rate_per_period: float, periods: float) -> float:
    """Future value of 1 paid at the end of each period."""
    if rate_per_period == 0:
        return float(periods)
    return (growth_factor(rate_per_period, periods) - 1) / rate_per_period


def annuity_due_factor(rate_per_period: float, periods: float) -> float:
    """Future value of 1 paid at the start of each period."""
    if rate_per_period == 0:
        return float(periods)
    return annuity_factor(rate_per_period, periods) * (1 + rate_per_period)
