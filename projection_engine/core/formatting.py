"""Display formatting for result metrics.

The calculation code never reads a global preference: callers hand a
:class:`NumberFormat` to the engine, which only uses it to fill
``Metric.formatted``.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Literal

Currency = Literal["INR", "USD", "EUR", "GBP"]
Locale = Literal["en-IN", "en-US", "en-GB"]

CURRENCY_SYMBOLS = {
    "INR": "₹",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


@dataclass(frozen=True)
class NumberFormat:
    currency: Currency = "INR"
    locale: Locale = "en-IN"

    @property
    def symbol(self) -> str:
        return CURRENCY_SYMBOLS[self.currency]


DEFAULT_FORMAT = NumberFormat()


def round_currency(amount: float) -> int:
    """Round half away from zero to a whole currency unit."""
    if amount < 0:
        return -round_currency(-amount)
    return int(math.floor(amount + 0.5))


def format_indian_number(amount: float) -> str:
    """Group digits the Indian way: 1234567 -> 12,34,567."""
    rounded = round_currency(amount)
    sign = "-" if rounded < 0 else ""
    digits = str(abs(rounded))
    if len(digits) <= 3:
        return sign + digits

    result = digits[-3:]
    remaining = digits[:-3]
    while len(remaining) > 2:
        result = f"{remaining[-2:]},{result}"
        remaining = remaining[:-2]
    if remaining:
        result = f"{remaining},{result}"
    return sign + result


def format_currency(amount: float, number_format: NumberFormat = DEFAULT_FORMAT) -> str:
    if number_format.locale == "en-IN":
        grouped = format_indian_number(amount)
    else:
        grouped = f"{round_currency(amount):,}"
    if grouped.startswith("-"):
        return f"-{number_format.symbol}{grouped[1:]}"
    return f"{number_format.symbol}{grouped}"


def format_percent(value: float, decimals: int = 2) -> str:
    return f"{value:.{decimals}f}%"


def format_compact(amount: float, number_format: NumberFormat = DEFAULT_FORMAT) -> str:
    """Abbreviate large amounts: Cr/L/K for rupees, B/M/K otherwise."""
    symbol = number_format.symbol
    magnitude = abs(amount)
    sign = "-" if amount < 0 else ""

    if number_format.currency == "INR":
        steps = ((10_000_000, "Cr"), (100_000, "L"), (1_000, "K"))
    else:
        steps = ((1_000_000_000, "B"), (1_000_000, "M"), (1_000, "K"))

    for size, suffix in steps:
        if magnitude >= size:
            return f"{sign}{symbol}{magnitude / size:.2f}{suffix}"
    return f"{sign}{symbol}{magnitude:.0f}"


def format_tenure(months: int) -> str:
    if months < 12:
        return f"{months} month{'s' if months != 1 else ''}"
    years, remainder = divmod(months, 12)
    if remainder == 0:
        return f"{years} year{'s' if years != 1 else ''}"
    return f"{years}y {remainder}m"
