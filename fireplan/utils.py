"""General utilities for FirePlan

Contents
--------
- Rounding helpers (half-up rounding that matches cent-level ledgers)
- Percentage helpers (guarded denominators, clamping)
- Date helpers (calendar age, anniversary dates)
- Formatting helpers (short/compact currency strings, axis formatter)
"""

from __future__ import annotations

import datetime
import math
from typing import Optional

__all__ = [
    # Rounding
    "round_half_up",
    # Percentages
    "clamp_percent",
    "progress_percent",
    # Dates
    "calculate_age",
    "add_years",
    # Formatting
    "format_cents_short",
    "format_cents_compact",
    "cents_axis_formatter",
]

# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def round_half_up(x: float) -> int:
    """Round to the nearest integer with ties going towards +infinity.

    Python's built-in ``round`` uses banker's rounding, which drifts from
    the ledger arithmetic the projections are calibrated against.

    >>> round_half_up(2.5), round_half_up(-2.5), round_half_up(3.4999)
    (3, -2, 3)
    """
    return int(math.floor(x + 0.5))


# ---------------------------------------------------------------------------
# Percentages
# ---------------------------------------------------------------------------

def clamp_percent(value: float) -> float:
    """Clamp a percentage into [0, 100]."""
    return max(0.0, min(100.0, float(value)))


def progress_percent(current: float, target: float, *, if_zero: float = 100.0) -> float:
    """Return ``current / target`` as a percentage clamped to [0, 100].

    A non-positive target has nothing left to accumulate and resolves to
    *if_zero* instead of dividing by zero.
    """
    if target <= 0:
        return if_zero
    return clamp_percent(current / target * 100)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

def calculate_age(dob: datetime.date, today: Optional[datetime.date] = None) -> int:
    """Exact calendar age on *today* (defaults to the current date).

    The age is decremented when today's month/day precedes the birthday.
    """
    if today is None:
        today = datetime.date.today()
    age = today.year - dob.year
    if (today.month, today.day) < (dob.month, dob.day):
        age -= 1
    return age


def add_years(d: datetime.date, years: int) -> datetime.date:
    """Same calendar day *years* later; Feb 29 maps to Feb 28 in common years."""
    try:
        return d.replace(year=d.year + years)
    except ValueError:
        return d.replace(year=d.year + years, day=28)


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------

def format_cents_short(cents: float, symbol: str = "$") -> str:
    """
    Format cents as a whole-dollar amount for headlines.

    Examples
    --------
    >>> format_cents_short(1_100_000)
    '$11,000'
    >>> format_cents_short(250_000_000)
    '$2.5M'
    >>> format_cents_short(4_999)
    '$50'
    """
    dollars = abs(cents) / 100
    if dollars >= 1_000_000:
        return f"{symbol}{dollars / 1_000_000:.1f}M"
    return f"{symbol}{round_half_up(dollars):,}"


def format_cents_compact(cents: float, symbol: str = "$") -> str:
    """
    Format cents in compact thousands/millions notation.

    Examples
    --------
    >>> format_cents_compact(150_000_000)
    '$1.5M'
    >>> format_cents_compact(15_000_000)
    '$150k'
    >>> format_cents_compact(50_000)
    '$500'
    """
    dollars = abs(cents) / 100
    if dollars >= 1_000_000:
        return f"{symbol}{dollars / 1_000_000:.1f}M"
    if dollars >= 1_000:
        return f"{symbol}{dollars / 1_000:.0f}k"
    return f"{symbol}{round_half_up(dollars)}"


def cents_axis_formatter(x, pos):
    """
    Format cents on a matplotlib axis in compact dollars.

    Designed for use with matplotlib's FuncFormatter.

    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(cents_axis_formatter))
    """
    if x == 0:
        return "0"
    return format_cents_compact(x)
