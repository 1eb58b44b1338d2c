"""
Global constants for FirePlan.

Purpose
-------
Centralizes default values and magic numbers used throughout the FirePlan
codebase. These are the defaults of `FireAssumptions`; calculation code reads
them through an injected assumptions object rather than importing them
directly, so a different jurisdiction only needs a different config.

Usage
-----
>>> from fireplan.constants import PRESERVATION_AGE, SAFE_WITHDRAWAL_RATE
>>> fire_number = round(annual_expenses_cents / SAFE_WITHDRAWAL_RATE)

Categories
----------
- Retirement system: preservation and pension ages, contribution rate
- FIRE rules: withdrawal rate, multipliers
- Projection: horizon ages for solver and chart passes
- Search: bisection bounds and tolerances
- Gameplan: savings-rate curve and withdrawal comparison grids
- Plotting: Figure sizes, colors
"""

from typing import Tuple

__all__ = [
    # Retirement system
    "PRESERVATION_AGE",
    "AGE_PENSION_AGE",
    "DEFAULT_SG_RATE",
    # FIRE rules
    "SAFE_WITHDRAWAL_RATE",
    "FAT_FIRE_MULTIPLIER",
    "FIRE_VARIANTS",
    "MILESTONE_ORDER",
    # Projection
    "MAX_PROJECTION_AGE",
    "CHART_MAX_AGE",
    "CHART_MAX_YEARS",
    # Search
    "MAX_EXTRA_INCOME_CENTS",
    "DEFAULT_MAX_ITERS",
    "DEFAULT_TOLERANCE_CENTS",
    # Gameplan
    "ASAP_LEAD_YEARS",
    "FALLBACK_HORIZON_YEARS",
    "SAVINGS_RATE_STEPS",
    "WITHDRAWAL_RATES",
    "MONTHS_PER_YEAR",
    # Plotting
    "DEFAULT_FIGSIZE",
    "DEFAULT_FIGSIZE_WIDE",
    "BUCKET_COLORS",
]


# =============================================================================
# Retirement System
# =============================================================================

PRESERVATION_AGE: int = 60
"""Age at which the super (mandatory) bucket becomes accessible."""

AGE_PENSION_AGE: int = 67
"""Age pension eligibility age. Fallback target when none is set."""

DEFAULT_SG_RATE: float = 11.5
"""Default superannuation guarantee rate (%).

Only used as a comparison threshold for the salary-sacrifice recommendation.
"""


# =============================================================================
# FIRE Rules
# =============================================================================

SAFE_WITHDRAWAL_RATE: float = 0.04
"""Standard safe withdrawal rate (the 4% rule)."""

FAT_FIRE_MULTIPLIER: float = 1.25
"""Fat FIRE multiplier over regular spending."""

FIRE_VARIANTS: Tuple[str, ...] = ("lean", "regular", "fat", "coast")
"""Order in which variants are simulated and reported."""

MILESTONE_ORDER: Tuple[str, ...] = ("coast", "lean", "regular", "fat")
"""Order of the milestone ladder (smallest to largest goal)."""


# =============================================================================
# Projection Horizons
# =============================================================================

MAX_PROJECTION_AGE: int = 100
"""Last simulated age for solver-facing projections."""

CHART_MAX_AGE: int = 80
"""Last simulated age for chart-resolution projections."""

CHART_MAX_YEARS: int = 50
"""Maximum number of years recorded in a chart-resolution projection."""


# =============================================================================
# Search Defaults
# =============================================================================

MAX_EXTRA_INCOME_CENTS: int = 5_000_000
"""Upper bound for the extra-income search ($50k/month)."""

DEFAULT_MAX_ITERS: int = 20
"""Maximum bisection iterations."""

DEFAULT_TOLERANCE_CENTS: int = 5_000
"""Bisection stops once the bracket is narrower than this (~$50)."""


# =============================================================================
# Gameplan Defaults
# =============================================================================

ASAP_LEAD_YEARS: int = 5
"""In ASAP mode with a projection, the gameplan aims this many years earlier."""

FALLBACK_HORIZON_YEARS: int = 15
"""Target horizon used when there is neither a target nor a projection."""

SAVINGS_RATE_STEPS: Tuple[int, ...] = (10, 20, 30, 40, 50, 60, 70, 80)
"""Savings rates (%) evaluated by the sensitivity curve."""

WITHDRAWAL_RATES: Tuple[Tuple[float, str, str], ...] = (
    (0.04, "4%", "Standard (30yr retirement)"),
    (0.035, "3.5%", "Conservative (50yr+ retirement)"),
    (0.03, "3%", "Ultra-safe (perpetual)"),
)
"""(rate, label, note) rows of the withdrawal-rate comparison table."""

MONTHS_PER_YEAR: int = 12
"""Number of months in a year."""


# =============================================================================
# Plotting Defaults
# =============================================================================

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 7)
"""Default figure size (width, height) in inches for standard plots."""

DEFAULT_FIGSIZE_WIDE: Tuple[int, int] = (14, 5)
"""Figure size for wide aspect ratio plots (bucket bars, curves)."""

BUCKET_COLORS: Tuple[str, str] = ("#4C72B0", "#55A868")
"""Colors for the outside-super and super buckets."""
