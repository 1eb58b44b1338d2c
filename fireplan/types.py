"""
Type definitions for FirePlan.

Purpose
-------
Provides TypedDict definitions for the plain-dictionary shapes produced by
``fireplan.serialization`` and consumed by the CLI, JSON exports and the
plotting helpers. Dates are ISO-8601 strings; money is integer cents.

Usage
-----
>>> from fireplan.serialization import result_to_dict
>>> data: FireResultDict = result_to_dict(result)
>>> data["variants"][0]["variant"]
'lean'

Type Definitions
----------------
ProjectionYearDict
    One step of the chart projection: {"age", "year", "total_cents", ...}

VariantResultDict
    Per-variant outcome: {"variant", "fire_number_cents", "projected_age", ...}

TwoBucketDict
    Outside-super bridge and super split of the required capital

FireResultDict
    Full simulation result

GameplanActionDict / GameplanDict
    Gameplan records

PlotColorsDict
    Colour overrides accepted by plotting functions
"""

from typing import List, Optional
from typing_extensions import TypedDict

__all__ = [
    "ProjectionYearDict",
    "VariantResultDict",
    "TwoBucketDict",
    "FireResultDict",
    "GameplanActionDict",
    "MilestoneDict",
    "CoastFireDict",
    "SavingsRatePointDict",
    "SavingsRateImpactDict",
    "WithdrawalComparisonDict",
    "ReferenceSuggestionDict",
    "GameplanDict",
    "PlotColorsDict",
]


class ProjectionYearDict(TypedDict):
    """
    One simulated year of the chart projection.

    Attributes
    ----------
    age : int
        Age at the start of the step.
    year : int
        Calendar year of the step.
    outside_super_cents, super_cents, total_cents : int
        Bucket balances before the step's growth.
    fire_target_cents : int
        Target compared against ``total_cents`` in this step.
    """

    age: int
    year: int
    outside_super_cents: int
    super_cents: int
    total_cents: int
    fire_target_cents: int


class VariantResultDict(TypedDict):
    variant: str
    annual_expenses_cents: int
    fire_number_cents: int
    projected_date: Optional[str]
    projected_age: Optional[int]
    progress_percent: float


class TwoBucketDict(TypedDict):
    outside_super_target_cents: int
    outside_super_current_cents: int
    outside_super_progress_percent: float
    super_target_cents: int
    super_current_cents: int
    super_progress_percent: float
    years_pre_retirement: int
    years_post_preservation: int


class FireResultDict(TypedDict):
    """
    Serialized ``FireResult``.

    ``projected_fire_date`` is an ISO date string or None when the active
    variant is not reached within the horizon.
    """

    schema_version: str
    current_age: int
    target_age: Optional[int]
    fire_number_cents: int
    annual_expenses_cents: int
    progress_percent: float
    projected_fire_date: Optional[str]
    projected_fire_age: Optional[int]
    years_to_fire: Optional[int]
    two_bucket: TwoBucketDict
    variants: List[VariantResultDict]
    projection: List[ProjectionYearDict]


class GameplanActionDict(TypedDict):
    type: str
    priority: str
    headline: str
    detail: str
    amount_per_month_cents: Optional[int]
    impact_years: Optional[int]
    result_age: Optional[int]


class MilestoneDict(TypedDict):
    variant: str
    label: str
    fire_number_cents: int
    projected_age: Optional[int]
    progress_percent: float
    is_achieved: bool
    is_current: bool


class CoastFireDict(TypedDict):
    coast_number_cents: int
    current_portfolio_cents: int
    progress_percent: float
    is_achieved: bool
    description: str


class SavingsRatePointDict(TypedDict):
    rate: int
    years_to_fire: Optional[int]
    is_current: bool


class SavingsRateImpactDict(TypedDict):
    current_rate: int
    plus_ten_years_saved: Optional[int]


class WithdrawalComparisonDict(TypedDict):
    rate: float
    label: str
    fire_number_cents: int
    note: str


class ReferenceSuggestionDict(TypedDict):
    ticker: str
    name: str
    type: str


class GameplanDict(TypedDict):
    """Serialized ``Gameplan``."""

    schema_version: str
    status: str
    status_summary: str
    target_label: str
    progress_percent: float
    actions: List[GameplanActionDict]
    milestones: List[MilestoneDict]
    coast_fire: CoastFireDict
    savings_rate_curve: List[SavingsRatePointDict]
    savings_rate_impact: SavingsRateImpactDict
    withdrawal_comparison: List[WithdrawalComparisonDict]
    reference_suggestions: List[ReferenceSuggestionDict]


class PlotColorsDict(TypedDict, total=False):
    """
    Color specifications for plotting functions.

    Attributes
    ----------
    outside : str
        Outside-super bucket. Default: ``BUCKET_COLORS[0]``.
    super : str
        Super bucket. Default: ``BUCKET_COLORS[1]``.
    target : str
        FIRE target line. Default: "crimson".
    current : str
        Highlight for the caller's current point on curves.

    Examples
    --------
    >>> colors: PlotColorsDict = {"outside": "#2196F3", "target": "red"}
    >>> plot_projection(result, colors=colors)
    """

    outside: str
    super: str
    target: str
    current: str
