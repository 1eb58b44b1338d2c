"""
Year-by-year projection engine for FirePlan.

Purpose
-------
Simulates two independently growing capital buckets one year at a time:

    C_t   = round(I_t · c)                           (super contribution)
    D_t   = max(0, max(0, I_t − S_t) − C_t)           (outside deposit)
    O_t+1 = round(O_t · (1 + r_o) + D_t)
    P_t+1 = round(P_t · (1 + r_p) + C_t)

where I_t is annual income, S_t annual spending, c the contribution rate,
O the outside-super bucket and P the super bucket. Income and spending drift
by their growth rates after each step, and the FIRE target drifts with
spending. Rounding happens inside every step: cent-level rounding is path
dependent over decades, so it cannot be deferred to the end.

Two passes share the same step:

- run_projection    : solver-facing; runs to ``max_projection_age`` and only
                      reports when (and whether) the variant's target is hit.
- projection_series : chart-facing; records every year up to
                      ``min(chart_max_age, current_age + chart_max_years)``
                      and stops just after the target is reached.

Key Features
------------
- Coast variant re-discounts its target every year using the years left to
  the target age (pension age when unset)
- Contributions are paid on top of income and never double-counted into the
  outside deposit
- An exhausted horizon yields ``(None, None)``: "not achievable", not an error

Example
-------
>>> outcome = run_projection(30, profile, spending, investments,
...                          fire_number_cents=150_000_000, variant="regular")
>>> outcome.achieved
True
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, asdict
from typing import List, Optional

import pandas as pd

from .calculations import coast_number
from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .constants import MONTHS_PER_YEAR
from .profile import FireProfile, FireVariant, InvestmentSnapshot, SpendingSnapshot
from .utils import add_years, round_half_up

__all__ = [
    "ProjectionYear",
    "ProjectionOutcome",
    "run_projection",
    "projection_series",
    "series_to_frame",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ProjectionYear:
    """Bucket balances at the start of one simulated year."""
    age: int
    year: int
    outside_super_cents: int
    super_cents: int
    total_cents: int
    fire_target_cents: int


@dataclass(frozen=True)
class ProjectionOutcome:
    """When the target is reached; both fields are None if never."""
    fire_date: Optional[datetime.date]
    fire_age: Optional[int]

    @property
    def achieved(self) -> bool:
        return self.fire_age is not None


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

class _Ledger:
    """Mutable per-run state. Never shared between runs."""

    def __init__(
        self,
        profile: FireProfile,
        spending: SpendingSnapshot,
        investments: InvestmentSnapshot,
        fire_target_cents: int,
        inflate_target: bool,
    ):
        self.outside = investments.outside_super_cents
        self.super = investments.super_balance_cents
        self.income = spending.monthly_income_cents * MONTHS_PER_YEAR
        self.spending = spending.monthly_total_spend_cents * MONTHS_PER_YEAR
        self.target = fire_target_cents
        self.inflate_target = inflate_target

        self.contribution_rate = profile.super_contribution_rate
        self.super_return = profile.expected_return_rate / 100
        self.outside_return = profile.outside_return_rate / 100
        self.income_growth = (profile.income_growth_rate or 0) / 100
        self.spending_growth = (profile.spending_growth_rate or 0) / 100

    @property
    def total(self) -> int:
        return self.outside + self.super

    def advance(self) -> None:
        """Apply one year of contributions, growth and drift."""
        # Contributions sit on top of take-home pay, so only the super bucket
        # receives them; the outside bucket gets what is left of the surplus.
        contribution = max(0, round_half_up(self.income * self.contribution_rate / 100))
        surplus = self.income - self.spending
        deposit = max(0, surplus) - contribution

        self.outside = round_half_up(self.outside * (1 + self.outside_return) + max(0, deposit))
        self.super = round_half_up(self.super * (1 + self.super_return) + contribution)

        if self.income_growth > 0:
            self.income = round_half_up(self.income * (1 + self.income_growth))
        if self.spending_growth > 0:
            self.spending = round_half_up(self.spending * (1 + self.spending_growth))
            if self.inflate_target:
                self.target = round_half_up(self.target * (1 + self.spending_growth))


# ---------------------------------------------------------------------------
# Passes
# ---------------------------------------------------------------------------

def run_projection(
    current_age: int,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    fire_number_cents: int,
    variant: FireVariant,
    *,
    today: Optional[datetime.date] = None,
    assumptions: FireAssumptions = DEFAULT_ASSUMPTIONS,
) -> ProjectionOutcome:
    """
    Find the first age at which *variant*'s target is met.

    Parameters
    ----------
    current_age : int
        Age at the first simulated step.
    profile, spending, investments
        Input snapshots. Only read.
    fire_number_cents : int
        The variant's FIRE number at the current age.
    variant : {"lean", "regular", "fat", "coast"}
        Selects the termination rule. Coast compares the portfolio with the
        FIRE target discounted over the years left to the target age,
        re-discounted every year; the check only applies up to that age.
    today : datetime.date, optional
        Anchor for the projected date. Defaults to the current date.
    assumptions : FireAssumptions
        Horizon and fallback-age rules.

    Returns
    -------
    ProjectionOutcome
        ``(date, age)`` on success, ``(None, None)`` when the horizon is
        exhausted first.
    """
    if today is None:
        today = datetime.date.today()

    is_coast = variant == "coast"
    ledger = _Ledger(
        profile,
        spending,
        investments,
        fire_number_cents,
        inflate_target=(not is_coast) or assumptions.coast_target_tracks_spending,
    )
    coast_age = (
        profile.target_retirement_age
        if profile.target_retirement_age is not None
        else assumptions.pension_age
    )

    for age in range(current_age, assumptions.max_projection_age + 1):
        if is_coast:
            years_to_target = coast_age - age
            reached = years_to_target >= 0 and ledger.total >= coast_number(
                ledger.target, years_to_target, profile.expected_return_rate
            )
        else:
            reached = ledger.total >= ledger.target

        if reached:
            return ProjectionOutcome(
                fire_date=add_years(today, age - current_age),
                fire_age=age,
            )
        ledger.advance()

    logger.debug(
        "%s target %d not reached by age %d",
        variant, fire_number_cents, assumptions.max_projection_age,
    )
    return ProjectionOutcome(fire_date=None, fire_age=None)


def projection_series(
    current_age: int,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    fire_number_cents: int,
    *,
    today: Optional[datetime.date] = None,
    assumptions: FireAssumptions = DEFAULT_ASSUMPTIONS,
) -> List[ProjectionYear]:
    """
    Record the bucket trajectory for charting.

    Every year from *current_age* is recorded; the run stops on the first
    year after the starting one whose total reaches the (drifting) target,
    or at ``min(chart_max_age, current_age + chart_max_years)``.
    """
    if today is None:
        today = datetime.date.today()

    ledger = _Ledger(profile, spending, investments, fire_number_cents, inflate_target=True)
    max_age = min(assumptions.chart_max_age, current_age + assumptions.chart_max_years)

    series: List[ProjectionYear] = []
    for age in range(current_age, max_age + 1):
        series.append(ProjectionYear(
            age=age,
            year=today.year + (age - current_age),
            outside_super_cents=ledger.outside,
            super_cents=ledger.super,
            total_cents=ledger.total,
            fire_target_cents=ledger.target,
        ))
        if ledger.total >= ledger.target and age > current_age:
            break
        ledger.advance()

    return series


def series_to_frame(series: List[ProjectionYear]) -> pd.DataFrame:
    """Projection series as a DataFrame indexed by age."""
    columns = [
        "age", "year", "outside_super_cents", "super_cents",
        "total_cents", "fire_target_cents",
    ]
    if not series:
        return pd.DataFrame(columns=columns).set_index("age")
    return pd.DataFrame([asdict(row) for row in series], columns=columns).set_index("age")
