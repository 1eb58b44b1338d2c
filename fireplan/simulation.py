"""Simulation orchestrator for FirePlan

Connects `calculations.py` and `projection.py` into the single entry point
every other calculation reruns: ``simulate(profile, spending, investments)``.

For each of the four variants it derives the expense basis and FIRE number,
runs the solver-facing projection, and scores progress. It then selects the
profile's active variant, resolves the target age, splits the requirement
into the two buckets, and records a chart-resolution projection series.

Design goals
------------
- Pure: inputs are only read, nothing is cached between calls.
- Deterministic: the only clock read is ``today`` (injectable).
- One projection loop: impact calculators, solvers and the savings-rate
  curve all build modified snapshots and call back into ``simulate``.

Typical usage
-------------
>>> from datetime import date
>>> from fireplan.profile import FireProfile, SpendingSnapshot, InvestmentSnapshot
>>> profile = FireProfile(date_of_birth=date(1995, 1, 1), target_retirement_age=45)
>>> spending = SpendingSnapshot(
...     monthly_essentials_cents=300_000,
...     monthly_total_spend_cents=500_000,
...     monthly_income_cents=1_000_000,
...     savings_rate_percent=50,
... )
>>> investments = InvestmentSnapshot(outside_super_cents=10_000_000,
...                                  super_balance_cents=5_000_000)
>>> result = FireSimulator().simulate(profile, spending, investments)
>>> [v.variant for v in result.variants]
['lean', 'regular', 'fat', 'coast']
"""
from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import pandas as pd

from .calculations import TwoBucketBreakdown, annual_expenses, fire_number, two_bucket
from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .constants import FIRE_VARIANTS
from .profile import FireProfile, FireVariant, InvestmentSnapshot, SpendingSnapshot
from .projection import ProjectionYear, projection_series, run_projection, series_to_frame
from .utils import calculate_age, progress_percent

__all__ = [
    "FireVariantResult",
    "FireResult",
    "FireSimulator",
    "simulate",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FireVariantResult:
    variant: FireVariant
    annual_expenses_cents: int
    fire_number_cents: int
    projected_date: Optional[datetime.date]
    projected_age: Optional[int]
    progress_percent: float


@dataclass(frozen=True)
class FireResult:
    """Outcome of one simulation, centred on the profile's active variant.

    ``target_age`` is the explicit target, or the projected age in
    "as soon as possible" mode (None when there is no projection either).
    """
    current_age: int
    target_age: Optional[int]
    fire_number_cents: int
    annual_expenses_cents: int
    two_bucket: TwoBucketBreakdown
    progress_percent: float
    projected_fire_date: Optional[datetime.date]
    projected_fire_age: Optional[int]
    years_to_fire: Optional[int]
    variants: Tuple[FireVariantResult, ...]
    projection: Tuple[ProjectionYear, ...]

    def variant(self, name: FireVariant) -> FireVariantResult:
        """Result of variant *name*."""
        for v in self.variants:
            if v.variant == name:
                return v
        raise KeyError(f"Unknown FIRE variant: {name!r}")

    @property
    def projection_frame(self) -> pd.DataFrame:
        """Chart projection as a DataFrame indexed by age."""
        return series_to_frame(list(self.projection))


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class FireSimulator:
    """Runs the projection engine for every variant under one set of rules.

    Parameters
    ----------
    assumptions : FireAssumptions, optional
        Numeric rules (ages, withdrawal rate, horizons). Defaults to the
        standard rules.
    """

    def __init__(self, assumptions: Optional[FireAssumptions] = None):
        self.assumptions = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS

    def simulate(
        self,
        profile: FireProfile,
        spending: SpendingSnapshot,
        investments: InvestmentSnapshot,
        *,
        today: Optional[datetime.date] = None,
    ) -> FireResult:
        """Project every variant and assemble the result for the active one."""
        if today is None:
            today = datetime.date.today()
        cfg = self.assumptions
        current_age = calculate_age(profile.date_of_birth, today)

        variants = tuple(
            self._run_variant(variant, current_age, profile, spending, investments, today)
            for variant in FIRE_VARIANTS
        )
        selected = next(v for v in variants if v.variant == profile.fire_variant)

        target_age = (
            profile.target_retirement_age
            if profile.target_retirement_age is not None
            else selected.projected_age
        )

        breakdown = two_bucket(
            selected.annual_expenses_cents,
            current_age,
            target_age if target_age is not None else cfg.pension_age,
            investments,
            assumptions=cfg,
        )

        series = projection_series(
            current_age,
            profile,
            spending,
            investments,
            selected.fire_number_cents,
            today=today,
            assumptions=cfg,
        )

        years_to_fire = (
            selected.projected_age - current_age
            if selected.projected_age is not None
            else None
        )

        logger.debug(
            "simulated %s FIRE at age %d: projected age %s, FIRE number %d",
            profile.fire_variant, current_age, selected.projected_age,
            selected.fire_number_cents,
        )

        return FireResult(
            current_age=current_age,
            target_age=target_age,
            fire_number_cents=selected.fire_number_cents,
            annual_expenses_cents=selected.annual_expenses_cents,
            two_bucket=breakdown,
            progress_percent=selected.progress_percent,
            projected_fire_date=selected.projected_date,
            projected_fire_age=selected.projected_age,
            years_to_fire=years_to_fire,
            variants=variants,
            projection=tuple(series),
        )

    # -------------------- Helpers --------------------
    def _run_variant(
        self,
        variant: FireVariant,
        current_age: int,
        profile: FireProfile,
        spending: SpendingSnapshot,
        investments: InvestmentSnapshot,
        today: datetime.date,
    ) -> FireVariantResult:
        cfg = self.assumptions
        # The override describes the user's chosen lifestyle only.
        override = (
            profile.annual_expense_override_cents
            if variant == profile.fire_variant
            else None
        )
        expenses = annual_expenses(spending, variant, override, assumptions=cfg)
        number = fire_number(expenses, assumptions=cfg)

        outcome = run_projection(
            current_age,
            profile,
            spending,
            investments,
            number,
            variant,
            today=today,
            assumptions=cfg,
        )

        return FireVariantResult(
            variant=variant,
            annual_expenses_cents=expenses,
            fire_number_cents=number,
            projected_date=outcome.fire_date,
            projected_age=outcome.fire_age,
            progress_percent=progress_percent(investments.total_cents, number),
        )


def simulate(
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> FireResult:
    """Module-level shortcut for ``FireSimulator(assumptions).simulate(...)``."""
    return FireSimulator(assumptions).simulate(profile, spending, investments, today=today)
