"""
What-if calculators for FirePlan.

Purpose
-------
Answers "what happens to my FIRE age if ...?" by building a modified copy of
the spending snapshot and rerunning the full simulation:

- savings_impact    : spend ``extra`` less per month. Lowers the FIRE target
                      and raises the outside deposit at the same time.
- income_impact     : earn ``extra`` more per month. Spending and target stay
                      put; part of the raise flows into super.
- income_milestones : income_impact at four round annual-income levels.

Non-positive amounts are no-ops that return an identity result. Snapshots are
never mutated; every scenario is a ``model_copy``.

Example
-------
>>> result = simulate(profile, spending, investments, today=today)
>>> impact = income_impact(result, 100_000, profile, spending, investments,
...                        today=today)
>>> impact.new_fire_age <= result.projected_fire_age
True
"""

from __future__ import annotations

import datetime
import math
from dataclasses import dataclass
from typing import List, Optional

from .constants import MONTHS_PER_YEAR
from .config import FireAssumptions
from .profile import FireProfile, InvestmentSnapshot, SpendingSnapshot
from .simulation import FireResult, simulate
from .utils import round_half_up

__all__ = [
    "SavingsImpactResult",
    "IncomeImpactResult",
    "IncomeMilestone",
    "savings_impact",
    "income_impact",
    "income_milestones",
]


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class SavingsImpactResult:
    original_fire_date: Optional[datetime.date]
    new_fire_date: Optional[datetime.date]
    years_saved: Optional[int]
    original_fire_age: Optional[int]
    new_fire_age: Optional[int]


@dataclass(frozen=True)
class IncomeImpactResult:
    original_fire_age: Optional[int]
    new_fire_age: Optional[int]
    years_saved: Optional[int]
    extra_annual_savings_cents: int
    extra_super_contribution_cents: int


@dataclass(frozen=True)
class IncomeMilestone:
    annual_income_cents: int
    fire_age: Optional[int]
    years_saved: Optional[int]


def _years_saved(original: Optional[int], new: Optional[int]) -> Optional[int]:
    if original is None or new is None:
        return None
    return original - new


def _savings_rate(income_cents: int, spend_cents: int) -> float:
    if income_cents <= 0:
        return 0.0
    return (income_cents - spend_cents) / income_cents * 100


# ---------------------------------------------------------------------------
# Calculators
# ---------------------------------------------------------------------------

def savings_impact(
    result: FireResult,
    extra_monthly_cents: int,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> SavingsImpactResult:
    """
    Effect of spending *extra_monthly_cents* less every month.

    Parameters
    ----------
    result : FireResult
        Baseline simulation of the same inputs.
    extra_monthly_cents : int
        Monthly spending cut. Values ≤ 0 return the baseline unchanged.
    profile, spending, investments
        Baseline inputs; not modified.
    today : datetime.date, optional
        Must match the date the baseline was simulated on.
    assumptions : FireAssumptions, optional
        Rules used by the rerun.
    """
    if extra_monthly_cents <= 0:
        return SavingsImpactResult(
            original_fire_date=result.projected_fire_date,
            new_fire_date=result.projected_fire_date,
            years_saved=0,
            original_fire_age=result.projected_fire_age,
            new_fire_age=result.projected_fire_age,
        )

    new_spend = spending.monthly_total_spend_cents - extra_monthly_cents
    modified = spending.model_copy(update={
        "monthly_total_spend_cents": new_spend,
        "savings_rate_percent": _savings_rate(spending.monthly_income_cents, new_spend),
    })
    new_result = simulate(profile, modified, investments, today=today, assumptions=assumptions)

    return SavingsImpactResult(
        original_fire_date=result.projected_fire_date,
        new_fire_date=new_result.projected_fire_date,
        years_saved=_years_saved(result.projected_fire_age, new_result.projected_fire_age),
        original_fire_age=result.projected_fire_age,
        new_fire_age=new_result.projected_fire_age,
    )


def income_impact(
    result: FireResult,
    extra_monthly_cents: int,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> IncomeImpactResult:
    """
    Effect of earning *extra_monthly_cents* more every month.

    Unlike ``savings_impact`` the expense basis is unchanged, so only the
    deposits grow. The mandatory contribution on the raise is reported
    separately as ``extra_super_contribution_cents`` (per year).
    """
    if extra_monthly_cents <= 0:
        return IncomeImpactResult(
            original_fire_age=result.projected_fire_age,
            new_fire_age=result.projected_fire_age,
            years_saved=0,
            extra_annual_savings_cents=0,
            extra_super_contribution_cents=0,
        )

    new_income = spending.monthly_income_cents + extra_monthly_cents
    modified = spending.model_copy(update={
        "monthly_income_cents": new_income,
        "savings_rate_percent": _savings_rate(new_income, spending.monthly_total_spend_cents),
    })
    new_result = simulate(profile, modified, investments, today=today, assumptions=assumptions)

    extra_annual = extra_monthly_cents * MONTHS_PER_YEAR
    return IncomeImpactResult(
        original_fire_age=result.projected_fire_age,
        new_fire_age=new_result.projected_fire_age,
        years_saved=_years_saved(result.projected_fire_age, new_result.projected_fire_age),
        extra_annual_savings_cents=extra_annual,
        extra_super_contribution_cents=round_half_up(
            extra_annual * profile.super_contribution_rate / 100
        ),
    )


def income_milestones(
    result: FireResult,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> List[IncomeMilestone]:
    """
    FIRE ages at four annual-income levels above the current income.

    Levels start from the current annual income rounded up to the next
    $10k and step by $10k below $80k, $20k below $150k, $30k above.
    """
    current_annual = spending.monthly_income_cents * MONTHS_PER_YEAR
    current_dollars = current_annual / 100

    base = math.ceil(current_dollars / 10_000) * 10_000
    if current_dollars < 80_000:
        step = 10_000
    elif current_dollars < 150_000:
        step = 20_000
    else:
        step = 30_000

    milestones: List[IncomeMilestone] = []
    for i in range(1, 5):
        target_cents = (base + step * i) * 100
        extra_monthly = round_half_up((target_cents - current_annual) / MONTHS_PER_YEAR)
        if extra_monthly <= 0:
            continue

        impact = income_impact(
            result, extra_monthly, profile, spending, investments,
            today=today, assumptions=assumptions,
        )
        milestones.append(IncomeMilestone(
            annual_income_cents=target_cents,
            fire_age=impact.new_fire_age,
            years_saved=impact.years_saved,
        ))

    return milestones
