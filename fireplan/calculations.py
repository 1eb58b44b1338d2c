"""FIRE building blocks

Closed-form pieces the projection engine and the gameplan are built from:

- annual_expenses : expense basis for each FIRE variant
- fire_number     : capital required under the safe withdrawal rate
- two_bucket      : split of that capital between the outside-super bridge
                    and the super bucket after preservation age
- coast_number    : present value of a FIRE number at a target age

All amounts are integer cents. Every function takes an optional
``FireAssumptions``; the defaults reproduce the standard rules
(4% withdrawal rate, fat multiplier 1.25, preservation age 60).

Examples
--------
>>> fire_number(6_000_000)
150000000
>>> coast_number(150_000_000, 0, 7.0)
150000000
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .constants import MONTHS_PER_YEAR
from .profile import FireVariant, InvestmentSnapshot, SpendingSnapshot
from .utils import progress_percent, round_half_up

__all__ = [
    "TwoBucketBreakdown",
    "annual_expenses",
    "fire_number",
    "two_bucket",
    "coast_number",
]


# ---------------------------------------------------------------------------
# Expense basis
# ---------------------------------------------------------------------------

def annual_expenses(
    spending: SpendingSnapshot,
    variant: FireVariant,
    override_cents: Optional[int] = None,
    *,
    assumptions: FireAssumptions = DEFAULT_ASSUMPTIONS,
) -> int:
    """Annual expense basis (cents) of *variant*.

    A positive override wins unconditionally; zero, negative or None
    overrides fall through to the spending-based basis.
    """
    if override_cents is not None and override_cents > 0:
        return override_cents

    if variant == "lean":
        return spending.monthly_essentials_cents * MONTHS_PER_YEAR
    if variant in ("regular", "coast"):
        return spending.monthly_total_spend_cents * MONTHS_PER_YEAR
    if variant == "fat":
        return round_half_up(
            spending.monthly_total_spend_cents * MONTHS_PER_YEAR * assumptions.fat_multiplier
        )
    raise ValueError(f"Unknown FIRE variant: {variant!r}")


def fire_number(
    annual_expenses_cents: int,
    *,
    assumptions: FireAssumptions = DEFAULT_ASSUMPTIONS,
) -> int:
    """Capital required to fund *annual_expenses_cents* indefinitely.

    Divides by the withdrawal rate rather than multiplying by a rounded
    multiplier, so rates such as 3.5% agree with the withdrawal table.
    """
    return round_half_up(annual_expenses_cents / assumptions.safe_withdrawal_rate)


# ---------------------------------------------------------------------------
# Two-bucket breakdown
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TwoBucketBreakdown:
    """Required capital split around the preservation age.

    Before preservation age the outside-super bucket must fund every year of
    retirement on its own; afterwards the super bucket carries a full FIRE
    number's worth of expenses.
    """
    outside_super_target_cents: int
    outside_super_current_cents: int
    outside_super_progress_percent: float
    super_target_cents: int
    super_current_cents: int
    super_progress_percent: float
    years_pre_retirement: int
    years_post_preservation: int


def two_bucket(
    annual_expenses_cents: int,
    current_age: int,
    target_retirement_age: int,
    investments: InvestmentSnapshot,
    *,
    assumptions: FireAssumptions = DEFAULT_ASSUMPTIONS,
) -> TwoBucketBreakdown:
    """Split the capital requirement into outside-super and super targets.

    Retiring at or after preservation age needs no bridge, so the outside
    target is zero and reported as 100% satisfied.
    """
    years_pre = max(0, assumptions.preservation_age - target_retirement_age)
    years_post = assumptions.fire_multiplier

    outside_target = annual_expenses_cents * years_pre
    super_target = fire_number(annual_expenses_cents, assumptions=assumptions)

    return TwoBucketBreakdown(
        outside_super_target_cents=outside_target,
        outside_super_current_cents=investments.outside_super_cents,
        outside_super_progress_percent=progress_percent(
            investments.outside_super_cents, outside_target
        ),
        super_target_cents=super_target,
        super_current_cents=investments.super_balance_cents,
        super_progress_percent=progress_percent(
            investments.super_balance_cents, super_target
        ),
        years_pre_retirement=years_pre,
        years_post_preservation=years_post,
    )


# ---------------------------------------------------------------------------
# Coast FIRE
# ---------------------------------------------------------------------------

def coast_number(
    fire_number_cents: int,
    years_to_target: int,
    annual_return_rate: float,
) -> int:
    """Amount that grows into *fire_number_cents* with no further contributions.

    Parameters
    ----------
    fire_number_cents : int
        Target capital at the target age.
    years_to_target : int
        Years of compounding left. Non-positive values return the target
        unchanged.
    annual_return_rate : float
        Annual return in percent (e.g. 7.0).
    """
    if years_to_target <= 0:
        return fire_number_cents
    rate = annual_return_rate / 100
    return round_half_up(fire_number_cents / (1 + rate) ** years_to_target)
