"""
Inverse solvers for FirePlan.

Purpose
-------
Finds the smallest monthly change that brings the FIRE age down to a target:

- find_required_extra_income  : extra income in [0, max_extra_income_cents]
- find_required_extra_savings : spending cut in [0, discretionary spend]

Both are thin wrappers around one bisection, ``solve_for_threshold``, which
only assumes the predicate is monotone (if an amount works, any larger amount
works too).

Algorithm
---------
1. Initialize: low = lower bound, high = upper bound
2. For at most ``max_iterations`` rounds:
   a. mid = round((low + high) / 2)
   b. If predicate(mid) holds: remember mid, high = mid
   c. Else: low = mid
   d. Stop once high − low < tolerance
3. Return the smallest satisfying amount found, or None

When nothing in the bounded range satisfies the target, the solvers report
the boundary amount together with whatever age it actually produces, which
may be None. A None age is "insufficient", never success.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import Callable, Generic, Optional, Tuple, TypeVar

from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .exceptions import ValidationError
from .impact import income_impact, savings_impact
from .profile import FireProfile, InvestmentSnapshot, SpendingSnapshot
from .simulation import FireResult
from .utils import round_half_up

__all__ = [
    "ThresholdSolution",
    "SolverResult",
    "solve_for_threshold",
    "find_required_extra_income",
    "find_required_extra_savings",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ThresholdSolution(Generic[T]):
    """Smallest satisfying amount and the predicate's payload for it."""
    amount: int
    payload: T
    iterations: int


@dataclass(frozen=True)
class SolverResult:
    """
    Minimal monthly change and the FIRE age it produces.

    Attributes
    ----------
    extra_monthly_cents : int
        Amount found (0 when already on track).
    result_age : int, optional
        FIRE age with that amount applied. None means even this amount
        does not reach FIRE within the horizon.
    satisfied : bool
        Whether ``result_age`` meets the target age.
    """
    extra_monthly_cents: int
    result_age: Optional[int]
    satisfied: bool


# ---------------------------------------------------------------------------
# Generic bisection
# ---------------------------------------------------------------------------

def solve_for_threshold(
    lower: int,
    upper: int,
    predicate: Callable[[int], Tuple[bool, T]],
    *,
    max_iterations: int = DEFAULT_ASSUMPTIONS.max_iterations,
    tolerance: int = DEFAULT_ASSUMPTIONS.tolerance_cents,
) -> Optional[ThresholdSolution[T]]:
    """
    Bisect [lower, upper] for the smallest amount satisfying *predicate*.

    Parameters
    ----------
    lower, upper : int
        Search bounds (cents).
    predicate : callable
        ``amount -> (satisfied, payload)``. Must be monotone in *amount*.
    max_iterations : int
        Iteration cap.
    tolerance : int
        Stop once the bracket is narrower than this.

    Returns
    -------
    ThresholdSolution or None
        None when no tested amount satisfied the predicate.
    """
    if upper < lower:
        raise ValidationError(f"upper ({upper}) must be >= lower ({lower})")

    low, high = lower, upper
    best: Optional[ThresholdSolution[T]] = None

    for iteration in range(1, max_iterations + 1):
        mid = round_half_up((low + high) / 2)
        satisfied, payload = predicate(mid)

        logger.debug(
            "[Iter %d] testing %d (range=[%d, %d]): %s",
            iteration, mid, low, high, "satisfied" if satisfied else "short",
        )

        if satisfied:
            best = ThresholdSolution(amount=mid, payload=payload, iterations=iteration)
            high = mid
        else:
            low = mid

        if high - low < tolerance:
            break

    return best


# ---------------------------------------------------------------------------
# FIRE solvers
# ---------------------------------------------------------------------------

def _meets(age: Optional[int], target_age: int) -> bool:
    return age is not None and age <= target_age


def find_required_extra_income(
    result: FireResult,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    target_age: int,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> SolverResult:
    """
    Minimum extra monthly income to reach FIRE by *target_age*.

    Returns 0 without searching when the baseline is already on track. When
    even ``max_extra_income_cents`` falls short, returns that ceiling and
    the age it yields.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS

    if _meets(result.projected_fire_age, target_age):
        return SolverResult(0, result.projected_fire_age, True)

    def reaches_target(extra: int) -> Tuple[bool, Optional[int]]:
        impact = income_impact(
            result, extra, profile, spending, investments,
            today=today, assumptions=cfg,
        )
        return _meets(impact.new_fire_age, target_age), impact.new_fire_age

    solution = solve_for_threshold(
        0,
        cfg.max_extra_income_cents,
        reaches_target,
        max_iterations=cfg.max_iterations,
        tolerance=cfg.tolerance_cents,
    )

    if solution is None:
        _, ceiling_age = reaches_target(cfg.max_extra_income_cents)
        logger.info(
            "no extra income up to %d cents/month reaches FIRE by %d",
            cfg.max_extra_income_cents, target_age,
        )
        return SolverResult(cfg.max_extra_income_cents, ceiling_age, False)

    return SolverResult(solution.amount, solution.payload, True)


def find_required_extra_savings(
    result: FireResult,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    target_age: int,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> SolverResult:
    """
    Minimum monthly spending cut to reach FIRE by *target_age*.

    Cuts are capped at discretionary spend (essentials cannot be cut). With
    no discretionary spend the result is 0 and the baseline age. When the
    full discretionary cut falls short, returns it and the age it yields.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS

    if _meets(result.projected_fire_age, target_age):
        return SolverResult(0, result.projected_fire_age, True)

    discretionary = spending.discretionary_cents
    if discretionary <= 0:
        return SolverResult(0, result.projected_fire_age, False)

    def reaches_target(cut: int) -> Tuple[bool, Optional[int]]:
        impact = savings_impact(
            result, cut, profile, spending, investments,
            today=today, assumptions=cfg,
        )
        return _meets(impact.new_fire_age, target_age), impact.new_fire_age

    solution = solve_for_threshold(
        0,
        discretionary,
        reaches_target,
        max_iterations=cfg.max_iterations,
        tolerance=cfg.tolerance_cents,
    )

    if solution is None:
        _, floor_age = reaches_target(discretionary)
        logger.info(
            "cutting all %d cents/month of discretionary spend misses FIRE by %d",
            discretionary, target_age,
        )
        return SolverResult(discretionary, floor_age, False)

    return SolverResult(solution.amount, solution.payload, True)
