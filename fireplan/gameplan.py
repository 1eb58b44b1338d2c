"""
Gameplan composition for FirePlan.

Purpose
-------
Turns one ``FireResult`` into a prioritized, presentation-ready plan:

- status           : "on-track", "gap" or "impossible"
- actions          : ordered steps (earn more, invest, cut, switch variant)
- milestones       : four-rung ladder coast → lean → regular → fat
- coast_fire       : present value of the FIRE number at the target age
- savings_rate_curve : years to FIRE at savings rates 10% … 80%
- withdrawal_comparison : FIRE number at 4% / 3.5% / 3% withdrawal
- reference_suggestions : static list of broad-market funds

Everything that needs "what if" numbers reruns ``simulate`` on a modified
copy of the snapshots; nothing here owns a projection loop.

Example
-------
>>> result = simulate(profile, spending, investments, today=today)
>>> plan = generate_gameplan(result, profile, spending, investments, today=today)
>>> plan.status, [a.type for a in plan.actions]
('on-track', ['save-invest'])
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence, Tuple

from .calculations import coast_number
from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .constants import MILESTONE_ORDER, MONTHS_PER_YEAR
from .optimization import find_required_extra_income, find_required_extra_savings
from .profile import FireProfile, FireVariant, InvestmentSnapshot, SpendingSnapshot
from .simulation import FireResult, simulate
from .utils import (
    format_cents_compact,
    format_cents_short,
    progress_percent,
    round_half_up,
)

__all__ = [
    "GameplanStatus",
    "GameplanAction",
    "FireMilestone",
    "CoastFireData",
    "SavingsRatePoint",
    "SavingsRateImpact",
    "WithdrawalComparison",
    "ReferenceSuggestion",
    "Gameplan",
    "gameplan_status",
    "generate_gameplan",
    "generate_actions",
    "compute_milestones",
    "compute_coast_fire",
    "compute_savings_rate_curve",
    "compute_savings_rate_impact",
    "compute_withdrawal_comparison",
    "get_reference_suggestions",
]

logger = logging.getLogger(__name__)

GameplanStatus = Literal["on-track", "gap", "impossible"]
ActionType = Literal["save-invest", "earn-more", "cut-spending", "switch-variant"]
ActionPriority = Literal["primary", "secondary", "alternative"]


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GameplanAction:
    type: ActionType
    priority: ActionPriority
    headline: str
    detail: str
    amount_per_month_cents: Optional[int]
    impact_years: Optional[int]
    result_age: Optional[int]


@dataclass(frozen=True)
class FireMilestone:
    variant: FireVariant
    label: str
    fire_number_cents: int
    projected_age: Optional[int]
    progress_percent: float
    is_achieved: bool
    is_current: bool


@dataclass(frozen=True)
class CoastFireData:
    coast_number_cents: int
    current_portfolio_cents: int
    progress_percent: float
    is_achieved: bool
    description: str


@dataclass(frozen=True)
class SavingsRatePoint:
    rate: int
    years_to_fire: Optional[int]
    is_current: bool


@dataclass(frozen=True)
class SavingsRateImpact:
    """Years gained by saving ten percentage points more than today."""
    current_rate: int
    plus_ten_years_saved: Optional[int]


@dataclass(frozen=True)
class WithdrawalComparison:
    rate: float
    label: str
    fire_number_cents: int
    note: str


@dataclass(frozen=True)
class ReferenceSuggestion:
    ticker: str
    name: str
    type: str


@dataclass(frozen=True)
class Gameplan:
    """Derived, non-persisted plan built from one simulation."""
    status: GameplanStatus
    status_summary: str
    target_label: str
    progress_percent: float
    actions: Tuple[GameplanAction, ...]
    milestones: Tuple[FireMilestone, ...]
    coast_fire: CoastFireData
    savings_rate_curve: Tuple[SavingsRatePoint, ...]
    savings_rate_impact: SavingsRateImpact
    withdrawal_comparison: Tuple[WithdrawalComparison, ...]
    reference_suggestions: Tuple[ReferenceSuggestion, ...]


# ---------------------------------------------------------------------------
# Orchestrator
# ---------------------------------------------------------------------------

def gameplan_status(result: FireResult, target_age: Optional[int]) -> GameplanStatus:
    """Classify a result against the explicit target age (None = ASAP)."""
    if result.projected_fire_age is None:
        return "impossible"
    if target_age is not None and result.projected_fire_age > target_age:
        return "gap"
    return "on-track"


def generate_gameplan(
    result: FireResult,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    current_age: Optional[int] = None,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> Gameplan:
    """
    Compose the full gameplan for one simulation result.

    Parameters
    ----------
    result : FireResult
        Baseline simulation of the same inputs.
    profile, spending, investments
        Baseline inputs; never modified.
    current_age : int, optional
        Defaults to ``result.current_age``.
    today : datetime.date, optional
        Date the baseline was simulated on; reused by every rerun.
    assumptions : FireAssumptions, optional
        Rules for reruns and the reference tables.

    Returns
    -------
    Gameplan
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    if current_age is None:
        current_age = result.current_age

    target_age = profile.target_retirement_age
    status = gameplan_status(result, target_age)

    age_label = f"by {target_age}" if target_age is not None else "as early as possible"
    status_summary = f"{profile.fire_variant.capitalize()} FIRE {age_label}"
    target_label = f"{format_cents_compact(result.fire_number_cents)} target"

    actions = generate_actions(
        result, profile, spending, investments, current_age, status,
        today=today, assumptions=cfg,
    )
    milestones = compute_milestones(result, investments, profile.fire_variant)
    coast = compute_coast_fire(result, profile, investments, current_age, assumptions=cfg)
    curve = compute_savings_rate_curve(
        profile, spending, investments, current_age,
        today=today, assumptions=cfg,
    )
    rate_impact = compute_savings_rate_impact(
        spending.savings_rate_percent, curve, assumptions=cfg,
    )

    logger.debug(
        "gameplan %s: %d actions, coast achieved=%s",
        status, len(actions), coast.is_achieved,
    )

    return Gameplan(
        status=status,
        status_summary=status_summary,
        target_label=target_label,
        progress_percent=result.progress_percent,
        actions=tuple(actions),
        milestones=tuple(milestones),
        coast_fire=coast,
        savings_rate_curve=tuple(curve),
        savings_rate_impact=rate_impact,
        withdrawal_comparison=tuple(
            compute_withdrawal_comparison(result.annual_expenses_cents, assumptions=cfg)
        ),
        reference_suggestions=tuple(get_reference_suggestions()),
    )


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

def _years_between(before: Optional[int], after: Optional[int]) -> Optional[int]:
    if before is None or after is None:
        return None
    return before - after


def generate_actions(
    result: FireResult,
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    current_age: int,
    status: GameplanStatus,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> List[GameplanAction]:
    """
    Ordered action list for *status*.

    On track: a single "save & invest" step. Otherwise the plan aims at the
    explicit target, or ``asap_lead_years`` before the projected age, or
    ``fallback_horizon_years`` from now, and proposes (in order) earning
    more, investing the current surplus, cutting discretionary spend and
    switching to lean FIRE.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    surplus = spending.monthly_surplus_cents
    projected = result.projected_fire_age

    if status == "on-track":
        return [GameplanAction(
            type="save-invest",
            priority="primary",
            headline=f"Save {format_cents_short(surplus)}/mo and invest it",
            detail="In broad market ETFs like VAS, VGS, or VDHG",
            amount_per_month_cents=surplus,
            impact_years=None,
            result_age=projected,
        )]

    if profile.target_retirement_age is not None:
        effective_target = profile.target_retirement_age
    elif projected is not None:
        effective_target = projected - cfg.asap_lead_years
    else:
        effective_target = current_age + cfg.fallback_horizon_years

    actions: List[GameplanAction] = []

    income = find_required_extra_income(
        result, profile, spending, investments, effective_target,
        today=today, assumptions=cfg,
    )
    if income.extra_monthly_cents > 0:
        actions.append(GameplanAction(
            type="earn-more",
            priority="primary",
            headline=f"Earn {format_cents_short(income.extra_monthly_cents)} more per month",
            detail=(
                f"This closes the gap. FIRE by age {income.result_age}"
                if income.satisfied and income.result_age is not None
                else "This significantly accelerates your FIRE timeline"
            ),
            amount_per_month_cents=income.extra_monthly_cents,
            impact_years=_years_between(projected, income.result_age),
            result_age=income.result_age,
        ))

    if surplus > 0:
        actions.append(GameplanAction(
            type="save-invest",
            priority="secondary",
            headline=f"Invest your {format_cents_short(surplus)}/mo savings",
            detail="In broad market ETFs. Compound growth is your engine",
            amount_per_month_cents=surplus,
            impact_years=None,
            result_age=projected,
        ))

    savings = find_required_extra_savings(
        result, profile, spending, investments, effective_target,
        today=today, assumptions=cfg,
    )
    # A cut that cannot reach the target even at the full discretionary
    # amount is infeasible and dropped.
    if savings.satisfied and 0 < savings.extra_monthly_cents <= spending.discretionary_cents:
        actions.append(GameplanAction(
            type="cut-spending",
            priority="secondary",
            headline=f"Cut {format_cents_short(savings.extra_monthly_cents)}/mo from spending",
            detail=(
                f"Reduces your FIRE age to {savings.result_age}"
                if savings.result_age is not None
                else "Every dollar saved is a dollar invested"
            ),
            amount_per_month_cents=savings.extra_monthly_cents,
            impact_years=_years_between(projected, savings.result_age),
            result_age=savings.result_age,
        ))

    if profile.fire_variant != "lean":
        lean = result.variant("lean")
        lean_age = lean.projected_age
        if lean_age is not None and (projected is None or lean_age < projected):
            actions.append(GameplanAction(
                type="switch-variant",
                priority="alternative",
                headline=f"Switch to Lean FIRE. Free by {lean_age}",
                detail=(
                    f"Essentials-only budget of "
                    f"{format_cents_short(lean.annual_expenses_cents / MONTHS_PER_YEAR)}/mo. "
                    f"Needs {format_cents_compact(lean.fire_number_cents)}"
                ),
                amount_per_month_cents=None,
                impact_years=_years_between(projected, lean_age),
                result_age=lean_age,
            ))

    return actions


# ---------------------------------------------------------------------------
# Milestones & coast FIRE
# ---------------------------------------------------------------------------

def compute_milestones(
    result: FireResult,
    investments: InvestmentSnapshot,
    current_variant: FireVariant,
) -> List[FireMilestone]:
    """Four-rung ladder in fixed order, independent of the active variant."""
    portfolio = investments.total_cents
    milestones = []
    for name in MILESTONE_ORDER:
        v = result.variant(name)
        number = v.fire_number_cents
        milestones.append(FireMilestone(
            variant=name,
            label=name.capitalize(),
            fire_number_cents=number,
            projected_age=v.projected_age,
            progress_percent=min(100.0, v.progress_percent),
            is_achieved=number > 0 and portfolio >= number,
            is_current=name == current_variant,
        ))
    return milestones


def compute_coast_fire(
    result: FireResult,
    profile: FireProfile,
    investments: InvestmentSnapshot,
    current_age: int,
    *,
    assumptions: Optional[FireAssumptions] = None,
) -> CoastFireData:
    """
    Coast FIRE position of the active FIRE number.

    Discounts to the explicit target age, or to the preservation age when
    the profile has none.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    target_age = (
        profile.target_retirement_age
        if profile.target_retirement_age is not None
        else cfg.preservation_age
    )
    years = max(0, target_age - current_age)
    coast = coast_number(result.fire_number_cents, years, profile.expected_return_rate)

    portfolio = investments.total_cents
    achieved = portfolio >= coast
    if achieved:
        description = (
            "Your portfolio will grow to your FIRE target through compound growth "
            "alone. You could stop saving aggressively."
        )
    else:
        description = (
            f"{format_cents_compact(coast - portfolio)} more to Coast FIRE. "
            f"Once reached, compound growth handles the rest."
        )

    return CoastFireData(
        coast_number_cents=coast,
        current_portfolio_cents=portfolio,
        progress_percent=progress_percent(portfolio, coast),
        is_achieved=achieved,
        description=description,
    )


# ---------------------------------------------------------------------------
# Sensitivity
# ---------------------------------------------------------------------------

def compute_savings_rate_curve(
    profile: FireProfile,
    spending: SpendingSnapshot,
    investments: InvestmentSnapshot,
    current_age: int,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> List[SavingsRatePoint]:
    """
    Years to FIRE at each configured savings rate.

    Each point replaces total spend with ``income × (1 − rate)`` and clamps
    essentials to that spend, then reruns the simulation. The point at the
    caller's rate rounded to the nearest ten is flagged as current.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    current_rate = round_half_up(spending.savings_rate_percent / 10) * 10

    points = []
    for rate in cfg.savings_rate_steps:
        spend = round_half_up(spending.monthly_income_cents * (1 - rate / 100))
        if spend < 0:
            points.append(SavingsRatePoint(rate, None, rate == current_rate))
            continue

        modified = spending.model_copy(update={
            "monthly_total_spend_cents": spend,
            "monthly_essentials_cents": min(spending.monthly_essentials_cents, spend),
            "savings_rate_percent": float(rate),
        })
        rerun = simulate(profile, modified, investments, today=today, assumptions=cfg)
        years = (
            rerun.projected_fire_age - current_age
            if rerun.projected_fire_age is not None
            else None
        )
        points.append(SavingsRatePoint(rate, years, rate == current_rate))

    return points


def compute_savings_rate_impact(
    savings_rate_percent: float,
    curve: Sequence[SavingsRatePoint],
    *,
    assumptions: Optional[FireAssumptions] = None,
) -> SavingsRateImpact:
    """Years saved between the current curve point and the one ten points up."""
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    current_rate = round_half_up(savings_rate_percent)
    next_rate = min(current_rate + 10, cfg.savings_rate_steps[-1])

    current_point = next((p for p in curve if p.is_current), None)
    next_point = next((p for p in curve if p.rate == next_rate), None)

    saved = None
    if current_point is not None and next_point is not None:
        saved = _years_between(current_point.years_to_fire, next_point.years_to_fire)
    return SavingsRateImpact(current_rate=current_rate, plus_ten_years_saved=saved)


# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------

def compute_withdrawal_comparison(
    annual_expenses_cents: int,
    *,
    assumptions: Optional[FireAssumptions] = None,
) -> List[WithdrawalComparison]:
    """FIRE number at each configured withdrawal rate. No simulation."""
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    return [
        WithdrawalComparison(
            rate=row.rate,
            label=row.label,
            fire_number_cents=round_half_up(annual_expenses_cents / row.rate),
            note=row.note,
        )
        for row in cfg.withdrawal_rates
    ]


def get_reference_suggestions() -> List[ReferenceSuggestion]:
    return [
        ReferenceSuggestion("VAS", "Vanguard Australian Shares", "Australian"),
        ReferenceSuggestion("VGS", "Vanguard Intl Shares", "International"),
        ReferenceSuggestion("VDHG", "Vanguard Diversified High Growth", "All-in-one"),
    ]
