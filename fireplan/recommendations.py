"""
Rule-based FIRE recommendations.

Each rule inspects the simulation result and the spending snapshot and may
emit one ``FireRecommendation``. Rules are evaluated in a fixed order and
the "on track" message is only added when nothing else fired.

Rules
-----
- coast-achieved   : coast profile whose portfolio already exceeds the
                     coast number
- cut-spending     : savings rate below 20%
- increase-income  : savings rate of 50%+ on a modest income
- income-leverage  : a $1k/month raise would bring FIRE forward
- salary-sacrifice : contribution rate at or below the statutory rate
- on-track         : fallback when nothing else applies
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import List, Literal, Optional

from .calculations import coast_number
from .config import DEFAULT_ASSUMPTIONS, FireAssumptions
from .constants import MONTHS_PER_YEAR
from .impact import income_impact
from .profile import FireProfile, InvestmentSnapshot, SpendingSnapshot
from .simulation import FireResult
from .utils import format_cents_compact

__all__ = [
    "FireRecommendation",
    "generate_recommendations",
]

RecommendationType = Literal[
    "cut-spending",
    "increase-income",
    "salary-sacrifice",
    "on-track",
    "coast-achieved",
    "income-leverage",
]

LOW_SAVINGS_RATE = 20
HIGH_SAVINGS_RATE = 50
MODEST_MONTHLY_INCOME_CENTS = 800_000
TEST_RAISE_CENTS = 100_000
MIN_YEARS_FOR_LEVERAGE = 3


@dataclass(frozen=True)
class FireRecommendation:
    type: RecommendationType
    priority: Literal["high", "medium", "low"]
    title: str
    description: str
    impact: str
    action_href: Optional[str] = None


def generate_recommendations(
    result: FireResult,
    spending: SpendingSnapshot,
    profile: FireProfile,
    investments: Optional[InvestmentSnapshot] = None,
    *,
    today: Optional[datetime.date] = None,
    assumptions: Optional[FireAssumptions] = None,
) -> List[FireRecommendation]:
    """
    Actionable recommendations for the current FIRE position.

    The income-leverage rule reruns the simulation and is skipped when
    *investments* is not supplied.
    """
    cfg = assumptions if assumptions is not None else DEFAULT_ASSUMPTIONS
    recommendations: List[FireRecommendation] = []
    rate = spending.savings_rate_percent
    income = spending.monthly_income_cents

    if profile.fire_variant == "coast":
        target_age = result.target_age if result.target_age is not None else cfg.pension_age
        coast = coast_number(
            result.variant("coast").fire_number_cents,
            target_age - result.current_age,
            profile.expected_return_rate,
        )
        invested = (
            result.two_bucket.outside_super_current_cents
            + result.two_bucket.super_current_cents
        )
        if invested >= coast:
            recommendations.append(FireRecommendation(
                type="coast-achieved",
                priority="low",
                title="Coast FIRE Achieved",
                description=(
                    "Your investments can grow to your FIRE number without any further "
                    "contributions. You could stop saving aggressively and let compound "
                    "growth do the work."
                ),
                impact=(
                    f"Your portfolio of {format_cents_compact(invested)} exceeds the "
                    f"Coast FIRE target of {format_cents_compact(coast)}."
                ),
            ))

    if rate < LOW_SAVINGS_RATE and income > 0:
        if spending.top_categories:
            top = spending.top_categories[0]
            impact = f"Top spending: {top.name} ({format_cents_compact(top.amount_cents)}/mo)"
        else:
            impact = "Review your spending categories for opportunities."
        recommendations.append(FireRecommendation(
            type="cut-spending",
            priority="high",
            title="Boost Your Savings Rate",
            description=(
                f"Your savings rate is {rate:.0f}%. Increasing to 20%+ significantly "
                f"accelerates your FIRE timeline."
            ),
            impact=impact,
            action_href="/activity",
        ))

    if rate >= HIGH_SAVINGS_RATE and 0 < income < MODEST_MONTHLY_INCOME_CENTS:
        recommendations.append(FireRecommendation(
            type="increase-income",
            priority="medium",
            title="Focus on Income Growth",
            description=(
                "Your savings rate is excellent. At this point, increasing income has "
                "more impact than further cuts."
            ),
            impact=(
                f"A $500/mo raise at your savings rate saves an extra "
                f"{format_cents_compact(50_000 * MONTHS_PER_YEAR)}/year."
            ),
        ))

    if (
        investments is not None
        and profile.fire_variant != "coast"
        and result.years_to_fire is not None
        and result.years_to_fire > MIN_YEARS_FOR_LEVERAGE
        and income > 0
    ):
        raise_impact = income_impact(
            result, TEST_RAISE_CENTS, profile, spending, investments,
            today=today, assumptions=cfg,
        )
        saved = raise_impact.years_saved
        if saved is not None and saved > 0:
            recommendations.append(FireRecommendation(
                type="income-leverage",
                priority="medium",
                title="The Bigger Shovel",
                description=(
                    f"A $1,000/mo income increase would move your FIRE date {saved} "
                    f"{'year' if saved == 1 else 'years'} earlier. Extra income also boosts "
                    f"super by {format_cents_compact(raise_impact.extra_super_contribution_cents)}/year."
                ),
                impact=(
                    "You can cut expenses to a floor, but income has no ceiling. Focus on "
                    "skills, promotions, or side income."
                ),
            ))

    if profile.super_contribution_rate <= cfg.default_contribution_rate:
        recommendations.append(FireRecommendation(
            type="salary-sacrifice",
            priority="medium",
            title="Consider Salary Sacrifice",
            description=(
                "You're only on the standard contribution rate. Salary sacrificing extra "
                "into super is tax-advantaged and grows your super bucket faster."
            ),
            impact=(
                "Contributions taxed at 15% inside super vs your marginal rate outside. "
                "Check your concessional cap ($30k/year)."
            ),
            action_href="/settings/fire",
        ))

    if rate >= LOW_SAVINGS_RATE and result.progress_percent > 0 and not recommendations:
        recommendations.append(FireRecommendation(
            type="on-track",
            priority="low",
            title="You're on Track",
            description=(
                f"With a {rate:.0f}% savings rate, you're making solid progress toward FIRE."
            ),
            impact=(
                f"Projected FIRE in ~{result.years_to_fire} years."
                if result.years_to_fire is not None
                else "Keep going, consistency is key."
            ),
        ))

    return recommendations
