"""
Pytest configuration and fixtures for FirePlan test suite.

This module provides reusable fixtures for testing all FirePlan components.
Fixtures follow the principle of "arrange-act-assert" with clear separation.

The baseline person is 31 on the evaluation date, earns $10k/month, spends
$5k/month ($3k essentials) and holds $100k outside super plus $50k super.
"""

from datetime import date
from typing import Callable

import pytest

from fireplan.config import FireAssumptions, PlanConfig
from fireplan.profile import FireProfile, InvestmentSnapshot, SpendingSnapshot
from fireplan.simulation import FireResult, simulate


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def today() -> date:
    """Fixed evaluation date so ages and projected dates are stable."""
    return date(2026, 6, 15)


# ---------------------------------------------------------------------------
# Snapshot Factories
# ---------------------------------------------------------------------------

@pytest.fixture
def make_profile() -> Callable[..., FireProfile]:
    """
    Factory for FireProfile with overridable defaults.

    DOB: 1995-01-01, target 45, regular FIRE, 11.5% contributions, 7% return.
    """
    def _make(**overrides) -> FireProfile:
        data = dict(
            date_of_birth=date(1995, 1, 1),
            target_retirement_age=45,
            super_balance_cents=5_000_000,
            super_contribution_rate=11.5,
            expected_return_rate=7.0,
            outside_super_return_rate=None,
            income_growth_rate=0.0,
            spending_growth_rate=0.0,
            fire_variant="regular",
            annual_expense_override_cents=None,
        )
        data.update(overrides)
        return FireProfile(**data)
    return _make


@pytest.fixture
def make_spending() -> Callable[..., SpendingSnapshot]:
    """
    Factory for SpendingSnapshot with overridable defaults.

    Essentials: $3,000/month, total: $5,000/month, income: $10,000/month.
    """
    def _make(**overrides) -> SpendingSnapshot:
        data = dict(
            monthly_essentials_cents=300_000,
            monthly_total_spend_cents=500_000,
            monthly_income_cents=1_000_000,
            savings_rate_percent=50.0,
            top_categories=[],
        )
        data.update(overrides)
        return SpendingSnapshot(**data)
    return _make


@pytest.fixture
def make_investments() -> Callable[..., InvestmentSnapshot]:
    """Factory for InvestmentSnapshot: $100k outside super, $50k super."""
    def _make(**overrides) -> InvestmentSnapshot:
        data = dict(outside_super_cents=10_000_000, super_balance_cents=5_000_000)
        data.update(overrides)
        return InvestmentSnapshot(**data)
    return _make


# ---------------------------------------------------------------------------
# Baseline Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def profile(make_profile) -> FireProfile:
    return make_profile()


@pytest.fixture
def spending(make_spending) -> SpendingSnapshot:
    return make_spending()


@pytest.fixture
def investments(make_investments) -> InvestmentSnapshot:
    return make_investments()


@pytest.fixture
def result(profile, spending, investments, today) -> FireResult:
    """Baseline simulation of the default snapshots."""
    return simulate(profile, spending, investments, today=today)


@pytest.fixture
def assumptions() -> FireAssumptions:
    return FireAssumptions()


# ---------------------------------------------------------------------------
# Scenario Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def on_track_case(make_profile, make_spending, make_investments):
    """
    Comfortably on track: target 55, $15k income, $4k spend, $500k invested.

    Returns (profile, spending, investments).
    """
    return (
        make_profile(target_retirement_age=55),
        make_spending(
            monthly_income_cents=1_500_000,
            monthly_total_spend_cents=400_000,
            savings_rate_percent=73.3,
        ),
        make_investments(outside_super_cents=50_000_000),
    )


@pytest.fixture
def gap_case(make_profile, make_spending, make_investments):
    """
    Behind target: target 35 on $8k income, $6k spend, $7k invested.

    Returns (profile, spending, investments).
    """
    return (
        make_profile(target_retirement_age=35),
        make_spending(
            monthly_income_cents=800_000,
            monthly_total_spend_cents=600_000,
            savings_rate_percent=25.0,
        ),
        make_investments(outside_super_cents=500_000, super_balance_cents=200_000),
    )


@pytest.fixture
def impossible_case(make_profile, make_spending, make_investments):
    """
    Spending exceeds income and nothing flows into super.

    Returns (profile, spending, investments).
    """
    return (
        make_profile(target_retirement_age=40, super_contribution_rate=0.0),
        make_spending(
            monthly_income_cents=400_000,
            monthly_total_spend_cents=500_000,
            savings_rate_percent=-25.0,
        ),
        make_investments(outside_super_cents=100_000, super_balance_cents=100_000),
    )


@pytest.fixture
def plan(profile, spending, investments) -> PlanConfig:
    return PlanConfig(
        name="Test plan",
        profile=profile,
        spending=spending,
        investments=investments,
    )
