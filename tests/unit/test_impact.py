"""
Unit tests for impact.py module.

Tests the what-if calculators: spending cuts, raises and income milestones.
"""

import pytest

from fireplan.impact import income_impact, income_milestones, savings_impact
from fireplan.simulation import simulate


class TestSavingsImpact:
    """Tests for savings_impact()."""

    @pytest.mark.parametrize("extra", [0, -50_000])
    def test_non_positive_is_identity(self, result, profile, spending, investments, today, extra):
        impact = savings_impact(result, extra, profile, spending, investments, today=today)

        assert impact.years_saved == 0
        assert impact.new_fire_age == result.projected_fire_age
        assert impact.new_fire_date == result.projected_fire_date

    def test_cut_brings_fire_forward(self, result, profile, spending, investments, today):
        impact = savings_impact(result, 100_000, profile, spending, investments, today=today)

        assert impact.original_fire_age == result.projected_fire_age
        assert impact.new_fire_age < result.projected_fire_age
        assert impact.years_saved == impact.original_fire_age - impact.new_fire_age
        assert impact.years_saved > 0

    def test_matches_direct_rerun(self, result, profile, make_spending, spending, investments, today):
        """Equivalent to simulating with the lower spend directly."""
        impact = savings_impact(result, 100_000, profile, spending, investments, today=today)
        direct = simulate(
            profile, make_spending(monthly_total_spend_cents=400_000), investments, today=today
        )
        assert impact.new_fire_age == direct.projected_fire_age

    def test_snapshot_not_mutated(self, result, profile, spending, investments, today):
        savings_impact(result, 100_000, profile, spending, investments, today=today)
        assert spending.monthly_total_spend_cents == 500_000
        assert spending.savings_rate_percent == 50.0

    def test_years_saved_none_when_unreachable(self, impossible_case, today):
        profile, spending, investments = impossible_case
        r = simulate(profile, spending, investments, today=today)
        impact = savings_impact(r, 10_000, profile, spending, investments, today=today)
        assert impact.new_fire_age is None
        assert impact.years_saved is None


class TestIncomeImpact:
    """Tests for income_impact()."""

    def test_non_positive_is_identity(self, result, profile, spending, investments, today):
        impact = income_impact(result, 0, profile, spending, investments, today=today)

        assert impact.years_saved == 0
        assert impact.new_fire_age == result.projected_fire_age
        assert impact.extra_annual_savings_cents == 0
        assert impact.extra_super_contribution_cents == 0

    def test_raise(self, result, profile, spending, investments, today):
        impact = income_impact(result, 100_000, profile, spending, investments, today=today)

        assert impact.extra_annual_savings_cents == 1_200_000
        assert impact.extra_super_contribution_cents == 138_000
        assert impact.new_fire_age <= result.projected_fire_age
        assert impact.years_saved == result.projected_fire_age - impact.new_fire_age

    def test_raise_keeps_fire_number(self, result, profile, spending, investments, today):
        """Only deposits change; the active FIRE number is the same."""
        direct = simulate(
            profile,
            spending.model_copy(update={"monthly_income_cents": 1_100_000}),
            investments,
            today=today,
        )
        impact = income_impact(result, 100_000, profile, spending, investments, today=today)
        assert direct.fire_number_cents == result.fire_number_cents
        assert impact.new_fire_age == direct.projected_fire_age

    def test_snapshot_not_mutated(self, result, profile, spending, investments, today):
        income_impact(result, 100_000, profile, spending, investments, today=today)
        assert spending.monthly_income_cents == 1_000_000

    def test_rescues_impossible(self, impossible_case, today):
        profile, spending, investments = impossible_case
        r = simulate(profile, spending, investments, today=today)
        impact = income_impact(r, 1_000_000, profile, spending, investments, today=today)

        assert impact.original_fire_age is None
        assert impact.new_fire_age is not None
        assert impact.years_saved is None


class TestIncomeMilestones:
    """Tests for income_milestones()."""

    def test_levels_mid_income(self, result, profile, spending, investments, today):
        """$120k/yr: base $120k, step $20k."""
        milestones = income_milestones(result, profile, spending, investments, today=today)
        assert [m.annual_income_cents for m in milestones] == [
            14_000_000, 16_000_000, 18_000_000, 20_000_000,
        ]

    def test_levels_low_income(self, result, profile, make_spending, investments, today):
        """$54k/yr rounds up to $60k, step $10k."""
        spending = make_spending(monthly_income_cents=450_000, monthly_total_spend_cents=300_000)
        milestones = income_milestones(result, profile, spending, investments, today=today)
        assert [m.annual_income_cents for m in milestones] == [
            7_000_000, 8_000_000, 9_000_000, 10_000_000,
        ]

    def test_levels_high_income(self, result, profile, make_spending, investments, today):
        """$180k/yr: base $180k, step $30k."""
        spending = make_spending(monthly_income_cents=1_500_000)
        milestones = income_milestones(result, profile, spending, investments, today=today)
        assert [m.annual_income_cents for m in milestones] == [
            21_000_000, 24_000_000, 27_000_000, 30_000_000,
        ]

    def test_ages_non_increasing(self, result, profile, spending, investments, today):
        milestones = income_milestones(result, profile, spending, investments, today=today)
        ages = [m.fire_age for m in milestones]
        assert all(a is not None for a in ages)
        assert ages == sorted(ages, reverse=True)
        assert all(m.years_saved >= 0 for m in milestones)
