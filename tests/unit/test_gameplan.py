"""
Unit tests for gameplan.py module.

Tests status classification, action composition, the milestone ladder,
coast FIRE, the savings-rate sensitivity curve and the reference tables.
"""

import pytest

from fireplan.calculations import coast_number
from fireplan.config import FireAssumptions
from fireplan.gameplan import (
    Gameplan,
    ReferenceSuggestion,
    SavingsRatePoint,
    compute_coast_fire,
    compute_milestones,
    compute_savings_rate_curve,
    compute_savings_rate_impact,
    compute_withdrawal_comparison,
    gameplan_status,
    generate_actions,
    generate_gameplan,
    get_reference_suggestions,
)
from fireplan.simulation import simulate


# ---------------------------------------------------------------------------
# Status
# ---------------------------------------------------------------------------

class TestStatus:
    """Tests for gameplan_status()."""

    def test_on_track(self, result):
        assert result.projected_fire_age == 44
        assert gameplan_status(result, 45) == "on-track"
        assert gameplan_status(result, 44) == "on-track"

    def test_gap(self, result):
        assert gameplan_status(result, 40) == "gap"

    def test_asap_is_on_track(self, result):
        assert gameplan_status(result, None) == "on-track"

    def test_impossible(self, impossible_case, today):
        r = simulate(*impossible_case, today=today)
        assert gameplan_status(r, 40) == "impossible"
        assert gameplan_status(r, None) == "impossible"


# ---------------------------------------------------------------------------
# Full gameplan
# ---------------------------------------------------------------------------

class TestGenerateGameplan:
    """Tests for generate_gameplan()."""

    def test_baseline(self, result, profile, spending, investments, today):
        plan = generate_gameplan(result, profile, spending, investments, today=today)

        assert isinstance(plan, Gameplan)
        assert plan.status == "on-track"
        assert plan.status_summary == "Regular FIRE by 45"
        assert plan.target_label == "$1.5M target"
        assert plan.progress_percent == result.progress_percent
        assert len(plan.milestones) == 4
        assert len(plan.savings_rate_curve) == 8
        assert len(plan.withdrawal_comparison) == 3
        assert len(plan.reference_suggestions) == 3

    def test_asap_summary(self, make_profile, spending, investments, today):
        profile = make_profile(target_retirement_age=None, fire_variant="lean")
        r = simulate(profile, spending, investments, today=today)
        plan = generate_gameplan(r, profile, spending, investments, today=today)

        assert plan.status_summary == "Lean FIRE as early as possible"
        assert plan.target_label == "$900k target"

    def test_on_track_single_action(self, on_track_case, today):
        profile, spending, investments = on_track_case
        r = simulate(profile, spending, investments, today=today)
        plan = generate_gameplan(r, profile, spending, investments, today=today)

        assert plan.status == "on-track"
        assert len(plan.actions) == 1
        action = plan.actions[0]
        assert action.type == "save-invest"
        assert action.priority == "primary"
        assert action.amount_per_month_cents == 1_100_000
        assert action.headline == "Save $11,000/mo and invest it"
        assert action.result_age == 35

    def test_impossible(self, impossible_case, today):
        profile, spending, investments = impossible_case
        r = simulate(profile, spending, investments, today=today)
        plan = generate_gameplan(r, profile, spending, investments, today=today)

        assert plan.status == "impossible"
        types = [a.type for a in plan.actions]
        # No surplus to invest; cutting every discretionary dollar still
        # misses the target and lean is unreachable too.
        assert types == ["earn-more"]
        assert plan.actions[0].result_age <= 40
        assert plan.actions[0].impact_years is None

    def test_inputs_untouched(self, gap_case, today):
        profile, spending, investments = gap_case
        before = (profile.model_dump(), spending.model_dump(), investments.model_dump())
        r = simulate(profile, spending, investments, today=today)
        generate_gameplan(r, profile, spending, investments, today=today)
        assert before == (profile.model_dump(), spending.model_dump(), investments.model_dump())


# ---------------------------------------------------------------------------
# Actions
# ---------------------------------------------------------------------------

class TestActions:
    """Tests for generate_actions() on plans behind target."""

    @pytest.fixture
    def gap_actions(self, gap_case, today):
        profile, spending, investments = gap_case
        r = simulate(profile, spending, investments, today=today)
        return r, generate_actions(
            r, profile, spending, investments, r.current_age, "gap", today=today
        )

    @pytest.fixture
    def reachable_actions(self, make_profile, spending, investments, today):
        """Baseline person aiming at 42: a spending cut alone gets there."""
        profile = make_profile(target_retirement_age=42)
        r = simulate(profile, spending, investments, today=today)
        return r, generate_actions(
            r, profile, spending, investments, r.current_age, "gap", today=today
        )

    def test_order_and_priorities(self, reachable_actions):
        _, actions = reachable_actions
        assert [a.type for a in actions] == [
            "earn-more", "save-invest", "cut-spending", "switch-variant",
        ]
        assert [a.priority for a in actions] == [
            "primary", "secondary", "secondary", "alternative",
        ]

    def test_unreachable_cut_dropped(self, gap_actions):
        """Cutting all $3,000 of discretionary spend still misses 35."""
        _, actions = gap_actions
        assert [a.type for a in actions] == ["earn-more", "save-invest", "switch-variant"]

    def test_earn_more(self, gap_actions):
        r, actions = gap_actions
        earn = actions[0]
        assert earn.headline.startswith("Earn $")
        assert earn.headline.endswith(" more per month")
        assert earn.result_age <= 35
        assert earn.detail == f"This closes the gap. FIRE by age {earn.result_age}"
        assert earn.impact_years == r.projected_fire_age - earn.result_age

    def test_invest_surplus(self, gap_actions):
        _, actions = gap_actions
        invest = actions[1]
        assert invest.amount_per_month_cents == 200_000
        assert invest.headline == "Invest your $2,000/mo savings"

    def test_cut_reaches_target(self, reachable_actions, spending):
        r, actions = reachable_actions
        cut = next(a for a in actions if a.type == "cut-spending")

        assert 0 < cut.amount_per_month_cents <= spending.discretionary_cents
        assert cut.result_age <= 42
        assert cut.detail == f"Reduces your FIRE age to {cut.result_age}"
        assert cut.impact_years == r.projected_fire_age - cut.result_age

    def test_earn_more_short_of_target(self, gap_case, today):
        """A capped raise that cannot close the gap does not claim to."""
        profile, spending, investments = gap_case
        capped = FireAssumptions(max_extra_income_cents=10_000)
        r = simulate(profile, spending, investments, today=today, assumptions=capped)
        actions = generate_actions(
            r, profile, spending, investments, r.current_age, "gap",
            today=today, assumptions=capped,
        )
        earn = actions[0]

        assert earn.type == "earn-more"
        assert earn.amount_per_month_cents == 10_000
        assert earn.result_age > 35
        assert earn.detail == "This significantly accelerates your FIRE timeline"

    def test_switch_variant(self, gap_actions):
        r, actions = gap_actions
        switch = next(a for a in actions if a.type == "switch-variant")
        lean_age = r.variant("lean").projected_age

        assert lean_age < r.projected_fire_age
        assert switch.headline == f"Switch to Lean FIRE. Free by {lean_age}"
        assert switch.detail == "Essentials-only budget of $3,000/mo. Needs $900k"
        assert switch.amount_per_month_cents is None
        assert switch.result_age == lean_age

    def test_no_switch_when_already_lean(self, gap_case, today):
        profile, spending, investments = gap_case
        profile = profile.model_copy(update={"fire_variant": "lean"})
        r = simulate(profile, spending, investments, today=today)
        actions = generate_actions(
            r, profile, spending, investments, r.current_age, "gap", today=today
        )
        assert "switch-variant" not in [a.type for a in actions]

    def test_asap_aims_earlier_than_projection(self, make_profile, spending, investments, today):
        profile = make_profile(target_retirement_age=None)
        r = simulate(profile, spending, investments, today=today)
        actions = generate_actions(
            r, profile, spending, investments, r.current_age, "gap", today=today
        )
        earn = actions[0]
        assert earn.type == "earn-more"
        assert earn.result_age <= r.projected_fire_age - 5


# ---------------------------------------------------------------------------
# Milestones and coast FIRE
# ---------------------------------------------------------------------------

class TestMilestones:
    """Tests for compute_milestones()."""

    def test_fixed_order(self, result, investments):
        milestones = compute_milestones(result, investments, "regular")
        assert [m.variant for m in milestones] == ["coast", "lean", "regular", "fat"]
        assert [m.label for m in milestones] == ["Coast", "Lean", "Regular", "Fat"]

    def test_exactly_one_current(self, result, investments):
        for variant in ("lean", "regular", "fat", "coast"):
            milestones = compute_milestones(result, investments, variant)
            current = [m.variant for m in milestones if m.is_current]
            assert current == [variant]

    def test_achieved(self, result, make_investments):
        rich = make_investments(outside_super_cents=95_000_000)
        milestones = {m.variant: m for m in compute_milestones(result, rich, "regular")}

        assert milestones["lean"].is_achieved
        assert not milestones["regular"].is_achieved
        assert not milestones["fat"].is_achieved

    def test_numbers_match_variants(self, result, investments):
        for m in compute_milestones(result, investments, "regular"):
            assert m.fire_number_cents == result.variant(m.variant).fire_number_cents
            assert 0 <= m.progress_percent <= 100


class TestCoastFire:
    """Tests for compute_coast_fire()."""

    def test_not_achieved(self, result, profile, investments):
        coast = compute_coast_fire(result, profile, investments, 31)

        assert coast.coast_number_cents == coast_number(150_000_000, 14, 7.0)
        assert coast.current_portfolio_cents == 15_000_000
        assert not coast.is_achieved
        assert coast.progress_percent == pytest.approx(
            15_000_000 / coast.coast_number_cents * 100
        )
        assert "more to Coast FIRE" in coast.description

    def test_achieved(self, on_track_case, today):
        profile, spending, investments = on_track_case
        r = simulate(profile, spending, investments, today=today)
        coast = compute_coast_fire(r, profile, investments, 31)

        assert coast.is_achieved
        assert coast.progress_percent == 100.0
        assert coast.description.startswith("Your portfolio will grow")

    def test_asap_discounts_to_preservation_age(self, make_profile, result, investments):
        profile = make_profile(target_retirement_age=None)
        coast = compute_coast_fire(result, profile, investments, 31)
        assert coast.coast_number_cents == coast_number(150_000_000, 29, 7.0)

    def test_past_target_age(self, make_profile, result, investments):
        profile = make_profile(target_retirement_age=30)
        coast = compute_coast_fire(result, profile, investments, 31)
        assert coast.coast_number_cents == 150_000_000


# ---------------------------------------------------------------------------
# Savings-rate sensitivity
# ---------------------------------------------------------------------------

class TestSavingsRateCurve:
    """Tests for compute_savings_rate_curve() and compute_savings_rate_impact()."""

    @pytest.fixture
    def curve(self, profile, spending, investments, today):
        return compute_savings_rate_curve(profile, spending, investments, 31, today=today)

    def test_rates(self, curve):
        assert [p.rate for p in curve] == [10, 20, 30, 40, 50, 60, 70, 80]

    def test_current_point(self, curve, result):
        current = [p for p in curve if p.is_current]
        assert len(current) == 1
        assert current[0].rate == 50
        assert current[0].years_to_fire == result.years_to_fire

    def test_non_increasing(self, curve):
        years = [p.years_to_fire for p in curve]
        assert all(y is not None for y in years)
        assert all(b <= a for a, b in zip(years, years[1:]))

    def test_current_rounds_to_nearest_ten(self, profile, make_spending, investments, today):
        spending = make_spending(savings_rate_percent=44.9)
        curve = compute_savings_rate_curve(profile, spending, investments, 31, today=today)
        assert [p.rate for p in curve if p.is_current] == [40]

    def test_custom_steps(self, profile, spending, investments, today):
        a = FireAssumptions(savings_rate_steps=(25, 50, 75))
        curve = compute_savings_rate_curve(
            profile, spending, investments, 31, today=today, assumptions=a
        )
        assert [p.rate for p in curve] == [25, 50, 75]

    def test_impact(self, curve):
        impact = compute_savings_rate_impact(50.0, curve)
        by_rate = {p.rate: p.years_to_fire for p in curve}

        assert impact.current_rate == 50
        assert impact.plus_ten_years_saved == by_rate[50] - by_rate[60]
        assert impact.plus_ten_years_saved >= 0

    def test_impact_without_current_point(self):
        curve = [SavingsRatePoint(10, 30, False), SavingsRatePoint(20, 25, False)]
        impact = compute_savings_rate_impact(5.0, curve)
        assert impact.plus_ten_years_saved is None


# ---------------------------------------------------------------------------
# Reference tables
# ---------------------------------------------------------------------------

class TestReferenceTables:
    """Tests for the withdrawal comparison and fund suggestions."""

    def test_withdrawal_comparison(self):
        rows = compute_withdrawal_comparison(6_000_000)

        assert [r.label for r in rows] == ["4%", "3.5%", "3%"]
        assert [r.fire_number_cents for r in rows] == [
            150_000_000, 171_428_571, 200_000_000,
        ]
        assert rows[0].note == "Standard (30yr retirement)"

    def test_suggestions(self):
        suggestions = get_reference_suggestions()
        assert [s.ticker for s in suggestions] == ["VAS", "VGS", "VDHG"]
        assert suggestions[2] == ReferenceSuggestion(
            "VDHG", "Vanguard Diversified High Growth", "All-in-one"
        )
