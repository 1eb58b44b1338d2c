"""
Unit tests for CLI module.

Tests command-line interface functionality using Click's testing utilities.
"""

import json
import pytest
from click.testing import CliRunner

from fireplan.cli import main, __version__
from fireplan.serialization import load_plan

TODAY = ["--today", "2026-06-15"]


# ============================================================================
# FIXTURES
# ============================================================================

@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def plan_file(runner, tmp_path):
    """Basic template: same person as the shared fixtures."""
    path = tmp_path / "plan.json"
    result = runner.invoke(main, ["config", "create", str(path)])
    assert result.exit_code == 0
    return path


@pytest.fixture
def invalid_file(tmp_path):
    path = tmp_path / "invalid.json"
    path.write_text(json.dumps({"schema_version": "0.1.0", "name": "No profile"}))
    return path


# ============================================================================
# MAIN GROUP
# ============================================================================

class TestMain:

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("project", "gameplan", "solve", "what-if", "config", "info"):
            assert command in result.output

    def test_info(self, runner):
        result = runner.invoke(main, ["info"])
        assert result.exit_code == 0
        assert "FirePlan Version" in result.output


# ============================================================================
# CONFIG COMMANDS
# ============================================================================

class TestConfigCommands:

    def test_create_basic(self, plan_file):
        plan = load_plan(plan_file)
        assert plan.name == "Basic plan"
        assert plan.profile.target_retirement_age == 45
        assert plan.spending.monthly_income_cents == 1_000_000

    def test_create_asap_with_name(self, runner, tmp_path):
        path = tmp_path / "asap.json"
        result = runner.invoke(
            main, ["config", "create", str(path), "--template", "asap", "--name", "Early"]
        )
        assert result.exit_code == 0

        plan = load_plan(path)
        assert plan.name == "Early"
        assert plan.profile.target_retirement_age is None

    def test_validate(self, runner, plan_file):
        result = runner.invoke(main, ["config", "validate", str(plan_file)])
        assert result.exit_code == 0
        assert "Plan valid" in result.output

    def test_validate_invalid(self, runner, invalid_file):
        result = runner.invoke(main, ["config", "validate", str(invalid_file)])
        assert result.exit_code == 1
        assert "Plan validation failed" in result.output

    def test_show_json(self, runner, plan_file):
        result = runner.invoke(main, ["config", "show", str(plan_file), "--format", "json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["profile"]["date_of_birth"] == "1995-01-01"

    def test_show_table(self, runner, plan_file):
        result = runner.invoke(main, ["config", "show", str(plan_file)])
        assert result.exit_code == 0
        assert "Monthly income" in result.output


# ============================================================================
# ANALYSIS COMMANDS
# ============================================================================

class TestProjectCommand:

    def test_project(self, runner, plan_file):
        result = runner.invoke(main, TODAY + ["project", "-c", str(plan_file)])
        assert result.exit_code == 0
        assert "FIRE Projection" in result.output
        assert "regular *" in result.output

    def test_output(self, runner, plan_file, tmp_path):
        out = tmp_path / "results" / "result.json"
        result = runner.invoke(
            main, TODAY + ["--quiet", "project", "-c", str(plan_file), "-o", str(out)]
        )
        assert result.exit_code == 0

        payload = json.loads(out.read_text())
        assert payload["result"]["projected_fire_age"] == 44

    def test_plot(self, runner, plan_file, tmp_path):
        chart = tmp_path / "charts" / "projection.png"
        result = runner.invoke(
            main, TODAY + ["-q", "project", "-c", str(plan_file), "--plot", str(chart)]
        )
        assert result.exit_code == 0
        assert chart.exists()

    def test_missing_file(self, runner, tmp_path):
        result = runner.invoke(main, ["project", "-c", str(tmp_path / "nope.json")])
        assert result.exit_code != 0

    def test_invalid_file(self, runner, invalid_file):
        result = runner.invoke(main, ["project", "-c", str(invalid_file)])
        assert result.exit_code == 1
        assert "Error loading plan" in result.output


class TestGameplanCommand:

    def test_gameplan(self, runner, plan_file):
        result = runner.invoke(main, TODAY + ["gameplan", "-c", str(plan_file)])
        assert result.exit_code == 0
        assert "on-track" in result.output
        assert "Milestones" in result.output

    def test_output(self, runner, plan_file, tmp_path):
        out = tmp_path / "gameplan.json"
        result = runner.invoke(
            main, TODAY + ["-q", "gameplan", "-c", str(plan_file), "-o", str(out)]
        )
        assert result.exit_code == 0

        payload = json.loads(out.read_text())
        assert payload["gameplan"]["status"] == "on-track"


class TestSolveCommands:

    def test_solve_on_track(self, runner, plan_file):
        result = runner.invoke(
            main, TODAY + ["solve", "-c", str(plan_file), "--target-age", "45"]
        )
        assert result.exit_code == 0
        assert "Current projection: FIRE at 44" in result.output
        assert "Extra income: $0/mo -> FIRE at 44 (reaches 45)" in result.output

    def test_solve_gap(self, runner, plan_file):
        result = runner.invoke(
            main, TODAY + ["solve", "-c", str(plan_file), "--target-age", "40"]
        )
        assert result.exit_code == 0
        assert "(reaches 40)" in result.output

    def test_what_if(self, runner, plan_file):
        result = runner.invoke(
            main,
            TODAY + ["what-if", "-c", str(plan_file),
                     "--extra-savings", "100000", "--extra-income", "100000"],
        )
        assert result.exit_code == 0
        assert "Spending $1,000/mo less: FIRE at 41" in result.output
        assert "Earning $1,000/mo more: FIRE at 43" in result.output

    def test_what_if_milestones(self, runner, plan_file):
        result = runner.invoke(
            main, TODAY + ["what-if", "-c", str(plan_file), "--milestones"]
        )
        assert result.exit_code == 0
        assert "At $140,000/yr" in result.output
        assert "At $200,000/yr" in result.output
