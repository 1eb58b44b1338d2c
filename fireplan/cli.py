"""
Command-Line Interface for FirePlan.

Purpose
-------
Provides a CLI for running FIRE projections, gameplans and what-if
scenarios from a plan file without writing Python code.

Commands
--------
- project: Project every FIRE variant and show the active one
- gameplan: Status, actions, milestones and savings-rate curve
- solve: Extra income / spending cut needed to reach a target age
- what-if: Effect of a monthly raise or spending cut
- config: Create, validate and display plan files
- info: Version and dependency information

Example Usage
-------------
    # Create a starter plan
    $ fireplan config create plan.json

    # Run the projection and save the result
    $ fireplan project --config plan.json --output results/plan.json

    # How much more do I need to earn to retire at 45?
    $ fireplan solve --config plan.json --target-age 45

    # Show version
    $ fireplan --version
"""

from __future__ import annotations

import datetime
import json
import logging
import sys
from importlib import metadata
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from .config import AppSettings, PlanConfig
from .exceptions import FirePlanError
from .gameplan import generate_gameplan
from .impact import income_impact, income_milestones, savings_impact
from .optimization import find_required_extra_income, find_required_extra_savings
from .recommendations import generate_recommendations
from .serialization import SCHEMA_VERSION, load_plan, save_plan, save_result
from .simulation import simulate

# Version
__version__ = "0.1.0"

logger = logging.getLogger(__name__)

STATUS_STYLES = {"on-track": "green", "gap": "yellow", "impossible": "red"}


def _configure_logging(settings: AppSettings) -> None:
    logging.basicConfig(
        level=settings.effective_log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _money(cents: Optional[float], symbol: str = "$") -> str:
    if cents is None:
        return "-"
    return f"{symbol}{cents / 100:,.0f}"


def _age(age: Optional[int]) -> str:
    return "not reached" if age is None else str(age)


def _load(path: Path) -> PlanConfig:
    try:
        plan = load_plan(path)
    except FirePlanError as e:
        click.echo(f"Error loading plan: {e}", err=True)
        sys.exit(1)
    logger.debug("loaded plan %r from %s", plan.name, path)
    return plan


def _run(ctx: click.Context, plan: PlanConfig):
    return simulate(
        plan.profile,
        plan.spending,
        plan.investments,
        today=ctx.obj["today"],
        assumptions=plan.assumptions,
    )


config_option = click.option(
    "--config", "-c",
    type=click.Path(exists=True, path_type=Path),
    required=True,
    help="Path to plan file (JSON)"
)


@click.group()
@click.version_option(version=__version__, prog_name="fireplan")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option(
    "--today",
    type=click.DateTime(formats=["%Y-%m-%d"]),
    default=None,
    help="Evaluate as of this date (YYYY-MM-DD, default: today)"
)
@click.pass_context
def main(ctx: click.Context, quiet: bool, today: Optional[datetime.datetime]) -> None:
    """
    FirePlan - FIRE projection and gameplan engine.

    Projects when invested assets can fund your spending indefinitely,
    across lean, regular, fat and coast FIRE, and what it takes to get
    there sooner.

    Use 'fireplan COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    _configure_logging(settings)

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["console"] = Console()
    ctx.obj["settings"] = settings
    ctx.obj["today"] = today.date() if today is not None else datetime.date.today()


# ---------------------------------------------------------------------------
# project
# ---------------------------------------------------------------------------

@main.command()
@config_option
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the result as JSON to this file"
)
@click.option(
    "--plot",
    type=click.Path(path_type=Path),
    default=None,
    help="Save the projection chart to this image file"
)
@click.pass_context
def project(ctx: click.Context, config: Path, output: Optional[Path], plot: Optional[Path]) -> None:
    """
    Project every FIRE variant.

    Example:
        fireplan project -c plan.json -o results/plan.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    symbol = ctx.obj["settings"].currency_symbol

    plan = _load(config)
    result = _run(ctx, plan)

    if not quiet:
        table = Table(title=f"FIRE Projection: {plan.name}", show_header=True)
        table.add_column("Variant", style="cyan")
        table.add_column("Annual Expenses", justify="right")
        table.add_column("FIRE Number", justify="right")
        table.add_column("Progress", justify="right")
        table.add_column("FIRE Age", justify="right", style="green")

        for v in result.variants:
            marker = " *" if v.variant == plan.profile.fire_variant else ""
            table.add_row(
                f"{v.variant}{marker}",
                _money(v.annual_expenses_cents, symbol),
                _money(v.fire_number_cents, symbol),
                f"{v.progress_percent:.1f}%",
                _age(v.projected_age),
            )
        console.print(table)

        tb = result.two_bucket
        summary = (
            f"[bold]Current age:[/bold] {result.current_age}\n"
            f"[bold]Target age:[/bold] {_age(result.target_age)}\n"
            f"[bold]Projected FIRE:[/bold] {_age(result.projected_fire_age)}"
            + (f" ({result.projected_fire_date.isoformat()})" if result.projected_fire_date else "")
            + f"\n\n[cyan]Outside super:[/cyan] {_money(tb.outside_super_current_cents, symbol)}"
            f" / {_money(tb.outside_super_target_cents, symbol)}"
            f" ({tb.outside_super_progress_percent:.0f}%)\n"
            f"[cyan]Super:[/cyan] {_money(tb.super_current_cents, symbol)}"
            f" / {_money(tb.super_target_cents, symbol)}"
            f" ({tb.super_progress_percent:.0f}%)"
        )
        console.print(Panel(summary, title="Summary", border_style="blue"))

        for rec in generate_recommendations(
            result, plan.spending, plan.profile, plan.investments,
            today=ctx.obj["today"], assumptions=plan.assumptions,
        ):
            console.print(f"[bold]{rec.title}[/bold] ({rec.priority}): {rec.description}")

    if output:
        save_result(result, output)
        if not quiet:
            click.echo(f"Result saved to {output}")

    if plot:
        import matplotlib
        matplotlib.use("Agg")
        from .plotting import plot_projection

        plot.parent.mkdir(parents=True, exist_ok=True)
        plot_projection(result, save_path=str(plot))
        if not quiet:
            click.echo(f"Chart saved to {plot}")


# ---------------------------------------------------------------------------
# gameplan
# ---------------------------------------------------------------------------

@main.command()
@config_option
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the result and gameplan as JSON to this file"
)
@click.pass_context
def gameplan(ctx: click.Context, config: Path, output: Optional[Path]) -> None:
    """
    Build the FIRE gameplan.

    Example:
        fireplan gameplan -c plan.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]
    symbol = ctx.obj["settings"].currency_symbol

    plan = _load(config)
    result = _run(ctx, plan)
    gp = generate_gameplan(
        result, plan.profile, plan.spending, plan.investments,
        today=ctx.obj["today"], assumptions=plan.assumptions,
    )

    if not quiet:
        style = STATUS_STYLES[gp.status]
        console.print(Panel(
            f"[bold {style}]{gp.status}[/bold {style}]  {gp.status_summary}\n"
            f"{gp.target_label}, {gp.progress_percent:.1f}% there",
            title="Gameplan",
            border_style=style,
        ))

        actions = Table(title="Actions", show_header=True)
        actions.add_column("Priority", style="cyan")
        actions.add_column("Action")
        actions.add_column("Result Age", justify="right")
        for a in gp.actions:
            actions.add_row(a.priority, f"{a.headline}\n[dim]{a.detail}[/dim]", _age(a.result_age))
        console.print(actions)

        ladder = Table(title="Milestones", show_header=True)
        ladder.add_column("Variant", style="cyan")
        ladder.add_column("FIRE Number", justify="right")
        ladder.add_column("Progress", justify="right")
        ladder.add_column("FIRE Age", justify="right")
        for m in gp.milestones:
            label = f"{m.label}{' *' if m.is_current else ''}{' ✓' if m.is_achieved else ''}"
            ladder.add_row(label, _money(m.fire_number_cents, symbol),
                           f"{m.progress_percent:.1f}%", _age(m.projected_age))
        console.print(ladder)

        curve = Table(title="Savings Rate vs Years to FIRE", show_header=True)
        curve.add_column("Rate", justify="right")
        curve.add_column("Years", justify="right")
        for p in gp.savings_rate_curve:
            rate = f"{p.rate}%{' *' if p.is_current else ''}"
            curve.add_row(rate, "-" if p.years_to_fire is None else str(p.years_to_fire))
        console.print(curve)
        console.print(gp.coast_fire.description)

    if output:
        save_result(result, output, gameplan=gp)
        if not quiet:
            click.echo(f"Gameplan saved to {output}")


# ---------------------------------------------------------------------------
# solve / what-if
# ---------------------------------------------------------------------------

@main.command()
@config_option
@click.option("--target-age", "-a", type=click.IntRange(1, 120), required=True,
              help="Age by which FIRE should be reached")
@click.pass_context
def solve(ctx: click.Context, config: Path, target_age: int) -> None:
    """
    Find the extra income or spending cut needed to reach a target age.

    Example:
        fireplan solve -c plan.json --target-age 45
    """
    symbol = ctx.obj["settings"].currency_symbol
    plan = _load(config)
    result = _run(ctx, plan)
    kwargs = dict(today=ctx.obj["today"], assumptions=plan.assumptions)

    income = find_required_extra_income(
        result, plan.profile, plan.spending, plan.investments, target_age, **kwargs
    )
    savings = find_required_extra_savings(
        result, plan.profile, plan.spending, plan.investments, target_age, **kwargs
    )

    click.echo(f"Current projection: FIRE at {_age(result.projected_fire_age)}")
    for label, solution in (("Extra income", income), ("Spending cut", savings)):
        verdict = "reaches" if solution.satisfied else "does not reach"
        click.echo(
            f"{label}: {_money(solution.extra_monthly_cents, symbol)}/mo "
            f"-> FIRE at {_age(solution.result_age)} ({verdict} {target_age})"
        )


@main.command("what-if")
@config_option
@click.option("--extra-income", type=click.IntRange(min=0), default=0,
              help="Extra monthly income in cents")
@click.option("--extra-savings", type=click.IntRange(min=0), default=0,
              help="Monthly spending cut in cents")
@click.option("--milestones", is_flag=True, help="Also show FIRE ages at higher incomes")
@click.pass_context
def what_if(
    ctx: click.Context,
    config: Path,
    extra_income: int,
    extra_savings: int,
    milestones: bool,
) -> None:
    """
    Show the effect of earning more or spending less.

    Example:
        fireplan what-if -c plan.json --extra-income 100000
    """
    symbol = ctx.obj["settings"].currency_symbol
    plan = _load(config)
    result = _run(ctx, plan)
    kwargs = dict(today=ctx.obj["today"], assumptions=plan.assumptions)

    click.echo(f"Current projection: FIRE at {_age(result.projected_fire_age)}")
    if extra_income:
        impact = income_impact(
            result, extra_income, plan.profile, plan.spending, plan.investments, **kwargs
        )
        click.echo(
            f"Earning {_money(extra_income, symbol)}/mo more: FIRE at "
            f"{_age(impact.new_fire_age)} ({impact.years_saved} years saved)"
        )
    if extra_savings:
        impact = savings_impact(
            result, extra_savings, plan.profile, plan.spending, plan.investments, **kwargs
        )
        click.echo(
            f"Spending {_money(extra_savings, symbol)}/mo less: FIRE at "
            f"{_age(impact.new_fire_age)} ({impact.years_saved} years saved)"
        )
    if milestones:
        for m in income_milestones(
            result, plan.profile, plan.spending, plan.investments, **kwargs
        ):
            click.echo(
                f"At {_money(m.annual_income_cents, symbol)}/yr: FIRE at {_age(m.fire_age)}"
            )


# ---------------------------------------------------------------------------
# config
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """
    Plan file management commands.

    Create, validate, and display plan files.
    """
    pass


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path) -> None:
    """
    Validate a plan file.

    Example:
        fireplan config validate plan.json
    """
    console = ctx.obj["console"]
    quiet = ctx.obj["quiet"]

    try:
        plan = load_plan(config_file)
    except FirePlanError as e:
        click.echo(f"Plan validation failed: {e}", err=True)
        sys.exit(1)

    if not quiet:
        p = plan.profile
        target = p.target_retirement_age if p.target_retirement_age is not None else "ASAP"
        console.print(Panel(
            f"[bold]Plan valid[/bold]: {plan.name}\n\n"
            f"[cyan]Variant:[/cyan] {p.fire_variant}\n"
            f"[cyan]Target age:[/cyan] {target}\n"
            f"[cyan]Expected return:[/cyan] {p.expected_return_rate:.1f}%\n"
            f"[cyan]Contribution rate:[/cyan] {p.super_contribution_rate:.1f}%",
            title="Plan Summary",
            border_style="green",
        ))


@config.command("show")
@click.argument("config_file", type=click.Path(exists=True, path_type=Path))
@click.option("--format", "-f", type=click.Choice(["json", "table"]), default="table")
@click.pass_context
def config_show(ctx: click.Context, config_file: Path, format: str) -> None:
    """
    Display plan details.

    Example:
        fireplan config show plan.json --format table
    """
    console = ctx.obj["console"]
    symbol = ctx.obj["settings"].currency_symbol
    plan = _load(config_file)

    if format == "json":
        click.echo(json.dumps(plan.model_dump(mode="json"), indent=2))
        return

    table = Table(title=plan.name)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")

    s, i = plan.spending, plan.investments
    table.add_row("Date of birth", plan.profile.date_of_birth.isoformat())
    table.add_row("Variant", plan.profile.fire_variant)
    table.add_row("Monthly income", _money(s.monthly_income_cents, symbol))
    table.add_row("Monthly spend", _money(s.monthly_total_spend_cents, symbol))
    table.add_row("Monthly essentials", _money(s.monthly_essentials_cents, symbol))
    table.add_row("Outside super", _money(i.outside_super_cents, symbol))
    table.add_row("Super", _money(i.super_balance_cents, symbol))
    console.print(table)


TEMPLATES = {
    "basic": dict(
        profile=dict(date_of_birth="1995-01-01", target_retirement_age=45),
        spending=dict(
            monthly_essentials_cents=300_000,
            monthly_total_spend_cents=500_000,
            monthly_income_cents=1_000_000,
            savings_rate_percent=50,
        ),
        investments=dict(outside_super_cents=10_000_000, super_balance_cents=5_000_000),
    ),
    "asap": dict(
        profile=dict(
            date_of_birth="1990-06-15",
            income_growth_rate=3.0,
            spending_growth_rate=2.5,
            outside_super_return_rate=6.5,
        ),
        spending=dict(
            monthly_essentials_cents=400_000,
            monthly_total_spend_cents=650_000,
            monthly_income_cents=1_200_000,
            savings_rate_percent=45.8,
        ),
        investments=dict(outside_super_cents=25_000_000, super_balance_cents=12_000_000),
    ),
}


@config.command("create")
@click.argument("output_file", type=click.Path(path_type=Path))
@click.option("--template", "-t", type=click.Choice(sorted(TEMPLATES)), default="basic")
@click.option("--name", "-n", default=None, help="Plan name")
@click.pass_context
def config_create(ctx: click.Context, output_file: Path, template: str, name: Optional[str]) -> None:
    """
    Create a new plan file from a template.

    Example:
        fireplan config create my_plan.json --template basic
    """
    data = dict(TEMPLATES[template])
    data["schema_version"] = SCHEMA_VERSION
    data["name"] = name or f"{template.capitalize()} plan"
    plan = PlanConfig.model_validate(data)
    save_plan(plan, output_file)

    if not ctx.obj["quiet"]:
        ctx.obj["console"].print(f"[green]Created plan file: {output_file}[/green]")


# ---------------------------------------------------------------------------
# info
# ---------------------------------------------------------------------------

@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display package and dependency information.
    """
    console = ctx.obj["console"]
    settings = ctx.obj["settings"]

    info_lines = [
        f"FirePlan Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Log level: {settings.effective_log_level}",
    ]

    for dist in ("numpy", "pandas", "pydantic", "matplotlib", "rich", "click"):
        try:
            info_lines.append(f"{dist}: {metadata.version(dist)}")
        except metadata.PackageNotFoundError:
            info_lines.append(f"{dist}: not installed")

    console.print(Panel("\n".join(info_lines), title="System Information"))


if __name__ == "__main__":
    main()
