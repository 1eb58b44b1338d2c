"""
Plotting utilities for FirePlan results.

Purpose
-------
Matplotlib views of a simulation and its gameplan:

- plot_projection         : stacked bucket balances against the FIRE target
- plot_two_bucket         : progress of the outside-super bridge and super
- plot_savings_rate_curve : years to FIRE across savings rates

All functions follow the same conventions: draw on ``ax`` when given,
otherwise create a figure; save when ``save_path`` is set; return
``(fig, ax)`` only when ``return_fig_ax`` is True. Amounts are plotted in
cents and labelled in compact dollars.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from .constants import BUCKET_COLORS, DEFAULT_FIGSIZE, DEFAULT_FIGSIZE_WIDE
from .utils import cents_axis_formatter, format_cents_compact

if TYPE_CHECKING:
    from .gameplan import SavingsRatePoint
    from .simulation import FireResult
    from .types import PlotColorsDict

__all__ = [
    "plot_projection",
    "plot_two_bucket",
    "plot_savings_rate_curve",
]

TARGET_COLOR = "crimson"
CURRENT_COLOR = "darkorange"


def _colors(colors: Optional[PlotColorsDict]) -> dict:
    merged = {
        "outside": BUCKET_COLORS[0],
        "super": BUCKET_COLORS[1],
        "target": TARGET_COLOR,
        "current": CURRENT_COLOR,
    }
    if colors:
        merged.update(colors)
    return merged


def _new_ax(ax, figsize):
    import matplotlib.pyplot as plt

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
        return fig, ax
    return None, ax


def plot_projection(
    result: FireResult,
    *,
    ax=None,
    figsize: tuple = DEFAULT_FIGSIZE,
    title: Optional[str] = None,
    colors: Optional[PlotColorsDict] = None,
    show_fire_age: bool = True,
    grid: bool = True,
    legend: bool = True,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Stacked area of both buckets by age with the FIRE target line.

    Parameters
    ----------
    result : FireResult
        Simulation whose chart projection is drawn.
    ax : matplotlib.axes.Axes, optional
        Axes to draw on. A new figure is created when None.
    figsize : tuple
        Figure size when a new figure is created.
    title : str, optional
        Axes title. Defaults to the projected FIRE age.
    colors : PlotColorsDict, optional
        Overrides for "outside", "super" and "target".
    show_fire_age : bool
        Draw a vertical marker at the projected FIRE age.
    save_path : str, optional
        Path to save figure.
    return_fig_ax : bool, default False
        If True, returns (fig, ax).

    Raises
    ------
    ValueError
        If the result carries no projection.
    """
    from matplotlib.ticker import FuncFormatter

    df = result.projection_frame
    if df.empty:
        raise ValueError("result has no projection to plot")

    c = _colors(colors)
    fig, ax = _new_ax(ax, figsize)

    ages = df.index.to_numpy()
    ax.stackplot(
        ages,
        df["outside_super_cents"].to_numpy(),
        df["super_cents"].to_numpy(),
        labels=["Outside super", "Super"],
        colors=[c["outside"], c["super"]],
        alpha=0.8,
        zorder=2,
    )
    ax.plot(ages, df["fire_target_cents"].to_numpy(), color=c["target"],
            linestyle="--", linewidth=2, label="FIRE target", zorder=3)

    if show_fire_age and result.projected_fire_age is not None:
        ax.axvline(result.projected_fire_age, color=c["target"], alpha=0.5,
                   linewidth=1, zorder=1)

    if title is None:
        title = (
            f"FIRE at {result.projected_fire_age}"
            if result.projected_fire_age is not None
            else "FIRE not reached within the horizon"
        )
    ax.set_title(title)
    ax.set_xlabel("Age")
    ax.set_ylabel("Portfolio")
    ax.yaxis.set_major_formatter(FuncFormatter(cents_axis_formatter))
    if grid: ax.grid(True, linestyle="--", alpha=0.4, zorder=0)
    if legend: ax.legend(loc="upper left")

    if save_path: (fig or ax.figure).savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax: return (fig or ax.figure, ax)


def plot_two_bucket(
    result: FireResult,
    *,
    ax=None,
    figsize: tuple = DEFAULT_FIGSIZE_WIDE,
    title: Optional[str] = "Two-bucket progress",
    colors: Optional[PlotColorsDict] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Horizontal bars of current balance vs target for each bucket.

    Buckets with a zero target (no bridge needed) are drawn as complete.
    """
    from matplotlib.ticker import FuncFormatter

    c = _colors(colors)
    fig, ax = _new_ax(ax, figsize)
    tb = result.two_bucket

    labels = ["Outside super", "Super"]
    targets = np.array([tb.outside_super_target_cents, tb.super_target_cents], dtype=float)
    currents = np.array([tb.outside_super_current_cents, tb.super_current_cents], dtype=float)
    progress = [tb.outside_super_progress_percent, tb.super_progress_percent]
    y = np.arange(len(labels))

    ax.barh(y, targets, color="lightgrey", edgecolor="grey", label="Target", zorder=2)
    ax.barh(y, np.minimum(currents, np.where(targets > 0, targets, currents)),
            color=[c["outside"], c["super"]], height=0.5, label="Current", zorder=3)

    for yi, cur, tgt, pct in zip(y, currents, targets, progress):
        ax.text(max(cur, tgt), yi, f"  {format_cents_compact(cur)} / "
                f"{format_cents_compact(tgt)} ({pct:.0f}%)",
                va="center", fontsize=9)

    ax.set_yticks(y)
    ax.set_yticklabels(labels)
    ax.xaxis.set_major_formatter(FuncFormatter(cents_axis_formatter))
    if title: ax.set_title(title)
    ax.grid(True, linestyle="--", alpha=0.4, axis="x", zorder=0)

    if save_path: (fig or ax.figure).savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax: return (fig or ax.figure, ax)


def plot_savings_rate_curve(
    curve: Sequence[SavingsRatePoint],
    *,
    ax=None,
    figsize: tuple = DEFAULT_FIGSIZE_WIDE,
    title: Optional[str] = "Years to FIRE by savings rate",
    colors: Optional[PlotColorsDict] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
):
    """
    Line of years to FIRE against savings rate.

    Rates without a projection are left as gaps. The caller's current rate
    is highlighted.
    """
    c = _colors(colors)
    fig, ax = _new_ax(ax, figsize)

    rates = np.array([p.rate for p in curve], dtype=float)
    years = np.array(
        [np.nan if p.years_to_fire is None else p.years_to_fire for p in curve],
        dtype=float,
    )

    ax.plot(rates, years, marker="o", color=c["outside"], linewidth=2, zorder=2)
    for p in curve:
        if p.is_current and p.years_to_fire is not None:
            ax.scatter([p.rate], [p.years_to_fire], s=120, color=c["current"],
                       label="You", zorder=3)

    ax.set_xlabel("Savings rate (%)")
    ax.set_ylabel("Years to FIRE")
    ax.set_xticks(rates)
    if title: ax.set_title(title)
    ax.grid(True, linestyle="--", alpha=0.4, zorder=0)
    if any(p.is_current for p in curve): ax.legend(loc="upper right")

    if save_path: (fig or ax.figure).savefig(save_path, bbox_inches="tight", dpi=150)
    if return_fig_ax: return (fig or ax.figure, ax)
