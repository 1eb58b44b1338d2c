"""
Configuration management module for FirePlan.

Purpose
-------
Centralized configuration using Pydantic models for type-safe parameter
management, validation, and serialization.

- FireAssumptions : every numeric rule of the FIRE engine (ages, withdrawal
                    rate, multipliers, horizons, search bounds) in one frozen
                    object injected into the simulator
- PlanConfig      : on-disk plan file (profile + spending + investments)
- AppSettings     : environment-driven application settings

Design Principles
-----------------
- Type-safe: Pydantic enforces types and validates ranges
- Immutable: Frozen models prevent accidental mutation
- Serializable: Easy conversion to/from JSON for plan files
- Environment-aware: Supports .env files for application settings

Example
-------
>>> from fireplan.config import FireAssumptions
>>> assumptions = FireAssumptions(preservation_age=58)
>>> assumptions.fire_multiplier
25
>>>
>>> # Serialize to dict/JSON
>>> data = assumptions.model_dump()
>>> loaded = FireAssumptions.model_validate(data)
"""

from __future__ import annotations
from typing import Literal, Optional, Tuple
from pathlib import Path

from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from . import constants
from .profile import FireProfile, InvestmentSnapshot, SpendingSnapshot
from .utils import round_half_up

__all__ = [
    "FireAssumptions",
    "WithdrawalRateConfig",
    "PlanConfig",
    "AppSettings",
    "DEFAULT_ASSUMPTIONS",
]


# ---------------------------------------------------------------------------
# FIRE Assumptions
# ---------------------------------------------------------------------------

class WithdrawalRateConfig(BaseModel):
    """One row of the withdrawal-rate comparison table."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    rate: float = Field(gt=0, lt=1, description="Annual withdrawal rate")
    label: str = Field(min_length=1, max_length=20)
    note: str = Field(default="", max_length=100)


def _default_withdrawal_rates() -> Tuple[WithdrawalRateConfig, ...]:
    return tuple(
        WithdrawalRateConfig(rate=rate, label=label, note=note)
        for rate, label, note in constants.WITHDRAWAL_RATES
    )


class FireAssumptions(BaseModel):
    """
    Numeric rules of the FIRE engine.

    Attributes
    ----------
    preservation_age : int
        Age at which the super bucket becomes accessible.
    pension_age : int
        Age pension eligibility; fallback target age for projections.
    safe_withdrawal_rate : float
        Sustainable annual withdrawal fraction (0.04 for the 4% rule).
    fat_multiplier : float
        Fat FIRE spending multiplier over total spend.
    default_contribution_rate : float
        Statutory contribution rate (%). Only compared against the profile
        for the salary-sacrifice recommendation, never substituted for it.
    max_projection_age : int
        Horizon of solver-facing projections.
    chart_max_age, chart_max_years : int
        Horizon of chart-resolution projections:
        ``min(chart_max_age, current_age + chart_max_years)``.
    max_extra_income_cents : int
        Upper bound of the extra-income search (per month).
    max_iterations : int
        Bisection iteration cap.
    tolerance_cents : int
        Bisection stops once the bracket is narrower than this.
    asap_lead_years : int
        ASAP gameplans aim this many years before the projected age.
    fallback_horizon_years : int
        Gameplan horizon when there is neither target nor projection.
    savings_rate_steps : tuple of int
        Savings rates (%) of the sensitivity curve.
    withdrawal_rates : tuple of WithdrawalRateConfig
        Rows of the withdrawal comparison table.
    coast_target_tracks_spending : bool
        Whether spending growth also inflates the target the coast variant
        discounts each year. Other variants always track spending.

    Examples
    --------
    >>> FireAssumptions().fire_multiplier
    25
    >>> FireAssumptions(safe_withdrawal_rate=0.05).fire_multiplier
    20
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    preservation_age: int = Field(
        default=constants.PRESERVATION_AGE,
        ge=40,
        le=80,
        description="Super preservation age"
    )
    pension_age: int = Field(
        default=constants.AGE_PENSION_AGE,
        ge=40,
        le=90,
        description="Age pension eligibility age"
    )
    safe_withdrawal_rate: float = Field(
        default=constants.SAFE_WITHDRAWAL_RATE,
        gt=0,
        lt=1,
        description="Safe withdrawal rate"
    )
    fat_multiplier: float = Field(
        default=constants.FAT_FIRE_MULTIPLIER,
        ge=1,
        le=5,
        description="Fat FIRE multiplier over total spend"
    )
    default_contribution_rate: float = Field(
        default=constants.DEFAULT_SG_RATE,
        ge=0,
        le=100,
        description="Statutory contribution rate (%)"
    )
    max_projection_age: int = Field(
        default=constants.MAX_PROJECTION_AGE,
        ge=60,
        le=130,
        description="Last simulated age for solver-facing runs"
    )
    chart_max_age: int = Field(
        default=constants.CHART_MAX_AGE,
        ge=40,
        le=130,
        description="Last simulated age for chart runs"
    )
    chart_max_years: int = Field(
        default=constants.CHART_MAX_YEARS,
        ge=1,
        le=100,
        description="Maximum span of chart runs (years)"
    )
    max_extra_income_cents: int = Field(
        default=constants.MAX_EXTRA_INCOME_CENTS,
        gt=0,
        description="Extra-income search ceiling (cents/month)"
    )
    max_iterations: int = Field(
        default=constants.DEFAULT_MAX_ITERS,
        ge=1,
        le=100,
        description="Bisection iteration cap"
    )
    tolerance_cents: int = Field(
        default=constants.DEFAULT_TOLERANCE_CENTS,
        ge=1,
        description="Bisection bracket tolerance (cents)"
    )
    asap_lead_years: int = Field(
        default=constants.ASAP_LEAD_YEARS,
        ge=0,
        le=30,
        description="ASAP gameplan lead (years)"
    )
    fallback_horizon_years: int = Field(
        default=constants.FALLBACK_HORIZON_YEARS,
        ge=1,
        le=60,
        description="Fallback gameplan horizon (years)"
    )
    savings_rate_steps: Tuple[int, ...] = Field(
        default=constants.SAVINGS_RATE_STEPS,
        description="Savings rates (%) of the sensitivity curve"
    )
    withdrawal_rates: Tuple[WithdrawalRateConfig, ...] = Field(
        default_factory=_default_withdrawal_rates,
        description="Withdrawal comparison rows"
    )
    coast_target_tracks_spending: bool = Field(
        default=True,
        description="Inflate the coast target with spending growth"
    )

    @field_validator("savings_rate_steps")
    @classmethod
    def validate_savings_rate_steps(cls, v):
        """Ensure rates are strictly increasing percentages in (0, 100)."""
        if not v:
            raise ValueError("savings_rate_steps cannot be empty")
        if any(r <= 0 or r >= 100 for r in v):
            raise ValueError(f"savings_rate_steps must lie in (0, 100), got {v}")
        if any(b <= a for a, b in zip(v, v[1:])):
            raise ValueError(f"savings_rate_steps must be strictly increasing, got {v}")
        return v

    @model_validator(mode="after")
    def validate_ages(self):
        """Ensure the age ladder is ordered."""
        if self.pension_age < self.preservation_age:
            raise ValueError(
                f"pension_age ({self.pension_age}) must be >= "
                f"preservation_age ({self.preservation_age})"
            )
        if self.max_projection_age < self.chart_max_age:
            raise ValueError(
                f"max_projection_age ({self.max_projection_age}) must be >= "
                f"chart_max_age ({self.chart_max_age})"
            )
        return self

    @property
    def fire_multiplier(self) -> int:
        """Whole years of expenses funded by the FIRE number (1 / withdrawal rate).

        Reported as the post-preservation span of the two-bucket breakdown;
        FIRE numbers themselves divide by the exact rate.
        """
        return round_half_up(1 / self.safe_withdrawal_rate)


DEFAULT_ASSUMPTIONS = FireAssumptions()


# ---------------------------------------------------------------------------
# Plan file
# ---------------------------------------------------------------------------

class PlanConfig(BaseModel):
    """
    Configuration for a complete FIRE plan file.

    A plan bundles the three input snapshots with optional assumption
    overrides so that a projection can be reproduced from disk.

    Examples
    --------
    >>> from datetime import date
    >>> plan = PlanConfig(
    ...     name="Base case",
    ...     profile=FireProfile(date_of_birth=date(1995, 1, 1)),
    ...     spending=SpendingSnapshot(
    ...         monthly_essentials_cents=300_000,
    ...         monthly_total_spend_cents=500_000,
    ...         monthly_income_cents=1_000_000,
    ...     ),
    ...     investments=InvestmentSnapshot(outside_super_cents=10_000_000),
    ... )
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    schema_version: str = Field(
        default="0.1.0",
        description="Plan file schema version"
    )
    name: str = Field(
        default="My plan",
        min_length=1,
        max_length=100,
        description="Plan name"
    )
    description: str = Field(
        default="",
        max_length=500,
        description="Plan description"
    )
    profile: FireProfile
    spending: SpendingSnapshot
    investments: InvestmentSnapshot = Field(default_factory=InvestmentSnapshot)
    assumptions: FireAssumptions = Field(default_factory=FireAssumptions)


# ---------------------------------------------------------------------------
# Application Settings (Environment Variables)
# ---------------------------------------------------------------------------

class AppSettings(BaseSettings):
    """
    Global application settings loaded from environment variables.

    Supports .env files for local development. Environment variables
    should be prefixed with FIREPLAN_ (e.g., FIREPLAN_LOG_LEVEL=DEBUG).

    Attributes
    ----------
    debug : bool
        Enable debug mode with verbose logging
    log_level : str
        Logging level: "DEBUG", "INFO", "WARNING", "ERROR"
    output_dir : Path
        Default directory for exported results and charts
    currency_symbol : str
        Symbol used in human-readable amounts

    Examples
    --------
    >>> settings = AppSettings()
    >>> settings.log_level
    'WARNING'
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREPLAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging level"
    )
    output_dir: Path = Field(
        default=Path("results"),
        description="Default output directory"
    )
    currency_symbol: str = Field(
        default="$",
        min_length=1,
        max_length=3,
        description="Currency symbol for display strings"
    )

    @property
    def effective_log_level(self) -> str:
        return "DEBUG" if self.debug else self.log_level
