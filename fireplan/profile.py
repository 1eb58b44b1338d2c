"""
Input snapshots for FirePlan.

Purpose
-------
Defines the three immutable records every calculation consumes:

- FireProfile        : who the user is and what they assume about the future
- SpendingSnapshot   : monthly essentials / total spend / income
- InvestmentSnapshot : current balances of the two capital buckets

All monetary fields are integer cents. The models are frozen Pydantic models;
derived scenarios (impact calculators, savings-rate curve, solvers) build
modified copies with ``model_copy(update=...)`` and never mutate the caller's
snapshot.

Example
-------
>>> from datetime import date
>>> profile = FireProfile(
...     date_of_birth=date(1995, 1, 1),
...     target_retirement_age=45,
...     super_contribution_rate=11.5,
...     expected_return_rate=7.0,
... )
>>> spending = SpendingSnapshot(
...     monthly_essentials_cents=300_000,
...     monthly_total_spend_cents=500_000,
...     monthly_income_cents=1_000_000,
...     savings_rate_percent=50,
... )
>>> spending.discretionary_cents
200000
"""

from __future__ import annotations

import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "FireVariant",
    "FireProfile",
    "TopCategory",
    "SpendingSnapshot",
    "InvestmentSnapshot",
]

FireVariant = Literal["lean", "regular", "fat", "coast"]


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------

class FireProfile(BaseModel):
    """
    FIRE profile of a single person.

    Attributes
    ----------
    date_of_birth : datetime.date
        Used to compute the current calendar age.
    target_retirement_age : int, optional
        Desired retirement age. None means "as soon as possible".
    super_balance_cents : int
        Balance of the mandatory-contribution (super) bucket as recorded on
        the profile. Projections use ``InvestmentSnapshot.super_balance_cents``.
    super_contribution_rate : float
        Mandatory contribution rate as a percentage of income (e.g. 11.5).
    expected_return_rate : float
        Annual return (%) of the super bucket.
    outside_super_return_rate : float, optional
        Annual return (%) of the outside bucket. None falls back to
        ``expected_return_rate``.
    income_growth_rate : float
        Annual income growth (%).
    spending_growth_rate : float
        Annual spending growth (%), i.e. inflation of the lifestyle.
    fire_variant : {"lean", "regular", "fat", "coast"}
        Active expense-basis variant.
    annual_expense_override_cents : int, optional
        Replaces the active variant's expense basis when > 0.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    date_of_birth: datetime.date = Field(
        description="Date of birth"
    )
    target_retirement_age: Optional[int] = Field(
        default=None,
        ge=1,
        le=120,
        description="Target retirement age (None = as soon as possible)"
    )
    super_balance_cents: int = Field(
        default=0,
        ge=0,
        description="Super bucket balance on the profile (cents)"
    )
    super_contribution_rate: float = Field(
        default=11.5,
        ge=0,
        le=100,
        description="Mandatory contribution rate (%)"
    )
    expected_return_rate: float = Field(
        default=7.0,
        gt=-100,
        le=100,
        description="Expected annual return of the super bucket (%)"
    )
    outside_super_return_rate: Optional[float] = Field(
        default=None,
        gt=-100,
        le=100,
        description="Expected annual return outside super (%)"
    )
    income_growth_rate: float = Field(
        default=0.0,
        ge=-50,
        le=100,
        description="Annual income growth (%)"
    )
    spending_growth_rate: float = Field(
        default=0.0,
        ge=-50,
        le=100,
        description="Annual spending growth (%)"
    )
    fire_variant: FireVariant = Field(
        default="regular",
        description="Active FIRE variant"
    )
    annual_expense_override_cents: Optional[int] = Field(
        default=None,
        description="Annual expense override for the active variant (cents)"
    )

    @field_validator("date_of_birth")
    @classmethod
    def validate_date_of_birth(cls, v):
        """Reject birth dates in the future."""
        if v > datetime.date.today():
            raise ValueError(f"date_of_birth ({v}) cannot be in the future")
        return v

    @property
    def outside_return_rate(self) -> float:
        """Outside-bucket return (%), falling back to the shared rate."""
        if self.outside_super_return_rate is None:
            return self.expected_return_rate
        return self.outside_super_return_rate


# ---------------------------------------------------------------------------
# Spending
# ---------------------------------------------------------------------------

class TopCategory(BaseModel):
    """A ranked spending category (monthly amount)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1, max_length=100)
    amount_cents: int = Field(ge=0)


class SpendingSnapshot(BaseModel):
    """
    Monthly spending and income snapshot.

    Produced by the data layer from classified transactions; essentials and
    discretionary spend come from the spending classifier.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    monthly_essentials_cents: int = Field(
        ge=0,
        description="Essential spend per month (cents)"
    )
    monthly_total_spend_cents: int = Field(
        ge=0,
        description="Total spend per month (cents)"
    )
    monthly_income_cents: int = Field(
        description="Income per month (cents)"
    )
    savings_rate_percent: float = Field(
        default=0.0,
        description="Savings rate (%), informational"
    )
    top_categories: List[TopCategory] = Field(
        default_factory=list,
        description="Top spending categories, largest first"
    )

    @property
    def discretionary_cents(self) -> int:
        """Monthly spend above essentials (what could be cut)."""
        return self.monthly_total_spend_cents - self.monthly_essentials_cents

    @property
    def monthly_surplus_cents(self) -> int:
        """Monthly income left after spending, floored at zero."""
        return max(0, self.monthly_income_cents - self.monthly_total_spend_cents)


# ---------------------------------------------------------------------------
# Investments
# ---------------------------------------------------------------------------

class InvestmentSnapshot(BaseModel):
    """Current balances of the outside and super buckets (cents)."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    outside_super_cents: int = Field(
        default=0,
        ge=0,
        description="Investments held outside super (cents)"
    )
    super_balance_cents: int = Field(
        default=0,
        ge=0,
        description="Super balance (cents)"
    )

    @property
    def total_cents(self) -> int:
        return self.outside_super_cents + self.super_balance_cents
