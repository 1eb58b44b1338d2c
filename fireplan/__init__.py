"""
FirePlan — FIRE projection and gameplan engine

A deterministic tool for projecting when invested assets can fund living
expenses indefinitely, and for planning how to get there sooner.

Modules
-------
- profile         : Input snapshots (profile, spending, investments)
- config          : Assumptions, plan files and application settings
- calculations    : Expense basis, FIRE number, two-bucket split, coast number
- projection      : Year-by-year two-bucket projection engine
- simulation      : Variant orchestration (lean/regular/fat/coast)
- impact          : What-if calculators (extra income, spending cuts)
- optimization    : Bisection solvers for required changes
- gameplan        : Status, actions, milestones and sensitivity curves
- recommendations : Rule-based recommendations
- serialization   : JSON plan files and result export
- utils           : Shared utilities (rounding, dates, formatting)

"""

from .profile import FireProfile, SpendingSnapshot, InvestmentSnapshot, TopCategory
from .config import FireAssumptions, PlanConfig, AppSettings, DEFAULT_ASSUMPTIONS
from .simulation import FireResult, FireVariantResult, FireSimulator, simulate
from .impact import savings_impact, income_impact, income_milestones
from .optimization import find_required_extra_income, find_required_extra_savings
from .gameplan import Gameplan, generate_gameplan
from .recommendations import generate_recommendations
from .serialization import save_plan, load_plan, save_result
from . import utils

__version__ = "0.1.0"
