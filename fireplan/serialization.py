"""
Serialization module for FirePlan persistence.

Purpose
-------
Provides JSON serialization for FirePlan inputs and outputs, enabling plan
files that can be versioned and shared, and structured exports for
reporting layers.

Supports serialization of:
- PlanConfig (profile + spending + investments + assumptions)
- FireResult (variants, two-bucket split, chart projection)
- Gameplan (status, actions, milestones, curves, reference tables)

Design Principles
-----------------
- Type-safe: plan files are validated through Pydantic models
- Human-readable: indented JSON with ISO dates and integer cents
- Backward compatible: validates schema versions and warns on mismatch
- One-way for outputs: results are derived values, so only ``*_to_dict``
  and ``save_*`` exist for them

Example
-------
>>> from pathlib import Path
>>> from fireplan.serialization import save_plan, load_plan
>>>
>>> save_plan(plan, Path("plans/base.json"))
>>> loaded = load_plan(Path("plans/base.json"))
>>> loaded == plan
True
"""

from __future__ import annotations

import dataclasses
import datetime
import json
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, Union

import pydantic

from .config import PlanConfig
from .exceptions import ConfigurationError
from .gameplan import Gameplan
from .simulation import FireResult
from .types import FireResultDict, GameplanDict

__all__ = [
    "SCHEMA_VERSION",
    "plan_to_dict",
    "plan_from_dict",
    "save_plan",
    "load_plan",
    "result_to_dict",
    "gameplan_to_dict",
    "save_result",
]


# ---------------------------------------------------------------------------
# Schema Version
# ---------------------------------------------------------------------------

SCHEMA_VERSION = "0.1.0"


def _check_schema_version(data: Dict[str, Any], source: str) -> None:
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"{source} schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )


def _to_jsonable(value: Any) -> Any:
    """Recursively convert dataclass output into JSON-friendly values."""
    if isinstance(value, datetime.date):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(v) for v in value]
    return value


# ---------------------------------------------------------------------------
# Plan Serialization
# ---------------------------------------------------------------------------

def plan_to_dict(plan: PlanConfig) -> Dict[str, Any]:
    """
    Convert PlanConfig to a JSON-compatible dictionary.

    The current ``SCHEMA_VERSION`` is always written, whatever the plan
    was loaded with.
    """
    data = plan.model_dump(mode="json")
    data["schema_version"] = SCHEMA_VERSION
    return data


def plan_from_dict(data: Dict[str, Any], source: str = "Plan") -> PlanConfig:
    """
    Validate a dictionary into a PlanConfig.

    Raises
    ------
    ConfigurationError
        If the dictionary does not describe a valid plan.
    """
    _check_schema_version(data, source)
    try:
        return PlanConfig.model_validate(data)
    except pydantic.ValidationError as e:
        raise ConfigurationError(f"{source} is not a valid plan:\n{e}") from e


def save_plan(plan: PlanConfig, path: Path) -> None:
    """
    Save a plan to a JSON file.

    Parameters
    ----------
    plan : PlanConfig
        Plan to save
    path : Path
        Output file path (should have .json extension). Parent directories
        are created.

    Examples
    --------
    >>> save_plan(plan, Path("plans/base.json"))
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(plan_to_dict(plan), f, indent=2)


def load_plan(path: Path) -> PlanConfig:
    """
    Load a plan from a JSON file.

    Parameters
    ----------
    path : Path
        Input file path

    Returns
    -------
    PlanConfig
        Validated plan

    Raises
    ------
    ConfigurationError
        If the file is missing, is not JSON or fails validation.
    """
    path = Path(path)
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigurationError(f"Plan file not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Plan file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Plan file {path} must contain a JSON object.")

    return plan_from_dict(data, source=f"Plan file {path}")


# ---------------------------------------------------------------------------
# Result Serialization
# ---------------------------------------------------------------------------

def result_to_dict(result: FireResult, include_projection: bool = True) -> FireResultDict:
    """
    Convert a FireResult to a JSON-compatible dictionary.

    Parameters
    ----------
    result : FireResult
        Simulation result
    include_projection : bool
        Whether to include the year-by-year chart projection

    Returns
    -------
    FireResultDict
        Dates as ISO strings, money as integer cents.
    """
    data = _to_jsonable(dataclasses.asdict(result))
    if not include_projection:
        data["projection"] = []
    data["schema_version"] = SCHEMA_VERSION
    return data


def gameplan_to_dict(gameplan: Gameplan) -> GameplanDict:
    """Convert a Gameplan to a JSON-compatible dictionary."""
    data = _to_jsonable(dataclasses.asdict(gameplan))
    data["schema_version"] = SCHEMA_VERSION
    return data


def save_result(
    result: FireResult,
    path: Union[str, Path],
    gameplan: Optional[Gameplan] = None,
    include_projection: bool = True,
) -> None:
    """
    Save a simulation result (and optionally its gameplan) to JSON.

    Examples
    --------
    >>> save_result(result, Path("results/base.json"), gameplan=plan)
    """
    payload: Dict[str, Any] = {
        "schema_version": SCHEMA_VERSION,
        "result": result_to_dict(result, include_projection=include_projection),
    }
    if gameplan is not None:
        payload["gameplan"] = gameplan_to_dict(gameplan)

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(payload, f, indent=2)
