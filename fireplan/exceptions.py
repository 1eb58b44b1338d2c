"""
Custom exceptions for FirePlan.

Purpose
-------
Provides a unified exception hierarchy for the edges of FirePlan: loading
plan files, validating assumptions and snapshots. The calculation core never
raises for a missing answer (an unreachable FIRE age or an unsatisfiable
search); those are reported as ``None`` or zero-amount results.

Exception Hierarchy
-------------------
FirePlanError (base)
├── ConfigurationError - Invalid assumptions or plan files
└── ValidationError - Snapshot validation failures

Usage
-----
>>> from fireplan.exceptions import ConfigurationError
>>>
>>> try:
...     plan = load_plan(path)
... except FirePlanError as e:
...     print(f"FirePlan error: {e}")
"""


class FirePlanError(Exception):
    """
    Base exception for all FirePlan errors.

    All FirePlan-specific exceptions inherit from this class,
    enabling unified error handling when needed.
    """
    pass


class ConfigurationError(FirePlanError):
    """
    Invalid configuration or plan file.

    Raised when a plan file cannot be parsed or its contents do not
    validate, such as:
    - Malformed JSON
    - Missing profile / spending / investments sections
    - Assumptions that fail validation (e.g. withdrawal rate of 0)

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Plan file plan.json is missing the 'profile' section."
    ... )
    """
    pass


class ValidationError(FirePlanError):
    """
    Snapshot validation failures.

    Raised when caller-supplied values are out of range, such as
    a negative target age for a solver or a negative cents amount.

    Examples
    --------
    >>> raise ValidationError(f"target_age must be positive, got {target_age}.")
    """
    pass
