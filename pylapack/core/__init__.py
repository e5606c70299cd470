"""
Core infrastructure for PyLapack.

This module provides shared abstractions used by both the binding layer
(pylapack.lapack) and the caller layer (pylapack.linalg).

Key components:
    exceptions: Exception hierarchy
    routines: LAPACK argument tables
    status: Status code interpretation
    validation: Input validators
    precision: Supported floating-point precisions
    tolerances: Tolerance tiers per precision
"""

from pylapack.core.exceptions import (
    PyLapackError,
    ValidationError,
    DimensionError,
    InvalidArgumentError,
    NumericalError,
    SingularMatrixError,
    NotPositiveDefiniteError,
    ConvergenceError,
    RankDeficiencyWarning,
)
from pylapack.core.precision import Precision, SINGLE, DOUBLE, PRECISIONS
from pylapack.core.status import check_status

__all__ = [
    # Exceptions
    "PyLapackError",
    "ValidationError",
    "DimensionError",
    "InvalidArgumentError",
    "NumericalError",
    "SingularMatrixError",
    "NotPositiveDefiniteError",
    "ConvergenceError",
    "RankDeficiencyWarning",
    # Precision
    "Precision",
    "SINGLE",
    "DOUBLE",
    "PRECISIONS",
    # Status
    "check_status",
]
