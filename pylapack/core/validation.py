"""
Checks applied to user arrays before they become LAPACK buffers.

The caller layer (pylapack.linalg) runs these and raises; the binding layer
never does, it reports bad arguments through status codes. An array that
passes is real, finite, of a dtype one of the bindings is specialised to,
and small enough that every dimension fits a Fortran INTEGER.
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pylapack.core.exceptions import ValidationError, DimensionError
from pylapack.core.precision import DOUBLE, PIVOT_DTYPE, PRECISIONS

# Kernel dtypes; anything else real is promoted to double
_KERNEL_DTYPES = frozenset(np.dtype(p.dtype) for p in PRECISIONS)

# Largest dimension or leading dimension a LAPACK INTEGER argument can carry
LAPACK_INT_MAX = int(np.iinfo(PIVOT_DTYPE).max)


def check_array(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """
    Convert input to an array of a kernel dtype.

    float32 and float64 pass through unchanged, so the dtype picks the
    binding. Booleans, integers and other real floats are promoted to
    float64. Complex data is refused: only the real (s/d) routines are
    bound.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray of dtype float32 or float64

    Raises:
        ValidationError: If input is not real numeric data
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    kind = result.dtype
    if np.issubdtype(kind, np.complexfloating):
        raise ValidationError(
            f"{name}: complex dtype {kind}; only real LAPACK routines are bound"
        )
    if not (np.issubdtype(kind, np.number) or kind == np.bool_):
        raise ValidationError(
            f"{name}: dtype {kind} is not real numeric data"
        )

    if kind not in _KERNEL_DTYPES:
        result = result.astype(DOUBLE.dtype)
    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Refuse NaN and Inf, which LAPACK routines do not handle consistently.

    Raises:
        ValidationError: If array contains non-finite values
    """
    finite = np.isfinite(array)
    if not finite.all():
        n_nan = int(np.isnan(array).sum())
        n_inf = int(array.size - finite.sum()) - n_nan
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def _check_extent(array: NDArray[Any], name: str) -> None:
    if any(dim > LAPACK_INT_MAX for dim in array.shape):
        raise DimensionError(
            f"{name}: shape {array.shape} has a dimension above the "
            f"LAPACK integer limit {LAPACK_INT_MAX}"
        )


def check_matrix(
    array: NDArray[np.floating[Any]],
    name: str,
    square: bool = False,
) -> None:
    """
    Verify array can be passed as an m x n (or n x n) LAPACK matrix.

    Args:
        array: Array to check
        name: Parameter name for error messages
        square: Also require m == n

    Raises:
        DimensionError: If array is not 2D, not square when required, or
            too large for LAPACK integers
    """
    if array.ndim != 2:
        raise DimensionError(
            f"{name}: expected 2D matrix, got {array.ndim}D with shape {array.shape}"
        )
    if square and array.shape[0] != array.shape[1]:
        raise DimensionError(
            f"{name}: expected square matrix, got shape {array.shape}"
        )
    _check_extent(array, name)


def check_rhs(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array is a right-hand side: one vector, or one column per system.

    Raises:
        DimensionError: If array is neither 1D nor 2D, or too large for
            LAPACK integers
    """
    if array.ndim not in (1, 2):
        raise DimensionError(
            f"{name}: expected vector or matrix right-hand side, got "
            f"{array.ndim}D with shape {array.shape}"
        )
    _check_extent(array, name)
