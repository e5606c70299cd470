"""
Shared buffer preparation for the caller layer.

Turns user arrays into the Fortran-ordered, correctly typed buffers the
bindings expect, and runs workspace queries.
"""

from typing import Any, Callable

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylapack.core.exceptions import DimensionError
from pylapack.core.status import check_status
from pylapack.core.validation import (
    check_array,
    check_finite,
    check_matrix,
    check_rhs,
)
from pylapack.lapack import WORKSPACE_QUERY


def as_matrix(
    array: ArrayLike,
    name: str,
    square: bool = False,
) -> NDArray[np.floating[Any]]:
    """Validated 2D float32/float64 array (not yet a kernel buffer)."""
    result = check_array(array, name)
    check_matrix(result, name, square=square)
    check_finite(result, name)
    return result


def as_rhs(array: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Validated right-hand side: a 1D vector or a 2D matrix."""
    result = check_array(array, name)
    check_rhs(result, name)
    check_finite(result, name)
    return result


def check_rows(rhs: NDArray[Any], rows: int, name: str) -> None:
    """Verify a right-hand side has ``rows`` rows."""
    if rhs.shape[0] != rows:
        raise DimensionError(
            f"{name}: expected {rows} rows, got {rhs.shape[0]} (shape {rhs.shape})"
        )


def common_dtype(*arrays: NDArray[Any]) -> np.dtype:
    """Floating dtype wide enough for every array."""
    return np.result_type(*(a.dtype for a in arrays))


def fortran_buffer(array: NDArray[Any], dtype: np.dtype) -> NDArray[Any]:
    """Fresh Fortran-ordered copy the kernel may overwrite."""
    return np.array(array, dtype=dtype, order='F')


def rhs_buffer(rhs: NDArray[Any], dtype: np.dtype) -> NDArray[Any]:
    """Fortran-ordered 2D copy of a right-hand side (vectors become one column)."""
    if rhs.ndim == 1:
        rhs = rhs[:, np.newaxis]
    return fortran_buffer(rhs, dtype)


def query_workspace(operation: Callable[..., int], *args: Any, **kwargs: Any) -> int:
    """
    Optimal workspace length for a binding operation.

    Calls ``operation`` in query mode with the given arguments (everything
    except ``work`` and ``lwork``) and returns the size it reports.

    Args:
        operation: Bound LapackBinding method that supports lwork == -1
        *args: Positional arguments preceding ``work``
        **kwargs: Arguments following ``lwork`` (e.g. ``iwork`` for gesdd)

    Returns:
        Workspace length, at least 1

    Raises:
        InvalidArgumentError: If the query itself rejects an argument
    """
    lapack = operation.__self__
    work = np.zeros(1, dtype=lapack.dtype)
    info = operation(*args, work=work, lwork=WORKSPACE_QUERY, **kwargs)
    check_status(operation.__name__, info)
    return max(1, int(work[0]))


def allocate_workspace(
    operation: Callable[..., int],
    *args: Any,
    **kwargs: Any,
) -> tuple[NDArray[np.floating[Any]], int]:
    """Query, then allocate, the workspace for ``operation``."""
    lwork = query_workspace(operation, *args, **kwargs)
    return np.empty(lwork, dtype=operation.__self__.dtype), lwork
