"""
Linear solvers and the LU factorization.

Built on trtrs, gels, getrf, getrs and getri. Every function copies its
inputs into fresh kernel buffers, so user arrays are never modified.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylapack.core.exceptions import SingularMatrixError
from pylapack.core.precision import PIVOT_DTYPE
from pylapack.core.status import check_status
from pylapack.lapack import binding_for
from pylapack.linalg._common import (
    allocate_workspace,
    as_matrix,
    as_rhs,
    check_rows,
    common_dtype,
    fortran_buffer,
    rhs_buffer,
)


@dataclass(frozen=True)
class LUResult:
    """
    Result of LU factorization with partial pivoting.

    Attributes:
        lu: Packed factors (m x n); L below the diagonal (unit diagonal
            implied), U on and above it
        pivots: One-based LAPACK pivot indices (length min(m, n))
        singular_index: One-based index of the first exactly zero U(i,i),
            or None if U is nonsingular
    """
    lu: NDArray[np.floating[Any]]
    pivots: NDArray[np.intc]
    singular_index: int | None

    @property
    def is_singular(self) -> bool:
        return self.singular_index is not None


@dataclass(frozen=True)
class LstsqResult:
    """
    Result of a least squares solve.

    Attributes:
        solution: Minimizer X (vector if B was a vector)
        residual_sum_of_squares: Per-column ||op(A) X - B||^2 for
            overdetermined systems, empty otherwise
    """
    solution: NDArray[np.floating[Any]]
    residual_sum_of_squares: NDArray[np.floating[Any]]


def _shape_like(x: NDArray[Any], vector: bool) -> NDArray[Any]:
    return x[:, 0].copy() if vector else x


def triangular_solve(
    A: ArrayLike,
    B: ArrayLike,
    lower: bool = False,
    transpose: bool = False,
    unit_diagonal: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A X = B (or A' X = B) for triangular A.

    Only the selected triangle of A is referenced.

    Args:
        A: Triangular matrix (n x n)
        B: Right-hand side (n,) or (n, k)
        lower: Use the lower triangle of A
        transpose: Solve with A' instead of A
        unit_diagonal: Assume ones on the diagonal of A

    Returns:
        Solution X, shaped like B

    Raises:
        SingularMatrixError: If a diagonal element of A is exactly zero
    """
    A = as_matrix(A, 'A', square=True)
    B = as_rhs(B, 'B')
    n = A.shape[0]
    check_rows(B, n, 'B')

    dtype = common_dtype(A, B)
    a = fortran_buffer(A, dtype)
    b = rhs_buffer(B, dtype)
    lapack = binding_for(dtype)

    info = lapack.trtrs(
        'L' if lower else 'U',
        'T' if transpose else 'N',
        'U' if unit_diagonal else 'N',
        n, b.shape[1], a, max(1, n), b, max(1, n),
    )
    check_status('trtrs', info)
    return _shape_like(b, B.ndim == 1)


def lstsq(
    A: ArrayLike,
    B: ArrayLike,
    transpose: bool = False,
) -> LstsqResult:
    """
    Least squares or minimum-norm solution of A X = B via QR/LQ.

    If A is m x n with full rank:
        m >= n: X minimizes ||A X - B||
        m <  n: X is the minimum-norm solution of A X = B
    With transpose=True the same applies to A'.

    Args:
        A: Coefficient matrix (m x n), must have full rank
        B: Right-hand side with m rows (n rows if transpose)
        transpose: Solve with A' instead of A

    Returns:
        LstsqResult with solution and residual sums of squares

    Raises:
        SingularMatrixError: If A is rank-deficient
    """
    A = as_matrix(A, 'A')
    B = as_rhs(B, 'B')
    m, n = A.shape
    rows, cols = (n, m) if transpose else (m, n)
    check_rows(B, rows, 'B')

    dtype = common_dtype(A, B)
    lapack = binding_for(dtype)
    a = fortran_buffer(A, dtype)
    rhs = B[:, np.newaxis] if B.ndim == 1 else B
    nrhs = rhs.shape[1]
    ldb = max(1, m, n)
    b = np.zeros((ldb, nrhs), dtype=dtype, order='F')
    b[:rows] = rhs

    trans = 'T' if transpose else 'N'
    work, lwork = allocate_workspace(
        lapack.gels, trans, m, n, nrhs, a, max(1, m), b, ldb
    )
    info = lapack.gels(trans, m, n, nrhs, a, max(1, m), b, ldb, work, lwork)
    check_status('gels', info)

    solution = b[:cols].copy()
    if rows > cols:
        rss = np.sum(b[cols:rows] ** 2, axis=0)
    else:
        rss = np.empty(0, dtype=dtype)
    return LstsqResult(
        solution=_shape_like(solution, B.ndim == 1),
        residual_sum_of_squares=rss,
    )


def lu_factor(A: ArrayLike) -> LUResult:
    """
    LU factorization A = P L U using LAPACK getrf.

    A singular U is still a valid factorization, so singularity is
    recorded in the result rather than raised.

    Args:
        A: Matrix to factor (m x n)

    Returns:
        LUResult with packed factors and one-based pivots
    """
    A = as_matrix(A, 'A')
    m, n = A.shape
    lu = fortran_buffer(A, A.dtype)
    ipiv = np.zeros(min(m, n), dtype=PIVOT_DTYPE)

    info = binding_for(lu.dtype).getrf(m, n, lu, max(1, m), ipiv)
    if info < 0:
        check_status('getrf', info)
    return LUResult(
        lu=lu,
        pivots=ipiv,
        singular_index=int(info) if info > 0 else None,
    )


def lu_solve(
    factor: LUResult,
    B: ArrayLike,
    transpose: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A X = B (or A' X = B) from the LU factorization of square A.

    Args:
        factor: Result of lu_factor on a square matrix
        B: Right-hand side (n,) or (n, k)
        transpose: Solve with A' instead of A

    Returns:
        Solution X, shaped like B

    Raises:
        SingularMatrixError: If the factorization is singular
    """
    lu = as_matrix(factor.lu, 'lu', square=True)
    if factor.singular_index is not None:
        raise SingularMatrixError(
            f"getrs: U({factor.singular_index},{factor.singular_index}) is exactly "
            f"zero, cannot solve with a singular factorization",
            routine='getrs',
            index=factor.singular_index,
        )
    B = as_rhs(B, 'B')
    n = lu.shape[0]
    check_rows(B, n, 'B')

    dtype = lu.dtype
    b = rhs_buffer(B, dtype)
    ipiv = np.ascontiguousarray(factor.pivots, dtype=PIVOT_DTYPE)
    info = binding_for(dtype).getrs(
        'T' if transpose else 'N', n, b.shape[1],
        fortran_buffer(lu, dtype), max(1, n), ipiv, b, max(1, n),
    )
    check_status('getrs', info)
    return _shape_like(b, B.ndim == 1)


def inverse(A: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Inverse of a square matrix via LU (getrf followed by getri).

    Args:
        A: Square matrix (n x n)

    Returns:
        inv(A)

    Raises:
        SingularMatrixError: If A is exactly singular
    """
    A = as_matrix(A, 'A', square=True)
    n = A.shape[0]
    lapack = binding_for(A.dtype)
    a = fortran_buffer(A, A.dtype)
    ipiv = np.zeros(n, dtype=PIVOT_DTYPE)
    lda = max(1, n)

    check_status('getrf', lapack.getrf(n, n, a, lda, ipiv))
    work, lwork = allocate_workspace(lapack.getri, n, a, lda, ipiv)
    check_status('getri', lapack.getri(n, a, lda, ipiv, work, lwork))
    return a
