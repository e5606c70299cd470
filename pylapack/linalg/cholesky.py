"""
Cholesky-family operations for symmetric positive (semi-)definite matrices.

Built on potrf, potri, potrs and pstrf. Factors are returned with the
unreferenced triangle zeroed, so ``U.T @ U`` (or ``L @ L.T``) reproduces
the input directly.
"""

import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylapack.core.exceptions import RankDeficiencyWarning
from pylapack.core.precision import PIVOT_DTYPE
from pylapack.core.status import check_status
from pylapack.lapack import PSTRF_DEFAULT_TOL, binding_for
from pylapack.linalg._common import (
    as_matrix,
    as_rhs,
    check_rows,
    common_dtype,
    fortran_buffer,
    rhs_buffer,
)


@dataclass(frozen=True)
class PivotedCholeskyResult:
    """
    Result of Cholesky factorization with complete pivoting.

    For upper factors P' A P = U' U; for lower factors P' A P = L L'.

    Attributes:
        factor: Triangular factor (n x n); rows/columns beyond rank are zero
        pivots: One-based LAPACK pivot indices; column j of A P is
            column pivots[j] of A
        rank: Number of pivots accepted before the remaining diagonal
            fell below the tolerance
    """
    factor: NDArray[np.floating[Any]]
    pivots: NDArray[np.intc]
    rank: int

    @property
    def permutation(self) -> NDArray[np.intp]:
        """Zero-based permutation, so that A[np.ix_(p, p)] is factored."""
        return self.pivots.astype(np.intp) - 1


def _uplo(lower: bool) -> str:
    return 'L' if lower else 'U'


def _triangle(a: NDArray[Any], lower: bool) -> NDArray[Any]:
    return np.tril(a) if lower else np.triu(a)


def cholesky(A: ArrayLike, lower: bool = False) -> NDArray[np.floating[Any]]:
    """
    Cholesky factor of a symmetric positive definite matrix.

    Args:
        A: SPD matrix (n x n); only the selected triangle is referenced
        lower: Return L with A = L L' instead of U with A = U' U

    Returns:
        Triangular factor with the other triangle zeroed

    Raises:
        NotPositiveDefiniteError: If a leading minor is not positive definite
    """
    A = as_matrix(A, 'A', square=True)
    n = A.shape[0]
    a = fortran_buffer(A, A.dtype)
    info = binding_for(a.dtype).potrf(_uplo(lower), n, a, max(1, n))
    check_status('potrf', info)
    return _triangle(a, lower)


def cholesky_inverse(
    factor: ArrayLike,
    lower: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Inverse of an SPD matrix from its Cholesky factor.

    Args:
        factor: Triangular factor from cholesky()
        lower: Whether factor is lower triangular

    Returns:
        Full symmetric inv(A)

    Raises:
        SingularMatrixError: If the factor has a zero diagonal element
    """
    factor = as_matrix(factor, 'factor', square=True)
    n = factor.shape[0]
    a = fortran_buffer(factor, factor.dtype)
    info = binding_for(a.dtype).potri(_uplo(lower), n, a, max(1, n))
    check_status('potri', info)
    # potri fills only one triangle
    half = _triangle(a, lower)
    return half + half.T - np.diag(np.diag(half))


def cholesky_solve(
    factor: ArrayLike,
    B: ArrayLike,
    lower: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A X = B given the Cholesky factor of SPD A.

    Args:
        factor: Triangular factor from cholesky()
        B: Right-hand side (n,) or (n, k)
        lower: Whether factor is lower triangular

    Returns:
        Solution X, shaped like B
    """
    factor = as_matrix(factor, 'factor', square=True)
    B = as_rhs(B, 'B')
    n = factor.shape[0]
    check_rows(B, n, 'B')

    dtype = common_dtype(factor, B)
    b = rhs_buffer(B, dtype)
    info = binding_for(dtype).potrs(
        _uplo(lower), n, b.shape[1],
        fortran_buffer(factor, dtype), max(1, n), b, max(1, n),
    )
    check_status('potrs', info)
    return b[:, 0].copy() if B.ndim == 1 else b


def pivoted_cholesky(
    A: ArrayLike,
    lower: bool = False,
    tol: float | None = None,
    warn_rank: bool = False,
) -> PivotedCholeskyResult:
    """
    Cholesky factorization with complete pivoting (LAPACK pstrf).

    Works on positive semi-definite matrices; the numerical rank is part
    of the result rather than an error.

    Args:
        A: Symmetric positive semi-definite matrix (n x n)
        lower: Compute L instead of U
        tol: Pivot threshold; None uses n * eps * max(diag(A))
        warn_rank: Emit RankDeficiencyWarning when rank < n

    Returns:
        PivotedCholeskyResult with factor, pivots and rank
    """
    A = as_matrix(A, 'A', square=True)
    n = A.shape[0]
    a = fortran_buffer(A, A.dtype)
    piv = np.zeros(n, dtype=PIVOT_DTYPE)
    rank = np.zeros(1, dtype=PIVOT_DTYPE)
    work = np.empty(max(1, 2 * n), dtype=a.dtype)

    info = binding_for(a.dtype).pstrf(
        _uplo(lower), n, a, max(1, n), piv, rank,
        PSTRF_DEFAULT_TOL if tol is None else tol, work,
    )
    check_status('pstrf', info)

    computed_rank = int(rank[0]) if n else 0
    factor = _triangle(a, lower)
    # Trailing block holds the unfactored Schur complement
    factor[computed_rank:, computed_rank:] = 0
    if warn_rank and computed_rank < n:
        warnings.warn(
            f"pstrf: numerical rank {computed_rank} is below matrix order {n}",
            RankDeficiencyWarning,
            stacklevel=2,
        )
    return PivotedCholeskyResult(factor=factor, pivots=piv, rank=computed_rank)
