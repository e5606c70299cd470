"""
QR decomposition.

Built on geqrf (factor), orgqr (form Q) and ormqr (apply Q). The packed
form from qr_factor() can be applied to other matrices with apply_q()
without ever materialising Q.
"""

from dataclasses import dataclass
from typing import Any, Literal

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylapack.core.exceptions import (
    DimensionError,
    SingularMatrixError,
    ValidationError,
)
from pylapack.core.precision import machine_epsilon
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
from pylapack.linalg.solve import triangular_solve


@dataclass(frozen=True)
class QRFactor:
    """
    Packed QR factorization as returned by geqrf.

    Attributes:
        qr: m x n; R on and above the diagonal, Householder vectors below
        tau: Householder scalars (length min(m, n))
    """
    qr: NDArray[np.floating[Any]]
    tau: NDArray[np.floating[Any]]

    @property
    def R(self) -> NDArray[np.floating[Any]]:
        """Upper triangular factor (min(m, n) x n)."""
        k = self.tau.shape[0]
        return np.triu(self.qr[:k, :])


@dataclass(frozen=True)
class QRResult:
    """
    Result of QR decomposition.

    Attributes:
        Q: Orthogonal matrix (m x k where k = min(m, n) for reduced mode)
        R: Upper triangular matrix (k x n)
        rank: Numerical rank determined from R diagonal
    """
    Q: NDArray[np.floating[Any]]
    R: NDArray[np.floating[Any]]
    rank: int


def _numerical_rank(R: NDArray[np.floating[Any]], shape: tuple[int, int]) -> int:
    diag_R = np.abs(np.diag(R))
    if len(diag_R) > 0 and diag_R.max() > 0:
        # Tolerance based on matrix size and machine epsilon
        tol = max(shape) * machine_epsilon(R.dtype) * diag_R.max()
        return int(np.sum(diag_R > tol))
    return 0


def qr_factor(A: ArrayLike) -> QRFactor:
    """
    Packed QR factorization A = Q R using LAPACK geqrf.

    Args:
        A: Matrix to decompose (m x n)

    Returns:
        QRFactor holding R and the Householder reflectors
    """
    A = as_matrix(A, 'A')
    m, n = A.shape
    lapack = binding_for(A.dtype)
    a = fortran_buffer(A, A.dtype)
    tau = np.zeros(min(m, n), dtype=A.dtype)
    lda = max(1, m)

    work, lwork = allocate_workspace(lapack.geqrf, m, n, a, lda, tau)
    check_status('geqrf', lapack.geqrf(m, n, a, lda, tau, work, lwork))
    return QRFactor(qr=a, tau=tau)


def qr(
    A: ArrayLike,
    mode: Literal['reduced', 'complete'] = 'reduced'
) -> QRResult:
    """
    QR decomposition using LAPACK geqrf + orgqr.

    Computes A = QR where Q is orthogonal and R is upper triangular.

    Args:
        A: Matrix to decompose (m x n)
        mode: 'reduced' for economy QR (Q is m x k, R is k x n where k = min(m,n))
              'complete' for full QR (Q is m x m, R is m x n)

    Returns:
        QRResult with Q, R, and numerical rank
    """
    if mode not in ('reduced', 'complete'):
        raise ValidationError(f"mode must be 'reduced' or 'complete', got {mode!r}")

    factor = qr_factor(A)
    packed = factor.qr
    m, n = packed.shape
    k = factor.tau.shape[0]
    q_cols = m if mode == 'complete' else k
    lapack = binding_for(packed.dtype)

    q = np.zeros((m, q_cols), dtype=packed.dtype, order='F')
    width = min(n, q_cols)
    q[:, :width] = packed[:, :width]
    lda = max(1, m)
    work, lwork = allocate_workspace(lapack.orgqr, m, q_cols, k, q, lda, factor.tau)
    check_status('orgqr', lapack.orgqr(m, q_cols, k, q, lda, factor.tau, work, lwork))

    r_rows = m if mode == 'complete' else k
    R = np.triu(packed[:r_rows, :])

    return QRResult(Q=q, R=R, rank=_numerical_rank(R, (m, n)))


def apply_q(
    factor: QRFactor,
    C: ArrayLike,
    side: Literal['left', 'right'] = 'left',
    transpose: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Multiply C by the orthogonal factor of a packed QR, via LAPACK ormqr.

    Computes Q C, Q' C (side='left') or C Q, C Q' (side='right') where Q
    is the full m x m orthogonal matrix.

    Args:
        factor: Result of qr_factor()
        C: Matrix (or vector for side='left') to multiply
        side: Which side Q multiplies from
        transpose: Use Q' instead of Q

    Returns:
        The product, shaped like C
    """
    if side not in ('left', 'right'):
        raise ValidationError(f"side must be 'left' or 'right', got {side!r}")
    C = as_rhs(C, 'C')
    nq = factor.qr.shape[0]
    if side == 'left':
        check_rows(C, nq, 'C')
    elif C.ndim != 2 or C.shape[1] != nq:
        raise DimensionError(f"C: expected {nq} columns for side='right', got shape {C.shape}")

    dtype = common_dtype(factor.qr, C)
    lapack = binding_for(dtype)
    c = rhs_buffer(C, dtype)
    m, n = c.shape
    k = factor.tau.shape[0]
    a = fortran_buffer(factor.qr[:, :k], dtype)
    tau = fortran_buffer(factor.tau, dtype)
    flag_side = 'L' if side == 'left' else 'R'
    flag_trans = 'T' if transpose else 'N'
    lda = max(1, nq)
    ldc = max(1, m)

    work, lwork = allocate_workspace(
        lapack.ormqr, flag_side, flag_trans, m, n, k, a, lda, tau, c, ldc
    )
    info = lapack.ormqr(flag_side, flag_trans, m, n, k, a, lda, tau, c, ldc, work, lwork)
    check_status('ormqr', info)
    return c[:, 0].copy() if C.ndim == 1 else c


def qr_solve(
    A: ArrayLike,
    y: ArrayLike,
    check_rank: bool
) -> NDArray[np.floating[Any]]:
    """
    Solve least squares via QR decomposition.

    Solves: min_β ||y - Aβ||² via the packed QR of A.

    The solution is computed as:
        A = QR
        β = R⁻¹ Q'y

    Args:
        A: Matrix (m x n), must have m >= n
        y: Response vector (m,) or matrix (m, k)
        check_rank: If True, raise SingularMatrixError on rank-deficient A

    Returns:
        Coefficients β, shaped (n,) or (n, k)

    Raises:
        SingularMatrixError: If A is rank-deficient and check_rank=True
    """
    factor = qr_factor(A)
    m, n = factor.qr.shape
    if m < n:
        raise DimensionError(f"A: qr_solve needs m >= n, got shape {(m, n)}")
    R = factor.R
    rank = _numerical_rank(R, (m, n))

    if check_rank and rank < n:
        raise SingularMatrixError(
            f"A is rank-deficient: rank={rank}, expected={n}.",
            routine='geqrf',
        )

    # Q'y without forming Q, then back substitution on R
    Qty = apply_q(factor, y, side='left', transpose=True)
    return triangular_solve(R[:n, :n], Qty[:n])
