"""
Eigenvalue and singular value decompositions.

Built on syev, geev and gesdd, each sized with a workspace query first.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pylapack.core.status import check_status
from pylapack.lapack import binding_for
from pylapack.linalg._common import allocate_workspace, as_matrix, fortran_buffer


@dataclass(frozen=True)
class SymEigResult:
    """
    Eigendecomposition of a symmetric matrix.

    Attributes:
        eigenvalues: Ascending eigenvalues (n,)
        eigenvectors: Orthonormal eigenvectors as columns (n x n), or None
    """
    eigenvalues: NDArray[np.floating[Any]]
    eigenvectors: NDArray[np.floating[Any]] | None


@dataclass(frozen=True)
class EigResult:
    """
    Eigendecomposition of a general real matrix.

    Attributes:
        eigenvalues: Complex eigenvalues (n,), conjugate pairs adjacent
        left: Left eigenvectors as columns, or None
        right: Right eigenvectors as columns, or None
    """
    eigenvalues: NDArray[np.complexfloating[Any, Any]]
    left: NDArray[np.complexfloating[Any, Any]] | None
    right: NDArray[np.complexfloating[Any, Any]] | None


@dataclass(frozen=True)
class SVDResult:
    """
    Singular value decomposition A = U diag(S) Vt.

    Attributes:
        U: Left singular vectors, or None when not computed
        S: Singular values in descending order (min(m, n),)
        Vt: Right singular vectors as rows, or None when not computed
    """
    U: NDArray[np.floating[Any]] | None
    S: NDArray[np.floating[Any]]
    Vt: NDArray[np.floating[Any]] | None


def _unpack_eigenvectors(
    imag: NDArray[np.floating[Any]],
    packed: NDArray[np.floating[Any]],
) -> NDArray[np.complexfloating[Any, Any]]:
    """
    Expand geev's real storage of eigenvectors into complex columns.

    For a conjugate pair (j, j+1) geev stores the real part in column j
    and the imaginary part in column j+1.
    """
    n = packed.shape[0]
    vectors = packed.astype(np.result_type(packed.dtype, np.complex64))
    j = 0
    while j < n:
        if imag[j] != 0 and j + 1 < n:
            vectors[:, j] = packed[:, j] + 1j * packed[:, j + 1]
            vectors[:, j + 1] = packed[:, j] - 1j * packed[:, j + 1]
            j += 2
        else:
            j += 1
    return vectors


def symeig(
    A: ArrayLike,
    eigenvectors: bool = True,
    lower: bool = False,
) -> SymEigResult:
    """
    Eigenvalues and eigenvectors of a symmetric matrix (LAPACK syev).

    Args:
        A: Symmetric matrix (n x n); only the selected triangle is referenced
        eigenvectors: Also compute eigenvectors
        lower: Reference the lower triangle instead of the upper

    Returns:
        SymEigResult with ascending eigenvalues

    Raises:
        ConvergenceError: If the tridiagonal QR iteration fails
    """
    A = as_matrix(A, 'A', square=True)
    n = A.shape[0]
    lapack = binding_for(A.dtype)
    a = fortran_buffer(A, A.dtype)
    w = np.zeros(n, dtype=A.dtype)
    jobz = 'V' if eigenvectors else 'N'
    uplo = 'L' if lower else 'U'
    lda = max(1, n)

    work, lwork = allocate_workspace(lapack.syev, jobz, uplo, n, a, lda, w)
    check_status('syev', lapack.syev(jobz, uplo, n, a, lda, w, work, lwork))
    return SymEigResult(eigenvalues=w, eigenvectors=a if eigenvectors else None)


def eig(
    A: ArrayLike,
    left: bool = False,
    right: bool = True,
) -> EigResult:
    """
    Eigenvalues and eigenvectors of a general real matrix (LAPACK geev).

    Args:
        A: Square matrix (n x n)
        left: Compute left eigenvectors (u' A = lambda u')
        right: Compute right eigenvectors (A v = lambda v)

    Returns:
        EigResult with complex eigenvalues and eigenvectors

    Raises:
        ConvergenceError: If the QR algorithm fails
    """
    A = as_matrix(A, 'A', square=True)
    n = A.shape[0]
    lapack = binding_for(A.dtype)
    a = fortran_buffer(A, A.dtype)
    wr = np.zeros(n, dtype=A.dtype)
    wi = np.zeros(n, dtype=A.dtype)
    ld = max(1, n)
    vl = np.zeros((ld, n), dtype=A.dtype, order='F')
    vr = np.zeros((ld, n), dtype=A.dtype, order='F')
    jobvl = 'V' if left else 'N'
    jobvr = 'V' if right else 'N'

    work, lwork = allocate_workspace(
        lapack.geev, jobvl, jobvr, n, a, ld, wr, wi, vl, ld, vr, ld
    )
    info = lapack.geev(jobvl, jobvr, n, a, ld, wr, wi, vl, ld, vr, ld, work, lwork)
    check_status('geev', info)

    return EigResult(
        eigenvalues=wr + 1j * wi,
        left=_unpack_eigenvectors(wi, vl[:n]) if left else None,
        right=_unpack_eigenvectors(wi, vr[:n]) if right else None,
    )


def svd(
    A: ArrayLike,
    full_matrices: bool = True,
    compute_uv: bool = True,
) -> SVDResult:
    """
    Singular value decomposition by divide and conquer (LAPACK gesdd).

    Args:
        A: Matrix to decompose (m x n)
        full_matrices: U is m x m and Vt is n x n; otherwise U is m x k
            and Vt is k x n with k = min(m, n)
        compute_uv: Compute singular vectors; if False only S is returned

    Returns:
        SVDResult with U, S, Vt

    Raises:
        ConvergenceError: If the divide-and-conquer iteration fails
    """
    A = as_matrix(A, 'A')
    m, n = A.shape
    k = min(m, n)
    lapack = binding_for(A.dtype)
    a = fortran_buffer(A, A.dtype)
    s = np.zeros(k, dtype=A.dtype)

    if not compute_uv:
        jobz, u_cols, vt_rows = 'N', 1, 1
    elif full_matrices:
        jobz, u_cols, vt_rows = 'A', m, n
    else:
        jobz, u_cols, vt_rows = 'S', k, k
    ldu = max(1, m)
    ldvt = max(1, vt_rows)
    u = np.zeros((ldu, u_cols), dtype=A.dtype, order='F')
    vt = np.zeros((ldvt, n), dtype=A.dtype, order='F')
    iwork = np.zeros(max(1, 8 * k), dtype=np.intc)
    lda = max(1, m)

    work, lwork = allocate_workspace(
        lapack.gesdd, jobz, m, n, a, lda, s, u, ldu, vt, ldvt, iwork=iwork
    )
    info = lapack.gesdd(jobz, m, n, a, lda, s, u, ldu, vt, ldvt, work, lwork, iwork)
    check_status('gesdd', info)

    if not compute_uv:
        return SVDResult(U=None, S=s, Vt=None)
    return SVDResult(U=u[:m], S=s, Vt=vt[:vt_rows])
