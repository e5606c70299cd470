"""
Precision-generic LAPACK binding.

One LapackBinding is built per Precision. Its kernel entry points are
resolved from scipy.linalg.lapack once, in the constructor, using the
precision's routine prefix; a call never looks at the dtype of its
arguments to decide what to run.

Every operation follows the LAPACK calling convention:
    - dimensions and leading dimensions are explicit arguments
    - buffers are caller-owned and mutated in place
    - pivot arrays are one-based
    - lwork == -1 is a workspace query: work[0] receives the optimal size
    - the status code ``info`` is returned, never raised

Argument checks mirror the ones LAPACK itself performs, in the same order,
and report the same negative index. Positive codes are relayed unchanged.
A buffer argument whose storage is not contiguous is reported the same
way, by its own negative index, once LAPACK's checks have passed.
"""

import numpy as np
import scipy.linalg.lapack as kernel_library
from numpy.typing import NDArray
from typing import Any

from pylapack.core.precision import Precision
from pylapack.core.routines import ROUTINE_ARGUMENTS, argument_index
from pylapack.lapack import _flags
from pylapack.lapack._buffers import (
    fortran_copy,
    is_contiguous,
    matrix_view,
    store,
    store_scalar,
    vector_view,
)

# Sentinel lwork value requesting a workspace-size query
WORKSPACE_QUERY = -1

# Negative tol asks pstrf for its default, n * eps * max(diag(A))
PSTRF_DEFAULT_TOL = -1.0

_KERNELS = (
    'trtrs', 'gels', 'syev', 'geev', 'gesdd', 'getrf', 'getrs', 'getri',
    'potrf', 'potri', 'potrs', 'pstrf', 'geqrf', 'orgqr', 'ormqr',
    'gels_lwork', 'syev_lwork', 'geev_lwork', 'gesdd_lwork', 'getri_lwork',
)

Buffer = NDArray[Any]


def _illegal(routine: str, name: str) -> int:
    return -argument_index(routine, name)


def _discontiguous(routine: str, **buffers: Buffer) -> int:
    """Status for the first buffer, in argument order, that is not contiguous; else 0."""
    for name in ROUTINE_ARGUMENTS[routine]:
        if name in buffers and not is_contiguous(buffers[name]):
            return _illegal(routine, name)
    return 0


class LapackBinding:
    """
    LAPACK operations specialised to one floating-point precision.

    Attributes:
        precision: The Precision this binding is specialised to
        dtype: NumPy scalar type of its matrix buffers

    Instances are stateless apart from the resolved kernel table and may be
    shared freely between threads; concurrent calls must use disjoint
    buffers.
    """

    def __init__(self, precision: Precision):
        self.precision = precision
        self.dtype = precision.dtype
        self._kernels = {
            name: getattr(kernel_library, precision.prefix + name)
            for name in _KERNELS
        }

    def __repr__(self) -> str:
        return f"LapackBinding({self.precision.name})"

    def _copy(self, view: Buffer) -> Buffer:
        return fortran_copy(view, self.dtype)

    # ------------------------------------------------------------------
    # Triangular and least-squares solves
    # ------------------------------------------------------------------

    def trtrs(self, uplo: str, trans: str, diag: str, n: int, nrhs: int,
              a: Buffer, lda: int, b: Buffer, ldb: int) -> int:
        """Solve A*X = B or A**T*X = B for triangular A; B is overwritten by X."""
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        trans_flag = _flags.parse(trans, _flags.TRANS)
        diag_flag = _flags.parse(diag, _flags.DIAG)
        if uplo_flag is None:
            return _illegal('trtrs', 'uplo')
        if trans_flag is None:
            return _illegal('trtrs', 'trans')
        if diag_flag is None:
            return _illegal('trtrs', 'diag')
        if n < 0:
            return _illegal('trtrs', 'n')
        if nrhs < 0:
            return _illegal('trtrs', 'nrhs')
        if lda < max(1, n):
            return _illegal('trtrs', 'lda')
        if ldb < max(1, n):
            return _illegal('trtrs', 'ldb')
        status = _discontiguous('trtrs', a=a, b=b)
        if status:
            return status
        if n == 0 or nrhs == 0:
            return 0

        b_view = matrix_view(b, n, nrhs, ldb)
        x, info = self._kernels['trtrs'](
            self._copy(matrix_view(a, n, n, lda)),
            self._copy(b_view),
            lower=int(uplo_flag == 'L'),
            trans=_flags.TRANS_CODES[trans_flag],
            unitdiag=int(diag_flag == 'U'),
            overwrite_b=1,
        )
        if info == 0:
            store(b_view, x)
        return int(info)

    def gels(self, trans: str, m: int, n: int, nrhs: int, a: Buffer, lda: int,
             b: Buffer, ldb: int, work: Buffer, lwork: int) -> int:
        """
        Least squares or minimum-norm solution of op(A)*X = B via QR/LQ.

        On exit A holds its QR (m >= n) or LQ factorization and the leading
        rows of B hold the solution; for overdetermined systems the
        remaining rows of each column hold the residual components.
        """
        trans_flag = _flags.parse(trans, _flags.TRANS_REAL)
        mn = min(m, n)
        query = lwork == WORKSPACE_QUERY
        if trans_flag is None:
            return _illegal('gels', 'trans')
        if m < 0:
            return _illegal('gels', 'm')
        if n < 0:
            return _illegal('gels', 'n')
        if nrhs < 0:
            return _illegal('gels', 'nrhs')
        if lda < max(1, m):
            return _illegal('gels', 'lda')
        if ldb < max(1, m, n):
            return _illegal('gels', 'ldb')
        if lwork < max(1, mn + max(mn, nrhs)) and not query:
            return _illegal('gels', 'lwork')
        status = _discontiguous('gels', a=a, b=b, work=work)
        if status:
            return status

        if query and mn == 0:
            store_scalar(work, float(max(1, mn + max(mn, nrhs))))
            return 0
        if query:
            optimal, info = self._kernels['gels_lwork'](m, n, nrhs, trans=trans_flag)
            store_scalar(work, max(1.0, float(optimal)))
            return int(info)

        if min(m, n, nrhs) == 0:
            matrix_view(b, max(m, n), nrhs, ldb)[...] = 0
            return 0

        a_view = matrix_view(a, m, n, lda)
        b_view = matrix_view(b, max(m, n), nrhs, ldb)
        lqr, x, info = self._kernels['gels'](
            self._copy(a_view),
            self._copy(b_view),
            trans=trans_flag,
            lwork=lwork,
            overwrite_a=1,
            overwrite_b=1,
        )
        store(a_view, lqr)
        if info == 0:
            store(b_view, x)
        return int(info)

    # ------------------------------------------------------------------
    # Eigenvalue and singular value decompositions
    # ------------------------------------------------------------------

    def syev(self, jobz: str, uplo: str, n: int, a: Buffer, lda: int,
             w: Buffer, work: Buffer, lwork: int) -> int:
        """
        Eigenvalues (ascending, into w) and optionally eigenvectors of symmetric A.

        With jobz 'V' the orthonormal eigenvectors overwrite the columns of A.
        """
        jobz_flag = _flags.parse(jobz, _flags.JOB_VECTORS)
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        query = lwork == WORKSPACE_QUERY
        if jobz_flag is None:
            return _illegal('syev', 'jobz')
        if uplo_flag is None:
            return _illegal('syev', 'uplo')
        if n < 0:
            return _illegal('syev', 'n')
        if lda < max(1, n):
            return _illegal('syev', 'lda')
        if lwork < max(1, 3 * n - 1) and not query:
            return _illegal('syev', 'lwork')
        status = _discontiguous('syev', a=a, w=w, work=work)
        if status:
            return status

        lower = int(uplo_flag == 'L')
        if query and n == 0:
            store_scalar(work, 1.0)
            return 0
        if query:
            optimal, info = self._kernels['syev_lwork'](n, lower=lower)
            store_scalar(work, max(1.0, float(optimal)))
            return int(info)
        if n == 0:
            return 0

        compute_v = int(jobz_flag == 'V')
        a_view = matrix_view(a, n, n, lda)
        eigenvalues, vectors, info = self._kernels['syev'](
            self._copy(a_view),
            compute_v=compute_v,
            lower=lower,
            lwork=lwork,
            overwrite_a=1,
        )
        if info == 0:
            store(vector_view(w, n), eigenvalues)
            if compute_v:
                store(a_view, vectors)
        return int(info)

    def geev(self, jobvl: str, jobvr: str, n: int, a: Buffer, lda: int,
             wr: Buffer, wi: Buffer, vl: Buffer, ldvl: int, vr: Buffer, ldvr: int,
             work: Buffer, lwork: int) -> int:
        """
        Eigenvalues and optionally left/right eigenvectors of general A.

        Real and imaginary parts go to wr and wi; complex conjugate pairs
        appear consecutively with the positive imaginary part first, and
        their eigenvectors are packed as (real, imaginary) column pairs.
        """
        jobvl_flag = _flags.parse(jobvl, _flags.JOB_VECTORS)
        jobvr_flag = _flags.parse(jobvr, _flags.JOB_VECTORS)
        query = lwork == WORKSPACE_QUERY
        if jobvl_flag is None:
            return _illegal('geev', 'jobvl')
        if jobvr_flag is None:
            return _illegal('geev', 'jobvr')
        want_vl = jobvl_flag == 'V'
        want_vr = jobvr_flag == 'V'
        if n < 0:
            return _illegal('geev', 'n')
        if lda < max(1, n):
            return _illegal('geev', 'lda')
        if ldvl < 1 or (want_vl and ldvl < n):
            return _illegal('geev', 'ldvl')
        if ldvr < 1 or (want_vr and ldvr < n):
            return _illegal('geev', 'ldvr')
        if n == 0:
            minimum = 1
        else:
            minimum = 4 * n if (want_vl or want_vr) else 3 * n
        if lwork < minimum and not query:
            return _illegal('geev', 'lwork')
        status = _discontiguous('geev', a=a, wr=wr, wi=wi, vl=vl, vr=vr, work=work)
        if status:
            return status

        if query and n == 0:
            store_scalar(work, 1.0)
            return 0
        if query:
            optimal, info = self._kernels['geev_lwork'](
                n, compute_vl=int(want_vl), compute_vr=int(want_vr)
            )
            store_scalar(work, max(1.0, float(optimal)))
            return int(info)
        if n == 0:
            return 0

        real, imag, left, right, info = self._kernels['geev'](
            self._copy(matrix_view(a, n, n, lda)),
            compute_vl=int(want_vl),
            compute_vr=int(want_vr),
            lwork=lwork,
            overwrite_a=1,
        )
        store(vector_view(wr, n), real)
        store(vector_view(wi, n), imag)
        if info == 0:
            if want_vl:
                store(matrix_view(vl, n, n, ldvl), left)
            if want_vr:
                store(matrix_view(vr, n, n, ldvr), right)
        return int(info)

    def gesdd(self, jobz: str, m: int, n: int, a: Buffer, lda: int, s: Buffer,
              u: Buffer, ldu: int, vt: Buffer, ldvt: int, work: Buffer, lwork: int,
              iwork: Buffer) -> int:
        """
        Singular value decomposition A = U * diag(s) * V**T by divide and conquer.

        jobz selects what is computed:
            'A': all m columns of U and all n rows of V**T
            'S': the leading min(m, n) columns of U and rows of V**T
            'O': as 'S', with U (m >= n) or V**T (m < n) overwriting A
            'N': singular values only

        The kernel wrapper allocates its own scratch, so only work[0]
        (in query mode) is written and iwork is never touched.
        """
        jobz_flag = _flags.parse(jobz, _flags.JOB_SVD)
        mn = min(m, n)
        mx = max(m, n)
        query = lwork == WORKSPACE_QUERY
        if jobz_flag is None:
            return _illegal('gesdd', 'jobz')
        if m < 0:
            return _illegal('gesdd', 'm')
        if n < 0:
            return _illegal('gesdd', 'n')
        if lda < max(1, m):
            return _illegal('gesdd', 'lda')
        all_or_some = jobz_flag in ('A', 'S')
        overwrite = jobz_flag == 'O'
        if ldu < 1 or (all_or_some and ldu < m) or (overwrite and m < n and ldu < m):
            return _illegal('gesdd', 'ldu')
        if (ldvt < 1 or (jobz_flag == 'A' and ldvt < n)
                or (jobz_flag == 'S' and ldvt < mn)
                or (overwrite and m >= n and ldvt < n)):
            return _illegal('gesdd', 'ldvt')
        minimum = _gesdd_min_lwork(jobz_flag, mn, mx)
        if lwork < minimum and not query:
            return _illegal('gesdd', 'lwork')
        status = _discontiguous('gesdd', a=a, s=s, u=u, vt=vt, work=work, iwork=iwork)
        if status:
            return status

        compute_uv = int(jobz_flag != 'N')
        full_matrices = int(jobz_flag == 'A')
        if query and mn == 0:
            store_scalar(work, float(minimum))
            return 0
        if query:
            optimal, info = self._kernels['gesdd_lwork'](
                m, n, compute_uv=compute_uv, full_matrices=full_matrices
            )
            store_scalar(work, max(float(minimum), float(optimal)))
            return int(info)
        if mn == 0:
            return 0

        a_view = matrix_view(a, m, n, lda)
        left, values, right, info = self._kernels['gesdd'](
            self._copy(a_view),
            compute_uv=compute_uv,
            full_matrices=full_matrices,
            overwrite_a=1,
        )
        if info != 0:
            return int(info)
        store(vector_view(s, mn), values)
        if jobz_flag == 'A':
            store(matrix_view(u, m, m, ldu), left)
            store(matrix_view(vt, n, n, ldvt), right)
        elif jobz_flag == 'S':
            store(matrix_view(u, m, mn, ldu), left)
            store(matrix_view(vt, mn, n, ldvt), right)
        elif jobz_flag == 'O':
            if m >= n:
                store(a_view, left)
                store(matrix_view(vt, n, n, ldvt), right)
            else:
                store(matrix_view(u, m, m, ldu), left)
                store(a_view, right)
        return 0

    # ------------------------------------------------------------------
    # LU factorization, solve and inverse
    # ------------------------------------------------------------------

    def getrf(self, m: int, n: int, a: Buffer, lda: int, ipiv: Buffer) -> int:
        """
        LU factorization with partial pivoting, A = P * L * U.

        L (unit diagonal, not stored) and U overwrite A; ipiv[i] is the
        one-based row interchanged with row i + 1. A positive info i means
        U(i,i) is exactly zero: the factorization is complete but U is
        singular.
        """
        if m < 0:
            return _illegal('getrf', 'm')
        if n < 0:
            return _illegal('getrf', 'n')
        if lda < max(1, m):
            return _illegal('getrf', 'lda')
        status = _discontiguous('getrf', a=a, ipiv=ipiv)
        if status:
            return status
        if m == 0 or n == 0:
            return 0

        a_view = matrix_view(a, m, n, lda)
        lu, piv, info = self._kernels['getrf'](self._copy(a_view), overwrite_a=1)
        store(a_view, lu)
        # f2py hands back zero-based pivots
        store(vector_view(ipiv, min(m, n)), np.asarray(piv) + 1)
        return int(info)

    def getrs(self, trans: str, n: int, nrhs: int, a: Buffer, lda: int,
              ipiv: Buffer, b: Buffer, ldb: int) -> int:
        """Solve op(A)*X = B from the getrf factors of A; B is overwritten by X."""
        trans_flag = _flags.parse(trans, _flags.TRANS)
        if trans_flag is None:
            return _illegal('getrs', 'trans')
        if n < 0:
            return _illegal('getrs', 'n')
        if nrhs < 0:
            return _illegal('getrs', 'nrhs')
        if lda < max(1, n):
            return _illegal('getrs', 'lda')
        if ldb < max(1, n):
            return _illegal('getrs', 'ldb')
        status = _discontiguous('getrs', a=a, ipiv=ipiv, b=b)
        if status:
            return status
        if n == 0 or nrhs == 0:
            return 0

        b_view = matrix_view(b, n, nrhs, ldb)
        x, info = self._kernels['getrs'](
            self._copy(matrix_view(a, n, n, lda)),
            _zero_based(ipiv, n),
            self._copy(b_view),
            trans=_flags.TRANS_CODES[trans_flag],
            overwrite_b=1,
        )
        if info == 0:
            store(b_view, x)
        return int(info)

    def getri(self, n: int, a: Buffer, lda: int, ipiv: Buffer, work: Buffer,
              lwork: int) -> int:
        """Inverse of A from its getrf factors; A is overwritten by inv(A)."""
        query = lwork == WORKSPACE_QUERY
        if n < 0:
            return _illegal('getri', 'n')
        if lda < max(1, n):
            return _illegal('getri', 'lda')
        if lwork < max(1, n) and not query:
            return _illegal('getri', 'lwork')
        status = _discontiguous('getri', a=a, ipiv=ipiv, work=work)
        if status:
            return status

        if query and n == 0:
            store_scalar(work, 1.0)
            return 0
        if query:
            optimal, info = self._kernels['getri_lwork'](n)
            store_scalar(work, max(1.0, float(optimal)))
            return int(info)
        if n == 0:
            return 0

        a_view = matrix_view(a, n, n, lda)
        inverse, info = self._kernels['getri'](
            self._copy(a_view),
            _zero_based(ipiv, n),
            lwork=lwork,
            overwrite_lu=1,
        )
        if info == 0:
            store(a_view, inverse)
        return int(info)

    # ------------------------------------------------------------------
    # Symmetric positive definite matrices
    # ------------------------------------------------------------------

    def potrf(self, uplo: str, n: int, a: Buffer, lda: int) -> int:
        """
        Cholesky factorization A = U**T*U ('U') or A = L*L**T ('L').

        Only the uplo triangle of A is referenced and overwritten; the
        opposite triangle is left untouched.
        """
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        if uplo_flag is None:
            return _illegal('potrf', 'uplo')
        if n < 0:
            return _illegal('potrf', 'n')
        if lda < max(1, n):
            return _illegal('potrf', 'lda')
        status = _discontiguous('potrf', a=a)
        if status:
            return status
        if n == 0:
            return 0

        a_view = matrix_view(a, n, n, lda)
        factor, info = self._kernels['potrf'](
            self._copy(a_view), lower=int(uplo_flag == 'L'), clean=0, overwrite_a=1
        )
        store(a_view, factor)
        return int(info)

    def potri(self, uplo: str, n: int, a: Buffer, lda: int) -> int:
        """Inverse of A from its potrf factor; the uplo triangle of inv(A) overwrites A."""
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        if uplo_flag is None:
            return _illegal('potri', 'uplo')
        if n < 0:
            return _illegal('potri', 'n')
        if lda < max(1, n):
            return _illegal('potri', 'lda')
        status = _discontiguous('potri', a=a)
        if status:
            return status
        if n == 0:
            return 0

        a_view = matrix_view(a, n, n, lda)
        inverse, info = self._kernels['potri'](
            self._copy(a_view), lower=int(uplo_flag == 'L'), overwrite_c=1
        )
        if info == 0:
            store(a_view, inverse)
        return int(info)

    def potrs(self, uplo: str, n: int, nrhs: int, a: Buffer, lda: int,
              b: Buffer, ldb: int) -> int:
        """Solve A*X = B from the potrf factor of A; B is overwritten by X."""
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        if uplo_flag is None:
            return _illegal('potrs', 'uplo')
        if n < 0:
            return _illegal('potrs', 'n')
        if nrhs < 0:
            return _illegal('potrs', 'nrhs')
        if lda < max(1, n):
            return _illegal('potrs', 'lda')
        if ldb < max(1, n):
            return _illegal('potrs', 'ldb')
        status = _discontiguous('potrs', a=a, b=b)
        if status:
            return status
        if n == 0 or nrhs == 0:
            return 0

        b_view = matrix_view(b, n, nrhs, ldb)
        x, info = self._kernels['potrs'](
            self._copy(matrix_view(a, n, n, lda)),
            self._copy(b_view),
            lower=int(uplo_flag == 'L'),
            overwrite_b=1,
        )
        if info == 0:
            store(b_view, x)
        return int(info)

    def pstrf(self, uplo: str, n: int, a: Buffer, lda: int, piv: Buffer,
              rank: Buffer, tol: float, work: Buffer) -> int:
        """
        Cholesky factorization with complete pivoting of a semi-definite A.

        Computes P**T*A*P = U**T*U or L*L**T. The factor overwrites the uplo
        triangle of A, piv receives the one-based permutation and rank[0]
        the number of pivots accepted before the remaining diagonal fell
        below tol (a negative tol selects n * eps * max(diag(A))).

        Rank deficiency is a result, not a failure: it is reported only
        through rank[0] and info stays 0.
        """
        uplo_flag = _flags.parse(uplo, _flags.UPLO)
        if uplo_flag is None:
            return _illegal('pstrf', 'uplo')
        if n < 0:
            return _illegal('pstrf', 'n')
        if lda < max(1, n):
            return _illegal('pstrf', 'lda')
        status = _discontiguous('pstrf', a=a, piv=piv, rank=rank, work=work)
        if status:
            return status
        if n == 0:
            return 0

        a_view = matrix_view(a, n, n, lda)
        factor, permutation, computed_rank, info = self._kernels['pstrf'](
            self._copy(a_view),
            tol=self.dtype(tol),
            lower=int(uplo_flag == 'L'),
            overwrite_a=1,
        )
        if info < 0:
            return int(info)
        store(a_view, factor)
        store(vector_view(piv, n), permutation)
        store_scalar(rank, int(computed_rank))
        return 0

    # ------------------------------------------------------------------
    # QR factorization and its orthogonal factor
    # ------------------------------------------------------------------

    def geqrf(self, m: int, n: int, a: Buffer, lda: int, tau: Buffer,
              work: Buffer, lwork: int) -> int:
        """
        QR factorization A = Q * R.

        R overwrites the upper triangle of A; the Householder vectors
        defining Q are stored below the diagonal with their scalars in
        tau[:min(m, n)].
        """
        query = lwork == WORKSPACE_QUERY
        if m < 0:
            return _illegal('geqrf', 'm')
        if n < 0:
            return _illegal('geqrf', 'n')
        if lda < max(1, m):
            return _illegal('geqrf', 'lda')
        if lwork < max(1, n) and not query:
            return _illegal('geqrf', 'lwork')
        status = _discontiguous('geqrf', a=a, tau=tau, work=work)
        if status:
            return status
        k = min(m, n)
        if k == 0:
            if query:
                store_scalar(work, 1.0)
            return 0

        a_view = matrix_view(a, m, n, lda)
        factored, reflectors, kernel_work, info = self._kernels['geqrf'](
            self._copy(a_view), lwork=lwork, overwrite_a=1
        )
        if query:
            store_scalar(work, max(1.0, float(kernel_work[0])))
            return int(info)
        store(a_view, factored)
        store(vector_view(tau, k), reflectors)
        return int(info)

    def orgqr(self, m: int, n: int, k: int, a: Buffer, lda: int, tau: Buffer,
              work: Buffer, lwork: int) -> int:
        """
        Form the m x n matrix Q with orthonormal columns from k geqrf reflectors.

        Q overwrites A.
        """
        query = lwork == WORKSPACE_QUERY
        if m < 0:
            return _illegal('orgqr', 'm')
        if n < 0 or n > m:
            return _illegal('orgqr', 'n')
        if k < 0 or k > n:
            return _illegal('orgqr', 'k')
        if lda < max(1, m):
            return _illegal('orgqr', 'lda')
        if lwork < max(1, n) and not query:
            return _illegal('orgqr', 'lwork')
        status = _discontiguous('orgqr', a=a, tau=tau, work=work)
        if status:
            return status
        if n == 0:
            if query:
                store_scalar(work, 1.0)
            return 0

        a_view = matrix_view(a, m, n, lda)
        q, kernel_work, info = self._kernels['orgqr'](
            self._copy(a_view),
            self._copy(vector_view(tau, k)),
            lwork=lwork,
            overwrite_a=1,
        )
        if query:
            store_scalar(work, max(1.0, float(kernel_work[0])))
            return int(info)
        store(a_view, q)
        return int(info)

    def ormqr(self, side: str, trans: str, m: int, n: int, k: int, a: Buffer,
              lda: int, tau: Buffer, c: Buffer, ldc: int, work: Buffer,
              lwork: int) -> int:
        """
        Overwrite C with Q*C, Q**T*C, C*Q or C*Q**T without forming Q.

        Q is defined by k reflectors from geqrf stored in the columns of A.
        """
        side_flag = _flags.parse(side, _flags.SIDE)
        trans_flag = _flags.parse(trans, _flags.TRANS_REAL)
        query = lwork == WORKSPACE_QUERY
        left = side_flag == 'L'
        nq, nw = (m, max(1, n)) if left else (n, max(1, m))
        if side_flag is None:
            return _illegal('ormqr', 'side')
        if trans_flag is None:
            return _illegal('ormqr', 'trans')
        if m < 0:
            return _illegal('ormqr', 'm')
        if n < 0:
            return _illegal('ormqr', 'n')
        if k < 0 or k > nq:
            return _illegal('ormqr', 'k')
        if lda < max(1, nq):
            return _illegal('ormqr', 'lda')
        if ldc < max(1, m):
            return _illegal('ormqr', 'ldc')
        if lwork < nw and not query:
            return _illegal('ormqr', 'lwork')
        status = _discontiguous('ormqr', a=a, tau=tau, c=c, work=work)
        if status:
            return status
        if m == 0 or n == 0 or k == 0:
            if query:
                store_scalar(work, float(nw))
            return 0

        c_view = matrix_view(c, m, n, ldc)
        product, kernel_work, info = self._kernels['ormqr'](
            side_flag,
            trans_flag,
            self._copy(matrix_view(a, nq, k, lda)),
            self._copy(vector_view(tau, k)),
            self._copy(c_view),
            lwork,
            overwrite_c=1,
        )
        if query:
            store_scalar(work, max(float(nw), float(kernel_work[0])))
            return int(info)
        store(c_view, product)
        return int(info)


def _zero_based(ipiv: Buffer, n: int) -> NDArray[np.intc]:
    """Copy of one-based LAPACK pivots in the zero-based form f2py expects."""
    return np.asarray(vector_view(ipiv, n), dtype=np.intc) - 1


def _gesdd_min_lwork(jobz: str, mn: int, mx: int) -> int:
    """Documented minimum gesdd workspace for each jobz."""
    if jobz == 'N':
        minimum = 3 * mn + max(mx, 7 * mn)
    elif jobz == 'O':
        minimum = 3 * mn + max(mx, 5 * mn * mn + 4 * mn)
    elif jobz == 'S':
        minimum = 4 * mn * mn + 7 * mn
    else:
        minimum = 4 * mn * mn + 6 * mn + mx
    return max(1, minimum)
