"""
Tests for column-major buffer handling.

Validates:
    - matrix_view / vector_view address raw storage the way LAPACK does
    - operations honour a leading dimension larger than the row count
    - padding rows between columns are never written
    - flat 1D buffers and 2D Fortran arrays are interchangeable
    - strided views are rejected by argument index and left untouched
"""

import numpy as np
import pytest

from pylapack.core.routines import argument_index
from pylapack.lapack._buffers import (
    flat,
    is_contiguous,
    matrix_view,
    store,
    vector_view,
)

SENTINEL = -999.0


def _padded(A, ld, dtype):
    """Column-major storage of A with leading dimension ld, padding set to SENTINEL."""
    m, n = A.shape
    storage = np.full(ld * n, SENTINEL, dtype=dtype)
    matrix_view(storage, m, n, ld)[...] = A
    return storage


def _padding(storage, m, n, ld):
    return np.array([storage[i + j * ld] for j in range(n) for i in range(m, ld)])


# ═══════════════════════════════════════════════════════════════════════
# View helpers
# ═══════════════════════════════════════════════════════════════════════


class TestViews:

    def test_matrix_view_is_column_major(self):
        storage = np.arange(6.0)
        view = matrix_view(storage, 2, 3, 2)
        np.testing.assert_array_equal(view, [[0.0, 2.0, 4.0], [1.0, 3.0, 5.0]])

    def test_matrix_view_skips_padding(self):
        storage = np.arange(9.0)
        view = matrix_view(storage, 2, 3, 3)
        np.testing.assert_array_equal(view, [[0.0, 3.0, 6.0], [1.0, 4.0, 7.0]])

    def test_matrix_view_writes_through(self):
        storage = np.zeros(4)
        matrix_view(storage, 2, 2, 2)[0, 1] = 5.0
        assert storage[2] == 5.0

    def test_fortran_array_storage(self):
        A = np.asfortranarray([[1.0, 2.0], [3.0, 4.0]])
        np.testing.assert_array_equal(matrix_view(A, 2, 2, 2), A)
        np.testing.assert_array_equal(flat(A), [1.0, 3.0, 2.0, 4.0])

    def test_vector_view_prefix(self):
        storage = np.arange(5.0)
        vector_view(storage, 3)[...] = -1.0
        np.testing.assert_array_equal(storage, [-1.0, -1.0, -1.0, 3.0, 4.0])

    def test_store_uses_fortran_order(self):
        storage = np.zeros(4)
        store(matrix_view(storage, 2, 2, 2), np.array([[1.0, 2.0], [3.0, 4.0]]))
        np.testing.assert_array_equal(storage, [1.0, 3.0, 2.0, 4.0])

    @pytest.mark.parametrize("buffer", [
        np.zeros(4),
        np.zeros((3, 2), order='F'),
        np.zeros((3, 2)),
        np.zeros((4, 2), order='F')[:, 1],
        np.zeros(0),
    ])
    def test_contiguous_buffers(self, buffer):
        assert is_contiguous(buffer)

    @pytest.mark.parametrize("buffer", [
        np.zeros((4, 2), order='F')[1:3],
        np.zeros(6)[::2],
        np.zeros((3, 3))[:, 0],
        [1.0, 2.0],
    ])
    def test_strided_and_non_arrays_rejected(self, buffer):
        assert not is_contiguous(buffer)


# ═══════════════════════════════════════════════════════════════════════
# Leading dimensions
# ═══════════════════════════════════════════════════════════════════════


class TestLeadingDimension:
    """A 4x4 problem stored with lda = 6 leaves rows 4 and 5 alone."""

    N = 4
    LD = 6

    def test_getrf_padded(self, lapack, dtype, general_matrix, tol):
        A = general_matrix(self.N, dtype=dtype)
        a = _padded(A, self.LD, dtype)
        ipiv = np.zeros(self.N, dtype=np.intc)

        assert lapack.getrf(self.N, self.N, a, self.LD, ipiv) == 0

        np.testing.assert_array_equal(_padding(a, self.N, self.N, self.LD), SENTINEL)
        reference = np.asfortranarray(A, dtype=dtype)
        assert lapack.getrf(self.N, self.N, reference, self.N, np.zeros(self.N, dtype=np.intc)) == 0
        np.testing.assert_allclose(
            matrix_view(a, self.N, self.N, self.LD), reference, atol=tol(self.N)
        )

    def test_potrf_padded(self, lapack, dtype, spd_matrix, tol):
        A = spd_matrix(self.N, dtype=dtype)
        a = _padded(A, self.LD, dtype)

        assert lapack.potrf('L', self.N, a, self.LD) == 0

        np.testing.assert_array_equal(_padding(a, self.N, self.N, self.LD), SENTINEL)
        L = np.tril(matrix_view(a, self.N, self.N, self.LD))
        np.testing.assert_allclose(L @ L.T, A, rtol=tol(self.N), atol=tol(self.N) * self.N)

    def test_getrs_padded_rhs(self, lapack, dtype, general_matrix, rng, tol):
        A = general_matrix(self.N, dtype=dtype)
        x_true = rng.standard_normal((self.N, 2)).astype(dtype)
        a = _padded(A, self.LD, dtype)
        b = _padded(A @ x_true, self.LD, dtype)
        ipiv = np.zeros(self.N, dtype=np.intc)

        assert lapack.getrf(self.N, self.N, a, self.LD, ipiv) == 0
        assert lapack.getrs('N', self.N, 2, a, self.LD, ipiv, b, self.LD) == 0

        np.testing.assert_array_equal(_padding(b, self.N, 2, self.LD), SENTINEL)
        np.testing.assert_allclose(
            matrix_view(b, self.N, 2, self.LD), x_true, atol=tol(self.N) * 10
        )

    def test_syev_padded(self, lapack, dtype, spd_matrix, tol):
        A = spd_matrix(self.N, dtype=dtype)
        a = _padded(A, self.LD, dtype)
        w = np.zeros(self.N, dtype=dtype)
        work = np.zeros(3 * self.N, dtype=dtype)

        assert lapack.syev('N', 'U', self.N, a, self.LD, w, work, 3 * self.N) == 0

        np.testing.assert_array_equal(_padding(a, self.N, self.N, self.LD), SENTINEL)
        expected = np.linalg.eigvalsh(A.astype(np.float64))
        np.testing.assert_allclose(w, expected, rtol=tol(self.N))

    def test_geqrf_padded(self, lapack, dtype, general_matrix, tol):
        A = general_matrix(5, 3, dtype=dtype)
        a = _padded(A, 7, dtype)
        tau = np.zeros(3, dtype=dtype)
        work = np.zeros(3, dtype=dtype)

        assert lapack.geqrf(5, 3, a, 7, tau, work, 3) == 0

        np.testing.assert_array_equal(_padding(a, 5, 3, 7), SENTINEL)
        R = np.triu(matrix_view(a, 3, 3, 7))
        np.testing.assert_allclose(
            R.T @ R, A.T @ A, rtol=tol(5), atol=tol(5) * 25
        )

    def test_gesdd_padded_outputs(self, lapack, dtype, general_matrix, tol):
        m, n, ld = 4, 3, 6
        A = general_matrix(m, n, dtype=dtype)
        a = _padded(A, ld, dtype)
        s = np.zeros(n, dtype=dtype)
        u = np.full(ld * n, SENTINEL, dtype=dtype)
        vt = np.full(ld * n, SENTINEL, dtype=dtype)
        work = np.zeros(200, dtype=dtype)
        iwork = np.zeros(8 * n, dtype=np.intc)

        assert lapack.gesdd('S', m, n, a, ld, s, u, ld, vt, ld, work, 200, iwork) == 0

        np.testing.assert_array_equal(_padding(u, m, n, ld), SENTINEL)
        np.testing.assert_array_equal(_padding(vt, n, n, ld), SENTINEL)
        U = matrix_view(u, m, n, ld)
        VT = matrix_view(vt, n, n, ld)
        np.testing.assert_allclose(U @ np.diag(s) @ VT, A, atol=tol(m) * 10)


# ═══════════════════════════════════════════════════════════════════════
# Buffer shapes
# ═══════════════════════════════════════════════════════════════════════


class TestBufferShapes:

    def test_flat_and_2d_buffers_agree(self, lapack, dtype, spd_matrix):
        A = spd_matrix(3, dtype=dtype)
        as_matrix = A.copy(order='F')
        as_flat = A.ravel(order='F').copy()

        assert lapack.potrf('U', 3, as_matrix, 3) == 0
        assert lapack.potrf('U', 3, as_flat, 3) == 0

        np.testing.assert_array_equal(as_matrix.ravel(order='F'), as_flat)

    @pytest.mark.parametrize("shape", [(3,), (3, 1)])
    def test_vector_rhs_shapes(self, lapack, dtype, shape):
        a = np.asfortranarray(np.diag([2.0, 4.0, 8.0]), dtype=dtype)
        b = np.full(shape, 8.0, dtype=dtype)
        assert lapack.trtrs('L', 'N', 'N', 3, 1, a, 3, b, 3) == 0
        np.testing.assert_allclose(b.ravel(), [4.0, 2.0, 1.0])

    def test_pivots_written_in_place(self, lapack, dtype):
        a = np.asfortranarray([[1.0, 2.0], [3.0, 4.0]], dtype=dtype)
        ipiv = np.zeros(5, dtype=np.intc)
        assert lapack.getrf(2, 2, a, 2, ipiv) == 0
        np.testing.assert_array_equal(ipiv, [2, 2, 0, 0, 0])


# ═══════════════════════════════════════════════════════════════════════
# Non-contiguous buffers
# ═══════════════════════════════════════════════════════════════════════


def _illegal(routine, name):
    return -argument_index(routine, name)


def _row_slice(A, dtype):
    """Rows 1..m of a Fortran array with one spare row above and below."""
    m, n = A.shape
    big = np.zeros((m + 2, n), dtype=dtype, order='F')
    big[1:m + 1] = A
    return big[1:m + 1]


class TestNonContiguous:
    """Strided views would be written through a copy, so they are refused."""

    def test_potrf_row_slice(self, lapack, dtype):
        a = _row_slice(np.array([[4.0, 0.0], [0.0, 9.0]]), dtype)

        assert lapack.potrf('U', 2, a, 2) == _illegal('potrf', 'a')

        np.testing.assert_array_equal(a, [[4.0, 0.0], [0.0, 9.0]])

    def test_potrf_same_data_contiguous(self, lapack, dtype):
        a = np.asfortranarray(_row_slice(np.array([[4.0, 0.0], [0.0, 9.0]]), dtype))

        assert lapack.potrf('U', 2, a, 2) == 0

        np.testing.assert_array_equal(a, [[2.0, 0.0], [0.0, 3.0]])

    def test_lapack_checks_come_first(self, lapack, dtype):
        a = _row_slice(4.0 * np.eye(2), dtype)
        assert lapack.potrf('U', 2, a, 1) == _illegal('potrf', 'lda')

    def test_trtrs_strided_a(self, lapack, dtype):
        a = _row_slice(np.diag([2.0, 4.0]), dtype)
        b = np.asfortranarray([[2.0], [4.0]], dtype=dtype)

        assert lapack.trtrs('U', 'N', 'N', 2, 1, a, 2, b, 2) == _illegal('trtrs', 'a')

        np.testing.assert_array_equal(b, [[2.0], [4.0]])

    @pytest.mark.parametrize("routine", ['trtrs', 'getrs', 'potrs'])
    def test_strided_b(self, lapack, dtype, routine):
        a = np.asfortranarray(np.eye(2), dtype=dtype)
        ipiv = np.array([1, 2], dtype=np.intc)
        b = _row_slice(np.array([[1.0, 2.0], [3.0, 4.0]]), dtype)

        if routine == 'trtrs':
            info = lapack.trtrs('U', 'N', 'N', 2, 2, a, 2, b, 2)
        elif routine == 'getrs':
            info = lapack.getrs('N', 2, 2, a, 2, ipiv, b, 2)
        else:
            info = lapack.potrs('U', 2, 2, a, 2, b, 2)

        assert info == _illegal(routine, 'b')
        np.testing.assert_array_equal(b, [[1.0, 2.0], [3.0, 4.0]])

    def test_first_strided_buffer_reported(self, lapack, dtype):
        a = _row_slice(np.eye(2), dtype)
        ipiv = np.array([1, 2], dtype=np.intc)
        b = _row_slice(np.ones((2, 1)), dtype)
        assert lapack.getrs('N', 2, 1, a, 2, ipiv, b, 2) == _illegal('getrs', 'a')

    def test_strided_pivots(self, lapack, dtype):
        a = np.asfortranarray([[1.0, 2.0], [3.0, 4.0]], dtype=dtype)
        ipiv = np.zeros(4, dtype=np.intc)[::2]

        assert lapack.getrf(2, 2, a, 2, ipiv) == _illegal('getrf', 'ipiv')

        np.testing.assert_array_equal(a, [[1.0, 2.0], [3.0, 4.0]])

    def test_strided_eigenvalue_output(self, lapack, dtype):
        a = np.asfortranarray(np.diag([3.0, 1.0]), dtype=dtype)
        w = np.zeros(4, dtype=dtype)[::2]
        work = np.zeros(5, dtype=dtype)
        assert lapack.syev('N', 'U', 2, a, 2, w, work, 5) == _illegal('syev', 'w')

    def test_strided_workspace_in_query(self, lapack, dtype):
        a = np.asfortranarray(np.eye(3), dtype=dtype)
        tau = np.zeros(3, dtype=dtype)
        work = np.zeros(4, dtype=dtype)[::2]
        assert lapack.geqrf(3, 3, a, 3, tau, work, -1) == _illegal('geqrf', 'work')
        np.testing.assert_array_equal(work, 0.0)

    def test_list_buffer_rejected(self, lapack):
        a = [[4.0, 0.0], [0.0, 9.0]]
        assert lapack.potrf('U', 2, a, 2) == _illegal('potrf', 'a')
