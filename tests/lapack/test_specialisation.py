"""
Tests for precision specialisation of the bindings.

Validates:
    - each binding resolves its kernels with the matching routine prefix
    - binding_for maps dtypes to the module-level bindings
    - single and double precision agree within single-precision tolerance
"""

import numpy as np
import pytest
import scipy.linalg.lapack

import pylapack.lapack as lapack_module
from pylapack.core.precision import DOUBLE, SINGLE
from pylapack.core.tolerances import select_tolerance
from pylapack.lapack import LapackBinding, binding_for

# Single-precision results are checked against double at float32 accuracy
SINGLE_TIER = select_tolerance(np.float32)


# ═══════════════════════════════════════════════════════════════════════
# Specialisation
# ═══════════════════════════════════════════════════════════════════════


class TestSpecialisation:

    def test_module_bindings(self):
        assert lapack_module.float32.precision is SINGLE
        assert lapack_module.float64.precision is DOUBLE
        assert lapack_module.float32.dtype is np.float32
        assert lapack_module.float64.dtype is np.float64

    @pytest.mark.parametrize("binding, prefix", [
        (lapack_module.float32, 's'),
        (lapack_module.float64, 'd'),
    ])
    def test_kernels_use_precision_prefix(self, binding, prefix):
        for name, kernel in binding._kernels.items():
            assert kernel is getattr(scipy.linalg.lapack, prefix + name)

    def test_binding_for(self):
        assert binding_for(np.float32) is lapack_module.float32
        assert binding_for(np.dtype('float64')) is lapack_module.float64
        assert binding_for('f8') is lapack_module.float64

    @pytest.mark.parametrize("dtype_", [np.int64, np.complex128, np.float16])
    def test_binding_for_unsupported(self, dtype_):
        with pytest.raises(KeyError):
            binding_for(dtype_)

    def test_repr(self):
        assert repr(lapack_module.float32) == "LapackBinding(single)"
        assert repr(LapackBinding(DOUBLE)) == "LapackBinding(double)"

    def test_results_have_binding_dtype(self, lapack, dtype, spd_matrix):
        a = spd_matrix(3, dtype=dtype)
        w = np.zeros(3, dtype=dtype)
        work = np.zeros(8, dtype=dtype)
        assert lapack.syev('N', 'U', 3, a, 3, w, work, 8) == 0
        assert w.dtype == dtype


# ═══════════════════════════════════════════════════════════════════════
# Cross-precision agreement
# ═══════════════════════════════════════════════════════════════════════


class TestCrossPrecision:
    """float32 results match float64 results to single-precision tolerance."""

    def test_getrf_getrs(self, general_matrix, rng):
        n = 5
        A = general_matrix(n)
        B = rng.standard_normal((n, 2))
        solutions = {}
        for binding in (lapack_module.float32, lapack_module.float64):
            a = np.asfortranarray(A, dtype=binding.dtype)
            b = np.asfortranarray(B, dtype=binding.dtype)
            ipiv = np.zeros(n, dtype=np.intc)
            assert binding.getrf(n, n, a, n, ipiv) == 0
            assert binding.getrs('N', n, 2, a, n, ipiv, b, n) == 0
            solutions[binding.dtype] = b
        np.testing.assert_allclose(
            solutions[np.float32], solutions[np.float64],
            rtol=SINGLE_TIER.rtol, atol=SINGLE_TIER.atol,
        )

    def test_syev(self, spd_matrix):
        n = 5
        A = spd_matrix(n)
        values = {}
        for binding in (lapack_module.float32, lapack_module.float64):
            a = np.asfortranarray(A, dtype=binding.dtype)
            w = np.zeros(n, dtype=binding.dtype)
            work = np.zeros(3 * n, dtype=binding.dtype)
            assert binding.syev('N', 'L', n, a, n, w, work, 3 * n) == 0
            values[binding.dtype] = w
        np.testing.assert_allclose(values[np.float32], values[np.float64], rtol=SINGLE_TIER.rtol)

    def test_gesdd(self, general_matrix):
        m, n = 6, 4
        A = general_matrix(m, n)
        values = {}
        for binding in (lapack_module.float32, lapack_module.float64):
            a = np.asfortranarray(A, dtype=binding.dtype)
            s = np.zeros(n, dtype=binding.dtype)
            u = np.zeros(1, dtype=binding.dtype)
            vt = np.zeros(1, dtype=binding.dtype)
            work = np.zeros(100, dtype=binding.dtype)
            iwork = np.zeros(8 * n, dtype=np.intc)
            assert binding.gesdd('N', m, n, a, m, s, u, 1, vt, 1, work, 100, iwork) == 0
            values[binding.dtype] = s
        np.testing.assert_allclose(values[np.float32], values[np.float64], rtol=SINGLE_TIER.rtol)
