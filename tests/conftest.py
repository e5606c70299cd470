"""
pytest configuration and shared fixtures.
"""

import pytest
import numpy as np

from pylapack.core.tolerances import scaled_tolerance, select_tolerance
from pylapack.lapack import binding_for


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture(params=[np.float32, np.float64], ids=['float32', 'float64'])
def dtype(request):
    """Each supported LAPACK precision."""
    return request.param


@pytest.fixture
def lapack(dtype):
    """Binding specialised to the parametrized precision."""
    return binding_for(dtype)


@pytest.fixture
def tol(dtype):
    """Size-scaled absolute tolerance for the parametrized precision."""
    def _tol(n, factor=1000.0):
        return scaled_tolerance(dtype, n, factor=factor)
    return _tol


@pytest.fixture
def tier(dtype):
    """Tolerance tier for comparing the parametrized precision against float64 references."""
    return select_tolerance(dtype)


@pytest.fixture
def spd_matrix(rng):
    """Factory for well-conditioned symmetric positive definite matrices."""
    def _make(n, dtype=np.float64):
        M = rng.standard_normal((n, n))
        return np.asfortranarray(M @ M.T + n * np.eye(n), dtype=dtype)
    return _make


@pytest.fixture
def general_matrix(rng):
    """Factory for well-conditioned general square or rectangular matrices."""
    def _make(m, n=None, dtype=np.float64):
        n = m if n is None else n
        A = rng.standard_normal((m, n))
        k = min(m, n)
        A[:k, :k] += max(m, n) * np.eye(k)
        return np.asfortranarray(A, dtype=dtype)
    return _make


@pytest.fixture
def rank_deficient_psd(rng):
    """Factory for n x n positive semi-definite matrices of given rank."""
    def _make(n, rank, dtype=np.float64):
        B = rng.standard_normal((n, rank))
        return np.asfortranarray(B @ B.T, dtype=dtype)
    return _make
