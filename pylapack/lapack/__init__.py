"""
Decomposition binding layer.

Exposes the LAPACK catalogue once per supported precision:

    from pylapack.lapack import float64 as lapack

    ipiv = np.zeros(n, dtype=np.intc)
    info = lapack.getrf(n, n, a, n, ipiv)

Each operation mirrors its LAPACK counterpart argument for argument, with
``info`` returned instead of written through a pointer. Buffers are
mutated in place; nothing is allocated on the caller's behalf, nothing is
logged and no exception is raised for argument or numerical conditions.

Operations:
    trtrs: triangular solve
    gels: least squares
    syev: symmetric eigendecomposition
    geev: general eigendecomposition
    gesdd: singular value decomposition
    getrf / getrs / getri: LU factorization, solve, inverse
    potrf / potri / potrs: Cholesky factorization, inverse, solve
    pstrf: Cholesky with complete pivoting
    geqrf / orgqr / ormqr: QR factorization, form Q, apply Q
"""

import numpy as np

from pylapack.core.precision import DOUBLE, SINGLE
from pylapack.lapack.binding import (
    LapackBinding,
    PSTRF_DEFAULT_TOL,
    WORKSPACE_QUERY,
)

float32 = LapackBinding(SINGLE)
float64 = LapackBinding(DOUBLE)

_BINDINGS = {
    np.dtype(np.float32): float32,
    np.dtype(np.float64): float64,
}


def binding_for(dtype: np.dtype | type) -> LapackBinding:
    """
    The binding specialised to ``dtype`` (float32 or float64).

    For callers that hold a dtype rather than a static choice of binding.

    Raises:
        KeyError: If dtype has no LAPACK precision
    """
    return _BINDINGS[np.dtype(dtype)]


__all__ = [
    "LapackBinding",
    "WORKSPACE_QUERY",
    "PSTRF_DEFAULT_TOL",
    "float32",
    "float64",
    "binding_for",
]
