"""
Array-level linear algebra built on the LAPACK bindings.

This is the caller layer: it validates inputs, allocates buffers, runs
workspace queries, chooses mode flags, and turns status codes into
exceptions. Results are immutable dataclasses where more than one array
comes back.

All functions follow these conventions:
    - Inputs are never modified; kernels work on copies
    - float32 inputs are computed in single precision, everything else
      in double precision
    - Errors are raised immediately with clear messages

Submodules:
    solve: triangular solve, least squares, LU factor/solve, inverse
    cholesky: Cholesky factor/solve/inverse, pivoted Cholesky
    qr: QR factorization, Q application, QR least squares
    eigen: symmetric and general eigendecomposition, SVD
"""

from pylapack.linalg._common import query_workspace
from pylapack.linalg.cholesky import (
    PivotedCholeskyResult,
    cholesky,
    cholesky_inverse,
    cholesky_solve,
    pivoted_cholesky,
)
from pylapack.linalg.eigen import (
    EigResult,
    SVDResult,
    SymEigResult,
    eig,
    svd,
    symeig,
)
from pylapack.linalg.qr import (
    QRFactor,
    QRResult,
    apply_q,
    qr,
    qr_factor,
    qr_solve,
)
from pylapack.linalg.solve import (
    LstsqResult,
    LUResult,
    inverse,
    lstsq,
    lu_factor,
    lu_solve,
    triangular_solve,
)

__all__ = [
    # Workspace
    "query_workspace",
    # Solvers
    "triangular_solve",
    "lstsq",
    "LstsqResult",
    "lu_factor",
    "lu_solve",
    "LUResult",
    "inverse",
    # Cholesky
    "cholesky",
    "cholesky_inverse",
    "cholesky_solve",
    "pivoted_cholesky",
    "PivotedCholeskyResult",
    # QR
    "qr",
    "qr_factor",
    "apply_q",
    "qr_solve",
    "QRResult",
    "QRFactor",
    # Spectral
    "symeig",
    "eig",
    "svd",
    "SymEigResult",
    "EigResult",
    "SVDResult",
]
