"""
PyLapack: precision-generic LAPACK bindings for dense linear algebra.

Submodules:
    lapack: LAPACK-convention bindings, one per precision (float32, float64)
    linalg: Array-level decompositions and solvers built on the bindings
    core: Exceptions, status interpretation, validation, precision constants
"""

__version__ = "0.1.0"

from pylapack import lapack
from pylapack import linalg

__all__ = [
    "__version__",
    "lapack",
    "linalg",
]
