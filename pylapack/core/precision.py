"""
Floating-point precisions supported by the LAPACK bindings.

Each Precision names the LAPACK routine prefix and the NumPy scalar type
used for buffers of that precision. The binding layer is instantiated once
per Precision; nothing downstream inspects dtypes to pick a kernel.
"""

from dataclasses import dataclass

import numpy as np


def machine_epsilon(dtype: np.dtype | type) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


@dataclass(frozen=True)
class Precision:
    """
    A real floating-point precision.

    Attributes:
        name: Human-readable name ('single', 'double')
        prefix: LAPACK routine prefix ('s', 'd')
        dtype: NumPy scalar type of matrix buffers
    """
    name: str
    prefix: str
    dtype: type

    @property
    def eps(self) -> float:
        """Machine epsilon of this precision."""
        return machine_epsilon(self.dtype)


SINGLE = Precision(name='single', prefix='s', dtype=np.float32)
DOUBLE = Precision(name='double', prefix='d', dtype=np.float64)

PRECISIONS: tuple[Precision, ...] = (SINGLE, DOUBLE)

# Integer type of pivot and rank buffers (Fortran INTEGER)
PIVOT_DTYPE = np.intc
