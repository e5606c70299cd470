"""
Tolerance tiers for numerical validation.

Defines precision expectations for the two kernel precisions:
- FP64: double precision
- FP32: single precision, relaxed accordingly

Used by the test suite and by callers comparing results across precisions.
"""

from dataclasses import dataclass

import numpy as np

from pylapack.core.precision import machine_epsilon


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision LAPACK',
)

FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='single precision LAPACK',
)


def select_tolerance(dtype: np.dtype | type) -> ToleranceTier:
    """Tier for results computed in ``dtype``; anything but float32 gets FP64."""
    if np.dtype(dtype) == np.float32:
        return FP32
    return FP64


def scaled_tolerance(dtype: np.dtype | type, n: int, factor: float = 100.0) -> float:
    """
    Tolerance proportional to problem size and machine epsilon.

    Backward-stable LAPACK routines have errors of order n * eps * ||A||;
    ``factor`` absorbs the constant.
    """
    return factor * max(n, 1) * machine_epsilon(dtype)
