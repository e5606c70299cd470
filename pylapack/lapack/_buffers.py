"""
Column-major views over caller-owned buffers.

A buffer is any contiguous ndarray: flat 1D storage, or a 2D
Fortran-ordered array. Its elements are read as raw column-major storage,
so element (i, j) of an ld-strided matrix sits at flat offset i + j*ld,
exactly as LAPACK addresses it. No bounds checking is done.

Strided views (a row slice, every other element) and non-arrays are not
buffers: flattening them makes a copy, and results written to the copy
never reach the caller. The bindings reject them with is_contiguous
before any view is taken.
"""

import numpy as np
from numpy.lib.stride_tricks import as_strided
from numpy.typing import NDArray
from typing import Any


def is_contiguous(buffer: Any) -> bool:
    """True if ``buffer`` is an ndarray occupying one unbroken block of memory."""
    return isinstance(buffer, np.ndarray) and (
        buffer.flags.c_contiguous or buffer.flags.f_contiguous
    )


def flat(buffer: NDArray[Any]) -> NDArray[Any]:
    """Flat view of a contiguous buffer in memory order."""
    return np.ravel(buffer, order='K')


def matrix_view(buffer: NDArray[Any], rows: int, cols: int, ld: int) -> NDArray[Any]:
    """Writable rows x cols view of a column-major buffer with leading dimension ld."""
    storage = flat(buffer)
    itemsize = storage.itemsize
    return as_strided(
        storage,
        shape=(rows, cols),
        strides=(itemsize, ld * itemsize),
        writeable=True,
    )


def vector_view(buffer: NDArray[Any], length: int) -> NDArray[Any]:
    """Writable view of the first ``length`` elements of a buffer."""
    return flat(buffer)[:length]


def fortran_copy(view: NDArray[Any], dtype: type) -> NDArray[Any]:
    """Fortran-contiguous copy handed to the kernel, which may overwrite it."""
    return np.array(view, dtype=dtype, order='F')


def store(view: NDArray[Any], result: NDArray[Any]) -> None:
    """Copy a kernel result back into the caller's buffer view."""
    view[...] = np.reshape(result, view.shape, order='F')


def store_scalar(buffer: NDArray[Any], value: float) -> None:
    """Write ``value`` into element 0 of a buffer (e.g. work(1), rank)."""
    flat(buffer)[0] = value
