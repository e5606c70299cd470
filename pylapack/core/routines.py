"""
Argument tables for the LAPACK routines bound by PyLapack.

This module is the SINGLE SOURCE OF TRUTH for argument positions.
A negative status ``-k`` refers to the k-th entry of the routine's tuple
(one-based), which is also the k-th positional parameter of the Python
binding. The trailing ``info`` argument is omitted: bindings return it.

Usage:
    from pylapack.core.routines import argument_index

    if lda < max(1, n):
        return -argument_index('potrf', 'lda')
"""

ROUTINE_ARGUMENTS: dict[str, tuple[str, ...]] = {
    'trtrs': ('uplo', 'trans', 'diag', 'n', 'nrhs', 'a', 'lda', 'b', 'ldb'),
    'gels': ('trans', 'm', 'n', 'nrhs', 'a', 'lda', 'b', 'ldb', 'work', 'lwork'),
    'syev': ('jobz', 'uplo', 'n', 'a', 'lda', 'w', 'work', 'lwork'),
    'geev': ('jobvl', 'jobvr', 'n', 'a', 'lda', 'wr', 'wi', 'vl', 'ldvl',
             'vr', 'ldvr', 'work', 'lwork'),
    'gesdd': ('jobz', 'm', 'n', 'a', 'lda', 's', 'u', 'ldu', 'vt', 'ldvt',
              'work', 'lwork', 'iwork'),
    'getrf': ('m', 'n', 'a', 'lda', 'ipiv'),
    'getrs': ('trans', 'n', 'nrhs', 'a', 'lda', 'ipiv', 'b', 'ldb'),
    'getri': ('n', 'a', 'lda', 'ipiv', 'work', 'lwork'),
    'potrf': ('uplo', 'n', 'a', 'lda'),
    'potri': ('uplo', 'n', 'a', 'lda'),
    'potrs': ('uplo', 'n', 'nrhs', 'a', 'lda', 'b', 'ldb'),
    'pstrf': ('uplo', 'n', 'a', 'lda', 'piv', 'rank', 'tol', 'work'),
    'geqrf': ('m', 'n', 'a', 'lda', 'tau', 'work', 'lwork'),
    'orgqr': ('m', 'n', 'k', 'a', 'lda', 'tau', 'work', 'lwork'),
    'ormqr': ('side', 'trans', 'm', 'n', 'k', 'a', 'lda', 'tau', 'c', 'ldc',
              'work', 'lwork'),
}

# Routines that accept lwork == -1 as a workspace query
WORKSPACE_ROUTINES = frozenset({
    'gels', 'syev', 'geev', 'gesdd', 'getri', 'geqrf', 'orgqr', 'ormqr',
})


def argument_index(routine: str, name: str) -> int:
    """One-based position of argument ``name`` in ``routine``."""
    return ROUTINE_ARGUMENTS[routine].index(name) + 1


def argument_name(routine: str, index: int) -> str | None:
    """LAPACK name of the one-based argument ``index``, or None if out of range."""
    arguments = ROUTINE_ARGUMENTS.get(routine, ())
    if 1 <= index <= len(arguments):
        return arguments[index - 1]
    return None


__all__ = [
    'ROUTINE_ARGUMENTS',
    'WORKSPACE_ROUTINES',
    'argument_index',
    'argument_name',
]
