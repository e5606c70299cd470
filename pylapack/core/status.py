"""
Interpretation of LAPACK status codes.

The binding layer relays ``info`` untouched. Callers that want structured
errors pass it through check_status(), which raises the exception matching
the routine's documented meaning of the code.

    info == 0  -> returns None
    info <  0  -> InvalidArgumentError (argument -info was illegal)
    info >  0  -> SingularMatrixError, NotPositiveDefiniteError,
                  ConvergenceError or NumericalError, per routine
"""

from pylapack.core.exceptions import (
    ConvergenceError,
    InvalidArgumentError,
    NotPositiveDefiniteError,
    NumericalError,
    SingularMatrixError,
)
from pylapack.core.routines import argument_name


def _singular(routine: str, info: int, detail: str) -> SingularMatrixError:
    return SingularMatrixError(
        f"{routine}: {detail}", routine=routine, info=info, index=info
    )


def _convergence(routine: str, info: int, detail: str) -> ConvergenceError:
    return ConvergenceError(f"{routine}: {detail}", routine=routine, info=info)


def _positive_error(routine: str, info: int) -> Exception:
    if routine in ('getrf', 'getri'):
        return _singular(
            routine, info,
            f"U({info},{info}) is exactly zero, the matrix is singular"
        )
    if routine == 'trtrs':
        return _singular(
            routine, info,
            f"A({info},{info}) is exactly zero, the triangular matrix is singular"
        )
    if routine == 'gels':
        return _singular(
            routine, info,
            f"diagonal element {info} of the triangular factor is zero, "
            f"A does not have full rank"
        )
    if routine == 'potri':
        return _singular(
            routine, info,
            f"factor element ({info},{info}) is zero, the inverse cannot be computed"
        )
    if routine == 'potrf':
        return NotPositiveDefiniteError(
            f"{routine}: the leading minor of order {info} is not positive definite",
            routine=routine, info=info, minor=info
        )
    if routine == 'syev':
        return _convergence(
            routine, info,
            f"{info} off-diagonal elements of the tridiagonal form "
            f"did not converge to zero"
        )
    if routine == 'geev':
        return _convergence(
            routine, info,
            f"the QR algorithm failed to compute all eigenvalues; "
            f"elements {info + 1} onward have converged"
        )
    if routine == 'gesdd':
        return _convergence(
            routine, info, "the bidiagonal divide-and-conquer did not converge"
        )
    return NumericalError(
        f"{routine}: numerical failure (info={info})", routine=routine, info=info
    )


def check_status(routine: str, info: int) -> None:
    """
    Raise the exception corresponding to a nonzero LAPACK status.

    Args:
        routine: Precision-less routine name ('getrf', 'potrf', ...)
        info: Status code returned by the binding

    Raises:
        InvalidArgumentError: If info < 0
        SingularMatrixError: getrf/getri/trtrs/gels/potri with info > 0
        NotPositiveDefiniteError: potrf with info > 0
        ConvergenceError: syev/geev/gesdd with info > 0
        NumericalError: any other routine with info > 0
    """
    if info == 0:
        return
    if info < 0:
        index = -info
        name = argument_name(routine, index)
        label = f"argument {index}" if name is None else f"argument {index} ({name})"
        raise InvalidArgumentError(
            f"{routine}: {label} had an illegal value",
            routine=routine,
            argument_index=index,
            argument_name=name,
        )
    raise _positive_error(routine, info)
