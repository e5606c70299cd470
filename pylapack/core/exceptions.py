"""
Exception hierarchy for PyLapack.

All exceptions inherit from PyLapackError to allow catching any
library-specific error. The binding layer (pylapack.lapack) never raises
these; they are produced by the caller layer when it interprets a LAPACK
status code (see pylapack.core.status).

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLapackError(Exception):
    """Base exception for all PyLapack errors."""
    pass


class ValidationError(PyLapackError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class InvalidArgumentError(ValidationError):
    """
    A LAPACK routine rejected one of its arguments (negative info).

    Attributes:
        routine: Name of the LAPACK routine (e.g. 'getrf')
        argument_index: One-based index of the rejected argument
        argument_name: LAPACK name of that argument, if known
    """

    def __init__(
        self,
        message: str,
        routine: str,
        argument_index: int,
        argument_name: str | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.argument_index = argument_index
        self.argument_name = argument_name


class NumericalError(PyLapackError):
    """
    Numerical computation failed.

    Base class for positive LAPACK status codes. The meaning of ``info``
    is specific to ``routine``.

    Attributes:
        routine: Name of the LAPACK routine, if known
        info: Raw positive status code, if known
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None
    ):
        super().__init__(message)
        self.routine = routine
        self.info = info


class SingularMatrixError(NumericalError):
    """
    Matrix is exactly singular.

    Raised when a factor has an exactly zero diagonal element.

    Attributes:
        index: One-based index of the zero diagonal element
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        index: int | None = None
    ):
        super().__init__(message, routine=routine, info=info)
        self.index = index


class NotPositiveDefiniteError(NumericalError):
    """
    Matrix is not positive definite.

    Raised when Cholesky factorization reaches a leading minor that is
    not positive definite.

    Attributes:
        minor: Order of the first leading minor that is not positive definite
    """

    def __init__(
        self,
        message: str,
        routine: str | None = None,
        info: int | None = None,
        minor: int | None = None
    ):
        super().__init__(message, routine=routine, info=info)
        self.minor = minor


class ConvergenceError(PyLapackError):
    """
    Iterative kernel failed to converge.

    Raised for eigenvalue and singular value routines whose internal
    QR or divide-and-conquer iteration did not converge.

    Attributes:
        routine: Name of the LAPACK routine
        info: Raw positive status code
    """

    def __init__(self, message: str, routine: str, info: int):
        super().__init__(message)
        self.routine = routine
        self.info = info


class RankDeficiencyWarning(UserWarning):
    """Factorization detected a numerical rank below the matrix order."""
    pass
