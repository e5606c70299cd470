"""
LAPACK mode characters.

Only the first character is significant and case is ignored, matching
LAPACK's LSAME. Anything else parses to None, which the bindings report
as an illegal argument.
"""

UPLO = frozenset('UL')
TRANS = frozenset('NTC')
TRANS_REAL = frozenset('NT')
DIAG = frozenset('NU')
JOB_VECTORS = frozenset('NV')
JOB_SVD = frozenset('ASON')
SIDE = frozenset('LR')

# f2py wrappers encode trans as an int for trtrs/getrs
TRANS_CODES = {'N': 0, 'T': 1, 'C': 2}


def parse(value: object, allowed: frozenset[str]) -> str | None:
    """Upper-cased first character of ``value`` if it is in ``allowed``."""
    if not isinstance(value, str) or not value:
        return None
    flag = value[0].upper()
    return flag if flag in allowed else None
