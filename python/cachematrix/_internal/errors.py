"""cachematrix exception types.

Everything raised on purpose by the package derives from CachedMatrixError so
callers can catch the whole family at once. Each class also inherits from the
builtin (or NumPy) category it refines.
"""

import numpy as np


class CachedMatrixError(Exception):
    """Base class for all cachematrix errors."""


class MatrixValueError(CachedMatrixError, ValueError):
    """Matrix input is malformed (wrong rank, empty, non-real entries)."""


class DimensionMismatchError(CachedMatrixError, ValueError):
    """A square matrix was required, or two operand shapes disagree."""


class SingularMatrixError(CachedMatrixError, np.linalg.LinAlgError):
    """The matrix has no inverse."""


class InversionMismatchError(CachedMatrixError, ValueError):
    """A candidate inverse failed verification against its matrix."""
