"""Matrices that compute their inverse once and remember it."""
from __future__ import annotations

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "unknown"

from ._internal.cached_matrix import (
    CachedMatrix,
    CacheStats,
    cache_solve,
    make_cached_matrix,
)
from ._internal.coercion import coerce_matrix
from ._internal.errors import (
    CachedMatrixError,
    DimensionMismatchError,
    InversionMismatchError,
    MatrixValueError,
    SingularMatrixError,
)
from ._internal.factories import random_matrix
from ._internal.linalg import identity, invert, matmul
from ._internal.logging_config import setup_logging
from ._internal.runtime import DEFAULT_TOLERANCE, settings
from ._internal.verify import verify_inversion
from ._internal.warnings import CachedMatrixConsistencyWarning, CachedMatrixWarning

__all__ = [
    "CachedMatrix",
    "CacheStats",
    "make_cached_matrix",
    "cache_solve",
    "verify_inversion",
    "invert",
    "matmul",
    "identity",
    "coerce_matrix",
    "random_matrix",
    "setup_logging",
    "settings",
    "DEFAULT_TOLERANCE",
    "CachedMatrixError",
    "MatrixValueError",
    "DimensionMismatchError",
    "SingularMatrixError",
    "InversionMismatchError",
    "CachedMatrixWarning",
    "CachedMatrixConsistencyWarning",
]
