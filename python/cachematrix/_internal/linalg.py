"""Numeric primitives the cache is built around.

These are thin wrappers over NumPy that translate its failure modes into the
cachematrix error taxonomy. Nothing here caches.
"""

from __future__ import annotations

from typing import Any

import numpy as np

from .coercion import coerce_matrix, require_square
from .errors import DimensionMismatchError, SingularMatrixError


def invert(matrix: Any) -> np.ndarray:
    """Return the inverse of a square matrix.

    Raises ``DimensionMismatchError`` for non-square input and
    ``SingularMatrixError`` when NumPy reports a singular matrix or the
    result is not finite.
    """

    m = coerce_matrix(matrix)
    require_square(m)
    # LAPACK can return a finite "inverse" for inf input.
    if not np.all(np.isfinite(m)):
        raise SingularMatrixError("matrix is not invertible: it has non-finite entries")
    try:
        inv = np.linalg.inv(m)
    except np.linalg.LinAlgError as exc:
        raise SingularMatrixError(f"matrix is not invertible: {exc}") from exc

    # Near-singular input can overflow.
    if not np.all(np.isfinite(inv)):
        raise SingularMatrixError("matrix is not invertible: inverse has non-finite entries")
    return inv


def matmul(a: Any, b: Any) -> np.ndarray:
    left = coerce_matrix(a)
    right = coerce_matrix(b)
    if left.shape[1] != right.shape[0]:
        raise DimensionMismatchError(
            f"matmul dimension mismatch: {left.shape} @ {right.shape}"
        )
    return left @ right


def identity(n: int) -> np.ndarray:
    n = int(n)
    if n < 1:
        raise DimensionMismatchError(f"identity size must be positive, got {n}")
    return np.eye(n, dtype=np.float64)
