from __future__ import annotations

import numbers
from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np

from .errors import DimensionMismatchError, MatrixValueError


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def coerce_sequence_rows(candidate: Any) -> list[list[Any]]:
    if not is_sequence_like(candidate):
        raise MatrixValueError(
            "Matrix data must be provided as a nested sequence or a NumPy array."
        )
    rows = [
        list(row) if is_sequence_like(row) or (isinstance(row, np.ndarray) and row.ndim == 1) else row
        for row in candidate
    ]
    if not rows:
        raise MatrixValueError("Matrix data must not be empty.")
    for row in rows:
        if not isinstance(row, list):
            raise MatrixValueError("Each matrix row must be a sequence of entries.")
    cols = len(rows[0])
    if any(len(row) != cols for row in rows):
        raise MatrixValueError("Matrix data must be rectangular (equal row lengths).")
    return rows


def coerce_matrix(candidate: Any) -> np.ndarray:
    """Return ``candidate`` as a read-only, C-contiguous float64 2D array.

    The result is always a fresh copy, so later mutation of the caller's
    buffer cannot leak into a held matrix.
    """

    if isinstance(candidate, np.ndarray):
        array = candidate
    else:
        if is_sequence_like(candidate):
            candidate = coerce_sequence_rows(candidate)
        try:
            try:
                array = np.asarray(candidate)
            except OverflowError:
                array = np.asarray(candidate, dtype=object)
        except (TypeError, ValueError) as exc:
            raise MatrixValueError(f"Matrix data could not be converted: {exc}") from exc

    if array.ndim != 2:
        raise MatrixValueError(f"Matrix input must be 2D, got {array.ndim}D.")
    if array.shape[0] < 1 or array.shape[1] < 1:
        raise MatrixValueError(f"Matrix must have at least one row and column, got {array.shape}.")
    if np.iscomplexobj(array):
        raise MatrixValueError("Matrix entries must be real numbers.")
    if array.dtype == object:
        # Python ints beyond int64 land here.
        if not all(isinstance(x, numbers.Real) for x in array.flat):
            raise MatrixValueError("Matrix entries must be real numbers.")
        try:
            array = array.astype(np.float64)
        except (TypeError, ValueError, OverflowError) as exc:
            raise MatrixValueError(f"Matrix data could not be converted: {exc}") from exc
    # Booleans are accepted as 0/1.
    if not (np.issubdtype(array.dtype, np.number) or array.dtype == np.bool_):
        raise MatrixValueError(f"Matrix entries must be numeric, got dtype {array.dtype}.")

    out = np.array(array, dtype=np.float64, order="C", copy=True)
    out.flags.writeable = False
    return out


def require_square(matrix: np.ndarray, *, what: str = "matrix") -> int:
    rows, cols = matrix.shape
    if rows != cols:
        raise DimensionMismatchError(f"{what} must be square, got {rows}x{cols}.")
    return int(rows)
