from __future__ import annotations

import numpy as np

from .errors import MatrixValueError


def random_matrix(
    rows: int = 1000,
    cols: int | None = None,
    low: int = 1,
    high: int = 100,
    *,
    seed: int | np.random.Generator | None = None,
) -> np.ndarray:
    """Random integer-valued test matrix.

    Entries are drawn uniformly from the inclusive range ``[low, high]`` and
    stored as float64. ``cols`` defaults to ``rows``. ``seed`` may be an int
    or an existing ``numpy.random.Generator``.
    """

    if cols is None:
        cols = rows
    rows = int(rows)
    cols = int(cols)
    if rows < 1 or cols < 1:
        raise MatrixValueError(f"random_matrix dimensions must be positive, got {rows}x{cols}")
    if low > high:
        raise MatrixValueError(f"random_matrix requires low <= high, got {low} > {high}")

    rng = seed if isinstance(seed, np.random.Generator) else np.random.default_rng(seed)
    return rng.integers(int(low), int(high), size=(rows, cols), endpoint=True).astype(np.float64)
