from __future__ import annotations

import logging
from typing import Any

import numpy as np

from .coercion import coerce_matrix, require_square
from .errors import DimensionMismatchError
from .linalg import identity, matmul
from .runtime import check_tolerance, settings

logger = logging.getLogger(__name__)


def verify_inversion(original: Any, candidate: Any, *, tolerance: float | None = None) -> bool:
    """Check that ``original @ candidate`` equals the identity within tolerance.

    Exact equality is useless here: elimination-based inversion leaves
    round-off in the last few bits (entries like ``1.0`` and ``-3.3e-16``
    where ``1`` and ``0`` are expected). Each element pair is compared with
    ``numpy.allclose`` using ``tolerance`` as both the relative and absolute
    bound; it defaults to ``settings.tolerance()`` (1.5e-8).

    Raises ``DimensionMismatchError`` if ``original`` is not square or the
    candidate's shape differs from it, and ``MatrixValueError`` for a
    tolerance that is not positive and finite.
    """

    orig = coerce_matrix(original)
    cand = coerce_matrix(candidate)
    n = require_square(orig, what="original")
    if cand.shape != orig.shape:
        raise DimensionMismatchError(
            f"candidate inverse shape {cand.shape} does not match matrix shape {orig.shape}"
        )

    tol = settings.tolerance() if tolerance is None else check_tolerance(tolerance, what="tolerance")

    product = matmul(orig, cand)
    ok = bool(np.allclose(product, identity(n), rtol=tol, atol=tol))
    logger.debug(
        "x @ inversion %s identity matrix (n=%d, tolerance=%g)",
        "equals" if ok else "does NOT equal",
        n,
        tol,
    )
    return ok
