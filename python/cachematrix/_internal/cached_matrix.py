from __future__ import annotations

import logging
import threading
import time
import warnings
from dataclasses import dataclass
from typing import Any, Callable

import numpy as np

from .coercion import coerce_matrix
from .errors import DimensionMismatchError, InversionMismatchError
from .linalg import invert
from .verify import verify_inversion
from .warnings import CachedMatrixConsistencyWarning

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheStats:
    hits: int = 0
    misses: int = 0
    computations: int = 0
    failures: int = 0
    invalidations: int = 0
    injections: int = 0
    last_compute_seconds: float | None = None


def _default_matrix() -> np.ndarray:
    # 1x1 "not available" matrix; inverting it raises SingularMatrixError.
    return coerce_matrix(np.full((1, 1), np.nan))


class CachedMatrix:
    """A matrix that remembers its inverse.

    The inverse is computed lazily by :meth:`inversion` on first request and
    returned from the cache afterwards. Replacing the matrix with
    :meth:`set_matrix` drops the cache in the same critical section, so a
    stale inverse is never paired with a new matrix.

    Cache slot states:
    - Empty: initial, after ``set_matrix``, after a failed inversion
    - Populated: after a successful ``inversion`` or a ``set_inversion``

    All state lives behind one reentrant lock per instance. Concurrent first
    calls to :meth:`inversion` compute once; later arrivers get the stored
    result.

    Held matrices are read-only float64 arrays. Mutating a copy never touches
    the cache; call ``set_matrix`` with the modified copy instead.
    """

    def __init__(
        self,
        matrix: Any = None,
        *,
        inverter: Callable[[np.ndarray], Any] = invert,
    ):
        self._value = _default_matrix() if matrix is None else coerce_matrix(matrix)
        self._inverter = inverter
        self._cache: np.ndarray | None = None
        self._version = 0
        self._lock = threading.RLock()

        self._hits = 0
        self._misses = 0
        self._computations = 0
        self._failures = 0
        self._invalidations = 0
        self._injections = 0
        self._last_compute_seconds: float | None = None

    # -- matrix ----------------------------------------------------------

    def get_matrix(self) -> np.ndarray:
        with self._lock:
            return self._value

    def set_matrix(self, new_matrix: Any) -> None:
        # Validate before taking the lock: a bad matrix leaves state untouched.
        value = coerce_matrix(new_matrix)
        with self._lock:
            had_cache = self._cache is not None
            self._value = value
            self._cache = None
            self._version += 1
            if had_cache:
                self._invalidations += 1
                logger.debug("Matrix replaced, cached inversion dropped (version %d)", self._version)

    get = get_matrix
    set = set_matrix

    # -- inverse cache ---------------------------------------------------

    def get_inversion(self) -> np.ndarray | None:
        """Return the cached inverse, or None. Never computes."""
        with self._lock:
            return self._cache

    def set_inversion(self, inversion: Any, *, check: bool = False) -> None:
        """Store a precomputed inverse.

        Nothing ties the injected value to the current matrix unless
        ``check`` is true, in which case the candidate must pass
        :func:`verify_inversion` or ``InversionMismatchError`` is raised and
        the cache is left as it was.
        """

        inv = coerce_matrix(inversion)
        with self._lock:
            if check:
                if not verify_inversion(self._value, inv):
                    raise InversionMismatchError(
                        "candidate inverse does not satisfy matrix @ inverse == identity"
                    )
            elif self._value.shape[0] != self._value.shape[1] or inv.shape != self._value.shape:
                warnings.warn(
                    f"Caching a {inv.shape[0]}x{inv.shape[1]} inverse against a "
                    f"{self._value.shape[0]}x{self._value.shape[1]} matrix.",
                    CachedMatrixConsistencyWarning,
                    stacklevel=2,
                )
            self._cache = inv
            self._injections += 1

    def inversion(self) -> np.ndarray:
        """Return the inverse, computing and caching it on first use.

        Errors from the inverter propagate unchanged and leave the cache
        empty.
        """

        with self._lock:
            if self._cache is not None:
                self._hits += 1
                logger.debug("Using previously-cached inversion")
                return self._cache
            return self._compute_locked()

    inverse = inversion

    def _compute_locked(self) -> np.ndarray:
        # Caller holds self._lock and has seen an empty cache.
        self._misses += 1
        logger.info("Calculating inversion, please wait...")
        start = time.perf_counter()
        try:
            inv = coerce_matrix(self._inverter(self._value))
            if inv.shape != self._value.shape:
                raise DimensionMismatchError(
                    f"inverter returned shape {inv.shape} for a {self._value.shape} matrix"
                )
        except Exception:
            self._failures += 1
            logger.warning("Inversion failed for %dx%d matrix", *self._value.shape)
            raise
        elapsed = time.perf_counter() - start

        self._cache = inv
        self._computations += 1
        self._last_compute_seconds = elapsed
        logger.debug("Time to create inversion: %.3f msec", 1000.0 * elapsed)
        return inv

    def check_inversion(self, *, tolerance: float | None = None) -> bool:
        """Verify that the (possibly freshly computed) inverse is correct."""
        with self._lock:
            original = self._value
            inv = self.inversion()
        ok = verify_inversion(original, inv, tolerance=tolerance)
        logger.info("x @ inversion %s identity matrix", "equals" if ok else "does NOT equal")
        return ok

    # -- introspection ---------------------------------------------------

    @property
    def version(self) -> int:
        with self._lock:
            return self._version

    @property
    def shape(self) -> tuple[int, int]:
        with self._lock:
            rows, cols = self._value.shape
        return (int(rows), int(cols))

    @property
    def is_cached(self) -> bool:
        with self._lock:
            return self._cache is not None

    @property
    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                computations=self._computations,
                failures=self._failures,
                invalidations=self._invalidations,
                injections=self._injections,
                last_compute_seconds=self._last_compute_seconds,
            )

    def __repr__(self) -> str:
        with self._lock:
            return f"CachedMatrix(shape={self.shape}, cached={self.is_cached}, version={self.version})"


def make_cached_matrix(
    initial: Any = None,
    *,
    inverter: Callable[[np.ndarray], Any] = invert,
) -> CachedMatrix:
    return CachedMatrix(initial, inverter=inverter)


def cache_solve(cached: CachedMatrix) -> np.ndarray:
    """Inverse of the matrix held by ``cached``, computed at most once.

    Peeks with ``get_inversion``; on a miss, inverts the held matrix with the
    instance's inverter and stores the result. The instance lock is held
    across the sequence so a concurrent ``set_matrix`` cannot slip in
    between the computation and the store. Shape checks, stats and failure
    handling are the same as for :meth:`CachedMatrix.inversion`.
    """

    if not isinstance(cached, CachedMatrix):
        raise TypeError(f"cache_solve expects a CachedMatrix, got {type(cached).__name__}")

    with cached._lock:
        inv = cached.get_inversion()
        if inv is not None:
            cached._hits += 1
            logger.debug("Using previously-cached inversion")
            return inv
        return cached._compute_locked()
