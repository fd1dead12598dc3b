from __future__ import annotations

import logging
import math
import os
from typing import Any

from .errors import MatrixValueError

DEFAULT_TOLERANCE = 1.5e-8


def check_tolerance(raw: Any, *, what: str) -> float:
    try:
        value = float(raw)
    except (TypeError, ValueError) as exc:
        raise MatrixValueError(f"{what} must be a float, got {raw!r}") from exc
    if not math.isfinite(value) or value <= 0.0:
        raise MatrixValueError(f"{what} must be positive and finite, got {raw!r}")
    return value


class Settings:
    def __init__(
        self,
        *,
        tolerance_env_var: str = "CACHEMATRIX_TOLERANCE",
        log_level_env_var: str = "CACHEMATRIX_LOG_LEVEL",
    ) -> None:
        self._tolerance_env_var = tolerance_env_var
        self._log_level_env_var = log_level_env_var
        self._tolerance_cache: float | None = None

    def tolerance(self) -> float:
        if self._tolerance_cache is not None:
            return self._tolerance_cache

        raw = os.environ.get(self._tolerance_env_var)
        if raw is None or not raw.strip():
            value = DEFAULT_TOLERANCE
        else:
            value = check_tolerance(raw, what=self._tolerance_env_var)

        self._tolerance_cache = value
        return value

    def log_level(self) -> int | None:
        raw = os.environ.get(self._log_level_env_var)
        if raw is None or not raw.strip():
            return None
        raw = raw.strip()
        if raw.isdigit():
            return int(raw)
        level = logging.getLevelName(raw.upper())
        if not isinstance(level, int):
            raise MatrixValueError(f"{self._log_level_env_var} is not a log level: {raw!r}")
        return level

    def reset(self) -> None:
        self._tolerance_cache = None


settings = Settings()
