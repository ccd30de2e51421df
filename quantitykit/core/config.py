# quantitykit/core/config.py
# -----------------------------------------------------------------------------
# Engine configuration and logging setup
#
# Environment variables (all optional):
#   QUANTITYKIT_DECIMAL_PRECISION    digits kept by Precise division (50)
#   QUANTITYKIT_INVERTER_EPSILON     damped search tolerance (1e-8)
#   QUANTITYKIT_INVERTER_MAX_ITER    damped search iteration ceiling (10000)
#   QUANTITYKIT_INVERTER_STEP        damped search initial step (10.0)
#   QUANTITYKIT_COARSE_EPSILON       tolerance for coarse time relations (1e-3)
#   QUANTITYKIT_COARSE_MAX_ITER      ceiling for coarse time relations (100)
#   QUANTITYKIT_WARN_ON_EXHAUSTION   emit ConvergenceExhausted warnings (true)
#   QUANTITYKIT_DELTA_AT_JSON        leap second override table (JSON)
#   QUANTITYKIT_LOG_LEVEL            level used by configure_logging()
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from decimal import Context, ROUND_HALF_EVEN
from functools import lru_cache
from typing import Optional, Union

__all__ = [
    "EngineConfig",
    "load_config",
    "reset_config",
    "decimal_context",
    "configure_logging",
]

_ENV_PREFIX = "QUANTITYKIT_"
_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class EngineConfig:
    """Process-wide tuning for the numeric tower and the damped search."""

    # Precise arithmetic
    decimal_precision: int = 50

    # Damped search (fine relations: TDB, TCB, generic callers)
    inverter_epsilon: float = 1e-8
    inverter_max_iterations: int = 10000
    inverter_initial_step: float = 10.0

    # Damped search (coarse relations: UT1 and Delta T)
    coarse_epsilon: float = 1e-3
    coarse_max_iterations: int = 100

    # Reporting
    warn_on_exhaustion: bool = True

    # Leap seconds
    delta_at_json: Optional[str] = None

    def __post_init__(self) -> None:
        if self.decimal_precision <= 0:
            raise ValueError(f"decimal_precision must be positive, got {self.decimal_precision}")
        if self.inverter_epsilon <= 0 or self.coarse_epsilon <= 0:
            raise ValueError("inverter tolerances must be positive")
        if self.inverter_max_iterations <= 0 or self.coarse_max_iterations <= 0:
            raise ValueError("inverter iteration ceilings must be positive")
        if self.inverter_initial_step == 0:
            raise ValueError("inverter_initial_step cannot be zero")


def _env(name: str) -> Optional[str]:
    value = os.getenv(_ENV_PREFIX + name, "").strip()
    return value or None


def _env_int(name: str, default: int) -> int:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{_ENV_PREFIX}{name} must be an integer, got {raw!r}") from e


def _env_float(name: str, default: float) -> float:
    raw = _env(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError as e:
        raise ValueError(f"{_ENV_PREFIX}{name} must be a number, got {raw!r}") from e


def _env_bool(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    lowered = raw.lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"{_ENV_PREFIX}{name} must be a boolean, got {raw!r}")


@lru_cache(maxsize=1)
def load_config() -> EngineConfig:
    """Build the configuration from the environment (cached)."""
    defaults = EngineConfig()
    return EngineConfig(
        decimal_precision=_env_int("DECIMAL_PRECISION", defaults.decimal_precision),
        inverter_epsilon=_env_float("INVERTER_EPSILON", defaults.inverter_epsilon),
        inverter_max_iterations=_env_int("INVERTER_MAX_ITER", defaults.inverter_max_iterations),
        inverter_initial_step=_env_float("INVERTER_STEP", defaults.inverter_initial_step),
        coarse_epsilon=_env_float("COARSE_EPSILON", defaults.coarse_epsilon),
        coarse_max_iterations=_env_int("COARSE_MAX_ITER", defaults.coarse_max_iterations),
        warn_on_exhaustion=_env_bool("WARN_ON_EXHAUSTION", defaults.warn_on_exhaustion),
        delta_at_json=_env("DELTA_AT_JSON"),
    )


def reset_config() -> None:
    """Forget the cached configuration so the environment is read again."""
    load_config.cache_clear()
    decimal_context.cache_clear()


@lru_cache(maxsize=1)
def decimal_context() -> Context:
    """Decimal context used for inexact Precise operations (division)."""
    return Context(prec=load_config().decimal_precision, rounding=ROUND_HALF_EVEN)


def configure_logging(level: Union[int, str, None] = None) -> logging.Logger:
    """Attach a stdout handler to the package logger.

    The level comes from ``level``, else QUANTITYKIT_LOG_LEVEL, else WARNING.
    """
    if level is None:
        level = _env("LOG_LEVEL") or "WARNING"

    if isinstance(level, str):
        numeric_level = getattr(logging, level.upper(), None)
        if not isinstance(numeric_level, int):
            raise ValueError(f"Invalid log level: {level}")
    else:
        numeric_level = level

    logger = logging.getLogger("quantitykit")
    logger.setLevel(numeric_level)

    # Only one handler of our own, however often this runs
    if not any(getattr(h, "_quantitykit", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._quantitykit = True  # type: ignore[attr-defined]
        logger.addHandler(handler)

    return logger
