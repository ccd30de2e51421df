# quantitykit/core/inverter.py
# -----------------------------------------------------------------------------
# Bounded damped search for inverting closed-form converters
#
# Several time scales are closed-form functions of TAI whose correction term
# depends on the unknown itself (TDB, TCB, UT1). Their inverse is found by
# stepping an estimate and halving/reversing the step whenever the residual
# grows:
#
#   x   <- seed (the target itself, or an affine first approximation)
#   err <- forward(x) - target
#   loop until |err| < tolerance or the iteration ceiling:
#       if |err| grew since the previous step: step <- -step / 2
#       x <- x + step
#
# The search never fails outward. On exhaustion the best estimate is
# returned and a ConvergenceExhausted warning is issued.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import math
import warnings as py_warnings
from dataclasses import dataclass
from typing import Callable, Optional

from quantitykit.core.config import load_config
from quantitykit.core.errors import ConvergenceExhausted
from quantitykit.core.numbers import Double, Number, NumberLike, as_number

__all__ = [
    "InversionResult",
    "damped_search",
    "inverse_of",
]

log = logging.getLogger(__name__)

# Tolerance never drops below this many ulps of the target: a double
# cannot resolve a root any finer.
_ULP_FLOOR = 8


@dataclass(frozen=True)
class InversionResult:
    """Outcome of a damped search."""
    value: float            # best estimate of the unknown
    residual: float         # |forward(value) - target|
    initial_residual: float # |forward(seed) - target|
    iterations: int
    converged: bool
    tolerance: float


def damped_search(
    forward: Callable[[float], float],
    target: float,
    *,
    seed: Optional[float] = None,
    step: Optional[float] = None,
    epsilon: Optional[float] = None,
    max_iterations: Optional[int] = None,
    warn: Optional[bool] = None,
) -> InversionResult:
    """Solve ``forward(x) == target`` by damped stepping.

    Args:
        forward: Continuous function with a single root near ``seed``
        target: Value forward should produce
        seed: Starting estimate (defaults to ``target``)
        step: Initial step (EngineConfig.inverter_initial_step)
        epsilon: Residual tolerance (EngineConfig.inverter_epsilon)
        max_iterations: Iteration ceiling (EngineConfig.inverter_max_iterations)
        warn: Emit ConvergenceExhausted on exhaustion (EngineConfig.warn_on_exhaustion)

    Returns:
        InversionResult holding the best estimate seen, converged or not
    """
    config = load_config()
    step = config.inverter_initial_step if step is None else step
    epsilon = config.inverter_epsilon if epsilon is None else epsilon
    max_iterations = config.inverter_max_iterations if max_iterations is None else max_iterations
    warn = config.warn_on_exhaustion if warn is None else warn

    if step == 0 or not math.isfinite(step):
        raise ValueError(f"step must be finite and non-zero, got {step}")
    if epsilon <= 0:
        raise ValueError(f"epsilon must be positive, got {epsilon}")
    if max_iterations <= 0:
        raise ValueError(f"max_iterations must be positive, got {max_iterations}")

    x = float(target if seed is None else seed)
    tolerance = max(epsilon, _ULP_FLOOR * math.ulp(target)) if math.isfinite(target) else epsilon

    err = forward(x) - target
    initial = abs(err)
    best_x, best_err = x, initial
    prev = math.inf
    count = 0

    while math.isfinite(best_err) and best_err >= tolerance and count < max_iterations:
        # Moved away from the root: reverse with a smaller step
        if abs(err) > abs(prev):
            step *= -0.5

        moved = x + step
        if moved == x:
            # Step is below the spacing of doubles near x; nothing left to gain
            break
        x = moved
        prev = err
        count += 1

        err = forward(x) - target
        if abs(err) < best_err:
            best_x, best_err = x, abs(err)

    converged = best_err < tolerance
    result = InversionResult(
        value=best_x,
        residual=best_err,
        initial_residual=initial,
        iterations=count,
        converged=converged,
        tolerance=tolerance,
    )

    if converged:
        log.debug("damped search converged: target=%r value=%r iterations=%d", target, best_x, count)
    else:
        log.debug(
            "damped search exhausted: target=%r value=%r residual=%.3e iterations=%d",
            target, best_x, best_err, count,
        )
        if warn:
            py_warnings.warn(
                ConvergenceExhausted(target, best_x, best_err, count), stacklevel=2
            )

    return result


def inverse_of(
    forward: Callable[[float], float],
    *,
    seed: Optional[Callable[[float], float]] = None,
    epsilon: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> Callable[[NumberLike], Number]:
    """Wrap a float function's damped-search inverse as a Number converter.

    ``seed`` maps the target to a first approximation of the unknown.
    Settings left as None are read from the configuration at call time.
    """
    def converter(value: NumberLike) -> Number:
        target = as_number(value).to_double()
        start = seed(target) if seed is not None else None
        result = damped_search(
            forward,
            target,
            seed=start,
            epsilon=epsilon,
            max_iterations=max_iterations,
        )
        return Double(result.value)

    return converter
