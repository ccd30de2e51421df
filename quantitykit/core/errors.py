# quantitykit/core/errors.py
# -----------------------------------------------------------------------------
# Error taxonomy for the numeric tower and the unit conversion engine.
#
#   DivisionByZero         arithmetic on a zero-valued divisor
#   UnsupportedConversion  invalid kind combination, or a logarithmic unit
#                          treated as linear
#   MalformedDecimal       decimal text that cannot be parsed exactly
#   ConvergenceExhausted   warning category; the damped search hit its ceiling
# -----------------------------------------------------------------------------

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "ErrorClass",
    "QuantityError",
    "DivisionByZero",
    "UnsupportedConversion",
    "MalformedDecimal",
    "ConvergenceExhausted",
]


class ErrorClass(Enum):
    DIVISION_BY_ZERO = "division_by_zero"
    UNSUPPORTED_CONVERSION = "unsupported_conversion"
    MALFORMED_DECIMAL = "malformed_decimal"


class QuantityError(Exception):
    """Base exception for numeric and unit computations."""
    def __init__(self, message: str, error_class: ErrorClass, **context: Any):
        super().__init__(message)
        self.error_class = error_class
        self.context = context


class DivisionByZero(QuantityError, ZeroDivisionError):
    """Divisor has a zero value."""
    def __init__(self, message: str = "division by zero", **context: Any):
        super().__init__(message, ErrorClass.DIVISION_BY_ZERO, **context)


class UnsupportedConversion(QuantityError, TypeError):
    """Operation is not defined for the operands or the unit involved."""
    def __init__(self, message: str, **context: Any):
        super().__init__(message, ErrorClass.UNSUPPORTED_CONVERSION, **context)


class MalformedDecimal(QuantityError, ValueError):
    """Text is not a finite decimal literal."""
    def __init__(self, message: str, **context: Any):
        super().__init__(message, ErrorClass.MALFORMED_DECIMAL, **context)


class ConvergenceExhausted(RuntimeWarning):
    """The damped search stopped before meeting its tolerance.

    Informational only: the best value found is still returned to the caller.
    """
    def __init__(self, target: float, best: float, residual: float, iterations: int):
        super().__init__(
            f"search for {target!r} stopped after {iterations} iterations "
            f"(best={best!r}, residual={residual:.3e})"
        )
        self.target = target
        self.best = best
        self.residual = residual
        self.iterations = iterations
