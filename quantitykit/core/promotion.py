# quantitykit/core/promotion.py
# -----------------------------------------------------------------------------
# Promotion rules: result kinds and kernels for every operator and kind pair
#
# Policy, by increasing width:
#   Integer op Integer      Integer for + - *, Double for / (never truncates)
#   Integer op Double       Double
#   real op Imaginary       Complex (Imaginary op Imaginary: Imaginary for + -,
#                           Double for * /)
#   anything op Complex     Complex
#   anything op Precise     Precise ("precision is contagious"); Imaginary and
#                           Complex have no Precise analogue and are rejected
#
# Division by a zero value raises DivisionByZero for every pair except
# Double / Double, which keeps IEEE semantics (signed infinity, NaN).
#
# Equality is exact: operands are compared as exact rationals. When a Precise
# takes part, Double operands enter through their shortest decimal string,
# which is the same promotion arithmetic applies.
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from decimal import Context, Decimal
from enum import Enum
from fractions import Fraction
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple, Union

from quantitykit.core.config import decimal_context, load_config
from quantitykit.core.errors import DivisionByZero, UnsupportedConversion
from quantitykit.core.numbers import (
    Complex,
    Double,
    Imaginary,
    Integer,
    Kind,
    Number,
    Precise,
)

__all__ = [
    "Op",
    "RESULT_KINDS",
    "result_kind",
    "apply",
    "negate",
    "absolute",
    "equal",
    "compare",
]


class Op(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"


# ───────────────────────────── Promotion Table ─────────────────────────────

_I = Kind.INTEGER
_D = Kind.DOUBLE
_M = Kind.IMAGINARY
_C = Kind.COMPLEX
_P = Kind.PRECISE
_X = None  # unsupported combination

# Rows: left operand. Columns: right operand in Kind order
#                 INTEGER DOUBLE IMAG  COMPLEX PRECISE
_ADDITIVE = {
    _I:          (_I,     _D,    _C,   _C,     _P),
    _D:          (_D,     _D,    _C,   _C,     _P),
    _M:          (_C,     _C,    _M,   _C,     _X),
    _C:          (_C,     _C,    _C,   _C,     _X),
    _P:          (_P,     _P,    _X,   _X,     _P),
}

_MULTIPLICATIVE = {
    _I:          (_I,     _D,    _C,   _C,     _P),
    _D:          (_D,     _D,    _C,   _C,     _P),
    _M:          (_C,     _C,    _D,   _C,     _X),
    _C:          (_C,     _C,    _C,   _C,     _X),
    _P:          (_P,     _P,    _X,   _X,     _P),
}

_DIVISION = {
    _I:          (_D,     _D,    _C,   _C,     _P),
    _D:          (_D,     _D,    _C,   _C,     _P),
    _M:          (_C,     _C,    _D,   _C,     _X),
    _C:          (_C,     _C,    _C,   _C,     _X),
    _P:          (_P,     _P,    _X,   _X,     _P),
}

_GRIDS = {
    Op.ADD: _ADDITIVE,
    Op.SUB: _ADDITIVE,
    Op.MUL: _MULTIPLICATIVE,
    Op.DIV: _DIVISION,
}


def _build_table() -> Mapping[Tuple[Op, Kind, Kind], Optional[Kind]]:
    table: Dict[Tuple[Op, Kind, Kind], Optional[Kind]] = {}
    for op in Op:
        grid = _GRIDS[op]
        for left in Kind:
            row = grid[left]
            if len(row) != len(Kind):
                raise RuntimeError(f"promotion row {op.name}/{left.name} is incomplete")
            for right, result in zip(Kind, row):
                table[(op, left, right)] = result
    return MappingProxyType(table)


RESULT_KINDS = _build_table()


def result_kind(op: Op, left: Union[Kind, Number], right: Union[Kind, Number]) -> Optional[Kind]:
    """Kind produced by ``left op right``; None when the pair is unsupported."""
    lk = left.kind if isinstance(left, Number) else Kind(left)
    rk = right.kind if isinstance(right, Number) else Kind(right)
    return RESULT_KINDS[(op, lk, rk)]


# ───────────────────────────── Kernels ─────────────────────────────

def _integer_kernel(op: Op, a: Number, b: Number) -> Number:
    x, y = a.to_int(), b.to_int()
    if op is Op.ADD:
        return Integer(x + y)
    if op is Op.SUB:
        return Integer(x - y)
    if op is Op.MUL:
        return Integer(x * y)
    raise UnsupportedConversion("Integer division always widens to Double")


def _ieee_divide(x: float, y: float) -> float:
    if y != 0.0:
        return x / y
    if x == 0.0 or math.isnan(x):
        return math.nan
    return math.copysign(math.inf, x) * math.copysign(1.0, y)


def _double_kernel(op: Op, a: Number, b: Number) -> Number:
    if isinstance(a, Imaginary) and isinstance(b, Imaginary):
        # (ci)(di) = -cd, (ci)/(di) = c/d
        if op is Op.MUL:
            return Double(-(a.value * b.value))
        if b.is_zero:
            raise DivisionByZero(f"{a} / {b}", dividend=a, divisor=b)
        return Double(a.value / b.value)

    if op is Op.DIV:
        if isinstance(a, Double) and isinstance(b, Double):
            return Double(_ieee_divide(a.value, b.value))
        if b.is_zero:
            raise DivisionByZero(f"{a} / {b}", dividend=a, divisor=b)
        if isinstance(a, Integer) and isinstance(b, Integer):
            # Correctly rounded for any magnitude that fits a float
            try:
                return Double(a.value / b.value)
            except OverflowError:
                return Double(math.copysign(math.inf, a.value) * math.copysign(1.0, b.value))
        return Double(a.to_double() / b.to_double())

    x, y = a.to_double(), b.to_double()
    if op is Op.ADD:
        return Double(x + y)
    if op is Op.SUB:
        return Double(x - y)
    return Double(x * y)


def _imaginary_kernel(op: Op, a: Number, b: Number) -> Number:
    if op is Op.ADD:
        return Imaginary(a.value + b.value)
    if op is Op.SUB:
        return Imaginary(a.value - b.value)
    raise UnsupportedConversion(f"Imaginary {op.value} Imaginary is not Imaginary")


def _components(n: Number) -> Tuple[Number, float]:
    if isinstance(n, Complex):
        return n.real, n.imag.value
    if isinstance(n, Imaginary):
        return Integer.zero, n.value
    return n, 0.0


def _complex_kernel(op: Op, a: Number, b: Number) -> Number:
    re1, im1 = _components(a)
    re2, im2 = _components(b)

    if op is Op.ADD:
        return Complex(apply(Op.ADD, re1, re2), Imaginary(im1 + im2))
    if op is Op.SUB:
        return Complex(apply(Op.SUB, re1, re2), Imaginary(im1 - im2))
    if op is Op.MUL:
        real = apply(Op.MUL, re1, re2)
        if im1 != 0.0 and im2 != 0.0:
            real = apply(Op.SUB, real, Double(im1 * im2))
        imag = re1.to_double() * im2 + im1 * re2.to_double()
        return Complex(real, Imaginary(imag))

    if re2.is_zero and im2 == 0.0:
        raise DivisionByZero(f"{a} / {b}", dividend=a, divisor=b)
    if im2 == 0.0:
        return Complex(apply(Op.DIV, re1, re2), Imaginary(im1 / re2.to_double()))

    c, d = re2.to_double(), im2
    x = re1.to_double()
    den = c * c + d * d
    return Complex(Double((x * c + im1 * d) / den), Imaginary((im1 * c - x * d) / den))


def _as_decimal(n: Number) -> Decimal:
    if isinstance(n, Precise):
        return n.value
    if isinstance(n, Integer):
        return Decimal(n.value)
    if isinstance(n, Double):
        if not math.isfinite(n.value):
            raise UnsupportedConversion(f"{n.value!r} has no exact decimal form", value=n)
        return Decimal(repr(n.value))
    raise UnsupportedConversion(f"{n.kind.name} has no Precise analogue", value=n)


def _exact_context(x: Decimal, y: Decimal) -> Context:
    """Context wide enough that + - * of x and y are exact."""
    tx, ty = x.as_tuple(), y.as_tuple()
    digits = len(tx.digits) + len(ty.digits) + abs(tx.exponent - ty.exponent) + 2
    return Context(prec=max(digits, load_config().decimal_precision))


def _precise_kernel(op: Op, a: Number, b: Number) -> Number:
    x, y = _as_decimal(a), _as_decimal(b)
    if op is Op.DIV:
        if y.is_zero():
            raise DivisionByZero(f"{a} / {b}", dividend=a, divisor=b)
        return Precise(decimal_context().divide(x, y))

    ctx = _exact_context(x, y)
    if op is Op.ADD:
        return Precise(ctx.add(x, y))
    if op is Op.SUB:
        return Precise(ctx.subtract(x, y))
    return Precise(ctx.multiply(x, y))


_KERNELS: Mapping[Kind, Callable[[Op, Number, Number], Number]] = MappingProxyType({
    Kind.INTEGER: _integer_kernel,
    Kind.DOUBLE: _double_kernel,
    Kind.IMAGINARY: _imaginary_kernel,
    Kind.COMPLEX: _complex_kernel,
    Kind.PRECISE: _precise_kernel,
})

# Every kind the table can produce needs a kernel
_missing = {k for k in RESULT_KINDS.values() if k is not None} - set(_KERNELS)
if _missing:
    raise RuntimeError(f"no kernel for result kinds {sorted(k.name for k in _missing)}")


def apply(op: Op, left: Number, right: Number) -> Number:
    """Evaluate ``left op right`` under the promotion rules."""
    target = RESULT_KINDS[(op, left.kind, right.kind)]
    if target is None:
        raise UnsupportedConversion(
            f"{left.kind.name} {op.value} {right.kind.name} is not supported",
            op=op, left=left, right=right,
        )
    return _KERNELS[target](op, left, right)


# ───────────────────────────── Unary ─────────────────────────────

def negate(n: Number) -> Number:
    if isinstance(n, Integer):
        return Integer(-n.value)
    if isinstance(n, Double):
        return Double(-n.value)
    if isinstance(n, Imaginary):
        return Imaginary(-n.value)
    if isinstance(n, Complex):
        return Complex(negate(n.real), Imaginary(-n.imag.value))
    return Precise(n.value.copy_negate())


def absolute(n: Number) -> Number:
    """Magnitude; Imaginary and Complex magnitudes are Double."""
    if isinstance(n, Integer):
        return Integer(abs(n.value))
    if isinstance(n, Double):
        return Double(abs(n.value))
    if isinstance(n, Imaginary):
        return Double(abs(n.value))
    if isinstance(n, Complex):
        return Double(abs(n.to_complex()))
    return Precise(n.value.copy_abs())


# ───────────────────────────── Equality & Ordering ─────────────────────────────

def _is_finite(n: Number) -> bool:
    if isinstance(n, (Double, Imaginary)):
        return math.isfinite(n.value)
    if isinstance(n, Complex):
        return _is_finite(n.real) and math.isfinite(n.imag.value)
    return True


def _exact_float(x: float, decimal_floats: bool) -> Fraction:
    return Fraction(Decimal(repr(x))) if decimal_floats else Fraction(x)


def _exact_real(n: Number, decimal_floats: bool) -> Fraction:
    if isinstance(n, Double):
        return _exact_float(n.value, decimal_floats)
    return n.to_fraction()


def _exact_parts(n: Number, decimal_floats: bool) -> Tuple[Fraction, Fraction]:
    re, im = _components(n)
    return _exact_real(re, decimal_floats), _exact_float(im, decimal_floats)


def _equal_non_finite(a: Number, b: Number) -> bool:
    re1, im1 = _components(a)
    re2, im2 = _components(b)
    if im1 != im2:
        return False
    if _is_finite(re1) != _is_finite(re2):
        # An exact value is never infinite, however large
        return False
    if not _is_finite(re1):
        return re1.to_double() == re2.to_double()
    decimal_floats = Kind.PRECISE in (a.kind, b.kind)
    return _exact_real(re1, decimal_floats) == _exact_real(re2, decimal_floats)


def equal(a: Number, b: Number) -> bool:
    """Exact value equality across all kind pairs."""
    if not (_is_finite(a) and _is_finite(b)):
        return _equal_non_finite(a, b)
    decimal_floats = Kind.PRECISE in (a.kind, b.kind)
    return _exact_parts(a, decimal_floats) == _exact_parts(b, decimal_floats)


def _sign(x: Union[Fraction, float]) -> int:
    return (x > 0) - (x < 0)


def compare(a: Number, b: Number) -> Union[int, float]:
    """Three-way comparison: negative, zero, positive, or NaN when unordered.

    Defined for real values, for two Imaginary values, and for Complex values
    with a zero imaginary part; other pairs raise UnsupportedConversion.
    """
    if isinstance(a, Imaginary) and isinstance(b, Imaginary):
        x, y = a.value, b.value
        if math.isnan(x) or math.isnan(y):
            return math.nan
        return (x > y) - (x < y)

    re1, im1 = _components(a)
    re2, im2 = _components(b)
    if im1 != 0.0 or im2 != 0.0:
        raise UnsupportedConversion(
            f"{a.kind.name} and {b.kind.name} values with imaginary parts are not ordered",
            left=a, right=b,
        )

    if not (_is_finite(re1) and _is_finite(re2)):
        x, y = re1.to_double(), re2.to_double()
        if math.isnan(x) or math.isnan(y):
            return math.nan
        # Finite operands sit strictly between the infinities
        if _is_finite(re1):
            return -1 if y > 0 else 1
        if _is_finite(re2):
            return 1 if x > 0 else -1
        return (x > y) - (x < y)

    decimal_floats = Kind.PRECISE in (a.kind, b.kind)
    return _sign(_exact_real(re1, decimal_floats) - _exact_real(re2, decimal_floats))
