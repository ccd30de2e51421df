# quantitykit/core/numbers.py
# -----------------------------------------------------------------------------
# Numeric kinds: the closed family of value representations
#
#   Integer    signed arbitrary-range integer
#   Double     IEEE double (finite or infinite), no uncertainty
#   Imaginary  a double tagged as the imaginary component of a complex number
#   Complex    (real: Integer | Double, imag: Imaginary)
#   Precise    exact decimal: sign, unscaled integer, base-10 exponent
#
# Every kind is an immutable dataclass. Operators and comparisons are
# dispatched through quantitykit.core.promotion, which owns the promotion
# table; nothing here decides a result kind.
# -----------------------------------------------------------------------------

from __future__ import annotations

import cmath
import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import IntEnum
from fractions import Fraction
from typing import Any, ClassVar, Union, final

from quantitykit.core.errors import MalformedDecimal, UnsupportedConversion

__all__ = [
    "Kind",
    "Number",
    "Integer",
    "Double",
    "Imaginary",
    "Complex",
    "Precise",
    "NumberLike",
    "as_number",
]

NumberLike = Union["Number", int, float, complex, Decimal]

# Plain decimal literal: optional sign, digits with optional fraction, optional exponent
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class Kind(IntEnum):
    """Variant tags, ordered by promotion width."""
    INTEGER = 0
    DOUBLE = 1
    IMAGINARY = 2
    COMPLEX = 3
    PRECISE = 4


def _promotion():
    # Deferred: promotion imports this module for the variant classes
    from quantitykit.core import promotion
    return promotion


class Number(ABC):
    """Common protocol of all numeric kinds."""

    kind: ClassVar[Kind]

    # ───────────── conversions ─────────────

    @abstractmethod
    def to_double(self) -> float:
        """Floating approximation of the real axis component.

        Exact values beyond the float range saturate to a signed infinity.
        """

    @abstractmethod
    def to_int(self) -> int:
        """Integer part of the real axis component (exact for Integer)."""

    @abstractmethod
    def to_complex(self) -> complex:
        pass

    @property
    @abstractmethod
    def is_zero(self) -> bool:
        pass

    @property
    @abstractmethod
    def is_integral(self) -> bool:
        pass

    def __float__(self) -> float:
        return self.to_double()

    def __int__(self) -> int:
        return self.to_int()

    def __complex__(self) -> complex:
        return self.to_complex()

    def __bool__(self) -> bool:
        return not self.is_zero

    # ───────────── arithmetic ─────────────

    def _binary(self, op_name: str, left: Any, right: Any) -> Any:
        promotion = _promotion()
        try:
            lhs = as_number(left)
            rhs = as_number(right)
        except UnsupportedConversion:
            return NotImplemented
        return promotion.apply(promotion.Op[op_name], lhs, rhs)

    def __add__(self, other: Any) -> Any:
        return self._binary("ADD", self, other)

    def __radd__(self, other: Any) -> Any:
        return self._binary("ADD", other, self)

    def __sub__(self, other: Any) -> Any:
        return self._binary("SUB", self, other)

    def __rsub__(self, other: Any) -> Any:
        return self._binary("SUB", other, self)

    def __mul__(self, other: Any) -> Any:
        return self._binary("MUL", self, other)

    def __rmul__(self, other: Any) -> Any:
        return self._binary("MUL", other, self)

    def __truediv__(self, other: Any) -> Any:
        return self._binary("DIV", self, other)

    def __rtruediv__(self, other: Any) -> Any:
        return self._binary("DIV", other, self)

    def __neg__(self) -> "Number":
        return _promotion().negate(self)

    def __pos__(self) -> "Number":
        return self

    def __abs__(self) -> "Number":
        return _promotion().absolute(self)

    # ───────────── comparison ─────────────

    def __eq__(self, other: Any) -> bool:
        try:
            rhs = as_number(other)
        except UnsupportedConversion:
            return NotImplemented
        return _promotion().equal(self, rhs)

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def _hash_key(self) -> Any:
        return self.to_complex()

    def __hash__(self) -> int:
        # Equal values share a floating approximation, so they share a hash;
        # exact values past the float range hash as rationals instead
        return hash(self._hash_key())

    def _order(self, other: Any) -> Any:
        try:
            rhs = as_number(other)
        except UnsupportedConversion:
            return NotImplemented
        return _promotion().compare(self, rhs)

    def __lt__(self, other: Any) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c < 0

    def __le__(self, other: Any) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c <= 0

    def __gt__(self, other: Any) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c > 0

    def __ge__(self, other: Any) -> bool:
        c = self._order(other)
        return c if c is NotImplemented else c >= 0


# ───────────────────────────── Variants ─────────────────────────────

@final
@dataclass(frozen=True, eq=False)
class Integer(Number):
    """Exact signed integer of any magnitude."""

    value: int
    kind: ClassVar[Kind] = Kind.INTEGER

    zero: ClassVar["Integer"]
    one: ClassVar["Integer"]
    ten: ClassVar["Integer"]
    hundred: ClassVar["Integer"]
    thousand: ClassVar["Integer"]

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise UnsupportedConversion(
                f"Integer requires an int, got {type(self.value).__name__}",
                value=self.value,
            )

    def to_double(self) -> float:
        try:
            return float(self.value)
        except OverflowError:
            return math.copysign(math.inf, self.value)

    def to_int(self) -> int:
        return self.value

    def to_fraction(self) -> Fraction:
        return Fraction(self.value)

    def to_complex(self) -> complex:
        return complex(self.to_double())

    def _hash_key(self) -> Any:
        approx = self.to_double()
        return approx if math.isfinite(approx) else self.value

    @property
    def is_zero(self) -> bool:
        return self.value == 0

    @property
    def is_integral(self) -> bool:
        return True

    def __str__(self) -> str:
        return str(self.value)


Integer.zero = Integer(0)
Integer.one = Integer(1)
Integer.ten = Integer(10)
Integer.hundred = Integer(100)
Integer.thousand = Integer(1000)


@final
@dataclass(frozen=True, eq=False)
class Double(Number):
    """IEEE double precision real."""

    value: float
    kind: ClassVar[Kind] = Kind.DOUBLE

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise UnsupportedConversion(
                f"Double requires a float, got {type(self.value).__name__}",
                value=self.value,
            )
        object.__setattr__(self, "value", float(self.value))

    def to_double(self) -> float:
        return self.value

    def to_int(self) -> int:
        if not math.isfinite(self.value):
            raise UnsupportedConversion(f"cannot convert {self.value} to an integer")
        return int(self.value)

    def to_fraction(self) -> Fraction:
        return Fraction(self.value)

    def to_complex(self) -> complex:
        return complex(self.value)

    @property
    def is_zero(self) -> bool:
        return self.value == 0.0

    @property
    def is_integral(self) -> bool:
        return self.value.is_integer()

    def __str__(self) -> str:
        return repr(self.value)


@final
@dataclass(frozen=True, eq=False)
class Imaginary(Number):
    """Imaginary number ``value * i`` with no real part."""

    value: float
    kind: ClassVar[Kind] = Kind.IMAGINARY

    def __post_init__(self) -> None:
        value = self.value
        if isinstance(value, (Integer, Double)):
            value = value.to_double()
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise UnsupportedConversion(
                f"Imaginary requires a real coefficient, got {type(value).__name__}",
                value=value,
            )
        object.__setattr__(self, "value", float(value))

    def to_double(self) -> float:
        return 0.0

    def to_int(self) -> int:
        return 0

    def to_complex(self) -> complex:
        return complex(0.0, self.value)

    @property
    def is_zero(self) -> bool:
        return self.value == 0.0

    @property
    def is_integral(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.value!r}i"


@final
@dataclass(frozen=True, eq=False)
class Complex(Number):
    """Complex number with an Integer or Double real part."""

    real: Union[Integer, Double]
    imag: Imaginary
    kind: ClassVar[Kind] = Kind.COMPLEX

    def __post_init__(self) -> None:
        real = self.real
        if isinstance(real, bool):
            raise UnsupportedConversion("Complex real part cannot be a bool")
        if isinstance(real, int):
            real = Integer(real)
        elif isinstance(real, float):
            real = Double(real)
        if not isinstance(real, (Integer, Double)):
            raise UnsupportedConversion(
                f"Complex real part must be Integer or Double, got {type(real).__name__}",
                real=real,
            )
        imag = self.imag
        if not isinstance(imag, Imaginary):
            imag = Imaginary(imag)
        object.__setattr__(self, "real", real)
        object.__setattr__(self, "imag", imag)

    def to_double(self) -> float:
        return self.real.to_double()

    def to_int(self) -> int:
        return self.real.to_int()

    def to_complex(self) -> complex:
        return complex(self.real.to_double(), self.imag.value)

    def _hash_key(self) -> Any:
        approx = self.to_complex()
        if cmath.isfinite(approx) or not isinstance(self.real, Integer):
            return approx
        if not math.isfinite(self.imag.value):
            return approx
        # Integer real part past the float range
        if self.imag.is_zero:
            return self.real._hash_key()
        return (self.real.to_int(), self.imag.value)

    @property
    def is_zero(self) -> bool:
        return self.real.is_zero and self.imag.is_zero

    @property
    def is_integral(self) -> bool:
        return self.imag.is_zero and self.real.is_integral

    def __str__(self) -> str:
        sign = "-" if math.copysign(1.0, self.imag.value) < 0 else "+"
        return f"{self.real} {sign} {abs(self.imag.value)!r}i"


@final
@dataclass(frozen=True, eq=False)
class Precise(Number):
    """Exact decimal value.

    Accepts decimal text, ``int``, ``decimal.Decimal`` or ``float`` (through
    its shortest round-tripping decimal string). Text must be a plain
    decimal literal; anything else raises MalformedDecimal.
    """

    value: Decimal
    kind: ClassVar[Kind] = Kind.PRECISE

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _to_decimal(self.value))

    @property
    def sign(self) -> int:
        return -1 if self.value.is_signed() else 1

    @property
    def unscaled(self) -> int:
        """Magnitude digits as an integer."""
        digits = self.value.as_tuple().digits
        return int("".join(str(d) for d in digits)) if digits else 0

    @property
    def exponent(self) -> int:
        return int(self.value.as_tuple().exponent)

    @property
    def scale(self) -> int:
        """Digits after the decimal point (negative exponent)."""
        return -self.exponent

    def to_decimal(self) -> Decimal:
        return self.value

    def to_double(self) -> float:
        return float(self.value)

    def to_int(self) -> int:
        return int(self.value)

    def to_fraction(self) -> Fraction:
        return Fraction(self.value)

    def to_complex(self) -> complex:
        return complex(float(self.value))

    def _hash_key(self) -> Any:
        approx = float(self.value)
        return approx if math.isfinite(approx) else self.to_fraction()

    @property
    def is_zero(self) -> bool:
        return self.value.is_zero()

    @property
    def is_integral(self) -> bool:
        return self.value == self.value.to_integral_value()

    def __str__(self) -> str:
        return str(self.value)


def _to_decimal(raw: Any) -> Decimal:
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, bool):
        raise UnsupportedConversion("Precise cannot be built from a bool")
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        if not math.isfinite(raw):
            raise UnsupportedConversion(f"Precise cannot represent {raw!r}", value=raw)
        value = Decimal(repr(raw))
    elif isinstance(raw, str):
        text = raw.strip()
        if not _DECIMAL_RE.match(text):
            raise MalformedDecimal(f"Invalid decimal literal {raw!r}", text=raw)
        try:
            value = Decimal(text)
        except InvalidOperation as e:
            raise MalformedDecimal(f"Invalid decimal literal {raw!r}", text=raw) from e
    else:
        raise UnsupportedConversion(
            f"Precise cannot be built from {type(raw).__name__}", value=raw
        )

    if not value.is_finite():
        raise MalformedDecimal(f"Precise values must be finite, got {value}", text=str(raw))
    return value


# ───────────────────────────── Coercion ─────────────────────────────

def as_number(value: Any) -> Number:
    """Lift a plain Python number into its numeric kind."""
    if isinstance(value, Number):
        return value
    if isinstance(value, bool):
        raise UnsupportedConversion("bool is not a numeric kind", value=value)
    if isinstance(value, int):
        return Integer(value)
    if isinstance(value, float):
        return Double(value)
    if isinstance(value, complex):
        return Complex(Double(value.real), Imaginary(value.imag))
    if isinstance(value, Decimal):
        return Precise(value)
    raise UnsupportedConversion(
        f"{type(value).__name__} is not a numeric kind", value=value
    )
