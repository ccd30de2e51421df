# quantitykit/core/formatting.py
# -----------------------------------------------------------------------------
# SI style display of numeric values
#
#   • Digit groups of three separated by a space (or a unicode thin space)
#     once a run has more than four digits, on both sides of the decimal
#     point: 12 345, 12 345.678 91
#   • Values outside [1e-3, 1e6) switch to scientific notation: 1.3E9
#   • EngineeringFormatSI keeps the exponent a multiple of three:
#     123.345 x 10^3, or 123.345 × 10³ in unicode mode
#
# parse() reverses both the grouping and the exponent notations.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Optional, Tuple

from quantitykit.core.errors import MalformedDecimal, UnsupportedConversion
from quantitykit.core.measurement import Measurement
from quantitykit.core.numbers import (
    Complex,
    Double,
    Imaginary,
    Integer,
    Number,
    Precise,
    as_number,
)

__all__ = [
    "NumberFormatSI",
    "EngineeringFormatSI",
    "unicode_exponent",
]

log = logging.getLogger(__name__)

THIN_SPACE = "\u2009"
TIMES = "\u00d7"

_SUPERSCRIPTS = {
    "0": "⁰", "1": "¹", "2": "²", "3": "³", "4": "⁴",
    "5": "⁵", "6": "⁶", "7": "⁷", "8": "⁸", "9": "⁹",
    "-": "⁻", "+": "⁺",
}
_FROM_SUPERSCRIPT = {v: k for k, v in _SUPERSCRIPTS.items()}

_EXPONENT_MARKERS = (" x 10", f" {TIMES} 10", "E", "e")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")

# Plain notation is kept for magnitudes in [1e-3, 1e6)
_PLAIN_MIN = Decimal("0.001")
_PLAIN_MAX = Decimal("1000000")


def unicode_exponent(exponent: int) -> str:
    """Superscript form of an integer exponent, e.g. -6 -> '⁻⁶'."""
    return "".join(_SUPERSCRIPTS[c] for c in str(exponent))


def _exponent_index(text: str) -> int:
    indices = [text.find(marker) for marker in _EXPONENT_MARKERS]
    found = [i for i in indices if i != -1]
    return min(found) if found else -1


def _split_sign(text: str) -> Tuple[str, str]:
    if text[:1] in ("-", "+"):
        return ("-" if text[0] == "-" else ""), text[1:]
    return "", text


class NumberFormatSI:
    """SI display conventions for Numbers, plain numbers and Measurements."""

    def __init__(self, unicode: bool = False):
        self.unicode = unicode

    @property
    def separator(self) -> str:
        return THIN_SPACE if self.unicode else " "

    # ───────────── formatting ─────────────

    def format(self, value: Any) -> str:
        if isinstance(value, Measurement):
            value = value.base_value
        number = as_number(value)
        trim = not isinstance(number, Precise)

        real_str: Optional[str] = None
        imag_str: Optional[str] = None

        if isinstance(number, Integer):
            real_str = str(number.value)
        elif isinstance(number, Double):
            real_str = repr(number.value)
            if not math.isfinite(number.value):
                return real_str
        elif isinstance(number, Imaginary):
            imag_str = self._coefficient(number.value)
        elif isinstance(number, Complex):
            if not number.real.is_zero:
                real_str = (
                    str(number.real.to_int()) if number.real.is_integral else str(number.real)
                )
            if not number.imag.is_zero:
                imag_str = self._coefficient(number.imag.value)
            if real_str is None and imag_str is None:
                real_str = "0"
        elif isinstance(number, Precise):
            real_str = str(number.value)
        else:
            raise UnsupportedConversion(f"cannot format {type(number).__name__}")

        if real_str and real_str != "0":
            real_str = self.adjust_for_exponent(real_str, trim=trim)
        if imag_str:
            imag_str = self.adjust_for_exponent(imag_str, trim=trim)

        parts = []
        if real_str:
            parts.append(self.insert_spaces(real_str))
        if imag_str:
            if parts:
                if imag_str.startswith("-"):
                    parts.append(" - ")
                    imag_str = imag_str[1:]
                else:
                    parts.append(" + ")
            spaced = self.insert_spaces(imag_str)
            exp_index = _exponent_index(spaced)
            if exp_index == -1:
                parts.append(f"{spaced}i")
            else:
                parts.append(f"{spaced[:exp_index]}i{spaced[exp_index:]}")
        return "".join(parts)

    @staticmethod
    def _coefficient(value: float) -> str:
        if math.isfinite(value) and value == int(value) and abs(value) < 1e16:
            return str(int(value))
        return repr(value)

    def adjust_for_exponent(self, text: str, trim: bool = True) -> str:
        """Switch to ``dE n`` notation outside [1e-3, 1e6)."""
        try:
            d = Decimal(text)
        except InvalidOperation as e:
            raise MalformedDecimal(f"not a decimal number: {text!r}", text=text) from e
        if not d.is_finite():
            return text

        magnitude = abs(d)
        if d.is_zero() or _PLAIN_MIN <= magnitude < _PLAIN_MAX:
            if "e" in text.lower():
                return f"{d:f}"
            return text

        sign = "-" if d.is_signed() else ""
        digits = "".join(str(x) for x in d.as_tuple().digits)
        mantissa = f"{digits[0]}.{digits[1:] or '0'}"
        if trim:
            mantissa = self.remove_insignificant_zeros(mantissa)
        return f"{sign}{mantissa}E{d.adjusted()}"

    def insert_spaces(self, text: str) -> str:
        """Group digit runs longer than four into triads."""
        exp_index = _exponent_index(text)
        number_part = text[:exp_index] if exp_index != -1 else text
        exponent_part = text[exp_index:] if exp_index != -1 else ""

        sign, body = _split_sign(number_part)
        whole, dot, fraction = body.partition(".")
        sep = self.separator

        if len(whole) > 4:
            head = len(whole) % 3
            groups = [whole[:head]] if head else []
            groups.extend(whole[i:i + 3] for i in range(head, len(whole), 3))
            whole = sep.join(groups)

        if len(fraction) > 4:
            fraction = sep.join(fraction[i:i + 3] for i in range(0, len(fraction), 3))

        return f"{sign}{whole}{dot}{fraction}{exponent_part}"

    @staticmethod
    def remove_insignificant_zeros(text: str) -> str:
        """Drop trailing fractional zeros, keeping one digit after the point."""
        if not text:
            return text
        dot = text.find(".")
        if dot == -1:
            return text
        e = text.lower().find("e")
        end = len(text) if e == -1 else e
        mantissa = text[:end]
        stripped = mantissa.rstrip("0")
        if stripped.endswith("."):
            stripped += "0"
        return stripped + text[end:]

    # ───────────── parsing ─────────────

    def parse(self, text: str, precise: bool = False) -> Number:
        """Read back a formatted value as an Integer, Double or Precise."""
        adjusted = text.replace(" ", "").replace(THIN_SPACE, "")
        adjusted = adjusted.replace("x10^", "E").replace(f"{TIMES}10", "E").replace("x10", "E")
        adjusted = "".join(_FROM_SUPERSCRIPT.get(c, c) for c in adjusted)

        if precise:
            return Precise(adjusted)
        if _INTEGER_RE.match(adjusted):
            return Integer(int(adjusted))
        try:
            return Double(float(adjusted))
        except ValueError as e:
            log.debug("unparseable number text %r (normalized %r)", text, adjusted)
            raise MalformedDecimal(f"Invalid number text {text!r}", text=text) from e


class EngineeringFormatSI(NumberFormatSI):
    """Scientific notation whose exponent is a multiple of three."""

    def adjust_for_exponent(self, text: str, trim: bool = True) -> str:
        try:
            d = Decimal(text.strip())
        except InvalidOperation as e:
            raise MalformedDecimal(f"not a decimal number: {text!r}", text=text) from e
        if not d.is_finite():
            return text
        if d.is_zero():
            return "0.0"

        sign = "-" if d.is_signed() else ""
        digits = "".join(str(x) for x in d.as_tuple().digits)
        exponent = d.adjusted()
        engineering = (exponent // 3) * 3
        shift = exponent - engineering

        digits = digits.ljust(shift + 1, "0")
        mantissa = f"{digits[:shift + 1]}.{digits[shift + 1:] or '0'}"
        if trim:
            mantissa = self.remove_insignificant_zeros(mantissa)

        result = f"{sign}{mantissa}"
        if engineering != 0:
            if self.unicode:
                result = f"{result} {TIMES} 10{unicode_exponent(engineering)}"
            else:
                result = f"{result} x 10^{engineering}"
        return result
