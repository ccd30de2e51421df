# quantitykit/core/measurement.py
# -----------------------------------------------------------------------------
# A numeric value paired with its unit of measure
#
# Arithmetic between measurements goes through the base representation and
# the result is expressed in the left operand's unit. No dimensional
# analysis is performed: adding a length to a volume is the caller's error.
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from quantitykit.core.errors import UnsupportedConversion
from quantitykit.core.numbers import Number, NumberLike, as_number
from quantitykit.core.units import UnitDefinition

__all__ = ["Measurement"]


@dataclass(frozen=True, eq=False)
class Measurement:
    """Immutable (value, unit) pair."""

    value: Number
    unit: UnitDefinition

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", as_number(self.value))
        if not isinstance(self.unit, UnitDefinition):
            raise UnsupportedConversion(
                f"Measurement unit must be a UnitDefinition, got {type(self.unit).__name__}"
            )

    @classmethod
    def from_base(cls, base_value: NumberLike, unit: UnitDefinition) -> "Measurement":
        return cls(unit.from_base(base_value), unit)

    @property
    def base_value(self) -> Number:
        return self.unit.to_base(self.value)

    def in_units(self, unit: UnitDefinition) -> "Measurement":
        """Same quantity re-expressed in ``unit``."""
        if unit is self.unit:
            return self
        return Measurement(unit.from_base(self.base_value), unit)

    # ───────────── arithmetic ─────────────

    def __add__(self, other: Any) -> Any:
        if not isinstance(other, Measurement):
            return NotImplemented
        return Measurement.from_base(self.base_value + other.base_value, self.unit)

    def __sub__(self, other: Any) -> Any:
        if not isinstance(other, Measurement):
            return NotImplemented
        return Measurement.from_base(self.base_value - other.base_value, self.unit)

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Measurement):
            return NotImplemented
        try:
            factor = as_number(other)
        except UnsupportedConversion:
            return NotImplemented
        return Measurement(self.value * factor, self.unit)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Any:
        if isinstance(other, Measurement):
            return NotImplemented
        try:
            divisor = as_number(other)
        except UnsupportedConversion:
            return NotImplemented
        return Measurement(self.value / divisor, self.unit)

    def __neg__(self) -> "Measurement":
        return Measurement(-self.value, self.unit)

    # ───────────── comparison ─────────────

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        if other.unit == self.unit:
            return self.value == other.value
        return self.base_value == other.base_value

    def __ne__(self, other: Any) -> bool:
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    def __hash__(self) -> int:
        return hash(self.base_value)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.base_value < other.base_value

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.base_value <= other.base_value

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.base_value > other.base_value

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, Measurement):
            return NotImplemented
        return self.base_value >= other.base_value

    def __str__(self) -> str:
        return f"{self.value} {self.unit.symbol}"
