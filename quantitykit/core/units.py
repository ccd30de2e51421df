# quantitykit/core/units.py
# -----------------------------------------------------------------------------
# Unit definitions and conversion to/from the base (mks) representation
#
#   affine units      base = (value + offset) * scale_factor
#   converter units   a forward (unit -> base) and inverse (base -> unit)
#                     function pair replaces the affine formula; scale_factor
#                     and offset then only seed the damped search
#   logarithmic units excluded from affine math and from derivation
#
# Units are immutable and built once at import time. Derived units (cubic
# feet, kilowatt hours, kilojoules, ...) are computed at construction; they
# keep no reference to the units they came from.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Optional, Tuple, Union

from quantitykit.core.errors import UnsupportedConversion
from quantitykit.core.inverter import inverse_of
from quantitykit.core.numbers import Double, Integer, Number, NumberLike, as_number

__all__ = [
    "Converter",
    "UnitDefinition",
    "to_base",
    "from_base",
    "convert",
    "cubed",
    "squared",
    "product",
    "quotient",
    "prefixed",
    "searched_unit",
    "SI_PREFIXES",
]

log = logging.getLogger(__name__)

Converter = Callable[[Number], NumberLike]

# name -> (symbol, power of ten)
SI_PREFIXES: Dict[str, Tuple[str, int]] = {
    "yotta": ("Y", 24),
    "zetta": ("Z", 21),
    "exa": ("E", 18),
    "peta": ("P", 15),
    "tera": ("T", 12),
    "giga": ("G", 9),
    "mega": ("M", 6),
    "kilo": ("k", 3),
    "hecto": ("h", 2),
    "deka": ("da", 1),
    "deci": ("d", -1),
    "centi": ("c", -2),
    "milli": ("m", -3),
    "micro": ("µ", -6),
    "nano": ("n", -9),
    "pico": ("p", -12),
    "femto": ("f", -15),
    "atto": ("a", -18),
    "zepto": ("z", -21),
    "yocto": ("y", -24),
}


@dataclass(frozen=True)
class UnitDefinition:
    """Immutable descriptor of a unit of measure."""

    name: str
    symbols: Tuple[str, ...] = ()
    singular: Optional[str] = None
    scale_factor: Number = Integer(1)
    offset: Number = Integer(0)
    is_log: bool = False
    metric_base: bool = False
    forward_converter: Optional[Converter] = field(default=None, compare=False, repr=False)
    inverse_converter: Optional[Converter] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("unit name cannot be empty")

        symbols = self.symbols
        if isinstance(symbols, str):
            symbols = (symbols,)
        object.__setattr__(self, "symbols", tuple(s for s in symbols if s))

        scale = as_number(self.scale_factor)
        if scale.is_zero:
            raise ValueError(f"unit {self.name!r} has a zero scale factor")
        object.__setattr__(self, "scale_factor", scale)
        object.__setattr__(self, "offset", as_number(self.offset))

        if (self.forward_converter is None) != (self.inverse_converter is None):
            raise ValueError(f"unit {self.name!r} needs both converters or neither")

    # ───────────── descriptors ─────────────

    @property
    def symbol(self) -> str:
        """Shortest display form: first symbol, else the name."""
        return self.symbols[0] if self.symbols else self.name

    @property
    def has_converters(self) -> bool:
        return self.forward_converter is not None

    @property
    def is_affine(self) -> bool:
        return not self.is_log and not self.has_converters

    # ───────────── conversion ─────────────

    def to_base(self, value: NumberLike) -> Number:
        """Value in this unit -> base representation."""
        v = as_number(value)
        if self.forward_converter is not None:
            return as_number(self.forward_converter(v))
        self._require_affine("to_base")
        return self.affine_to_base(v)

    def from_base(self, value: NumberLike) -> Number:
        """Base representation -> value in this unit."""
        v = as_number(value)
        if self.inverse_converter is not None:
            return as_number(self.inverse_converter(v))
        self._require_affine("from_base")
        return self.affine_from_base(v)

    def affine_to_base(self, value: NumberLike) -> Number:
        """``(value + offset) * scale_factor`` regardless of converters."""
        if self.is_log:
            raise UnsupportedConversion(
                f"{self.name} is logarithmic and has no affine form", unit=self.name
            )
        v = as_number(value)
        if not self.offset.is_zero:
            v = v + self.offset
        if self.scale_factor != 1:
            v = v * self.scale_factor
        return v

    def affine_from_base(self, value: NumberLike) -> Number:
        if self.is_log:
            raise UnsupportedConversion(
                f"{self.name} is logarithmic and has no affine form", unit=self.name
            )
        v = as_number(value)
        if self.scale_factor != 1:
            v = v / self.scale_factor
        if not self.offset.is_zero:
            v = v - self.offset
        return v

    def _require_affine(self, operation: str) -> None:
        if self.is_log:
            raise UnsupportedConversion(
                f"{operation}: {self.name} is logarithmic and cannot be converted linearly",
                unit=self.name,
            )

    def __str__(self) -> str:
        return self.symbol


# ───────────────────────────── Functional API ─────────────────────────────

def to_base(value: NumberLike, unit: UnitDefinition) -> Number:
    return unit.to_base(value)


def from_base(value: NumberLike, unit: UnitDefinition) -> Number:
    return unit.from_base(value)


def convert(value: NumberLike, from_unit: UnitDefinition, to_unit: UnitDefinition) -> Number:
    """Re-express ``value`` from one unit in another through the base representation."""
    if from_unit is to_unit:
        return as_number(value)
    return to_unit.from_base(from_unit.to_base(value))


# ───────────────────────────── Derived Units ─────────────────────────────

def _require_linear(unit: UnitDefinition, derivation: str) -> None:
    if unit.is_log:
        raise UnsupportedConversion(
            f"cannot derive {derivation} from logarithmic unit {unit.name}", unit=unit.name
        )
    if unit.has_converters or not unit.offset.is_zero:
        raise UnsupportedConversion(
            f"cannot derive {derivation} from non-linear unit {unit.name}", unit=unit.name
        )


def cubed(unit: UnitDefinition, name: Optional[str] = None) -> UnitDefinition:
    _require_linear(unit, "a cubic unit")
    s = unit.scale_factor
    return UnitDefinition(
        name=name or f"cubic {unit.name}",
        symbols=tuple(f"{a}³" for a in unit.symbols[:1]),
        singular=f"cubic {unit.singular}" if unit.singular else None,
        scale_factor=s * s * s,
    )


def squared(unit: UnitDefinition, name: Optional[str] = None) -> UnitDefinition:
    _require_linear(unit, "a square unit")
    s = unit.scale_factor
    return UnitDefinition(
        name=name or f"square {unit.name}",
        symbols=tuple(f"{a}²" for a in unit.symbols[:1]),
        singular=f"square {unit.singular}" if unit.singular else None,
        scale_factor=s * s,
    )


def product(a: UnitDefinition, b: UnitDefinition, name: Optional[str] = None) -> UnitDefinition:
    """Unit of ``a * b``, e.g. kilowatts times hours."""
    _require_linear(a, "a product unit")
    _require_linear(b, "a product unit")
    return UnitDefinition(
        name=name or f"{a.singular or a.name} {b.name}",
        symbols=(f"{a.symbols[0]}{b.symbols[0]}",) if a.symbols and b.symbols else (),
        scale_factor=a.scale_factor * b.scale_factor,
    )


def quotient(a: UnitDefinition, b: UnitDefinition, name: Optional[str] = None) -> UnitDefinition:
    """Unit of ``a / b``, e.g. meters per second."""
    _require_linear(a, "a quotient unit")
    _require_linear(b, "a quotient unit")
    return UnitDefinition(
        name=name or f"{a.name} per {b.singular or b.name}",
        symbols=(f"{a.symbols[0]}/{b.symbols[0]}",) if a.symbols and b.symbols else (),
        scale_factor=a.scale_factor / b.scale_factor,
    )


def prefixed(unit: UnitDefinition, prefix: str) -> UnitDefinition:
    """SI-prefixed variant, e.g. ``prefixed(joules, "kilo")``."""
    try:
        symbol, power = SI_PREFIXES[prefix]
    except KeyError:
        raise ValueError(f"Unknown SI prefix {prefix!r}") from None
    _require_linear(unit, f"a {prefix} unit")
    if not unit.metric_base:
        log.debug("applying SI prefix %s to non-metric unit %s", prefix, unit.name)
    return UnitDefinition(
        name=f"{prefix}{unit.name}",
        symbols=tuple(f"{symbol}{s}" for s in unit.symbols),
        singular=f"{prefix}{unit.singular}" if unit.singular else None,
        scale_factor=unit.scale_factor * Double(float(f"1e{power}")),
    )


# ───────────────────────────── Searched Units ─────────────────────────────

def searched_unit(
    name: str,
    from_base_fn: Callable[[float], float],
    *,
    symbols: Union[str, Tuple[str, ...]] = (),
    singular: Optional[str] = None,
    scale_factor: NumberLike = 1,
    offset: NumberLike = 0,
    seed: Optional[Callable[[float], float]] = None,
    epsilon: Optional[float] = None,
    max_iterations: Optional[int] = None,
) -> UnitDefinition:
    """Unit whose base -> unit direction is closed-form.

    The unit -> base direction is the damped search, seeded by ``seed`` or
    by the affine approximation ``(value + offset) * scale_factor``.
    """
    scale_n = as_number(scale_factor)
    offset_n = as_number(offset)

    def affine_seed(target: float) -> float:
        return (target + offset_n.to_double()) * scale_n.to_double()

    def closed_form(value: Number) -> Number:
        return Double(from_base_fn(value.to_double()))

    return UnitDefinition(
        name=name,
        symbols=symbols,
        singular=singular,
        scale_factor=scale_n,
        offset=offset_n,
        forward_converter=inverse_of(
            from_base_fn,
            seed=seed or affine_seed,
            epsilon=epsilon,
            max_iterations=max_iterations,
        ),
        inverse_converter=closed_form,
    )
