"""
Core numeric tower and unit conversion engine.

Numbers and their promotion rules, unit definitions with to_base/from_base
conversion, the damped-search inverter, and the SI number formatter. Unit
tables (time scales, the sample catalog) live in their own modules and are
imported explicitly.
"""

from .errors import (
    ConvergenceExhausted,
    DivisionByZero,
    ErrorClass,
    MalformedDecimal,
    QuantityError,
    UnsupportedConversion,
)
from .config import EngineConfig, configure_logging, load_config, reset_config
from .numbers import Complex, Double, Imaginary, Integer, Kind, Number, Precise, as_number
from .promotion import Op, result_kind
from .inverter import InversionResult, damped_search, inverse_of
from .units import UnitDefinition, convert, from_base, searched_unit, to_base
from .measurement import Measurement
from .formatting import EngineeringFormatSI, NumberFormatSI

__all__ = [
    # Errors
    "QuantityError",
    "ErrorClass",
    "DivisionByZero",
    "UnsupportedConversion",
    "MalformedDecimal",
    "ConvergenceExhausted",
    # Configuration
    "EngineConfig",
    "load_config",
    "reset_config",
    "configure_logging",
    # Numeric tower
    "Kind",
    "Number",
    "Integer",
    "Double",
    "Imaginary",
    "Complex",
    "Precise",
    "as_number",
    "Op",
    "result_kind",
    # Conversion
    "UnitDefinition",
    "to_base",
    "from_base",
    "convert",
    "searched_unit",
    "InversionResult",
    "damped_search",
    "inverse_of",
    "Measurement",
    # Display
    "NumberFormatSI",
    "EngineeringFormatSI",
]
