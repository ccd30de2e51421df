# quantitykit/core/catalog.py
# -----------------------------------------------------------------------------
# Sample unit catalog
#
# Length, time, power, volume, energy, solid angle and angular momentum
# units plus the decibel power ratio, built only through the construction
# API in quantitykit.core.units. Base units are mks: m, s, W, m³, J, sr, J·s.
# -----------------------------------------------------------------------------

from __future__ import annotations

import math

from quantitykit.core.numbers import Double, Number
from quantitykit.core.units import (
    UnitDefinition,
    cubed,
    prefixed,
    product,
    squared,
)

# ───────────────────────────── Length ─────────────────────────────

METERS = UnitDefinition("meters", ("m",), singular="meter", metric_base=True)
CENTIMETERS = prefixed(METERS, "centi")
DECIMETERS = prefixed(METERS, "deci")
FEET = UnitDefinition("feet", ("ft",), singular="foot", scale_factor=Double(0.3048))
INCHES = UnitDefinition("inches", ("in",), singular="inch", scale_factor=Double(0.0254))
YARDS = UnitDefinition("yards", ("yd",), singular="yard", scale_factor=Double(0.9144))

# ───────────────────────────── Time & Power ─────────────────────────────

SECONDS = UnitDefinition("seconds", ("s",), singular="second", metric_base=True)
HOURS = UnitDefinition("hours", ("h",), singular="hour", scale_factor=3600)
WATTS = UnitDefinition("watts", ("W",), singular="watt", metric_base=True)
KILOWATTS = prefixed(WATTS, "kilo")

# ───────────────────────────── Volume ─────────────────────────────

CUBIC_METERS = cubed(METERS)
LITERS = cubed(DECIMETERS, name="liters")
CUBIC_CENTIMETERS = cubed(CENTIMETERS)
CUBIC_FEET = cubed(FEET)
CUBIC_INCHES = cubed(INCHES)
CUBIC_YARDS = cubed(YARDS)

ACRE_FOOT = UnitDefinition("acre foot", singular="acre foot", scale_factor=Double(1.23348183754752e3))
BARRELS = UnitDefinition(
    "barrels (other liquids, 31.5 gal)",
    ("bbl",),
    singular="barrel (other liquids, 31.5 gal)",
    scale_factor=Double(0.11924),
)
BARRELS_PETROLEUM = UnitDefinition(
    "barrels (petroleum, 42 gal)",
    singular="barrel (petroleum, 42 gal)",
    scale_factor=Double(1.589873e-1),
)
BUSHELS = UnitDefinition("bushels (U.S.)", ("bu",), singular="bushel (U.S.)", scale_factor=Double(3.523907016688e-2))
CUPS = UnitDefinition("cups", scale_factor=Double(2.365882365e-4))
FLUID_OUNCES = UnitDefinition("fluid ounces", singular="fluid ounce", scale_factor=Double(2.95735295625e-5))
GALLONS_US_LIQUID = UnitDefinition(
    "gallons (U.S. liquid)", singular="gallon (U.S. liquid)", scale_factor=Double(3.785411784e-3)
)
GALLONS_UK_LIQUID = UnitDefinition(
    "gallons (U.K. liquid)", singular="gallon (U.K. liquid)", scale_factor=Double(4.546087e-3)
)
PINTS_LIQUID = UnitDefinition("pints (U.S. liquid)", singular="pint (U.S. liquid)", scale_factor=Double(4.73176473e-4))
QUARTS_LIQUID = UnitDefinition("quarts (U.S. liquid)", singular="quart (U.S. liquid)", scale_factor=Double(9.4635295e-4))
TABLESPOONS = UnitDefinition("tablespoons", ("Tbsp",), scale_factor=Double(1.478676478125e-5))
TEASPOONS = UnitDefinition("teaspoons", ("tsp",), scale_factor=Double(4.92892159375e-6))

STERES = CUBIC_METERS

# ───────────────────────────── Energy ─────────────────────────────

JOULES = UnitDefinition("joules", ("J",), singular="joule", metric_base=True)
KILOJOULES = prefixed(JOULES, "kilo")
ELECTRON_VOLTS = UnitDefinition("electron volts", ("eV",), singular="electron volt", scale_factor=Double(1.602176634e-19))
BTU_INTERNATIONAL_TABLE = UnitDefinition("Btu (IT)", scale_factor=Double(1.055056e3))
BTU_THERMO = UnitDefinition("Btu (thermochemical)", scale_factor=Double(1.054350e3))
CALORIES_INTERNATIONAL_TABLE = UnitDefinition("calories (IT)", singular="calorie (IT)", scale_factor=Double(4.1868))
CALORIES_THERMO = UnitDefinition(
    "calories (thermochemical)", singular="calorie (thermochemical)", scale_factor=Double(4.184)
)
CALORIES_KG_THERMO = UnitDefinition(
    "calories (kg, thermochemical)", singular="calorie (kg, thermochemical)", scale_factor=Double(4.184e3)
)
ERGS = UnitDefinition("ergs", scale_factor=Double(1.0e-7), metric_base=True)
FOOT_POUNDS_FORCE = UnitDefinition(
    "foot pounds force", ("ft lbf",), singular="foot pound force", scale_factor=Double(1.3558179)
)
THERMS = UnitDefinition("therms", scale_factor=Double(1.0551e8))
TONS_TNT = UnitDefinition("tons (equivalent TNT)", singular="ton (equivalent TNT)", scale_factor=Double(4.184e9))
KILOWATT_HOURS = product(KILOWATTS, HOURS, name="kilowatt hours")
WATT_HOURS = product(WATTS, HOURS, name="watt hours")
WATT_SECONDS = product(WATTS, SECONDS, name="watt seconds")

KILOCALORIES_THERMO = CALORIES_KG_THERMO

# ───────────────────────────── Solid Angle ─────────────────────────────

RADIANS = UnitDefinition("radians", ("rad",), singular="radian", metric_base=True)
DEGREES = UnitDefinition("degrees", ("°", "deg"), singular="degree", scale_factor=Double(math.pi / 180.0))

STERADIANS = UnitDefinition("steradians", ("sr",), singular="steradian", metric_base=True)
MILLISTERADIANS = prefixed(STERADIANS, "milli")
SPATS = UnitDefinition("spats", ("sp",), scale_factor=Double(12.566371))
SPHERES = UnitDefinition("spheres", singular="sphere", scale_factor=Double(4.0 * math.pi))
HEMISPHERES = UnitDefinition("hemispheres", singular="hemisphere", scale_factor=Double(2.0 * math.pi))
SQUARE_DEGREES = squared(DEGREES, name="square degrees")

# ───────────────────────────── Angular Momentum ─────────────────────────────

JOULE_SECONDS = product(JOULES, SECONDS, name="joule seconds")
PLANCK_UNITS = UnitDefinition("planck units", ("h",), scale_factor=Double(6.62607015e-34))
H_BAR = UnitDefinition("h-bar", ("ħ",), scale_factor=Double(1.054571817e-34))

# ───────────────────────────── Logarithmic ─────────────────────────────

def _decibels_to_ratio(value: Number) -> Number:
    return Double(10.0 ** (value.to_double() / 10.0))


def _ratio_to_decibels(value: Number) -> Number:
    return Double(10.0 * math.log10(value.to_double()))


DECIBELS = UnitDefinition(
    "decibels",
    ("dB",),
    singular="decibel",
    is_log=True,
    forward_converter=_decibels_to_ratio,
    inverse_converter=_ratio_to_decibels,
)
