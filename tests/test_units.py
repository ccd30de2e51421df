import math

import pytest

from quantitykit.core import catalog
from quantitykit.core.errors import UnsupportedConversion
from quantitykit.core.numbers import Double, Integer, Precise
from quantitykit.core.units import (
    UnitDefinition,
    convert,
    cubed,
    from_base,
    prefixed,
    product,
    quotient,
    searched_unit,
    squared,
    to_base,
)

CELSIUS = UnitDefinition("degrees Celsius", ("°C",), offset=Precise("273.15"))
FAHRENHEIT = UnitDefinition(
    "degrees Fahrenheit",
    ("°F",),
    scale_factor=Precise("5") / Precise("9"),
    offset=Precise("459.67"),
)
KELVIN = UnitDefinition("kelvin", ("K",), metric_base=True)
BELS = UnitDefinition("bels", ("B",), is_log=True)


class TestAffineConversion:
    def test_to_base_scales(self):
        assert to_base(Integer(2), catalog.FEET) == Double(0.6096)

    def test_offset_is_applied_before_scale(self):
        assert to_base(Precise("0"), CELSIUS) == Precise("273.15")
        assert from_base(Precise("273.15"), CELSIUS) == 0

    def test_precise_input_stays_precise(self):
        result = to_base(Precise("1.5"), catalog.FEET)
        assert isinstance(result, Precise)
        assert result == Precise("0.4572")

    def test_identity_unit_keeps_integer(self):
        result = to_base(Integer(5), KELVIN)
        assert isinstance(result, Integer)
        assert from_base(result, KELVIN) == 5

    def test_plain_numbers_are_accepted(self):
        assert catalog.HOURS.to_base(2) == 7200

    def test_convert_between_units(self):
        result = convert(Precise("212"), FAHRENHEIT, CELSIUS)
        assert result.to_double() == pytest.approx(100.0, abs=1e-12)

    def test_round_trip_affine_units(self, rng):
        units = [catalog.FEET, catalog.CUBIC_FEET, catalog.ACRE_FOOT, catalog.KILOWATT_HOURS,
                 catalog.SPHERES, catalog.SQUARE_DEGREES, catalog.H_BAR, CELSIUS]
        for unit in units:
            for _ in range(20):
                v = Double(rng.uniform(-1e6, 1e6))
                back = from_base(to_base(v, unit), unit)
                assert back.to_double() == pytest.approx(v.to_double(), rel=1e-12, abs=1e-8)


class TestLogarithmicUnits:
    def test_affine_conversion_rejected(self):
        with pytest.raises(UnsupportedConversion):
            to_base(Integer(3), BELS)
        with pytest.raises(UnsupportedConversion):
            from_base(Integer(3), BELS)

    def test_affine_form_rejected_even_with_converters(self):
        with pytest.raises(UnsupportedConversion):
            catalog.DECIBELS.affine_to_base(Integer(10))

    def test_converters_are_used(self):
        assert catalog.DECIBELS.to_base(Integer(20)).to_double() == pytest.approx(100.0)
        assert catalog.DECIBELS.from_base(Integer(1000)).to_double() == pytest.approx(30.0)

    @pytest.mark.parametrize("derive", [cubed, squared, lambda u: prefixed(u, "kilo")])
    def test_derivation_rejected(self, derive):
        with pytest.raises(UnsupportedConversion):
            derive(catalog.DECIBELS)

    def test_composition_rejected(self):
        with pytest.raises(UnsupportedConversion):
            product(catalog.WATTS, BELS)


class TestConstruction:
    def test_units_are_immutable(self):
        with pytest.raises(AttributeError):
            catalog.FEET.scale_factor = Double(1.0)

    def test_zero_scale_rejected(self):
        with pytest.raises(ValueError, match="zero scale factor"):
            UnitDefinition("nothing", scale_factor=0)

    def test_converters_come_in_pairs(self):
        with pytest.raises(ValueError, match="both converters"):
            UnitDefinition("half", forward_converter=lambda v: v)

    def test_single_symbol_string(self):
        unit = UnitDefinition("parsecs", "pc")
        assert unit.symbols == ("pc",)
        assert unit.symbol == "pc"

    def test_symbol_falls_back_to_name(self):
        assert catalog.CUPS.symbol == "cups"


class TestDerivedUnits:
    def test_cubed(self):
        assert catalog.CUBIC_FEET.name == "cubic feet"
        assert catalog.CUBIC_FEET.symbol == "ft³"
        assert catalog.CUBIC_FEET.scale_factor.to_double() == pytest.approx(0.028316846592)

    def test_squared(self):
        assert catalog.SQUARE_DEGREES.scale_factor.to_double() == pytest.approx((math.pi / 180) ** 2)

    def test_product(self):
        assert catalog.KILOWATT_HOURS.scale_factor.to_double() == pytest.approx(3.6e6)
        assert catalog.KILOWATT_HOURS.symbol == "kWh"

    def test_quotient(self):
        meters_per_second = quotient(catalog.METERS, catalog.SECONDS)
        assert meters_per_second.name == "meters per second"
        assert meters_per_second.symbol == "m/s"
        feet_per_hour = quotient(catalog.FEET, catalog.HOURS)
        assert feet_per_hour.scale_factor.to_double() == pytest.approx(0.3048 / 3600)

    def test_prefixed(self):
        assert catalog.KILOJOULES.name == "kilojoules"
        assert catalog.KILOJOULES.symbol == "kJ"
        assert catalog.KILOJOULES.to_base(Integer(2)) == 2000
        assert catalog.MILLISTERADIANS.scale_factor.to_double() == pytest.approx(1e-3)

    def test_unknown_prefix(self):
        with pytest.raises(ValueError, match="Unknown SI prefix"):
            prefixed(catalog.JOULES, "mega-ultra")

    def test_offset_units_cannot_be_derived(self):
        with pytest.raises(UnsupportedConversion):
            squared(CELSIUS)

    def test_searched_units_cannot_be_derived(self):
        unit = searched_unit("cubes", lambda x: x ** 3, seed=lambda t: t)
        with pytest.raises(UnsupportedConversion):
            cubed(unit)


class TestSearchedUnit:
    def test_inverse_found_by_search(self):
        # base -> unit: y = x + 0.001 sin(x); unit -> base has no closed form
        unit = searched_unit("wobble", lambda x: x + 0.001 * math.sin(x))
        for target in (0.5, 10.0, 1234.5):
            base = unit.to_base(Double(target)).to_double()
            assert base + 0.001 * math.sin(base) == pytest.approx(target, abs=1e-8)

    def test_affine_seed_is_used(self):
        calls = []

        def forward(x):
            calls.append(x)
            return 2.0 * x + 1.0

        unit = searched_unit("doubled", forward, scale_factor=0.5, offset=-1.0)
        result = unit.to_base(Double(7.0))
        assert result.to_double() == pytest.approx(3.0, abs=1e-8)
        assert calls[0] == pytest.approx(3.0)

    def test_inverse_direction_is_closed_form(self):
        unit = searched_unit("shifted", lambda x: x + 5.0)
        assert unit.from_base(Integer(1)) == Double(6.0)
