import math

import pytest

from quantitykit.core import catalog
from quantitykit.core.numbers import Double, Integer
from quantitykit.core.units import UnitDefinition, convert


def registered_units():
    return [
        (name, value)
        for name, value in vars(catalog).items()
        if isinstance(value, UnitDefinition)
    ]


class TestCatalogValues:
    def test_volume_factors(self):
        assert catalog.ACRE_FOOT.scale_factor == 1.23348183754752e3
        assert catalog.BARRELS.symbol == "bbl"
        assert catalog.GALLONS_US_LIQUID.to_base(Integer(1)).to_double() == pytest.approx(3.785411784e-3)

    def test_cubic_feet_derives_from_feet(self):
        assert catalog.CUBIC_FEET.scale_factor.to_double() == pytest.approx(0.3048 ** 3)

    def test_three_teaspoons_per_tablespoon(self):
        result = convert(Integer(3), catalog.TEASPOONS, catalog.TABLESPOONS)
        assert result.to_double() == pytest.approx(1.0)
        assert catalog.TEASPOONS.scale_factor == 4.92892159375e-6

    def test_liters(self):
        assert convert(Integer(1), catalog.LITERS, catalog.CUBIC_CENTIMETERS).to_double() == pytest.approx(1000.0)

    def test_gallon_in_liters(self):
        result = convert(Integer(1), catalog.GALLONS_US_LIQUID, catalog.LITERS)
        assert result.to_double() == pytest.approx(3.785411784)

    def test_solid_angle(self):
        assert catalog.SPHERES.scale_factor.to_double() == pytest.approx(4 * math.pi)
        full_sphere = convert(Integer(1), catalog.SPHERES, catalog.SQUARE_DEGREES)
        assert full_sphere.to_double() == pytest.approx(41252.96, rel=1e-6)

    def test_angular_momentum(self):
        ratio = convert(Integer(1), catalog.PLANCK_UNITS, catalog.H_BAR)
        assert ratio.to_double() == pytest.approx(2 * math.pi, rel=1e-9)

    def test_decibels_are_logarithmic(self):
        assert catalog.DECIBELS.is_log
        assert catalog.DECIBELS.to_base(Integer(10)).to_double() == pytest.approx(10.0)


class TestRoundTrip:
    def test_every_unit_round_trips(self, rng):
        for name, unit in registered_units():
            high = 60.0 if unit.is_log else 1e4
            for _ in range(10):
                value = rng.uniform(0.001, high)
                back = unit.from_base(unit.to_base(Double(value)))
                assert back.to_double() == pytest.approx(value, rel=1e-9), name
