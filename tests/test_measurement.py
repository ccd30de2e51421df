import pytest

from quantitykit.core import catalog
from quantitykit.core.errors import UnsupportedConversion
from quantitykit.core.measurement import Measurement
from quantitykit.core.numbers import Double, Integer, Precise


class TestMeasurement:
    def test_value_is_lifted(self):
        m = Measurement(3, catalog.FEET)
        assert isinstance(m.value, Integer)

    def test_rejects_non_units(self):
        with pytest.raises(UnsupportedConversion):
            Measurement(1, "feet")

    def test_base_value(self):
        m = Measurement(Precise("10"), catalog.FEET)
        assert m.base_value == Precise("3.048")

    def test_in_units(self):
        m = Measurement(Integer(1), catalog.CUBIC_FEET).in_units(catalog.CUBIC_INCHES)
        assert m.unit is catalog.CUBIC_INCHES
        assert m.value.to_double() == pytest.approx(1728.0)

    def test_in_same_units_is_identity(self):
        m = Measurement(Integer(1), catalog.FEET)
        assert m.in_units(catalog.FEET) is m

    def test_add_through_base_keeps_left_unit(self):
        total = Measurement(Integer(1), catalog.YARDS) + Measurement(Integer(3), catalog.FEET)
        assert total.unit is catalog.YARDS
        assert total.value.to_double() == pytest.approx(2.0)

    def test_subtract(self):
        diff = Measurement(Integer(1), catalog.KILOWATT_HOURS) - Measurement(Integer(600), catalog.WATT_HOURS)
        assert diff.value.to_double() == pytest.approx(0.4)

    def test_scalar_multiply_and_divide(self):
        m = Measurement(Integer(4), catalog.TEASPOONS)
        assert (m * 3).value == 12
        assert (3 * m).value == 12
        assert (m / 2).value == 2.0

    def test_measurement_product_is_not_defined(self):
        m = Measurement(Integer(4), catalog.FEET)
        with pytest.raises(TypeError):
            m * m

    def test_negation(self):
        assert (-Measurement(Integer(4), catalog.FEET)).value == -4

    def test_equality_across_units(self):
        assert Measurement(Integer(1), catalog.SPHERES) == Measurement(Integer(2), catalog.HEMISPHERES)
        assert Measurement(Integer(1), catalog.FEET) != Measurement(Integer(1), catalog.YARDS)

    def test_precise_equality_is_exact(self):
        a = Measurement(Precise("12"), catalog.INCHES)
        b = Measurement(Precise("1"), catalog.FEET)
        assert a == b
        assert hash(a) == hash(b)

    def test_ordering_through_base(self):
        assert Measurement(Integer(1), catalog.FEET) < Measurement(Integer(1), catalog.YARDS)
        assert Measurement(Integer(1), catalog.KILOJOULES) > Measurement(Integer(1), catalog.CALORIES_THERMO)

    def test_from_base(self):
        m = Measurement.from_base(Double(1.0), catalog.LITERS)
        assert m.value.to_double() == pytest.approx(1000.0)

    def test_str(self):
        assert str(Measurement(Integer(5), catalog.FEET)) == "5 ft"
