import pytest

from quantitykit.core import catalog
from quantitykit.core.errors import MalformedDecimal
from quantitykit.core.formatting import (
    EngineeringFormatSI,
    NumberFormatSI,
    THIN_SPACE,
    unicode_exponent,
)
from quantitykit.core.measurement import Measurement
from quantitykit.core.numbers import Complex, Double, Imaginary, Integer, Precise


@pytest.fixture
def si():
    return NumberFormatSI()


@pytest.fixture
def eng():
    return EngineeringFormatSI()


class TestGrouping:
    def test_short_runs_are_left_alone(self, si):
        assert si.format(Integer(1234)) == "1234"
        assert si.format(Double(0.1234)) == "0.1234"

    def test_whole_part_groups(self, si):
        assert si.format(Integer(12345)) == "12 345"
        assert si.format(Double(100000.0)) == "100 000.0"

    def test_both_sides_group(self, si):
        assert si.format(Double(12345.67891)) == "12 345.678 91"

    def test_sign_stays_outside_groups(self, si):
        assert si.format(Integer(-123456)) == "-123 456"

    def test_thin_space_in_unicode_mode(self):
        assert NumberFormatSI(unicode=True).format(Integer(12345)) == f"12{THIN_SPACE}345"


class TestScientific:
    def test_large_values(self, si):
        assert si.format(Double(1.3e9)) == "1.3E9"

    def test_small_values(self, si):
        assert si.format(Double(0.000123)) == "1.23E-4"
        assert si.format(Double(-2.5e-7)) == "-2.5E-7"

    def test_mantissa_groups(self, si):
        assert si.format(Integer(299792458)) == "2.997 924 58E8"

    def test_precise_keeps_trailing_zeros(self, si):
        assert si.format(Precise("12.50")) == "12.50"
        assert si.format(Precise("1234567.500")) == "1.234 567 500E6"

    def test_non_finite_passes_through(self, si):
        assert si.format(Double(float("inf"))) == "inf"
        assert si.format(Double(float("nan"))) == "nan"


class TestComplexRendering:
    def test_complex(self, si):
        assert si.format(Complex(Integer(3), Imaginary(4.0))) == "3 + 4i"
        assert si.format(Complex(Double(1.5), Imaginary(-2.0))) == "1.5 - 2i"

    def test_imaginary_with_exponent(self, si):
        assert si.format(Imaginary(2e7)) == "2.0iE7"

    def test_complex_zero(self, si):
        assert si.format(Complex(Integer(0), Imaginary(0.0))) == "0"


class TestEngineering:
    def test_exponent_multiple_of_three(self, eng):
        assert eng.format(Double(123345.0)) == "123.345 x 10^3"
        assert eng.format(Double(0.00012)) == "120.0 x 10^-6"

    def test_no_exponent_in_unit_range(self, eng):
        assert eng.format(Integer(42)) == "42.0"

    def test_unicode(self):
        fmt = EngineeringFormatSI(unicode=True)
        assert fmt.format(Double(123345.0)) == "123.345 × 10³"
        assert fmt.format(Double(0.00012)) == "120.0 × 10⁻⁶"

    def test_zero(self, eng):
        assert eng.format(Double(0.0)) == "0.0"


class TestHelpers:
    def test_remove_insignificant_zeros(self):
        strip = NumberFormatSI.remove_insignificant_zeros
        assert strip("1.2300") == "1.23"
        assert strip("5.000") == "5.0"
        assert strip("12") == "12"
        assert strip("1.500E3") == "1.5E3"

    def test_unicode_exponent(self):
        assert unicode_exponent(-6) == "⁻⁶"
        assert unicode_exponent(12) == "¹²"

    def test_measurement_formats_base_value(self, si):
        assert si.format(Measurement(Integer(2), catalog.FEET)) == "0.6096"


class TestParse:
    def test_grouped_integer(self, si):
        value = si.parse("12 345")
        assert isinstance(value, Integer)
        assert value == 12345

    def test_thin_spaces(self, si):
        assert si.parse(f"12{THIN_SPACE}345.678{THIN_SPACE}91") == Double(12345.67891)

    def test_scientific(self, si):
        assert si.parse("1.3E9") == Double(1.3e9)

    def test_engineering(self, si):
        assert si.parse("123.345 x 10^3").to_double() == pytest.approx(123345.0)
        assert si.parse("120.0 × 10⁻⁶").to_double() == pytest.approx(0.00012)

    def test_precise(self, si):
        assert si.parse("1 234.500", precise=True) == Precise("1234.5")

    def test_reads_back_formatted_text(self, si, eng):
        for value in (Double(12345.67891), Double(1.3e9), Double(0.000123)):
            assert si.parse(si.format(value)).to_double() == pytest.approx(value.to_double())
            assert eng.parse(eng.format(value)).to_double() == pytest.approx(value.to_double())

    def test_malformed(self, si):
        with pytest.raises(MalformedDecimal):
            si.parse("twelve")
        with pytest.raises(MalformedDecimal):
            si.parse("1.2.3", precise=True)
