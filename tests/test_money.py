"""
Unit tests for the Cents money type
"""
from decimal import Decimal
from fractions import Fraction

import pytest

from app.core.money import Cents, CentsType


class TestCents:
    """Tests for Cents arithmetic and presentation"""

    @pytest.mark.unit
    def test_display_form_is_zero_padded(self):
        assert str(Cents(1234)) == "12.34"
        assert str(Cents(1205)) == "12.05"
        assert str(Cents(7)) == "0.07"
        assert str(Cents(0)) == "0.00"

    @pytest.mark.unit
    def test_display_form_keeps_sign(self):
        assert str(Cents(-5)) == "-0.05"
        assert str(Cents(-1234)) == "-12.34"

    @pytest.mark.unit
    def test_arithmetic_stays_in_cents(self):
        total = Cents(1000) + Cents(250)
        rest = Cents(1000) - 250

        assert isinstance(total, Cents)
        assert isinstance(rest, Cents)
        assert total == 1250
        assert rest == 750
        assert isinstance(sum([Cents(1), Cents(2)]), Cents)

    @pytest.mark.unit
    def test_float_is_rejected(self):
        with pytest.raises(TypeError):
            Cents(10.5)

        with pytest.raises(TypeError):
            Cents(100) + 0.5

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [Decimal("10.5"), Fraction(21, 2), "10.5"])
    def test_non_integral_values_are_rejected(self, value):
        with pytest.raises(ValueError):
            Cents(value)

    @pytest.mark.unit
    def test_integral_decimal_and_string_are_accepted(self):
        assert Cents(Decimal("1000")) == 1000
        assert type(Cents(Decimal("1000"))) is Cents
        assert Cents("1000") == 1000

    @pytest.mark.unit
    def test_as_float_is_presentation_only(self):
        assert Cents(1234).as_float() == pytest.approx(12.34)
        assert Cents(100000).as_float() == 1000.0


class TestCentsType:
    """Tests for the SQLAlchemy column type"""

    @pytest.mark.unit
    def test_round_trip_through_storage_values(self):
        column_type = CentsType()

        assert column_type.process_bind_param(Cents(42), None) == 42
        assert type(column_type.process_bind_param(Cents(42), None)) is int
        assert column_type.process_result_value(42, None) == Cents(42)
        assert isinstance(column_type.process_result_value(42, None), Cents)
        assert column_type.process_result_value(None, None) is None
