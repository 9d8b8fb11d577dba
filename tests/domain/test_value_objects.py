"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.value_objects import Money


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "IDR"

    def test_of_factory_from_string(self):
        m = Money.of("25.99")
        assert m.amount == Decimal("25.99")

    def test_of_factory_from_int(self):
        m = Money.of(15000)
        assert m.amount == Decimal("15000")

    def test_of_factory_from_float_is_exact_on_str(self):
        assert Money.of(0.1) + Money.of(0.2) == Money.of("0.3")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_non_decimal_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10)

    def test_addition(self):
        result = Money.of("10") + Money.of("5.50")
        assert result == Money.of("15.50")

    def test_multiplication_by_int(self):
        result = Money.of("7.50") * 3
        assert result == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("10"), "IDR") + Money(Decimal("5"), "USD")

    def test_zero(self):
        assert Money.zero().amount == Decimal("0")
        assert Money.zero().is_zero

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("NaN")

    def test_int_times_money(self):
        assert 3 * Money.of("2.50") == Money.of("7.50")

    def test_total(self):
        assert Money.total([Money.of("1.10"), Money.of("2.20"), Money.of("3")]) == Money.of("6.30")

    def test_total_of_nothing_is_zero(self):
        assert Money.total([]) == Money.zero()

    def test_as_float_rounds_to_cents(self):
        assert Money.of("21000.505").as_float() == 21000.51

    def test_str_formatting(self):
        assert str(Money.of("15")) == "15.00"
        assert str(Money.of("9.5")) == "9.50"
        assert str(Money.of("0.125")) == "0.13"

    def test_comparison_operators(self):
        assert Money.of("5") < Money.of("10")
        assert Money.of("10") > Money.of("5")
        assert Money.of("10") >= Money.of("10")
        assert Money.of("10") <= Money.of("10")
