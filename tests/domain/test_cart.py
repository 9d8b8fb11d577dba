"""Unit tests for the cart aggregates."""

import time
from datetime import datetime, timedelta, timezone

import pytest

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.cart import Cart, CartLine, SavedCart, default_cart_name, lines_total
from cashier.domain.model.order import CheckoutRequest
from cashier.domain.model.value_objects import Money

T0 = datetime(2026, 3, 5, 14, 30, tzinfo=timezone.utc)
T1 = datetime(2026, 3, 5, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def jakarta_time(monkeypatch):
    """Run the test with the process clock on UTC+7."""
    monkeypatch.setenv("TZ", "WIB-7")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def _line(product_id: str = "1", qty: int = 1, price: str = "15000") -> CartLine:
    return CartLine(
        product_id=product_id,
        sku=f"SKU-{product_id}",
        name=f"Item {product_id}",
        unit_price=Money.of(price),
        quantity=qty,
    )


class TestCartLine:

    def test_line_total(self):
        assert _line(qty=3, price="2500").line_total == Money.of("7500")

    @pytest.mark.parametrize("qty", [0, -1])
    def test_non_positive_quantity_rejected(self, qty):
        with pytest.raises(ValidationError, match="must be positive"):
            _line(qty=qty)

    def test_bool_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            _line(qty=True)

    def test_with_quantity_returns_new_line(self):
        line = _line(qty=2)
        bumped = line.with_quantity(3)
        assert bumped.quantity == 3
        assert line.quantity == 2


class TestCart:

    def test_put_inserts_then_replaces_in_place(self):
        cart = Cart()
        cart.put(_line("1"))
        cart.put(_line("2"))
        cart.put(_line("1", qty=5))

        assert [(line.product_id, line.quantity) for line in cart.lines] == [("1", 5), ("2", 1)]

    def test_quantity_of_absent_product(self):
        assert Cart().quantity_of("x") == 0

    def test_total(self):
        cart = Cart(lines=[_line("1", 2, "1000"), _line("2", 1, "500")])
        assert cart.total == Money.of("2500")

    def test_empty_total_is_zero(self):
        assert Cart().total == Money.zero()

    def test_find_by_sku(self):
        cart = Cart(lines=[_line("7")])
        assert cart.find_by_sku("SKU-7").product_id == "7"
        assert cart.find_by_sku("nope") is None

    def test_reset_clears_identity(self):
        cart = Cart(lines=[_line()], cart_id="cart-1", name="Lunch")
        cart.reset()
        assert cart.is_empty
        assert cart.cart_id is None
        assert cart.name is None

    def test_copy_lines_is_detached(self):
        cart = Cart(lines=[_line()])
        copied = cart.copy_lines()
        copied.clear()
        assert len(cart.lines) == 1


class TestSavedCart:

    def test_create_computes_total_and_timestamps(self):
        saved = SavedCart.create([_line("1", 2, "1000"), _line("2", 3, "10")], now=T0, name="Lunch")

        assert saved.total == Money.of("2030")
        assert saved.created_at == saved.updated_at == T0
        assert saved.name == "Lunch"
        assert saved.id.startswith("cart-")

    def test_create_default_name(self, jakarta_time):
        saved = SavedCart.create([_line()], now=T0, name="  ")
        assert saved.name == "Cart 05/03/26 21:30"

    def test_create_without_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            SavedCart.create([], now=T0)

    def test_ids_are_unique(self):
        ids = {SavedCart.create([_line()], now=T0).id for _ in range(20)}
        assert len(ids) == 20

    def test_replace_items_preserves_identity(self):
        saved = SavedCart.create([_line("1")], now=T0, name="Lunch")
        original_id = saved.id

        saved.replace_items([_line("1"), _line("2", 2, "5")], now=T1, name="Lunch Updated")

        assert saved.id == original_id
        assert saved.created_at == T0
        assert saved.updated_at == T1
        assert saved.name == "Lunch Updated"
        assert saved.total == Money.of("15010")

    def test_replace_items_keeps_name_when_blank(self):
        saved = SavedCart.create([_line()], now=T0, name="Lunch")
        saved.replace_items([_line()], now=T1, name="")
        assert saved.name == "Lunch"

    def test_recompute_total_fixes_stale_value(self):
        saved = SavedCart.create([_line("1", 2, "100")], now=T0)
        saved.total = Money.of("999")

        assert saved.recompute_total() is True
        assert saved.total == Money.of("200")
        assert saved.recompute_total() is False

    def test_quantity_of(self):
        saved = SavedCart.create([_line("1", 4)], now=T0)
        assert saved.quantity_of("1") == 4
        assert saved.quantity_of("2") == 0


class TestCheckoutRequest:

    def test_from_lines(self):
        request = CheckoutRequest.from_lines([_line("1", 2, "100")], "Sari")
        assert request.customer_name == "Sari"
        assert request.grand_total == Money.of("200")

    def test_defaults_customer(self):
        assert CheckoutRequest.from_lines([_line()]).customer_name == "Walk-in Customer"

    def test_empty_rejected(self):
        with pytest.raises(ValidationError):
            CheckoutRequest.from_lines([])


def test_lines_total_empty():
    assert lines_total([]) == Money.zero()


class TestDefaultCartName:

    def test_uses_local_wall_clock(self, jakarta_time):
        assert default_cart_name(datetime(2026, 1, 1, 18, 5, tzinfo=timezone.utc)) == "Cart 02/01/26 01:05"

    def test_same_instant_same_name(self, jakarta_time):
        other_zone = T0.astimezone(timezone(timedelta(hours=-5)))
        assert default_cart_name(other_zone) == default_cart_name(T0)
