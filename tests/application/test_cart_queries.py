"""Tests for the read-side use cases: show cart, list saved carts, search stock."""

from datetime import datetime, timezone

from cashier.application.list_saved_carts import ListSavedCartsHandler
from cashier.application.search_stock import SearchStockHandler
from cashier.application.show_cart import ShowCartHandler
from cashier.domain.model.cart import CartLine, CartSession, SavedCart
from cashier.domain.model.value_objects import Money
from cashier.domain.service.reservation_ledger import ReservationLedger
from tests.fakes import FakeCartStore, FakeOrderSubmission, FakeStockCatalog, record

CREATED = datetime(2026, 2, 1, 8, 15, tzinfo=timezone.utc)


def _line(product_id: str, qty: int, price: str = "10.00") -> CartLine:
    return CartLine(product_id, f"SKU-{product_id}", f"Product {product_id}", Money.of(price), qty)


def _ledger(carts=None, records=None, page_size: int = 100) -> ReservationLedger:
    if records is None:
        records = [record("1", 10), record("2", 4, price="2.50")]
    return ReservationLedger(
        FakeCartStore(carts),
        FakeStockCatalog(records),
        FakeOrderSubmission(),
        page_size=page_size,
    )


class TestShowCart:

    def test_empty_cart(self):
        dto = ShowCartHandler(_ledger()).handle()
        assert dto.items == []
        assert dto.total == "0.00"
        assert dto.cart_id is None
        assert not dto.unsaved_changes

    def test_lines_with_remaining_availability(self):
        ledger = _ledger()
        ledger.search_stock("")
        ledger.add_line("1", Money.of("10.00"), "Product 1", "SKU-1")
        ledger.adjust_quantity("1", 2)

        dto = ShowCartHandler(ledger).handle()

        assert len(dto.items) == 1
        item = dto.items[0]
        assert item.quantity == 3
        assert item.line_total == "30.00"
        assert item.available == 7
        assert dto.total == "30.00"
        assert dto.unsaved_changes

    def test_loaded_cart_has_identity(self):
        saved = SavedCart.create([_line("1", 2)], now=CREATED, name="Table 4")
        ledger = _ledger([saved])
        ledger.load_cart(saved.id)

        dto = ShowCartHandler(ledger).handle()

        assert dto.cart_id == saved.id
        assert dto.name == "Table 4"
        assert not dto.unsaved_changes

    def test_availability_loaded_for_restored_lines(self):
        ledger = _ledger()
        ledger.restore(CartSession(None, None, (_line("2", 1, "2.50"),)))

        dto = ShowCartHandler(ledger).handle()

        assert dto.items[0].available == 3

    def test_line_whose_sku_no_longer_matches_falls_back_to_full_feed(self):
        ledger = _ledger()
        renamed = CartLine("1", "OLD-SKU", "Product 1", Money.of("10.00"), 1)
        ledger.restore(CartSession(None, None, (renamed,)))

        dto = ShowCartHandler(ledger).handle()

        assert dto.items[0].available == 9

    def test_unknown_availability_when_feed_fails(self):
        catalog = FakeStockCatalog([record("1", 10)])
        catalog.fail_at_offsets = {0}
        ledger = ReservationLedger(FakeCartStore(), catalog, FakeOrderSubmission())
        ledger.restore(CartSession(None, None, (_line("1", 1),)))

        dto = ShowCartHandler(ledger).handle()

        assert dto.items[0].available is None
        assert dto.total == "10.00"


class TestListSavedCarts:

    def test_lists_with_current_marker(self):
        first = SavedCart.create([_line("1", 2)], now=CREATED, name="A")
        second = SavedCart.create([_line("2", 1, "2.50")], now=CREATED, name="B")
        ledger = _ledger([first, second])
        ledger.load_cart(second.id)

        rows = ListSavedCartsHandler(ledger).handle()

        assert [row.name for row in rows] == ["A", "B"]
        assert [row.is_current for row in rows] == [False, True]
        assert rows[0].item_count == 2
        assert rows[0].total == "20.00"
        assert rows[0].created_at == "2026-02-01 08:15 UTC"

    def test_empty(self):
        assert ListSavedCartsHandler(_ledger()).handle() == []


class TestSearchStock:

    def test_reports_reservations_from_saved_carts(self):
        saved = SavedCart.create([_line("1", 3)], now=CREATED)
        rows = SearchStockHandler(_ledger([saved])).handle("")

        by_id = {row.product_id: row for row in rows}
        assert by_id["1"].sellable == 10
        assert by_id["1"].reserved == 3
        assert by_id["1"].available == 7
        assert by_id["2"].available == 4
        assert by_id["2"].unit_price == "2.50"

    def test_first_page_only_by_default(self):
        records = [record(str(i), 1) for i in range(5)]
        rows = SearchStockHandler(_ledger(records=records, page_size=2)).handle("")
        assert len(rows) == 2

    def test_load_all(self):
        records = [record(str(i), 1) for i in range(5)]
        rows = SearchStockHandler(_ledger(records=records, page_size=2)).handle("", load_all=True)
        assert len(rows) == 5

    def test_filters_by_query(self):
        rows = SearchStockHandler(_ledger()).handle("SKU-2")
        assert [row.product_id for row in rows] == ["2"]
