"""Unit tests for stock records and the stock index."""

from datetime import date

import pytest

from cashier.domain.model.stock import ExpiryStatus, StockIndex, StockPage
from tests.fakes import record

TODAY = date(2026, 10, 17)


class TestExpiryStatus:

    @pytest.mark.parametrize(
        "expiry, expected",
        [
            (date(2026, 10, 16), ExpiryStatus.EXPIRED),
            (date(2026, 10, 17), ExpiryStatus.NEAR_EXPIRY),
            (date(2026, 10, 24), ExpiryStatus.NEAR_EXPIRY),
            (date(2026, 10, 25), ExpiryStatus.VALID),
        ],
    )
    def test_from_expiry_date(self, expiry, expected):
        assert ExpiryStatus.from_expiry_date(expiry, TODAY) == expected

    def test_custom_window(self):
        assert ExpiryStatus.from_expiry_date(date(2026, 10, 20), TODAY, near_expiry_days=1) == ExpiryStatus.VALID

    def test_only_expired_is_unsellable(self):
        assert ExpiryStatus.VALID.is_sellable
        assert ExpiryStatus.NEAR_EXPIRY.is_sellable
        assert not ExpiryStatus.EXPIRED.is_sellable


class TestStockIndex:

    def test_sums_sellable_batches_per_product(self):
        index = StockIndex(page_size=10)
        index.ingest(StockPage([
            record("1", 5),
            record("1", 2, ExpiryStatus.NEAR_EXPIRY),
            record("1", 9, ExpiryStatus.EXPIRED),
            record("2", 0),
        ]))

        assert index.sellable("1") == 7
        assert index.sellable("2") == 0
        assert set(index.products) == {"1", "2"}

    def test_accumulates_across_pages(self):
        index = StockIndex(page_size=2)
        index.ingest(StockPage([record("1", 1), record("2", 1)]))
        assert not index.exhausted
        index.ingest(StockPage([record("1", 4)]))

        assert index.sellable("1") == 5
        assert index.offset == 3
        assert index.is_complete

    def test_empty_page_exhausts(self):
        index = StockIndex(page_size=2)
        index.ingest(StockPage([]))
        assert index.exhausted

    def test_first_record_wins_product_details(self):
        index = StockIndex()
        first = record("1", 1, price="100")
        later = record("1", 1, price="999")
        index.ingest(StockPage([first, later]))
        assert index.products["1"].unit_price == first.unit_price

    def test_reset(self):
        index = StockIndex(page_size=1)
        index.ingest(StockPage([record("1", 1)]))
        index.fetch_failed = True

        index.reset("milk")

        assert index.search == "milk"
        assert index.offset == 0
        assert not index.exhausted
        assert not index.fetch_failed
        assert index.totals == {}
        assert index.products == {}

    def test_find_by_sku(self):
        index = StockIndex()
        index.ingest(StockPage([record("1", 1)]))
        assert index.find_by_sku("SKU-1").product_id == "1"
        assert index.find_by_sku("SKU-9") is None
