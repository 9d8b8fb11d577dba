"""Stock records and the incrementally-loaded stock index.

The catalog is owned by the backend; the ledger only ever reads it a page
at a time.  ``StockIndex`` is what has been seen so far: availability
computed from it is an under-estimate until ``is_complete``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum

from cashier.domain.model.value_objects import Money

NEAR_EXPIRY_DAYS = 7


class ExpiryStatus(Enum):
    VALID = "valid"
    NEAR_EXPIRY = "near_expiry"
    EXPIRED = "expired"

    @property
    def is_sellable(self) -> bool:
        return self is not ExpiryStatus.EXPIRED

    @staticmethod
    def from_expiry_date(
        expiry_date: date, today: date, near_expiry_days: int = NEAR_EXPIRY_DAYS
    ) -> ExpiryStatus:
        days_left = (expiry_date - today).days
        if days_left < 0:
            return ExpiryStatus.EXPIRED
        if days_left <= near_expiry_days:
            return ExpiryStatus.NEAR_EXPIRY
        return ExpiryStatus.VALID


@dataclass(frozen=True)
class StockRecord:
    """One stock batch as reported by the catalog.

    Several batches of the same product (different expiry dates or
    locations) are summed by the index.
    """

    product_id: str
    quantity: int
    expiry_status: ExpiryStatus
    name: str = ""
    sku: str = ""
    unit_price: Money = field(default_factory=Money.zero)

    @property
    def is_sellable(self) -> bool:
        return self.quantity > 0 and self.expiry_status.is_sellable


@dataclass(frozen=True)
class CatalogProduct:
    """Product details as first seen in the stock feed."""

    product_id: str
    name: str
    sku: str
    unit_price: Money


@dataclass(frozen=True)
class StockPage:
    records: list[StockRecord]
    total: int | None = None


@dataclass
class StockIndex:
    """Per-product sellable totals accumulated from StockCatalog pages."""

    search: str = ""
    page_size: int = 100
    offset: int = 0
    exhausted: bool = False
    fetch_failed: bool = False
    totals: dict[str, int] = field(default_factory=dict)
    products: dict[str, CatalogProduct] = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.exhausted

    def reset(self, search: str) -> None:
        self.search = search
        self.offset = 0
        self.exhausted = False
        self.fetch_failed = False
        self.totals = {}
        self.products = {}

    def ingest(self, page: StockPage) -> None:
        """Reduce one page into the index as a single state transition."""
        totals = dict(self.totals)
        products = dict(self.products)
        for record in page.records:
            if record.product_id not in products:
                products[record.product_id] = CatalogProduct(
                    product_id=record.product_id,
                    name=record.name,
                    sku=record.sku,
                    unit_price=record.unit_price,
                )
            if record.is_sellable:
                totals[record.product_id] = totals.get(record.product_id, 0) + record.quantity

        self.totals = totals
        self.products = products
        self.offset += len(page.records)
        self.fetch_failed = False
        if len(page.records) < self.page_size:
            self.exhausted = True

    def sellable(self, product_id: str) -> int:
        return self.totals.get(product_id, 0)

    def find_by_sku(self, sku: str) -> CatalogProduct | None:
        for product in self.products.values():
            if product.sku == sku:
                return product
        return None
