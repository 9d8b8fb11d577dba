"""Application service: Search Stock use case (query)."""

from __future__ import annotations

from cashier.application.dto import ProductAvailabilityDTO
from cashier.domain.service.reservation_ledger import ReservationLedger


class SearchStockHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self, query: str, load_all: bool = False) -> list[ProductAvailabilityDTO]:
        """Load stock matching *query* and report what is still available.

        Only the first page is fetched unless *load_all* is set.
        """
        self._ledger.search_stock(query)
        if load_all:
            self._ledger.load_all_stock()

        return [
            ProductAvailabilityDTO(
                product_id=item.product.product_id,
                sku=item.product.sku,
                name=item.product.name,
                unit_price=str(item.product.unit_price),
                sellable=item.sellable,
                reserved=item.reserved,
                available=item.available,
            )
            for item in self._ledger.available_products()
        ]
