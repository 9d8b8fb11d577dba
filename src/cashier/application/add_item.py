"""Application service: Add Item use case.

Resolves a typed or scanned code against the stock feed and adds one
unit of the matching product to the live cart.
"""

from __future__ import annotations

from cashier.domain.exceptions import EntityNotFoundError
from cashier.domain.model.cart import CartLine
from cashier.domain.model.stock import CatalogProduct
from cashier.domain.service.reservation_ledger import ReservationLedger


class AddItemHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self, code: str) -> CartLine:
        """Add one unit of the product whose SKU (or id) is *code*.

        Steps:
        1. Search the stock feed for *code*, paging through every match.
        2. Prefer an exact SKU match, then an exact product id.
        3. Failing both, page the whole feed and look *code* up as an id.
        4. Let the ledger enforce availability.
        """
        code = code.strip()
        self._ledger.search_stock(code)
        self._ledger.load_all_stock()

        product = self._resolve(code)
        if product is None and code:
            # The feed's search does not necessarily match product ids.
            self._ledger.search_stock("")
            self._ledger.load_all_stock()
            product = self._ledger.stock.products.get(code)
        if product is None:
            raise EntityNotFoundError(f"No product matching '{code}'")

        return self._ledger.add_line(
            product_id=product.product_id,
            unit_price=product.unit_price,
            name=product.name,
            sku=product.sku,
        )

    def _resolve(self, code: str) -> CatalogProduct | None:
        stock = self._ledger.stock
        by_sku = stock.find_by_sku(code)
        if by_sku is not None:
            return by_sku
        return stock.products.get(code)
