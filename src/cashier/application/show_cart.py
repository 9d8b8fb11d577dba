"""Application service: Show Cart use case (query)."""

from __future__ import annotations

from cashier.application.dto import CartDTO, CartLineDTO
from cashier.domain.exceptions import CatalogFetchError
from cashier.domain.model.cart import CartLine
from cashier.domain.service.reservation_ledger import ReservationLedger


class ShowCartHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self) -> CartDTO:
        """Describe the live cart with the units still addable per line.

        Each line's product is re-read from the stock feed first, so the
        figure is never taken from an empty or partial stock index.
        """
        return CartDTO(
            cart_id=self._ledger.current_cart_id,
            name=self._ledger.current_cart_name,
            items=[
                CartLineDTO(
                    product_id=line.product_id,
                    sku=line.sku,
                    name=line.name,
                    quantity=line.quantity,
                    unit_price=str(line.unit_price),
                    line_total=str(line.line_total),
                    available=self._available(line),
                )
                for line in self._ledger.lines
            ],
            total=str(self._ledger.total),
            unsaved_changes=self._ledger.has_unsaved_changes,
        )

    def _available(self, line: CartLine) -> int | None:
        """None when the product's stock could not be loaded."""
        try:
            self._ledger.search_stock(line.sku or line.product_id)
            self._ledger.load_all_stock()
            if line.product_id not in self._ledger.stock.products:
                self._ledger.search_stock("")
                self._ledger.load_all_stock()
        except CatalogFetchError:
            return None
        return self._ledger.compute_available(line.product_id)
