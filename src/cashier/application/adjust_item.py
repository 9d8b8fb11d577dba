"""Application service: Adjust Item use case."""

from __future__ import annotations

from cashier.domain.exceptions import EntityNotFoundError
from cashier.domain.model.cart import CartLine
from cashier.domain.service.reservation_ledger import ReservationLedger


class AdjustItemHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self, sku: str, delta: int) -> CartLine | None:
        """Step a cart line up or down by *delta*.

        Increases re-read the product's stock first so the check runs
        against current figures.  Returns None once the line is removed.
        """
        line = self._find_line(sku)

        if delta > 0:
            self._ledger.search_stock(line.sku or line.product_id)
            self._ledger.load_all_stock()

        return self._ledger.adjust_quantity(line.product_id, delta)

    def _find_line(self, code: str) -> CartLine:
        for line in self._ledger.lines:
            if line.sku == code or line.product_id == code:
                return line
        raise EntityNotFoundError(f"'{code}' is not in the cart")
