"""Application service: Checkout use case.

Hands the live cart to the order backend.  A failed submission leaves
the cart exactly as it was; retrying is up to the cashier.
"""

from __future__ import annotations

from cashier.application.dto import ReceiptDTO
from cashier.domain.service.reservation_ledger import ReservationLedger


class CheckoutHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self, customer_name: str | None = None) -> ReceiptDTO:
        receipt = self._ledger.checkout(customer_name)
        return ReceiptDTO(
            order_id=receipt.order_id,
            customer_name=receipt.customer_name,
            total=str(receipt.grand_total),
            item_count=sum(line.quantity for line in receipt.lines),
        )
