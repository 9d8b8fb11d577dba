"""Application service: List Saved Carts use case (query)."""

from __future__ import annotations

from cashier.application.dto import SavedCartDTO
from cashier.domain.service.reservation_ledger import ReservationLedger

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M UTC"


class ListSavedCartsHandler:

    def __init__(self, ledger: ReservationLedger) -> None:
        self._ledger = ledger

    def handle(self) -> list[SavedCartDTO]:
        current = self._ledger.current_cart_id
        return [
            SavedCartDTO(
                id=saved.id,
                name=saved.name,
                item_count=sum(line.quantity for line in saved.items),
                total=str(saved.total),
                created_at=saved.created_at.strftime(TIMESTAMP_FORMAT),
                updated_at=saved.updated_at.strftime(TIMESTAMP_FORMAT),
                is_current=saved.id == current,
            )
            for saved in self._ledger.saved_carts
        ]
