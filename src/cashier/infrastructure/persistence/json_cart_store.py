"""JSON-file-backed implementation of CartStore.

The file holds one JSON array of saved carts.  It is read in full and
rewritten in full; lines with a non-positive quantity are dropped on
read and the stored total is recomputed rather than trusted.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.cart import SavedCart
from cashier.domain.repository.cart_store import CartStore
from cashier.infrastructure.persistence.serialization import (
    line_to_domain,
    line_to_raw,
    money_to_domain,
    timestamp_to_domain,
)

logger = logging.getLogger(__name__)


class JsonCartStore(CartStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- CartStore interface --------------------------------------------------

    def load_all(self) -> list[SavedCart]:
        carts = []
        for position, raw in enumerate(self._load_raw()):
            try:
                carts.append(self._to_domain(raw))
            except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as exc:
                raise ValidationError(
                    f"Cart store {self._file_path} has a malformed cart at index {position}: {exc!r}"
                ) from exc
        return carts

    def save_all(self, carts: list[SavedCart]) -> None:
        self._persist_raw([self._to_raw(cart) for cart in carts])

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(cart: SavedCart) -> dict:
        return {
            "id": cart.id,
            "name": cart.name,
            "items": [line_to_raw(line) for line in cart.items],
            "total": str(cart.total.amount),
            "currency": cart.total.currency,
            "createdAt": cart.created_at.isoformat(),
            "updatedAt": cart.updated_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> SavedCart:
        items = [
            line_to_domain(item)
            for item in raw.get("items", [])
            if int(item.get("quantity", 0)) > 0
        ]
        cart = SavedCart(
            id=raw["id"],
            name=raw.get("name", ""),
            items=items,
            total=money_to_domain(raw.get("total", 0), raw.get("currency")),
            created_at=timestamp_to_domain(raw["createdAt"]),
            updated_at=timestamp_to_domain(raw.get("updatedAt") or raw["createdAt"]),
        )
        if cart.recompute_total():
            logger.warning(
                "Stored total for cart %s did not match its items; recomputed as %s",
                cart.id,
                cart.total,
            )
        return cart

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        try:
            data = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Cart store {self._file_path} is not valid JSON") from exc
        if not isinstance(data, list):
            raise ValidationError(f"Cart store {self._file_path} must hold a JSON array")
        return data

    def _persist_raw(self, carts: list[dict]) -> None:
        self._file_path.write_text(
            json.dumps(carts, indent=2) + "\n", encoding="utf-8"
        )

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
