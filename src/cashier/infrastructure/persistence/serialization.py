"""Raw-dict mapping shared by the JSON stores."""

from __future__ import annotations

from datetime import datetime

from cashier.domain.model.cart import CartLine
from cashier.domain.model.value_objects import DEFAULT_CURRENCY, Money


def line_to_raw(line: CartLine) -> dict:
    return {
        "id": line.product_id,
        "sku": line.sku,
        "name": line.name,
        "price": str(line.unit_price.amount),
        "currency": line.unit_price.currency,
        "quantity": line.quantity,
    }


def line_to_domain(raw: dict) -> CartLine:
    return CartLine(
        product_id=str(raw["id"]),
        sku=raw.get("sku") or "",
        name=raw.get("name") or "",
        unit_price=money_to_domain(raw.get("price", 0), raw.get("currency")),
        quantity=int(raw["quantity"]),
    )


def money_to_domain(amount, currency: str | None = None) -> Money:
    # Amounts may be stored as JSON numbers or as decimal strings.
    return Money.of(amount, currency or DEFAULT_CURRENCY)


def timestamp_to_domain(value: str) -> datetime:
    # JavaScript's toISOString() ends in "Z", which fromisoformat only accepts from 3.11.
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
