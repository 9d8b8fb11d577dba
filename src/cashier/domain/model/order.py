"""Checkout handoff types.

The ledger never owns orders; it builds a CheckoutRequest from the live
cart and receives an OrderReceipt back from the order submission port.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.cart import CartLine, lines_total
from cashier.domain.model.value_objects import Money

WALK_IN_CUSTOMER = "Walk-in Customer"


@dataclass(frozen=True)
class CheckoutRequest:
    customer_name: str
    grand_total: Money
    lines: tuple[CartLine, ...]

    @staticmethod
    def from_lines(lines: list[CartLine], customer_name: str | None = None) -> CheckoutRequest:
        if not lines:
            raise ValidationError("Checkout requires at least one item")
        return CheckoutRequest(
            customer_name=(customer_name or "").strip() or WALK_IN_CUSTOMER,
            grand_total=lines_total(lines),
            lines=tuple(lines),
        )


@dataclass(frozen=True)
class OrderReceipt:
    """What the backend echoed back for a committed order."""

    customer_name: str
    grand_total: Money
    lines: tuple[CartLine, ...]
    order_id: str | None = None
    payload: dict[str, Any] = field(default_factory=dict)
