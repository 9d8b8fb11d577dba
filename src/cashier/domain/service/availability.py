"""Domain service: availability accounting.

Pure functions of (stock index, saved carts, live cart).  Nothing here is
stored; callers recompute on every read so the figure can never drift
from the state it is derived from.

The live cart is the authoritative reservation for its own id.  The
SavedCart snapshot carrying the same id is skipped, otherwise a loaded
cart would reserve its quantities twice.
"""

from __future__ import annotations

from dataclasses import dataclass

from cashier.domain.model.cart import Cart, SavedCart
from cashier.domain.model.stock import CatalogProduct, StockIndex


@dataclass(frozen=True)
class ProductAvailability:
    product: CatalogProduct
    sellable: int
    reserved: int
    available: int

    @property
    def is_overcommitted(self) -> bool:
        return self.reserved > self.sellable


def reserved_quantities(saved_carts: list[SavedCart], cart: Cart) -> dict[str, int]:
    """Total reserved quantity per product across every outstanding cart."""
    reserved: dict[str, int] = {}

    for saved in saved_carts:
        if cart.cart_id is not None and saved.id == cart.cart_id:
            continue
        for line in saved.items:
            reserved[line.product_id] = reserved.get(line.product_id, 0) + line.quantity

    for line in cart.lines:
        reserved[line.product_id] = reserved.get(line.product_id, 0) + line.quantity

    return reserved


def available_quantity(
    product_id: str,
    stock: StockIndex,
    saved_carts: list[SavedCart],
    cart: Cart,
) -> int:
    """Sellable stock minus every reservation, floored at zero.

    The floor covers stock that shrank between catalog refreshes after
    carts were parked against the larger figure.
    """
    reserved = reserved_quantities(saved_carts, cart).get(product_id, 0)
    return max(0, stock.sellable(product_id) - reserved)


def product_availability(
    stock: StockIndex,
    saved_carts: list[SavedCart],
    cart: Cart,
) -> list[ProductAvailability]:
    """Availability for every product the stock index has seen, in feed order."""
    reserved = reserved_quantities(saved_carts, cart)
    result: list[ProductAvailability] = []
    for product_id, product in stock.products.items():
        sellable = stock.sellable(product_id)
        held = reserved.get(product_id, 0)
        result.append(
            ProductAvailability(
                product=product,
                sellable=sellable,
                reserved=held,
                available=max(0, sellable - held),
            )
        )
    return result
