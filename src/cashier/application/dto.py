"""Data Transfer Objects: plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProductAvailabilityDTO:
    """Output: a product from the stock feed and how much can still be sold."""

    product_id: str
    sku: str
    name: str
    unit_price: str
    sellable: int
    reserved: int
    available: int


@dataclass(frozen=True)
class CartLineDTO:
    product_id: str
    sku: str
    name: str
    quantity: int
    unit_price: str
    line_total: str
    available: int | None  # units that could still be added; None if stock is unknown


@dataclass(frozen=True)
class CartDTO:
    """Output: the live cart as displayed to the cashier."""

    cart_id: str | None
    name: str | None
    items: list[CartLineDTO]
    total: str
    unsaved_changes: bool


@dataclass(frozen=True)
class SavedCartDTO:
    id: str
    name: str
    item_count: int
    total: str
    created_at: str
    updated_at: str
    is_current: bool


@dataclass(frozen=True)
class ReceiptDTO:
    order_id: str | None
    customer_name: str
    total: str
    item_count: int
