"""Cart aggregates: the live cart being edited and the parked SavedCarts.

A cart (saved or live) holding a quantity of a product is an implicit
reservation on that product's stock.  The ledger derives availability
from these; nothing here talks to the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.value_objects import Money


@dataclass(frozen=True)
class CartLine:
    """One product in a cart, with the price captured when it was added."""

    product_id: str
    sku: str
    name: str
    unit_price: Money
    quantity: int

    def __post_init__(self) -> None:
        if not isinstance(self.quantity, int) or isinstance(self.quantity, bool):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.quantity).__name__}"
            )
        if self.quantity <= 0:
            raise ValidationError("Quantity must be positive")

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity

    def with_quantity(self, quantity: int) -> CartLine:
        return replace(self, quantity=quantity)


def lines_total(lines: list[CartLine]) -> Money:
    """Sum of ``unit_price * quantity`` over *lines*."""
    return Money.total(line.line_total for line in lines)


def new_cart_id() -> str:
    return f"cart-{uuid.uuid4().hex}"


def default_cart_name(created_at: datetime) -> str:
    """Name a cart after its creation time on the till's local clock."""
    return f"Cart {created_at.astimezone().strftime('%d/%m/%y %H:%M')}"


@dataclass
class Cart:
    """The live cart.  Exactly one exists per ledger.

    ``cart_id`` is unset until the cart is first saved.  Line order is the
    order in which products were first added.
    """

    lines: list[CartLine] = field(default_factory=list)
    cart_id: str | None = None
    name: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def total(self) -> Money:
        return lines_total(self.lines)

    def get(self, product_id: str) -> CartLine | None:
        for line in self.lines:
            if line.product_id == product_id:
                return line
        return None

    def find_by_sku(self, sku: str) -> CartLine | None:
        for line in self.lines:
            if line.sku == sku:
                return line
        return None

    def quantity_of(self, product_id: str) -> int:
        line = self.get(product_id)
        return line.quantity if line is not None else 0

    def put(self, line: CartLine) -> None:
        """Insert *line*, or replace the existing line for the same product in place."""
        for i, existing in enumerate(self.lines):
            if existing.product_id == line.product_id:
                self.lines[i] = line
                return
        self.lines.append(line)

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]

    def reset(self) -> None:
        self.lines = []
        self.cart_id = None
        self.name = None

    def copy_lines(self) -> list[CartLine]:
        return list(self.lines)


@dataclass
class SavedCart:
    """A named, persisted snapshot of a cart parking a stock reservation.

    Invariant: ``total`` always equals ``lines_total(items)``.  It is stored
    for cheap reads but recomputed on every mutation and on reconstitution,
    never patched incrementally.
    """

    id: str
    name: str
    items: list[CartLine]
    total: Money
    created_at: datetime
    updated_at: datetime

    @staticmethod
    def create(
        items: list[CartLine],
        now: datetime,
        name: str | None = None,
        cart_id: str | None = None,
    ) -> SavedCart:
        kept = _positive_lines(items)
        if not kept:
            raise ValidationError("A saved cart must contain at least one item")
        return SavedCart(
            id=cart_id or new_cart_id(),
            name=(name or "").strip() or default_cart_name(now),
            items=kept,
            total=lines_total(kept),
            created_at=now,
            updated_at=now,
        )

    def replace_items(
        self, items: list[CartLine], now: datetime, name: str | None = None
    ) -> None:
        """Overwrite items, recompute total, bump ``updated_at``.

        ``id`` and ``created_at`` are preserved; ``name`` changes only when
        a non-blank one is given.
        """
        kept = _positive_lines(items)
        if not kept:
            raise ValidationError("A saved cart must contain at least one item")
        self.items = kept
        self.total = lines_total(kept)
        self.updated_at = now
        if name and name.strip():
            self.name = name.strip()

    def recompute_total(self) -> bool:
        """Reset ``total`` from items.  Returns True if the stored value was stale."""
        expected = lines_total(self.items)
        stale = expected != self.total
        self.total = expected
        return stale

    def quantity_of(self, product_id: str) -> int:
        return sum(line.quantity for line in self.items if line.product_id == product_id)


@dataclass(frozen=True)
class CartSession:
    """Snapshot of the live cart, used to carry it across process runs."""

    current_cart_id: str | None
    cart_name: str | None
    lines: tuple[CartLine, ...] = ()


# --- Internal helpers ---------------------------------------------------------


def _positive_lines(items: list[CartLine]) -> list[CartLine]:
    # Zero-quantity lines are never persisted.
    return [line for line in items if line.quantity > 0]
