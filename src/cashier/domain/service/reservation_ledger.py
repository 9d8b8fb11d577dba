"""Domain service: Reservation Ledger.

Holds the live cart, the parked SavedCarts and the incrementally loaded
stock index, and answers "how many more units of P can go into the live
cart?" for each product.  It also owns the cart lifecycle (new, save,
update, load, delete) and the checkout handoff.

Every operation validates first and mutates second: a rejected call
leaves the live cart, the saved carts and the current cart id exactly as
they were.  Collaborators are injected so the ledger runs without any
real storage or network.

Availability is advisory.  Saved carts may be stale relative to other
sessions sharing the same store, and the backend re-checks stock at
checkout.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from cashier.domain.exceptions import (
    CartNotFoundError,
    CatalogFetchError,
    CheckoutFailedError,
    EmptyCartError,
    InsufficientStockError,
)
from cashier.domain.model.cart import Cart, CartLine, CartSession, SavedCart
from cashier.domain.model.order import CheckoutRequest, OrderReceipt
from cashier.domain.model.stock import StockIndex
from cashier.domain.model.value_objects import Money
from cashier.domain.repository.cart_store import CartStore
from cashier.domain.repository.order_submission import OrderSubmission
from cashier.domain.repository.stock_catalog import StockCatalog
from cashier.domain.service.availability import (
    ProductAvailability,
    available_quantity,
    product_availability,
)

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ReservationLedger:

    def __init__(
        self,
        cart_store: CartStore,
        stock_catalog: StockCatalog,
        order_submission: OrderSubmission,
        page_size: int = DEFAULT_PAGE_SIZE,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._cart_store = cart_store
        self._stock_catalog = stock_catalog
        self._order_submission = order_submission
        self._clock = clock
        self._cart = Cart()
        self._stock = StockIndex(page_size=page_size)
        self._saved_carts: list[SavedCart] = cart_store.load_all()

    # --- Read-only views ------------------------------------------------------

    @property
    def current_cart_id(self) -> str | None:
        return self._cart.cart_id

    @property
    def current_cart_name(self) -> str | None:
        return self._cart.name

    @property
    def lines(self) -> list[CartLine]:
        return self._cart.copy_lines()

    @property
    def total(self) -> Money:
        return self._cart.total

    @property
    def saved_carts(self) -> list[SavedCart]:
        return [_snapshot(saved) for saved in self._saved_carts]

    @property
    def stock(self) -> StockIndex:
        return self._stock

    @property
    def has_unsaved_changes(self) -> bool:
        """True when discarding the live cart would lose work.

        UI callers ask for confirmation before ``new_cart``/``load_cart``
        when this is set; the ledger itself never blocks on it.
        """
        if self._cart.is_empty:
            return False
        if self._cart.cart_id is None:
            return True
        saved = self._find_saved(self._cart.cart_id)
        return saved is None or saved.items != self._cart.lines

    # --- Availability ---------------------------------------------------------

    def compute_available(self, product_id: str) -> int:
        """Units of *product_id* that can still be added to the live cart.

        Sellable stock minus every other saved cart minus the live cart's
        own quantity.  Never negative.
        """
        return available_quantity(product_id, self._stock, self._saved_carts, self._cart)

    def available_products(self) -> list[ProductAvailability]:
        return product_availability(self._stock, self._saved_carts, self._cart)

    def overcommitted_products(self) -> list[ProductAvailability]:
        """Loaded products whose outstanding reservations exceed sellable stock.

        Report only.  Nothing is released or rejected on account of it.
        """
        return [item for item in self.available_products() if item.is_overcommitted]

    # --- Stock paging ---------------------------------------------------------

    def search_stock(self, query: str = "") -> int:
        """Start a fresh stock index for *query* and load its first page."""
        self._stock.reset(query.strip())
        return self.load_more_stock()

    def load_more_stock(self) -> int:
        """Load the next catalog page.  Returns the number of records received.

        On failure the records already indexed are kept and the same offset
        is retried on the next call.
        """
        if self._stock.exhausted:
            return 0

        logger.debug(
            "Fetching stock page search=%r offset=%d limit=%d",
            self._stock.search,
            self._stock.offset,
            self._stock.page_size,
        )
        try:
            page = self._stock_catalog.fetch_page(
                search=self._stock.search,
                limit=self._stock.page_size,
                offset=self._stock.offset,
            )
        except CatalogFetchError:
            self._stock.fetch_failed = True
            logger.warning(
                "Stock page at offset %d failed; continuing with %d products indexed",
                self._stock.offset,
                len(self._stock.products),
            )
            raise

        self._stock.ingest(page)
        self._warn_overcommitted()
        return len(page.records)

    def load_all_stock(self) -> int:
        """Page until the catalog signals no more records."""
        received = 0
        while not self._stock.exhausted:
            received += self.load_more_stock()
        return received

    # --- Live cart editing ----------------------------------------------------

    def add_line(self, product_id: str, unit_price: Money, name: str, sku: str = "") -> CartLine:
        """Add one unit of *product_id*, inserting the line if it is new."""
        available = self.compute_available(product_id)
        existing = self._cart.get(product_id)
        proposed = existing.quantity + 1 if existing is not None else 1

        if available < 1:
            raise InsufficientStockError(product_id, available=available, requested=proposed)

        if existing is not None:
            line = existing.with_quantity(proposed)
        else:
            line = CartLine(
                product_id=product_id,
                sku=sku,
                name=name,
                unit_price=unit_price,
                quantity=1,
            )
        self._cart.put(line)
        return line

    def adjust_quantity(self, product_id: str, delta: int) -> CartLine | None:
        """Move a line's quantity by *delta*.

        Returns the updated line, or None when the line was removed because
        its quantity reached zero.  Decreases are always allowed.
        """
        existing = self._cart.get(product_id)
        if existing is None or delta == 0:
            return existing

        new_quantity = existing.quantity + delta
        if new_quantity <= 0:
            self._cart.remove(product_id)
            return None

        if delta > 0:
            available = self.compute_available(product_id)
            if delta > available:
                raise InsufficientStockError(
                    product_id, available=available, requested=new_quantity
                )

        line = existing.with_quantity(new_quantity)
        self._cart.put(line)
        return line

    def remove_line(self, product_id: str) -> None:
        self._cart.remove(product_id)

    def new_cart(self) -> None:
        """Drop the live cart.  An unsaved cart's reservation simply disappears."""
        self._cart.reset()

    # --- Saved cart lifecycle -------------------------------------------------

    def save_cart(self, name: str | None = None) -> SavedCart:
        """Park the live cart, or update its backing SavedCart if it has one."""
        if self._cart.is_empty:
            raise EmptyCartError("Cart is empty. Add items before saving.")

        if self._cart.cart_id is not None:
            return self.update_cart(self._cart.cart_id, self._cart.copy_lines(), name)

        saved = SavedCart.create(self._cart.copy_lines(), now=self._clock(), name=name)
        carts = [saved, *self._saved_carts]
        self._cart_store.save_all(carts)
        self._saved_carts = carts

        self._cart.cart_id = saved.id
        self._cart.name = saved.name
        logger.info("Saved cart %s (%s) with %d lines", saved.id, saved.name, len(saved.items))
        return _snapshot(saved)

    def update_cart(
        self, cart_id: str, lines: list[CartLine], name: str | None = None
    ) -> SavedCart:
        """Replace a SavedCart's items.  ``id`` and ``created_at`` are kept."""
        index = self._index_of(cart_id)
        if index is None:
            raise CartNotFoundError(cart_id)

        kept = [line for line in lines if line.quantity > 0]
        if not kept:
            raise EmptyCartError("Cart is empty. Add items before saving.")

        updated = _snapshot(self._saved_carts[index])
        updated.replace_items(kept, now=self._clock(), name=name)

        carts = list(self._saved_carts)
        carts[index] = updated
        self._cart_store.save_all(carts)
        self._saved_carts = carts

        if cart_id == self._cart.cart_id:
            self._cart.name = updated.name
        logger.info("Updated cart %s (%s) with %d lines", updated.id, updated.name, len(updated.items))
        return _snapshot(updated)

    def load_cart(self, cart_id: str) -> None:
        """Make a SavedCart the live cart.

        From here on the live lines carry this cart's reservation and the
        stored snapshot is skipped by the availability sum.
        """
        saved = self._find_saved(cart_id)
        if saved is None:
            raise CartNotFoundError(cart_id)

        self._cart = Cart(lines=list(saved.items), cart_id=saved.id, name=saved.name)
        logger.info("Loaded cart %s (%s)", saved.id, saved.name)

    def delete_cart(self, cart_id: str) -> None:
        """Remove a SavedCart.  Deleting an unknown id is a no-op write."""
        carts = [saved for saved in self._saved_carts if saved.id != cart_id]
        self._cart_store.save_all(carts)
        self._saved_carts = carts

        if cart_id == self._cart.cart_id:
            self._cart.reset()
        logger.info("Deleted cart %s", cart_id)

    def refresh(self) -> None:
        """Re-read saved carts from the store.

        Call on lifecycle events (window focus, navigation) to pick up
        changes made by other sessions.  Last write wins.
        """
        self._saved_carts = self._cart_store.load_all()

        cart_id = self._cart.cart_id
        if cart_id is not None and self._find_saved(cart_id) is None:
            logger.warning(
                "Current cart %s no longer exists in the store; keeping lines as unsaved",
                cart_id,
            )
            self._cart.cart_id = None
            self._cart.name = None
        self._warn_overcommitted()

    # --- Checkout -------------------------------------------------------------

    def checkout(self, customer_name: str | None = None) -> OrderReceipt:
        """Submit the live cart as an order.

        On success the backing SavedCart (if any) is released and the live
        cart cleared.  On failure nothing changes and the error propagates
        so the cashier can correct and resubmit.
        """
        if self._cart.is_empty:
            raise EmptyCartError("Cart is empty. Add items before checkout.")

        request = CheckoutRequest.from_lines(self._cart.copy_lines(), customer_name)
        try:
            receipt = self._order_submission.submit(request)
        except CheckoutFailedError as exc:
            logger.warning("Checkout failed, cart kept for retry: %s", exc)
            raise

        cart_id = self._cart.cart_id
        self._cart.reset()
        if cart_id is not None:
            carts = [saved for saved in self._saved_carts if saved.id != cart_id]
            self._saved_carts = carts
            self._cart_store.save_all(carts)

        logger.info(
            "Checkout committed order %s for %s, total %s",
            receipt.order_id,
            receipt.customer_name,
            receipt.grand_total,
        )
        return receipt

    # --- Session snapshot -----------------------------------------------------

    def snapshot(self) -> CartSession:
        return CartSession(
            current_cart_id=self._cart.cart_id,
            cart_name=self._cart.name,
            lines=tuple(self._cart.lines),
        )

    def restore(self, session: CartSession) -> None:
        """Reinstate a live cart captured by ``snapshot``."""
        cart_id = session.current_cart_id
        name = session.cart_name
        if cart_id is not None and self._find_saved(cart_id) is None:
            logger.warning("Session refers to missing cart %s; restoring as unsaved", cart_id)
            cart_id = None
            name = None
        self._cart = Cart(lines=list(session.lines), cart_id=cart_id, name=name)

    # --- Internal helpers -----------------------------------------------------

    def _find_saved(self, cart_id: str) -> SavedCart | None:
        index = self._index_of(cart_id)
        return self._saved_carts[index] if index is not None else None

    def _index_of(self, cart_id: str) -> int | None:
        for i, saved in enumerate(self._saved_carts):
            if saved.id == cart_id:
                return i
        return None

    def _warn_overcommitted(self) -> None:
        for item in self.overcommitted_products():
            logger.warning(
                "Product %s is overcommitted: %d reserved against %d sellable",
                item.product.product_id,
                item.reserved,
                item.sellable,
            )


def _snapshot(saved: SavedCart) -> SavedCart:
    return replace(saved, items=list(saved.items))
