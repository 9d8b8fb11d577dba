"""Abstract store for SavedCart snapshots.

Defined in the domain layer so the domain never depends on
infrastructure.  The store is a single slot: it is read in full and
rewritten in full, never patched.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cashier.domain.model.cart import SavedCart


class CartStore(ABC):

    @abstractmethod
    def load_all(self) -> list[SavedCart]:
        """Return every saved cart, most recently created first."""

    @abstractmethod
    def save_all(self, carts: list[SavedCart]) -> None:
        """Replace the stored list with *carts*."""
