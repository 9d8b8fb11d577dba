"""Abstract read-only feed of stock batches."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cashier.domain.model.stock import StockPage


class StockCatalog(ABC):

    @abstractmethod
    def fetch_page(self, search: str, limit: int, offset: int) -> StockPage:
        """Return up to *limit* records starting at *offset*.

        Raises CatalogFetchError if the page cannot be loaded.
        """
