"""REST-backed implementation of StockCatalog.

Reads ``GET /api/inventories?limit=&offset=&search=``.  Each row is one
stock batch; the backend nests product details under ``product``.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable

from cashier.domain.exceptions import CatalogFetchError, ValidationError
from cashier.domain.model.stock import NEAR_EXPIRY_DAYS, ExpiryStatus, StockPage, StockRecord
from cashier.domain.model.value_objects import Money
from cashier.domain.repository.stock_catalog import StockCatalog
from cashier.infrastructure.http.http_client import ApiError, HttpClient

INVENTORY_PATH = "/api/inventories"


class HttpStockCatalog(StockCatalog):

    def __init__(
        self,
        client: HttpClient,
        near_expiry_days: int = NEAR_EXPIRY_DAYS,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._client = client
        self._near_expiry_days = near_expiry_days
        self._today = today

    def fetch_page(self, search: str, limit: int, offset: int) -> StockPage:
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if search:
            params["search"] = search

        try:
            body = self._client.get(INVENTORY_PATH, params=params)
        except ApiError as exc:
            raise CatalogFetchError(f"Failed to load stock: {exc.message}") from exc

        rows, total = self._unwrap(body)
        try:
            records = [self._to_domain(row) for row in rows]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            raise CatalogFetchError(f"Malformed stock record: {exc}") from exc
        return StockPage(records=records, total=total)

    # --- Parsing --------------------------------------------------------------

    @staticmethod
    def _unwrap(body: Any) -> tuple[list[dict], int | None]:
        """Accept ``{data, total}``, a bare list, or ``{inventories}``."""
        if isinstance(body, list):
            return body, None
        if isinstance(body, dict):
            if isinstance(body.get("data"), list):
                return body["data"], body.get("total")
            if isinstance(body.get("inventories"), list):
                return body["inventories"], body.get("total")
            return [], body.get("total")
        raise CatalogFetchError("Unexpected stock response shape")

    def _to_domain(self, row: dict) -> StockRecord:
        product = row.get("product") or {}
        product_id = product.get("id") if product.get("id") is not None else row["product_id"]
        price = product.get("selling_price", row.get("selling_price")) or 0
        return StockRecord(
            product_id=str(product_id),
            quantity=int(row.get("quantity") or 0),
            expiry_status=self._expiry_status(row),
            name=product.get("name") or row.get("name") or "",
            sku=product.get("sku") or row.get("sku") or "",
            unit_price=Money.of(price),
        )

    def _expiry_status(self, row: dict) -> ExpiryStatus:
        if row.get("expiry_status"):
            return ExpiryStatus(row["expiry_status"])
        if row.get("expiry_date"):
            expiry = date.fromisoformat(str(row["expiry_date"])[:10])
            return ExpiryStatus.from_expiry_date(expiry, self._today(), self._near_expiry_days)
        return ExpiryStatus.VALID
