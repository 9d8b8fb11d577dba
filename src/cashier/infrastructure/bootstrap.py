"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from functools import lru_cache

from cashier.domain.service.reservation_ledger import ReservationLedger
from cashier.infrastructure.config import AppConfig
from cashier.infrastructure.http.http_client import HttpClient
from cashier.infrastructure.http.http_order_submission import HttpOrderSubmission
from cashier.infrastructure.http.http_stock_catalog import HttpStockCatalog
from cashier.infrastructure.persistence.json_cart_store import JsonCartStore
from cashier.infrastructure.persistence.json_session_store import JsonSessionStore


@lru_cache(maxsize=1)
def config() -> AppConfig:
    return AppConfig.from_env()


def http_client() -> HttpClient:
    cfg = config()
    return HttpClient(
        cfg.api_url,
        token=cfg.api_token,
        timeout_seconds=cfg.timeout_seconds,
        retry_max_attempts=cfg.retry_max_attempts,
        retry_backoff_ms=cfg.retry_backoff_ms,
    )


def cart_store() -> JsonCartStore:
    return JsonCartStore(config().data_dir / "carts.json")


def session_store() -> JsonSessionStore:
    return JsonSessionStore(config().data_dir / "session.json")


def reservation_ledger() -> ReservationLedger:
    """Build a ledger and put back the live cart from the last run."""
    cfg = config()
    client = http_client()
    result = ReservationLedger(
        cart_store=cart_store(),
        stock_catalog=HttpStockCatalog(client, near_expiry_days=cfg.near_expiry_days),
        order_submission=HttpOrderSubmission(client),
        page_size=cfg.page_size,
    )
    session = session_store().load()
    if session is not None:
        result.restore(session)
    return result
