"""Live-cart session handling shared by the CLI commands.

Each command runs in a fresh process, so the live cart is read from the
session file before the command and written back after it.
"""

from __future__ import annotations

from cashier.domain.service.reservation_ledger import ReservationLedger
from cashier.infrastructure.bootstrap import reservation_ledger, session_store


def open_ledger() -> ReservationLedger:
    return reservation_ledger()


def close_ledger(ledger: ReservationLedger) -> None:
    session_store().save(ledger.snapshot())
