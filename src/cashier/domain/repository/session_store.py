"""Abstract store for the live cart between process runs."""

from __future__ import annotations

from abc import ABC, abstractmethod

from cashier.domain.model.cart import CartSession


class SessionStore(ABC):

    @abstractmethod
    def load(self) -> CartSession | None:
        """Return the last stored session, or None."""

    @abstractmethod
    def save(self, session: CartSession) -> None:
        """Persist *session*, replacing any previous one."""
