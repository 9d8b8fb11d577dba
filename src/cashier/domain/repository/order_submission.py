"""Abstract order submission endpoint.

The backend is authoritative and atomic: a submission either commits a
whole order or fails without side effects.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from cashier.domain.model.order import CheckoutRequest, OrderReceipt


class OrderSubmission(ABC):

    @abstractmethod
    def submit(self, request: CheckoutRequest) -> OrderReceipt:
        """Commit *request* as an order.

        Raises CheckoutFailedError when the backend rejects it or cannot
        be reached.
        """
