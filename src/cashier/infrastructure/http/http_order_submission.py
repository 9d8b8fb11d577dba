"""REST-backed implementation of OrderSubmission."""

from __future__ import annotations

from typing import Any

from cashier.domain.exceptions import CheckoutFailedError
from cashier.domain.model.order import CheckoutRequest, OrderReceipt
from cashier.domain.repository.order_submission import OrderSubmission
from cashier.infrastructure.http.http_client import ApiError, HttpClient

CHECKOUT_PATH = "/api/orders/checkout"
GENERIC_FAILURE = "Failed to create order"


class HttpOrderSubmission(OrderSubmission):

    def __init__(self, client: HttpClient) -> None:
        self._client = client

    def submit(self, request: CheckoutRequest) -> OrderReceipt:
        try:
            body = self._client.post(CHECKOUT_PATH, self._to_payload(request))
        except ApiError as exc:
            raise CheckoutFailedError(exc.detail or GENERIC_FAILURE) from exc

        payload = body if isinstance(body, dict) else {"data": body}
        return OrderReceipt(
            customer_name=request.customer_name,
            grand_total=request.grand_total,
            lines=request.lines,
            order_id=self._order_id(payload),
            payload=payload,
        )

    @staticmethod
    def _to_payload(request: CheckoutRequest) -> dict[str, Any]:
        return {
            "customer_name": request.customer_name,
            "grand_total": request.grand_total.as_float(),
            "items": [
                {"product_id": line.product_id, "quantity": line.quantity}
                for line in request.lines
            ],
        }

    @staticmethod
    def _order_id(payload: dict[str, Any]) -> str | None:
        data = payload.get("data")
        source = data if isinstance(data, dict) else payload
        for key in ("id", "order_id", "orderNumber", "order_number"):
            if source.get(key) is not None:
                return str(source[key])
        return None
