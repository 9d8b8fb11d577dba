"""Checkout handoff over HTTP."""

import httpx
import pytest

from cashier.domain.exceptions import CheckoutFailedError
from cashier.domain.model.cart import CartLine
from cashier.domain.model.order import CheckoutRequest
from cashier.domain.model.value_objects import Money
from cashier.infrastructure.http.http_client import HttpClient
from cashier.infrastructure.http.http_order_submission import HttpOrderSubmission
from tests.transport import ScriptedTransport, response


def _submission(*responses) -> tuple[HttpOrderSubmission, ScriptedTransport]:
    transport = ScriptedTransport(list(responses))
    client = HttpClient("http://pos.local", retry_backoff_ms=0, transport=transport)
    return HttpOrderSubmission(client), transport


def _request() -> CheckoutRequest:
    lines = [
        CartLine("1", "TB-350", "Teh Botol", Money.of("4500"), 2),
        CartLine("9", "RT-1", "Roti", Money.of("12000.50"), 1),
    ]
    return CheckoutRequest.from_lines(lines, "Sari")


def test_posts_payload() -> None:
    submission, transport = _submission(response(201, {"data": {"id": 77}}))

    receipt = submission.submit(_request())

    method, url, kwargs = transport.calls[0]
    assert method == "POST"
    assert url == "http://pos.local/api/orders/checkout"
    assert kwargs["json"] == {
        "customer_name": "Sari",
        "grand_total": 21000.5,
        "items": [
            {"product_id": "1", "quantity": 2},
            {"product_id": "9", "quantity": 1},
        ],
    }
    assert receipt.order_id == "77"
    assert receipt.grand_total == Money.of("21000.50")


def test_order_number_fallback() -> None:
    submission, _ = _submission(response(200, {"orderNumber": "ORD-5"}))
    assert submission.submit(_request()).order_id == "ORD-5"


def test_missing_order_id() -> None:
    submission, _ = _submission(response(200, {"ok": True}))
    assert submission.submit(_request()).order_id is None


def test_backend_error_message_surfaces() -> None:
    submission, transport = _submission(response(400, {"error": "Insufficient stock for Teh Botol"}))

    with pytest.raises(CheckoutFailedError, match="Insufficient stock for Teh Botol"):
        submission.submit(_request())
    assert len(transport.calls) == 1


def test_generic_message_without_detail() -> None:
    submission, transport = _submission(httpx.ReadTimeout("slow"))

    with pytest.raises(CheckoutFailedError, match="Failed to create order"):
        submission.submit(_request())
    assert len(transport.calls) == 1
