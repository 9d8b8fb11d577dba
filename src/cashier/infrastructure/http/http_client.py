"""Thin httpx wrapper shared by the REST adapters.

GET requests retry on timeouts, transport errors and 5xx responses.
Writes are sent once: a checkout is never resubmitted automatically.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable

import httpx

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """The backend answered with an error status or could not be reached."""

    def __init__(
        self, message: str, status_code: int | None = None, detail: str | None = None
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        # The error text the backend put in the body, if any.
        self.detail = detail


class HttpClient:

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout_seconds: float = 20,
        retry_max_attempts: int = 3,
        retry_backoff_ms: int = 150,
        transport: Callable[..., httpx.Response] | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds
        self.retry_max_attempts = max(1, retry_max_attempts)
        self.retry_backoff_ms = max(0, retry_backoff_ms)
        self.transport = transport or httpx.request

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: dict[str, Any]) -> Any:
        return self.request("POST", path, json=payload)

    def request(self, method: str, path: str, **kwargs: Any) -> Any:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        url = f"{self.base_url}{path}"

        allow_retry = method.upper() == "GET"
        attempts = self.retry_max_attempts if allow_retry else 1

        for attempt in range(1, attempts + 1):
            try:
                response = self.transport(
                    method,
                    url,
                    timeout=self.timeout_seconds,
                    headers=headers,
                    **kwargs,
                )
            except httpx.TimeoutException as exc:
                if attempt >= attempts:
                    raise ApiError("The request timed out. Check the network and try again.") from exc
                logger.debug("%s %s timed out (attempt %d)", method, url, attempt)
                self._backoff(attempt)
                continue
            except httpx.TransportError as exc:
                if attempt >= attempts:
                    raise ApiError(f"Could not reach {self.base_url}.") from exc
                logger.debug("%s %s transport error (attempt %d): %s", method, url, attempt, exc)
                self._backoff(attempt)
                continue

            if response.status_code >= 400:
                if self._is_retryable_status(response.status_code) and attempt < attempts:
                    logger.debug("%s %s returned %d (attempt %d)", method, url, response.status_code, attempt)
                    self._backoff(attempt)
                    continue
                detail = self._error_detail(response)
                raise ApiError(
                    detail or response.text or f"HTTP {response.status_code}",
                    status_code=response.status_code,
                    detail=detail,
                )

            return self._safe_json(response)

        raise ApiError("Max retry attempts reached")

    def _backoff(self, attempt: int) -> None:
        time.sleep((self.retry_backoff_ms * attempt) / 1000)

    @staticmethod
    def _is_retryable_status(status_code: int) -> bool:
        return 500 <= status_code <= 599

    @staticmethod
    def _error_detail(response: httpx.Response) -> str | None:
        try:
            payload = response.json()
        except ValueError:
            return None
        if isinstance(payload, dict):
            message = payload.get("error") or payload.get("message")
            if message:
                return str(message)
        return None

    @staticmethod
    def _safe_json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise ApiError(
                "Response body is not valid JSON", status_code=response.status_code
            ) from exc
