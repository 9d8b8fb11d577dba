"""JSON-file-backed implementation of SessionStore."""

from __future__ import annotations

import json
from pathlib import Path

from cashier.domain.exceptions import ValidationError
from cashier.domain.model.cart import CartSession
from cashier.domain.repository.session_store import SessionStore
from cashier.infrastructure.persistence.serialization import line_to_domain, line_to_raw


class JsonSessionStore(SessionStore):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path

    def load(self) -> CartSession | None:
        if not self._file_path.exists():
            return None
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValidationError(f"Session file {self._file_path} is not valid JSON") from exc
        try:
            return CartSession(
                current_cart_id=raw.get("current_cart_id"),
                cart_name=raw.get("cart_name"),
                lines=tuple(
                    line_to_domain(item)
                    for item in raw.get("lines", [])
                    if int(item.get("quantity", 0)) > 0
                ),
            )
        except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as exc:
            raise ValidationError(f"Session file {self._file_path} is malformed: {exc!r}") from exc

    def save(self, session: CartSession) -> None:
        raw = {
            "current_cart_id": session.current_cart_id,
            "cart_name": session.cart_name,
            "lines": [line_to_raw(line) for line in session.lines],
        }
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
