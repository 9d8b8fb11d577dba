"""Runtime configuration read from the environment.

Values come from ``CASHIER_*`` variables; an optional ``.env`` file fills
in anything the environment does not already set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_URL = "http://localhost:3001"

# When installed in editable mode the project root is the repo root.
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"


@dataclass(frozen=True)
class AppConfig:
    api_url: str
    api_token: str | None
    timeout_seconds: float
    retry_max_attempts: int
    retry_backoff_ms: int
    page_size: int
    near_expiry_days: int
    data_dir: Path
    log_level: str

    @classmethod
    def from_env(cls, env_file: str = ".env") -> AppConfig:
        _load_dotenv(env_file)
        config = cls(
            api_url=os.getenv("CASHIER_API_URL", DEFAULT_API_URL).strip(),
            api_token=os.getenv("CASHIER_API_TOKEN") or None,
            timeout_seconds=float(os.getenv("CASHIER_TIMEOUT_SECONDS", "20")),
            retry_max_attempts=int(os.getenv("CASHIER_RETRY_MAX_ATTEMPTS", "3")),
            retry_backoff_ms=int(os.getenv("CASHIER_RETRY_BACKOFF_MS", "150")),
            page_size=int(os.getenv("CASHIER_PAGE_SIZE", "100")),
            near_expiry_days=int(os.getenv("CASHIER_NEAR_EXPIRY_DAYS", "7")),
            data_dir=Path(os.getenv("CASHIER_DATA_DIR") or DEFAULT_DATA_DIR),
            log_level=os.getenv("CASHIER_LOG_LEVEL", "WARNING").upper(),
        )
        config.validate()
        return config

    def validate(self) -> None:
        if not self.api_url:
            raise ValueError("CASHIER_API_URL must not be empty")
        if self.timeout_seconds <= 0:
            raise ValueError("CASHIER_TIMEOUT_SECONDS must be greater than 0")
        if self.retry_max_attempts < 1:
            raise ValueError("CASHIER_RETRY_MAX_ATTEMPTS must be >= 1")
        if self.retry_backoff_ms < 0:
            raise ValueError("CASHIER_RETRY_BACKOFF_MS must be >= 0")
        if self.page_size <= 0:
            raise ValueError("CASHIER_PAGE_SIZE must be greater than 0")
        if self.near_expiry_days < 0:
            raise ValueError("CASHIER_NEAR_EXPIRY_DAYS must be >= 0")


def _load_dotenv(path: str) -> None:
    dotenv_path = Path(path)
    if not dotenv_path.exists():
        return
    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())
