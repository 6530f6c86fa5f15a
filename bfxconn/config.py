"""Configuration management and credential helpers.

This module loads environment variables from a local ``.env`` file if one is
present so that credentials such as API keys are available without manual
exports.  Values in the real environment take precedence over those in the
file.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _load_env_file(path: str = ".env") -> None:
    """Populate :mod:`os.environ` with key/value pairs from *path*.

    Lines starting with ``#`` or lacking an ``=`` separator are ignored.
    Existing keys are not overwritten. Values wrapped in single or double
    quotes are unquoted to match typical ``.env`` file behavior.
    """

    try:
        for line in Path(path).read_text().splitlines():
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            if (value.startswith('"') and value.endswith('"')) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            os.environ.setdefault(key.strip(), value)
    except FileNotFoundError:
        # Credentials may come from shell exports instead.
        pass


_load_env_file()


class Settings(BaseSettings):
    """Connector parameters loaded from environment variables.

    Instances are frozen: every operation borrows the same bundle read-only.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        extra="ignore",
        frozen=True,
    )

    log_level: str = "INFO"
    # Optional log file path; when set, the CLI also logs to this file.
    log_file: str | None = "data/bfxconn.log"
    log_max_bytes: int = 1_000_000
    log_backup_count: int = 3

    bitfinex_api_key: str | None = None
    bitfinex_api_secret: str | None = None
    bitfinex_base_url: str = "https://api.bitfinex.com"
    # CA bundle used to verify the venue certificate; None uses the system store.
    bitfinex_cacert: str | None = None
    bitfinex_symbol: str = "btcusd"

    # Multiplier applied to the target volume before walking the order book.
    order_book_factor: float = 1.0
    request_timeout_secs: float = 10.0
    dry_run: bool = False
    # Raise instead of substituting 0.0/"0" when a response field is missing.
    strict_readings: bool = False

    prom_port: int = 9110

    @field_validator("order_book_factor")
    @classmethod
    def _check_order_book_factor(cls, value: float) -> float:
        if value < 1.0:
            raise ValueError("order_book_factor must be >= 1.0")
        return value

    @field_validator("bitfinex_base_url", mode="before")
    @classmethod
    def _strip_base_url(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().strip("'\"").rstrip("/")
        return value

    @field_validator("bitfinex_symbol", mode="before")
    @classmethod
    def _normalise_symbol(cls, value: Any) -> Any:
        # v1 endpoints expect compact lower-case pairs such as ``btcusd``.
        if isinstance(value, str):
            return value.strip().replace("/", "").replace("-", "").lower()
        return value

    @field_validator("bitfinex_cacert", "log_file", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def creds(self) -> tuple[str | None, str | None]:
        """Return the ``(api_key, api_secret)`` pair."""

        return self.bitfinex_api_key, self.bitfinex_api_secret


# Singleton settings instance populated on import.
settings = Settings()
