"""Shared fixtures: an in-memory transport and connector settings."""

from __future__ import annotations

import base64
import json
from typing import Any, Callable

import pytest

from bfxconn.adapters import BitfinexAdapter
from bfxconn.adapters.signing import NonceGenerator
from bfxconn.config import Settings


class FakeTransport:
    """Transport double returning canned documents keyed by request path."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self.responses = dict(responses or {})
        self.calls: list[tuple[str, str, dict[str, str] | None]] = []
        self.closed = False

    def get(self, path: str) -> Any:
        self.calls.append(("GET", path, None))
        return self._reply(path)

    def post(self, path: str, headers: dict[str, str] | None = None) -> Any:
        self.calls.append(("POST", path, dict(headers or {})))
        return self._reply(path)

    def _reply(self, path: str) -> Any:
        value = self.responses[path]
        if isinstance(value, Exception):
            raise value
        return value

    def close(self) -> None:
        self.closed = True

    def payload(self, index: int = -1) -> dict[str, Any]:
        """Decode the signed payload header of call *index*."""

        headers = self.calls[index][2] or {}
        return json.loads(base64.b64decode(headers["X-BFX-PAYLOAD"]))


class FakeClock:
    """Wall clock advancing by *step* seconds on every read."""

    def __init__(self, start: float = 1_700_000_000.0, step: float = 0.0) -> None:
        self.now = start
        self.step = step

    def __call__(self) -> float:
        value = self.now
        self.now += self.step
        return value


@pytest.fixture
def make_settings() -> Callable[..., Settings]:
    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "bitfinex_api_key": "key",
            "bitfinex_api_secret": "secret",
            "log_file": None,
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def fake_clock() -> type[FakeClock]:
    return FakeClock


@pytest.fixture
def adapter(make_settings, transport) -> BitfinexAdapter:
    return BitfinexAdapter(make_settings(), transport, nonce=NonceGenerator())
