"""Request signing for authenticated Bitfinex v1 endpoints.

An authenticated call carries three headers:

``X-BFX-APIKEY``
    The API key.
``X-BFX-PAYLOAD``
    ``base64(json({"request": path, "nonce": "<int>", **extra}))``.
``X-BFX-SIGNATURE``
    Hex encoded HMAC-SHA384 of the base64 payload text keyed by the secret.

The venue rejects any nonce that is not larger than the last one it saw for
the key, so :class:`NonceGenerator` keeps issued values strictly increasing.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import threading
import time
from typing import Any, Callable, Mapping

from bfxconn.errors import AuthenticationError

APIKEY_HEADER = "X-BFX-APIKEY"
SIGNATURE_HEADER = "X-BFX-SIGNATURE"
PAYLOAD_HEADER = "X-BFX-PAYLOAD"


def nonce_from_timestamp(ts: float) -> int:
    """Return the millisecond nonce for wall-clock time *ts* (seconds).

    Seconds and microseconds are combined as ``sec * 1000 + usec * 0.001``
    and rounded half up.
    """

    sec = int(ts)
    usec = int(round((ts - sec) * 1_000_000))
    return int(sec * 1000.0 + usec * 0.001 + 0.5)


class NonceGenerator:
    """Issue strictly increasing millisecond nonces.

    Parameters
    ----------
    clock:
        Callable returning wall-clock seconds. Defaults to :func:`time.time`;
        tests inject a fake.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.time
        self._last = 0
        self._lock = threading.Lock()

    def __call__(self) -> int:
        with self._lock:
            nonce = max(nonce_from_timestamp(self._clock()), self._last + 1)
            self._last = nonce
            return nonce


def build_payload(
    path: str, nonce: int, options: Mapping[str, Any] | None = None
) -> bytes:
    """Return the JSON payload bytes for *path* and *nonce*.

    *options* are merged flat after ``request`` and ``nonce``; they cannot
    replace either of those two keys.
    """

    body: dict[str, Any] = {"request": path, "nonce": str(nonce)}
    for key, value in (options or {}).items():
        if key in body:
            raise ValueError(f"option {key!r} collides with a reserved payload key")
        body[key] = value
    return json.dumps(body, separators=(",", ":")).encode("utf-8")


def encode_payload(payload: bytes) -> str:
    """Return *payload* as base64 text."""

    return base64.b64encode(payload).decode("ascii")


def sign(secret: str, payload_b64: str) -> str:
    """Return ``hex(hmac_sha384(secret, payload_b64))``."""

    return hmac.new(
        secret.encode("utf-8"), payload_b64.encode("ascii"), hashlib.sha384
    ).hexdigest()


def auth_headers(
    api_key: str | None,
    secret: str | None,
    path: str,
    nonce: int,
    options: Mapping[str, Any] | None = None,
) -> dict[str, str]:
    """Build the three authentication headers for one request."""

    if not api_key or not secret:
        raise AuthenticationError("Bitfinex credentials missing")
    payload_b64 = encode_payload(build_payload(path, nonce, options))
    return {
        APIKEY_HEADER: api_key,
        SIGNATURE_HEADER: sign(secret, payload_b64),
        PAYLOAD_HEADER: payload_b64,
    }


__all__ = [
    "APIKEY_HEADER",
    "PAYLOAD_HEADER",
    "SIGNATURE_HEADER",
    "NonceGenerator",
    "auth_headers",
    "build_payload",
    "encode_payload",
    "nonce_from_timestamp",
    "sign",
]
