"""Blocking HTTP transport for the venue REST API.

:class:`RestTransport` wraps a :class:`requests.Session` that is created on
first use and reused for every later call, so one connection pool serves the
lifetime of the adapter that owns it.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping

import requests

from bfxconn.errors import TransportError
from bfxconn.metrics.exporter import ERRORS_TOTAL, REQUEST_LATENCY, REQUESTS_TOTAL

_DEFAULT_TIMEOUT = 10.0


class RestTransport:
    """Send GET/POST requests and return the decoded JSON document.

    Parameters
    ----------
    base_url:
        Venue root such as ``https://api.bitfinex.com``.
    cacert:
        Optional CA bundle path used to verify the server certificate.
    timeout:
        Per-request timeout in seconds.
    log:
        Logger receiving diagnostics. Defaults to the ``bfxconn`` logger.
    session:
        Pre-built session, mainly for tests.
    venue:
        Label used for metrics.
    """

    def __init__(
        self,
        base_url: str,
        cacert: str | None = None,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        log: logging.Logger | None = None,
        session: requests.Session | None = None,
        venue: str = "bitfinex",
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cacert = cacert
        self.timeout = timeout
        self.log = log or logging.getLogger("bfxconn")
        self.venue = venue
        self._session = session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            session = requests.Session()
            if self.cacert:
                session.verify = self.cacert
            self._session = session
        return self._session

    def get(self, path: str) -> Any:
        """Issue an unauthenticated GET for *path*."""

        return self._request("GET", path)

    def post(self, path: str, headers: Mapping[str, str] | None = None) -> Any:
        """Issue a POST for *path* carrying *headers* and no body."""

        return self._request("POST", path, headers=headers)

    def _request(
        self, method: str, path: str, *, headers: Mapping[str, str] | None = None
    ) -> Any:
        url = f"{self.base_url}{path}"
        started = time.perf_counter()
        try:
            response = self.session.request(
                method, url, headers=dict(headers or {}), timeout=self.timeout
            )
        except requests.RequestException as exc:
            REQUESTS_TOTAL.labels(self.venue, method, "error").inc()
            ERRORS_TOTAL.labels(self.venue, "transport").inc()
            self.log.error("[%s] %s %s failed: %s", self.venue, method, path, exc)
            raise TransportError(f"{method} {path} failed: {exc}") from exc
        finally:
            REQUEST_LATENCY.labels(self.venue, method).observe(
                max(time.perf_counter() - started, 0.0)
            )

        # Venue errors arrive as JSON with a 4xx status; hand them back so the
        # caller can log the message.
        try:
            document = response.json()
        except ValueError as exc:
            REQUESTS_TOTAL.labels(self.venue, method, "error").inc()
            ERRORS_TOTAL.labels(self.venue, "decode").inc()
            status = response.status_code
            if status >= 400:
                message = f"{method} {path} returned HTTP {status}"
            else:
                message = f"{method} {path} returned a non-JSON body"
            self.log.error("[%s] %s", self.venue, message)
            raise TransportError(message, status=status) from exc

        REQUESTS_TOTAL.labels(
            self.venue, method, "ok" if response.ok else "rejected"
        ).inc()
        return document

    def close(self) -> None:
        """Close the pooled session if one was created."""

        if self._session is not None:
            self._session.close()
            self._session = None

    def __enter__(self) -> "RestTransport":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = ["RestTransport"]
