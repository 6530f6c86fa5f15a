"""Exception types raised by the connector."""

from __future__ import annotations


class BfxError(RuntimeError):
    """Base class for connector failures."""


class TransportError(BfxError):
    """Network, TLS, or body decoding failure for a single request.

    ``status`` carries the HTTP status code when a response was received.
    """

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AuthenticationError(BfxError):
    """Raised before sending when API credentials are not configured."""


class UnavailableError(BfxError):
    """Raised in strict mode when a response field cannot be read."""


__all__ = ["BfxError", "TransportError", "AuthenticationError", "UnavailableError"]
