"""Bitfinex v1 trading connector: signed requests and order book pricing."""

from __future__ import annotations

from .adapters import BitfinexAdapter, ExchangeAdapter, RestTransport
from .config import Settings
from .engine import limit_price_for_volume
from .errors import AuthenticationError, BfxError, TransportError, UnavailableError
from .models import NO_ORDER_ID, OrderSpec, Quote, Reading

__all__ = [
    "AuthenticationError",
    "BfxError",
    "BitfinexAdapter",
    "ExchangeAdapter",
    "NO_ORDER_ID",
    "OrderSpec",
    "Quote",
    "Reading",
    "RestTransport",
    "Settings",
    "TransportError",
    "UnavailableError",
    "limit_price_for_volume",
]
