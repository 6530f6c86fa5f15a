"""Exchange adapter interfaces and implementations."""

from .base import ExchangeAdapter
from .bitfinex import BitfinexAdapter
from .transport import RestTransport

__all__ = ["ExchangeAdapter", "BitfinexAdapter", "RestTransport"]
