"""Abstract interfaces for exchange adapters."""

from abc import ABC, abstractmethod

from bfxconn.models import Quote


class ExchangeAdapter(ABC):
    """Interface that all exchange adapters must implement."""

    @abstractmethod
    def name(self) -> str:
        """Return exchange identifier used by this adapter."""

    @abstractmethod
    def quote(self) -> Quote:
        """Return the current ``(bid, ask)`` for the configured symbol."""

    @abstractmethod
    def balance(self, currency: str) -> float:
        """Return the available trading balance for *currency*."""

    @abstractmethod
    def send_order(self, direction: str, quantity: float, price: float) -> str:
        """Place a limit order and return the venue order identifier."""

    def send_long_order(self, direction: str, quantity: float, price: float) -> str:
        """Open or close the long leg of a position.

        Delegates to :meth:`send_order`; venues needing margin-specific
        handling override this.
        """

        return self.send_order(direction, quantity, price)

    def send_short_order(self, direction: str, quantity: float, price: float) -> str:
        """Open or close the short leg of a position.

        Delegates to :meth:`send_order`; venues needing borrow-specific
        handling override this.
        """

        return self.send_order(direction, quantity, price)

    @abstractmethod
    def is_order_complete(self, order_id: str) -> bool:
        """Return ``True`` once *order_id* is no longer live."""

    @abstractmethod
    def active_position(self) -> float:
        """Return the size of the open position on the configured symbol."""

    @abstractmethod
    def limit_price(self, volume: float, is_bid: bool) -> float:
        """Return the limit price needed to fill *volume* on one book side."""
