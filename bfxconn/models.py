"""Shared data models for venue operations."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field, FiniteFloat

from .errors import UnavailableError

T = TypeVar("T")

Side = Literal["buy", "sell"]

# Order identifier used when nothing reached the venue.
NO_ORDER_ID = "0"


@dataclass(frozen=True)
class Quote:
    """Top-of-book prices. ``0.0`` on either side means unavailable."""

    bid: float
    ask: float

    @property
    def spread(self) -> float:
        return self.ask - self.bid


@dataclass(frozen=True)
class OrderSpec:
    """Parameters for placing a limit order on the venue."""

    symbol: str
    side: Side
    quantity: float
    price: float
    order_type: Literal["limit"] = "limit"


@dataclass(frozen=True)
class Reading(Generic[T]):
    """A value read from a response, or the reason it could not be read.

    Readings let callers choose between the lenient default and a strict
    failure instead of treating a missing field as zero.
    """

    value: T | None = None
    reason: str | None = None

    @classmethod
    def of(cls, value: T) -> "Reading[T]":
        return cls(value=value)

    @classmethod
    def unavailable(cls, reason: str) -> "Reading[T]":
        return cls(value=None, reason=reason)

    @property
    def available(self) -> bool:
        return self.value is not None

    def or_default(self, default: T) -> T:
        """Return the value, or *default* when unavailable."""

        return self.value if self.value is not None else default

    def unwrap(self) -> T:
        """Return the value or raise :class:`UnavailableError`."""

        if self.value is None:
            raise UnavailableError(self.reason or "value unavailable")
        return self.value


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class BalanceRecord(_Record):
    """One wallet entry from ``/v1/balances``."""

    type: str
    currency: str
    amount: FiniteFloat


class PositionRecord(_Record):
    """One open position from ``/v1/positions``."""

    symbol: str | None = None
    amount: FiniteFloat


class BookLevel(_Record):
    """A single ``(price, amount)`` order book entry."""

    price: FiniteFloat = Field(ge=0)
    amount: FiniteFloat = Field(ge=0)


__all__ = [
    "NO_ORDER_ID",
    "BalanceRecord",
    "BookLevel",
    "OrderSpec",
    "PositionRecord",
    "Quote",
    "Reading",
    "Side",
]
