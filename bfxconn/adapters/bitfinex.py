"""Bitfinex v1 REST adapter implementing the :class:`ExchangeAdapter` interface.

Public market data (ticker, order book) is fetched with plain GET requests.
Account endpoints are signed with :mod:`bfxconn.adapters.signing` and sent as
POST requests whose payload travels in the ``X-BFX-PAYLOAD`` header.

Every response passes through :meth:`BitfinexAdapter.check_response`, which
logs venue error messages but never raises. Missing or malformed fields are
read into :class:`~bfxconn.models.Reading` values and resolved to ``0.0`` /
``"0"`` unless ``Settings.strict_readings`` asks for an exception instead.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping, TypeVar

from pydantic import ValidationError

from bfxconn.adapters.base import ExchangeAdapter
from bfxconn.adapters.signing import NonceGenerator, auth_headers
from bfxconn.adapters.transport import RestTransport
from bfxconn.config import Settings, settings
from bfxconn.engine.depth import limit_price_for_volume, parse_levels
from bfxconn.errors import TransportError
from bfxconn.metrics.exporter import (
    ERRORS_TOTAL,
    ORDERS_TOTAL,
    QUOTE_PRICE,
    VENUE_ERRORS_TOTAL,
)
from bfxconn.models import (
    NO_ORDER_ID,
    BalanceRecord,
    BookLevel,
    OrderSpec,
    PositionRecord,
    Quote,
    Reading,
)

T = TypeVar("T")

VENUE = "bitfinex"


def describe_validation_error(exc: ValidationError) -> str:
    """Return a one-line summary of *exc*."""

    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "record"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def float_field(doc: Any, key: str) -> Reading[float]:
    """Read *key* from *doc* as a finite float.

    Bitfinex encodes prices and amounts as strings; plain numbers are accepted
    too.
    """

    if not isinstance(doc, Mapping):
        return Reading.unavailable(f"{key}: response is not an object")
    raw = doc.get(key)
    if raw is None:
        return Reading.unavailable(f"{key} missing")
    if isinstance(raw, bool):
        return Reading.unavailable(f"{key} is not numeric: {raw!r}")
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return Reading.unavailable(f"{key} is not numeric: {raw!r}")
    if not math.isfinite(value):
        return Reading.unavailable(f"{key} is not finite: {raw!r}")
    return Reading.of(value)


def int_field(doc: Any, key: str) -> Reading[int]:
    """Read *key* from *doc* as an integer."""

    if not isinstance(doc, Mapping):
        return Reading.unavailable(f"{key}: response is not an object")
    raw = doc.get(key)
    if isinstance(raw, bool) or raw is None:
        return Reading.unavailable(f"{key} missing")
    if isinstance(raw, int):
        return Reading.of(raw)
    if isinstance(raw, str):
        text = raw.strip()
        if text.isascii() and text.isdigit():
            return Reading.of(int(text))
    return Reading.unavailable(f"{key} is not an integer: {raw!r}")


def format_decimal(value: float) -> str:
    """Render *value* as a plain decimal string (no exponent)."""

    text = f"{float(value):.8f}".rstrip("0").rstrip(".")
    return text or "0"


def order_options(spec: OrderSpec) -> dict[str, Any]:
    """Return the signed payload fields for a new order."""

    return {
        "symbol": spec.symbol,
        "amount": format_decimal(spec.quantity),
        "price": format_decimal(spec.price),
        "exchange": VENUE,
        "side": spec.side,
        "type": spec.order_type,
    }


class BitfinexAdapter(ExchangeAdapter):
    """Exchange adapter for the Bitfinex v1 REST API.

    Parameters
    ----------
    params:
        Frozen connector settings. Defaults to :data:`bfxconn.config.settings`.
    transport:
        HTTP transport; built from *params* when omitted. The adapter owns the
        transport it builds and reuses it for every call.
    log:
        Diagnostic sink. Defaults to the ``bfxconn`` logger.
    nonce:
        Nonce source for signed requests.
    """

    def __init__(
        self,
        params: Settings | None = None,
        transport: RestTransport | None = None,
        *,
        log: logging.Logger | None = None,
        nonce: NonceGenerator | None = None,
    ) -> None:
        self.params = params or settings
        self.log = log or logging.getLogger("bfxconn")
        if transport is None:
            transport = RestTransport(
                self.params.bitfinex_base_url,
                self.params.bitfinex_cacert,
                timeout=self.params.request_timeout_secs,
                log=self.log,
                venue=VENUE,
            )
        self.transport = transport
        self.nonce = nonce or NonceGenerator()

    def name(self) -> str:
        """Return the exchange identifier."""

        return VENUE

    @property
    def symbol(self) -> str:
        return self.params.bitfinex_symbol

    @property
    def base_currency(self) -> str:
        return self.symbol[:3].upper()

    # ------------------------------------------------------------------
    # Request plumbing
    # ------------------------------------------------------------------
    def check_response(self, doc: Any) -> Any:
        """Log a venue error message carried by *doc* and return *doc*."""

        if isinstance(doc, Mapping) and "message" in doc:
            self.log.error("[%s] Error with response: %s", VENUE, doc.get("message"))
            VENUE_ERRORS_TOTAL.labels(VENUE).inc()
        return doc

    def public_request(self, path: str) -> Any:
        """GET *path* without authentication."""

        return self.check_response(self.transport.get(path))

    def auth_request(self, path: str, options: Mapping[str, Any] | None = None) -> Any:
        """POST a signed request for *path* with extra payload *options*."""

        key, secret = self.params.creds()
        headers = auth_headers(key, secret, path, self.nonce(), options)
        return self.check_response(self.transport.post(path, headers))

    def _resolve(self, reading: Reading[T], default: T) -> T:
        if reading.available:
            return reading.unwrap()
        if self.params.strict_readings:
            return reading.unwrap()
        self.log.debug("[%s] %s; using %r", VENUE, reading.reason, default)
        return reading.or_default(default)

    # ------------------------------------------------------------------
    # Market data
    # ------------------------------------------------------------------
    def quote(self) -> Quote:
        """Return the ticker bid/ask; unreadable sides become ``0.0``."""

        doc = self.public_request(f"/v1/ticker/{self.symbol}")
        bid = self._resolve(float_field(doc, "bid"), 0.0)
        ask = self._resolve(float_field(doc, "ask"), 0.0)
        QUOTE_PRICE.labels(VENUE, "bid").set(bid)
        QUOTE_PRICE.labels(VENUE, "ask").set(ask)
        return Quote(bid, ask)

    def limit_price(self, volume: float, is_bid: bool) -> float:
        """Walk one side of the book until ``|volume| * factor`` is covered.

        Returns the price of the last level examined, or ``0.0`` for an empty
        book.
        """

        doc = self.public_request(f"/v1/book/{self.symbol}")
        side = "bids" if is_bid else "asks"
        raw = doc.get(side) if isinstance(doc, Mapping) else None
        levels = parse_levels(raw, on_error=self._log_bad_level)

        self.log.info(
            "[%s] Looking for a limit price to fill %s %s...",
            VENUE,
            abs(volume),
            self.base_currency,
        )
        return limit_price_for_volume(
            levels,
            volume,
            self.params.order_book_factor,
            on_level=self._log_level,
        )

    def _log_level(self, level: BookLevel) -> None:
        self.log.info("[%s] order book: %s@$%s", VENUE, level.amount, level.price)

    def _log_bad_level(self, entry: Any, exc: Exception) -> None:
        ERRORS_TOTAL.labels(VENUE, "decode").inc()
        detail = (
            describe_validation_error(exc)
            if isinstance(exc, ValidationError)
            else str(exc)
        )
        self.log.error("[%s] Error with order book entry %r: %s", VENUE, entry, detail)

    # ------------------------------------------------------------------
    # Account
    # ------------------------------------------------------------------
    def balance(self, currency: str) -> float:
        """Return the ``trading`` wallet amount for *currency*."""

        doc = self.auth_request("/v1/balances")
        return self._resolve(self._balance_reading(doc, currency), 0.0)

    def _balance_reading(self, doc: Any, currency: str) -> Reading[float]:
        wanted = str(currency).strip().lower()
        records = doc if isinstance(doc, list) else []
        # Scan from the end; the first match wins.
        for raw in reversed(records):
            try:
                record = BalanceRecord.model_validate(raw)
            except ValidationError as exc:
                ERRORS_TOTAL.labels(VENUE, "decode").inc()
                self.log.error(
                    "[%s] Error with JSON: %s", VENUE, describe_validation_error(exc)
                )
                continue
            if record.type == "trading" and record.currency.lower() == wanted:
                return Reading.of(record.amount)
        return Reading.unavailable(f"no trading balance for {currency}")

    def active_position(self) -> float:
        """Return the amount of the first open position, ``0.0`` when flat."""

        doc = self.auth_request("/v1/positions")
        if not isinstance(doc, list) or not doc:
            self.log.warning(
                "[%s] %s position not available, return 0.0",
                VENUE,
                self.base_currency,
            )
            return 0.0
        try:
            reading = Reading.of(PositionRecord.model_validate(doc[0]).amount)
        except ValidationError as exc:
            ERRORS_TOTAL.labels(VENUE, "decode").inc()
            reason = describe_validation_error(exc)
            self.log.error("[%s] Error with JSON: %s", VENUE, reason)
            reading = Reading.unavailable(f"position record invalid: {reason}")
        return self._resolve(reading, 0.0)

    # ------------------------------------------------------------------
    # Orders
    # ------------------------------------------------------------------
    def send_order(self, direction: str, quantity: float, price: float) -> str:
        """Submit a limit order and return the venue order id as a string.

        With ``dry_run`` enabled nothing is sent and ``"0"`` is returned.
        """

        side = str(direction).strip().lower()
        if side not in ("buy", "sell"):
            raise ValueError(f"direction must be 'buy' or 'sell', got {direction!r}")
        spec = OrderSpec(
            symbol=self.symbol, side=side, quantity=quantity, price=price  # type: ignore[arg-type]
        )
        self.log.info(
            '[%s] Trying to send a "%s" limit order: %s@$%s...',
            VENUE,
            side,
            quantity,
            price,
        )
        if self.params.dry_run:
            ORDERS_TOTAL.labels(VENUE, side, "dry_run").inc()
            self.log.info("[%s] dry run; order not sent", VENUE)
            return NO_ORDER_ID

        try:
            doc = self.auth_request("/v1/order/new", order_options(spec))
        except TransportError:
            ORDERS_TOTAL.labels(VENUE, side, "error").inc()
            raise

        reading = int_field(doc, "order_id")
        if reading.available:
            ORDERS_TOTAL.labels(VENUE, side, "ok").inc()
        else:
            ORDERS_TOTAL.labels(VENUE, side, "rejected").inc()
            self.log.error("[%s] Order not acknowledged: %s", VENUE, reading.reason)
        order_id = str(self._resolve(reading, 0))
        self.log.info("[%s] Done (order ID: %s)", VENUE, order_id)
        return order_id

    def is_order_complete(self, order_id: str) -> bool:
        """Return ``True`` when the venue reports ``is_live`` as false.

        The ``"0"`` sentinel is complete without asking the venue.
        """

        order_id = str(order_id).strip()
        if order_id == NO_ORDER_ID:
            return True
        try:
            numeric = int(order_id)
        except ValueError:
            raise ValueError(f"invalid order id {order_id!r}") from None

        doc = self.auth_request("/v1/order/status", {"order_id": numeric})
        return isinstance(doc, Mapping) and doc.get("is_live") is False

    # ------------------------------------------------------------------
    def close(self) -> None:
        """Release the underlying HTTP session."""

        self.transport.close()

    def __enter__(self) -> "BitfinexAdapter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


__all__ = [
    "BitfinexAdapter",
    "describe_validation_error",
    "float_field",
    "format_decimal",
    "int_field",
    "order_options",
]
