"""Basic data model tests."""

import pytest
from pydantic import ValidationError

from bfxconn.errors import UnavailableError
from bfxconn.models import BalanceRecord, OrderSpec, PositionRecord, Quote, Reading


def test_quote_spread() -> None:
    """Quote exposes bid/ask and their difference."""
    quote = Quote(100.5, 101.0)
    assert quote.bid == 100.5
    assert quote.spread == pytest.approx(0.5)


def test_order_spec_defaults_to_limit() -> None:
    order = OrderSpec(symbol="btcusd", side="buy", quantity=1.0, price=100.0)
    assert order.order_type == "limit"


def test_reading_value() -> None:
    reading = Reading.of(0.0)
    assert reading.available
    assert reading.unwrap() == 0.0
    assert reading.or_default(5.0) == 0.0


def test_reading_unavailable() -> None:
    reading: Reading[float] = Reading.unavailable("bid missing")
    assert not reading.available
    assert reading.or_default(0.0) == 0.0
    with pytest.raises(UnavailableError, match="bid missing"):
        reading.unwrap()


def test_balance_record_parses_string_amount() -> None:
    record = BalanceRecord.model_validate(
        {"type": "trading", "currency": "usd", "amount": "42.0", "available": "40"}
    )
    assert record.amount == 42.0


def test_balance_record_requires_all_fields() -> None:
    with pytest.raises(ValidationError):
        BalanceRecord.model_validate({"type": "trading", "amount": "1"})


def test_position_record_amount() -> None:
    assert PositionRecord.model_validate({"amount": "-1.5"}).amount == -1.5
