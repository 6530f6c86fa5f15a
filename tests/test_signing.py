"""Tests for nonce generation and request signing."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json

import pytest

from bfxconn.adapters.signing import (
    APIKEY_HEADER,
    PAYLOAD_HEADER,
    SIGNATURE_HEADER,
    NonceGenerator,
    auth_headers,
    build_payload,
    encode_payload,
    nonce_from_timestamp,
    sign,
)
from bfxconn.errors import AuthenticationError


def test_sign_matches_rfc4231_sha384_vector() -> None:
    """HMAC-SHA384 known answer (RFC 4231 test case 2)."""
    assert sign("Jefe", "what do ya want for nothing?") == (
        "af45d2e376484031617f78d2b58a6b1b9c7ef464f5a01b47"
        "e42ec3736322445e8e2240ca5e69e2c78b3239ecfab21649"
    )


def test_nonce_from_timestamp_rounds_to_nearest_millisecond() -> None:
    assert nonce_from_timestamp(1_700_000_000.0004) == 1_700_000_000_000
    assert nonce_from_timestamp(1_700_000_000.0006) == 1_700_000_000_001
    assert nonce_from_timestamp(1_700_000_000.25) == 1_700_000_000_250


def test_nonce_generator_strictly_increasing_with_frozen_clock(fake_clock) -> None:
    """Calls inside one millisecond still produce distinct, growing nonces."""
    gen = NonceGenerator(clock=fake_clock(step=0.0))
    values = [gen() for _ in range(5)]
    assert values == [1_700_000_000_000 + i for i in range(5)]


def test_nonce_generator_follows_wall_clock(fake_clock) -> None:
    gen = NonceGenerator(clock=fake_clock(step=0.01))
    first, second = gen(), gen()
    assert second - first == 10


def test_nonce_generator_real_clock_never_repeats() -> None:
    gen = NonceGenerator()
    values = [gen() for _ in range(200)]
    assert all(b > a for a, b in zip(values, values[1:]))


def test_build_payload_without_options() -> None:
    assert build_payload("/v1/balances", 42) == (
        b'{"request":"/v1/balances","nonce":"42"}'
    )


def test_build_payload_appends_options_flat() -> None:
    raw = build_payload("/v1/order/status", 5, {"order_id": 42})
    assert raw == b'{"request":"/v1/order/status","nonce":"5","order_id":42}'
    assert list(json.loads(raw)) == ["request", "nonce", "order_id"]


def test_build_payload_rejects_reserved_keys() -> None:
    with pytest.raises(ValueError):
        build_payload("/v1/balances", 1, {"nonce": "2"})


def test_auth_headers_wire_format() -> None:
    headers = auth_headers("my-key", "my-secret", "/v1/balances", 1234)
    assert set(headers) == {APIKEY_HEADER, SIGNATURE_HEADER, PAYLOAD_HEADER}
    assert headers[APIKEY_HEADER] == "my-key"

    payload_b64 = headers[PAYLOAD_HEADER]
    assert json.loads(base64.b64decode(payload_b64)) == {
        "request": "/v1/balances",
        "nonce": "1234",
    }
    expected = hmac.new(b"my-secret", payload_b64.encode(), hashlib.sha384).hexdigest()
    assert headers[SIGNATURE_HEADER] == expected
    assert len(headers[SIGNATURE_HEADER]) == 96


def test_auth_headers_are_deterministic() -> None:
    opts = {"symbol": "btcusd", "amount": "0.5"}
    first = auth_headers("k", "s", "/v1/order/new", 99, opts)
    second = auth_headers("k", "s", "/v1/order/new", 99, dict(opts))
    assert first == second


def test_signature_changes_with_secret_or_payload() -> None:
    base = auth_headers("k", "secret", "/v1/balances", 7)
    other_secret = auth_headers("k", "secreT", "/v1/balances", 7)
    other_nonce = auth_headers("k", "secret", "/v1/balances", 8)
    assert base[SIGNATURE_HEADER] != other_secret[SIGNATURE_HEADER]
    assert base[PAYLOAD_HEADER] == other_secret[PAYLOAD_HEADER]
    assert base[SIGNATURE_HEADER] != other_nonce[SIGNATURE_HEADER]


def test_encode_payload_is_standard_base64() -> None:
    assert encode_payload(b'{"a":1}') == "eyJhIjoxfQ=="


@pytest.mark.parametrize("key,secret", [(None, "s"), ("k", None), ("", "")])
def test_auth_headers_require_credentials(key, secret) -> None:
    with pytest.raises(AuthenticationError):
        auth_headers(key, secret, "/v1/balances", 1)
