import base64
import hashlib
import hmac

import pytest

from hitbtc_api.core import CanonicalMessage, Credentials, RequestBuildError, SignatureComputeError, sign

CREDENTIALS = Credentials("PUBLIC_KEY", "SECRET_KEY")


def _expected(public: str, private: str, timestamp: str, message: str) -> str:
    digest = hmac.new(private.encode(), message.encode(), hashlib.sha256).hexdigest()
    return "HS256 " + base64.b64encode(f"{public}:{timestamp}:{digest}".encode()).decode()


def test_canonical_message_is_plain_concatenation():
    message = CanonicalMessage("get", "1610000000", "/api/2/order")
    assert message.method == "GET"
    assert message.text == "GET1610000000/api/2/order"
    assert str(message) == message.text


def test_sign_matches_independent_hmac():
    message = CanonicalMessage("GET", "1610000000", "/api/2/order", "")
    header = sign(CREDENTIALS, message)

    assert header == _expected("PUBLIC_KEY", "SECRET_KEY", "1610000000", "GET1610000000/api/2/order")
    scheme, token = header.split(" ", 1)
    assert scheme == "HS256"
    public, timestamp, digest = base64.b64decode(token).decode().split(":")
    assert public == "PUBLIC_KEY"
    assert timestamp == "1610000000"
    assert len(digest) == 64


def test_sign_is_deterministic():
    message = CanonicalMessage("POST", "1610000000", "/api/2/order", '{"symbol":"BTCUSDT20"}')
    assert sign(CREDENTIALS, message) == sign(CREDENTIALS, message)


@pytest.mark.parametrize(
    "changed",
    [
        CanonicalMessage("PUT", "1610000000", "/api/2/order", "{}"),
        CanonicalMessage("POST", "1610000001", "/api/2/order", "{}"),
        CanonicalMessage("POST", "1610000000", "/api/2/orders", "{}"),
        CanonicalMessage("POST", "1610000000", "/api/2/order", "{ }"),
    ],
)
def test_any_component_change_alters_signature(changed):
    base = CanonicalMessage("POST", "1610000000", "/api/2/order", "{}")
    assert sign(CREDENTIALS, changed) != sign(CREDENTIALS, base)


def test_long_private_key_is_accepted():
    credentials = Credentials("pub", "k" * 500)
    message = CanonicalMessage("GET", "1", "/")
    assert sign(credentials, message) == _expected("pub", "k" * 500, "1", "GET1/")


def test_empty_private_key_rejected_at_construction():
    with pytest.raises(SignatureComputeError):
        Credentials("PUBLIC_KEY", "")


def test_credentials_repr_is_redacted():
    text = repr(CREDENTIALS) + str(CREDENTIALS)
    assert "SECRET_KEY" not in text
    assert "PUBLIC_KEY" not in text


@pytest.mark.parametrize(
    "args",
    [
        ("G ET", "1", "/"),
        ("GET", "abc", "/"),
        ("GET", "1", "order"),
    ],
)
def test_malformed_canonical_message_rejected(args):
    with pytest.raises(RequestBuildError):
        CanonicalMessage(*args)
