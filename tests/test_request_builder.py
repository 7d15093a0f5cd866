import base64
import hashlib
import hmac
import json

import pytest

from hitbtc_api.core import (
    V3_COIN_TABLE,
    Coin,
    CreateLimitOrder,
    Credentials,
    DomainMapper,
    RequestBuildError,
    RequestBuilder,
    Side,
    Symbol,
)
from hitbtc_api.core.request import (
    build_orderbook_query,
    build_orders_query,
    build_symbol_orderbook_query,
    encode_query,
)

BASE_URL = "https://api.hitbtc.com/api/2"
CREDENTIALS = Credentials("PUBLIC_KEY", "SECRET_KEY")
V3 = DomainMapper(V3_COIN_TABLE)


def fixed_clock() -> float:
    return 1610000000.75


def _builder(**kwargs) -> RequestBuilder:
    kwargs.setdefault("credentials", CREDENTIALS)
    kwargs.setdefault("clock", fixed_clock)
    return RequestBuilder(BASE_URL, **kwargs)


def test_end_to_end_signature_for_get_order():
    request = _builder().segment("order").build("GET")

    assert request.url == "https://api.hitbtc.com/api/2/order"
    assert request.path_with_query == "/api/2/order"
    assert request.timestamp == "1610000000"
    assert request.body == b""
    assert request.canonical_message.text == "GET" + "1610000000" + "/api/2/order" + ""

    digest = hmac.new(b"SECRET_KEY", b"GET1610000000/api/2/order", hashlib.sha256).hexdigest()
    expected = "HS256 " + base64.b64encode(f"PUBLIC_KEY:1610000000:{digest}".encode()).decode()
    assert request.headers["Authorization"] == expected
    assert request.headers["Accept"] == "application/json"
    assert "Content-Type" not in request.headers


def test_timestamp_captured_once_per_build():
    ticks = iter([100.0, 200.0, 300.0])
    request = _builder(clock=lambda: next(ticks)).segment("order").build("GET")
    assert request.timestamp == "100"
    assert request.canonical_message.timestamp == "100"
    token = base64.b64decode(request.headers["Authorization"].split(" ", 1)[1]).decode()
    assert token.split(":")[1] == "100"


def test_signed_body_is_transmitted_body():
    order = CreateLimitOrder(Symbol(Coin.BTC, Coin.USDT), Side.BUY, "0.5", "30000")
    request = _builder(mapper=V3).segment("order").json_body(order).build("post")

    assert request.method == "POST"
    assert request.headers["Content-Type"] == "application/json"
    assert request.canonical_message.body.encode("utf-8") == request.body
    assert json.loads(request.body) == {
        "symbol": "BTCUSDT",
        "side": "buy",
        "quantity": "0.5",
        "price": "30000",
    }
    assert request.canonical_message.text.endswith(request.body.decode())


def test_segments_follow_push_order_and_accept_domain_values():
    request = _builder(mapper=V3).segments("trading", "fee", Symbol(Coin.ETH, Coin.BTC)).build("GET")
    assert request.path_with_query == "/api/2/trading/fee/ETHBTC"


@pytest.mark.parametrize("segment", ["", "a/b", "..", "id?x=1", "frag#1", "line\nbreak"])
def test_invalid_segment_is_a_build_error(segment):
    with pytest.raises(RequestBuildError):
        _builder().segment(segment)


@pytest.mark.parametrize("value", [None, object(), float("nan")])
def test_segment_without_wire_form_is_a_build_error(value):
    with pytest.raises(RequestBuildError):
        _builder().segment(value)


def test_query_value_without_wire_form_is_a_build_error():
    with pytest.raises(RequestBuildError):
        _builder().query("wait", object())
    with pytest.raises(RequestBuildError):
        _builder().query("symbols", [Symbol(Coin.BTC, Coin.USDT), object()])


def test_non_order_dataclass_body_is_a_build_error():
    with pytest.raises(RequestBuildError):
        _builder().segment("order").json_body(Symbol(Coin.BTC, Coin.ETH))


def test_order_with_bad_quantity_is_a_build_error():
    order = CreateLimitOrder(Symbol(Coin.BTC, Coin.USDT), Side.BUY, "lots", "30000")
    with pytest.raises(RequestBuildError):
        _builder().segment("order").json_body(order)


def test_prepared_headers_are_read_only():
    request = _builder().segment("order").build("GET")
    with pytest.raises(TypeError):
        request.headers["Authorization"] = "HS256 forged"
    assert request.headers["Authorization"].startswith("HS256 ")


def test_query_skips_missing_values():
    request = _builder().segment("order").query("symbol", None).query("wait", None).build("GET")
    assert request.path_with_query == "/api/2/order"
    assert request.url == "https://api.hitbtc.com/api/2/order"


def test_query_is_part_of_signed_path():
    request = _builder().segments("order", "abc").query("wait", 5000).build("GET")
    assert request.path_with_query == "/api/2/order/abc?wait=5000"
    assert request.url == "https://api.hitbtc.com/api/2/order/abc?wait=5000"
    assert request.canonical_message.path_with_query == "/api/2/order/abc?wait=5000"


def test_orderbook_query_comma_joined_symbols_then_limit():
    pairs = build_orderbook_query(
        limit=10,
        symbols=[Symbol(Coin.BTC, Coin.USDT), Symbol(Coin.TON, Coin.USDT)],
        mapper=V3,
    )
    assert encode_query(pairs) == "symbols=BTCUSDT,TONUSDT&limit=10"


def test_orderbook_query_optional_parts():
    assert build_orderbook_query(mapper=V3) == []
    assert build_orderbook_query(symbols=[], mapper=V3) == []
    assert encode_query(build_orderbook_query(limit=5, mapper=V3)) == "limit=5"


def test_symbol_orderbook_volume_takes_precedence():
    assert build_symbol_orderbook_query(limit=10, volume="1.5") == [("volume", "1.5")]
    assert build_symbol_orderbook_query(limit=10) == [("limit", "10")]
    assert build_symbol_orderbook_query() == []


def test_orders_query_symbol_filter():
    assert build_orders_query(None) == []
    assert build_orders_query(Symbol(Coin.BTC, Coin.USDT), V3) == [("symbol", "BTCUSDT")]


def test_list_query_values_are_comma_joined():
    request = _builder(mapper=V3).query("symbols", [Symbol(Coin.BTC, Coin.USDT), Symbol(Coin.ETH, Coin.BTC)])
    assert request.path_with_query.endswith("?symbols=BTCUSDT,ETHBTC")


def test_unsigned_builder_has_no_authorization():
    request = RequestBuilder(BASE_URL, clock=fixed_clock).segments("public", "symbol").build("GET")
    assert "Authorization" not in request.headers
    assert not request.is_signed
    assert request.canonical_message is None


def test_non_utf8_raw_body_rejected():
    with pytest.raises(RequestBuildError):
        _builder().raw_body(b"\xff\xfe")


def test_header_with_line_break_rejected():
    with pytest.raises(RequestBuildError):
        _builder().header("X-Test", "a\r\nInjected: yes")


@pytest.mark.parametrize("base_url", ["api.hitbtc.com/api/2", "ftp://api.hitbtc.com", "https://h/api?x=1"])
def test_bad_base_url_rejected(base_url):
    with pytest.raises(RequestBuildError):
        RequestBuilder(base_url)


def test_unsupported_method_rejected():
    with pytest.raises(RequestBuildError):
        _builder().build("TRACE")


def test_request_repr_hides_headers():
    request = _builder().segment("order").build("GET")
    assert "HS256" not in repr(request)
