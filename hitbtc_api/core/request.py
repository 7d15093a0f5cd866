"""Assembly of signed request descriptors.

A :class:`RequestBuilder` collects path segments, query parameters and an
optional JSON body, then :meth:`RequestBuilder.build` captures a single
timestamp, signs the canonical message and returns an immutable
:class:`PreparedRequest`. The body bytes stored on the descriptor are the
same bytes that were signed, so the transport must send them unchanged.
"""

from __future__ import annotations

import json
import time
from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, get_args
from urllib.parse import quote, urlsplit, urlunsplit

from .auth import CanonicalMessage, Credentials, sign
from .coin import Symbol
from .errors import RequestBuildError
from .mapper import DEFAULT_MAPPER, DomainMapper
from .models import OrderCommand

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
JSON_CONTENT_TYPE = "application/json"

QueryPairs = list[tuple[str, str]]


@dataclass(frozen=True)
class PreparedRequest:
    """Everything the transport needs to send one request."""

    method: str
    url: str
    path_with_query: str
    headers: Mapping[str, str] = field(repr=False)
    body: bytes = b""
    timestamp: str | None = None
    canonical_message: CanonicalMessage | None = field(default=None, repr=False)

    @property
    def is_signed(self) -> bool:
        return "Authorization" in self.headers


def encode_query(pairs: Iterable[tuple[str, str]]) -> str:
    """Join ``name=value`` pairs in order; commas in values stay literal."""

    return "&".join(f"{quote(name, safe='')}={quote(value, safe=',')}" for name, value in pairs)


def _join(values: Sequence[Any], mapper: DomainMapper) -> str:
    return ",".join(mapper.to_wire(value) for value in values)


def build_orderbook_query(
    limit: int | None = None,
    symbols: Sequence[Symbol] | None = None,
    mapper: DomainMapper = DEFAULT_MAPPER,
) -> QueryPairs:
    pairs: QueryPairs = []
    if symbols:
        pairs.append(("symbols", _join(symbols, mapper)))
    if limit is not None:
        pairs.append(("limit", mapper.to_wire(limit)))
    return pairs


def build_symbol_orderbook_query(
    limit: int | None = None,
    volume: Any = None,
    mapper: DomainMapper = DEFAULT_MAPPER,
) -> QueryPairs:
    # volume and limit are mutually exclusive; volume wins
    if volume is not None:
        return [("volume", mapper.format_decimal(volume))]
    if limit is not None:
        return [("limit", mapper.to_wire(limit))]
    return []


def build_orders_query(
    symbol: Symbol | None = None,
    mapper: DomainMapper = DEFAULT_MAPPER,
) -> QueryPairs:
    if symbol is None:
        return []
    return [("symbol", mapper.symbol_to_wire(symbol))]


def _validate_segment(segment: str) -> str:
    if not segment:
        raise RequestBuildError("Path segment must not be empty")
    if segment in {".", ".."}:
        raise RequestBuildError(f"Relative path segment {segment!r} is not allowed")
    for forbidden in ("/", "\\", "?", "#"):
        if forbidden in segment:
            raise RequestBuildError(f"Path segment {segment!r} contains {forbidden!r}")
    if any(ord(char) < 0x20 or ord(char) == 0x7F for char in segment):
        raise RequestBuildError(f"Path segment {segment!r} contains control characters")
    return quote(segment, safe="")


def _validate_header(name: str, value: str) -> None:
    if not name or any(char in name for char in " :\r\n\t"):
        raise RequestBuildError(f"Invalid header name: {name!r}")
    if any(char in value for char in "\r\n\0"):
        raise RequestBuildError(f"Header {name} contains a line break")


class RequestBuilder:
    """Single-use builder for one HitBTC request."""

    def __init__(
        self,
        base_url: str,
        *,
        credentials: Credentials | None = None,
        mapper: DomainMapper = DEFAULT_MAPPER,
        clock: Callable[[], float] = time.time,
    ) -> None:
        parts = urlsplit(base_url)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise RequestBuildError(f"Base URL must be absolute http(s), got {base_url!r}")
        if parts.query or parts.fragment:
            raise RequestBuildError("Base URL must not carry a query or fragment")
        self._scheme = parts.scheme
        self._netloc = parts.netloc
        self._base_path = parts.path.rstrip("/")
        self.credentials = credentials
        self.mapper = mapper
        self._clock = clock
        self._segments: list[str] = []
        self._query: QueryPairs = []
        self._headers: dict[str, str] = {}
        self._body: bytes = b""
        self._body_text = ""

    def _wire(self, value: Any, what: str) -> str:
        try:
            return self.mapper.to_wire(value)
        except (TypeError, ValueError) as exc:
            raise RequestBuildError(f"Invalid {what}: {value!r}") from exc

    def segment(self, value: Any) -> RequestBuilder:
        """Append one path segment; domain values are converted to their wire form."""

        self._segments.append(_validate_segment(self._wire(value, "path segment")))
        return self

    def segments(self, *values: Any) -> RequestBuilder:
        for value in values:
            self.segment(value)
        return self

    def query(self, name: str, value: Any) -> RequestBuilder:
        """Append a query parameter. ``None`` and empty sequences are skipped."""

        if value is None:
            return self
        if isinstance(value, (list, tuple)):
            if not value:
                return self
            self._query.append((name, ",".join(self._wire(item, f"query value {name}") for item in value)))
        else:
            self._query.append((name, self._wire(value, f"query value {name}")))
        return self

    def query_pairs(self, pairs: Iterable[tuple[str, str]]) -> RequestBuilder:
        for name, value in pairs:
            self.query(name, value)
        return self

    def header(self, name: str, value: str) -> RequestBuilder:
        _validate_header(name, value)
        self._headers[name] = value
        return self

    def json_body(self, payload: Any) -> RequestBuilder:
        """Serialise an order command or a mapping as compact JSON."""

        if isinstance(payload, get_args(OrderCommand)):
            try:
                payload = self.mapper.order_to_wire(payload)
            except (TypeError, ValueError) as exc:
                raise RequestBuildError(f"Invalid order: {exc}") from exc
        if not isinstance(payload, Mapping):
            raise RequestBuildError(f"Unsupported body type: {type(payload).__name__}")
        text = json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
        try:
            self._body = text.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise RequestBuildError("Body is not valid UTF-8") from exc
        self._body_text = text
        return self

    def raw_body(self, data: bytes) -> RequestBuilder:
        try:
            self._body_text = data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise RequestBuildError("Body is not valid UTF-8") from exc
        self._body = bytes(data)
        return self

    @property
    def path_with_query(self) -> str:
        path = self._base_path + "".join(f"/{segment}" for segment in self._segments)
        path = path or "/"
        if self._query:
            return f"{path}?{encode_query(self._query)}"
        return path

    def build(self, method: str) -> PreparedRequest:
        method = method.upper()
        if method not in ALLOWED_METHODS:
            raise RequestBuildError(f"Unsupported HTTP method: {method!r}")

        path_with_query = self.path_with_query
        path, _, query = path_with_query.partition("?")
        url = urlunsplit((self._scheme, self._netloc, path, query, ""))

        headers = {"Accept": JSON_CONTENT_TYPE}
        if self._body:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        headers.update(self._headers)

        # captured once: the same value is signed and sent
        timestamp = str(int(self._clock()))
        message = None
        if self.credentials is not None:
            message = CanonicalMessage(method, timestamp, path_with_query, self._body_text)
            headers["Authorization"] = sign(self.credentials, message)

        return PreparedRequest(
            method=method,
            url=url,
            path_with_query=path_with_query,
            headers=MappingProxyType(headers),
            body=self._body,
            timestamp=timestamp,
            canonical_message=message,
        )


__all__ = [
    "PreparedRequest",
    "RequestBuilder",
    "QueryPairs",
    "encode_query",
    "build_orderbook_query",
    "build_symbol_orderbook_query",
    "build_orders_query",
]
