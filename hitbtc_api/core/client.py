"""REST client wrappers for the HitBTC API."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Any

from .auth import Credentials
from .coin import Symbol
from .errors import ApiError, DeserializationError, TransportError
from .extractor import ResponseExtractor
from .mapper import DEFAULT_MAPPER, DomainMapper
from .models import (
    AccountCurrency,
    Order,
    OrderBook,
    OrderBookExactSymbol,
    OrderCommand,
    PublicCurrency,
    SymbolInfo,
    TradingCommission,
)
from .request import (
    RequestBuilder,
    build_orderbook_query,
    build_orders_query,
    build_symbol_orderbook_query,
)
from .transport import RequestsTransport, Transport

if TYPE_CHECKING:
    from hitbtc_api.config import Settings
    from hitbtc_api.utils.logging import RequestLogger

LOGGER = logging.getLogger(__name__)

API_ROOT = "https://api.hitbtc.com/api"
DEFAULT_BASE_URL = f"{API_ROOT}/2"


class _BaseClient:
    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: Transport | None = None,
        mapper: DomainMapper = DEFAULT_MAPPER,
        extractor: ResponseExtractor | None = None,
        request_logger: RequestLogger | None = None,
        clock: Callable[[], float] = time.time,
        timeout: float = 10,
    ) -> None:
        self.base_url = base_url
        self.transport = transport or RequestsTransport(timeout=timeout)
        self.mapper = mapper
        self.extractor = extractor or ResponseExtractor()
        self.request_logger = request_logger
        self._clock = clock

    def _credentials(self) -> Credentials | None:
        return None

    def _builder(self) -> RequestBuilder:
        return RequestBuilder(
            self.base_url,
            credentials=self._credentials(),
            mapper=self.mapper,
            clock=self._clock,
        )

    def _execute(self, builder: RequestBuilder, method: str, model: Any) -> Any:
        request = builder.build(method)
        if self.request_logger is not None:
            self.request_logger.log_request(request.method, request.url, signed=request.is_signed)

        started = time.monotonic()
        try:
            response = self.transport.send(request)
        except TransportError as exc:
            LOGGER.error("%s %s failed: %s", request.method, request.url, exc)
            if self.request_logger is not None:
                self.request_logger.log_error(f"{request.method} {request.url}", exception=exc)
            raise
        elapsed = time.monotonic() - started

        LOGGER.info("%s %s -> %s", request.method, request.path_with_query, response.status)
        if self.request_logger is not None:
            self.request_logger.log_response(request.method, request.url, response.status, elapsed)

        try:
            return self.extractor.extract(model, response.status, response.body)
        except (ApiError, DeserializationError) as exc:
            if self.request_logger is not None:
                self.request_logger.log_error(f"{request.method} {request.url}", exception=exc)
            raise

    def close(self) -> None:
        close = getattr(self.transport, "close", None)
        if close is not None:
            close()

    def __enter__(self) -> _BaseClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class HitBTCClient(_BaseClient):
    """Authenticated client; every request carries an ``HS256`` Authorization header."""

    ACCOUNT = "account"
    BALANCE = "balance"
    ORDER = "order"
    TRADING = "trading"
    FEE = "fee"

    def __init__(self, credentials: Credentials, base_url: str = DEFAULT_BASE_URL, **kwargs: Any) -> None:
        super().__init__(base_url, **kwargs)
        self.credentials = credentials

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> HitBTCClient:
        kwargs.setdefault("mapper", DomainMapper.for_api_version(settings.api_version))
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.credentials(), settings.base_url, **kwargs)

    def _credentials(self) -> Credentials:
        return self.credentials

    def get_balance(self) -> list[AccountCurrency]:
        builder = self._builder().segments(self.ACCOUNT, self.BALANCE)
        return self._execute(builder, "GET", list[AccountCurrency])

    def get_trading_balance(self) -> list[AccountCurrency]:
        builder = self._builder().segments(self.TRADING, self.BALANCE)
        return self._execute(builder, "GET", list[AccountCurrency])

    def get_all_orders(self, symbol: Symbol | None = None) -> list[Order]:
        """Active orders, optionally filtered by ``symbol``."""
        builder = self._builder().segment(self.ORDER).query_pairs(build_orders_query(symbol, self.mapper))
        return self._execute(builder, "GET", list[Order])

    def get_order(self, client_order_id: str, wait: int | None = None) -> Order:
        """Fetch one active order; ``wait`` long-polls up to that many milliseconds."""
        builder = self._builder().segments(self.ORDER, client_order_id).query("wait", wait)
        return self._execute(builder, "GET", Order)

    def create_order(self, order: OrderCommand) -> Order:
        builder = self._builder().segment(self.ORDER).json_body(order)
        return self._execute(builder, "POST", Order)

    def cancel_order(self, client_order_id: str) -> Order:
        builder = self._builder().segments(self.ORDER, client_order_id)
        return self._execute(builder, "DELETE", Order)

    def get_trading_commission(self, symbol: Symbol) -> TradingCommission:
        builder = self._builder().segments(self.TRADING, self.FEE, symbol)
        return self._execute(builder, "GET", TradingCommission)


class PublicClient(_BaseClient):
    """Market data endpoints that need no credentials."""

    PUBLIC = "public"
    SYMBOL = "symbol"
    CURRENCY = "currency"
    ORDERBOOK = "orderbook"

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs: Any) -> PublicClient:
        kwargs.setdefault("mapper", DomainMapper.for_api_version(settings.api_version))
        kwargs.setdefault("timeout", settings.timeout)
        return cls(settings.base_url, **kwargs)

    def get_all_symbols(self) -> list[SymbolInfo]:
        builder = self._builder().segments(self.PUBLIC, self.SYMBOL)
        return self._execute(builder, "GET", list[SymbolInfo])

    def get_currencies(self) -> list[PublicCurrency]:
        builder = self._builder().segments(self.PUBLIC, self.CURRENCY)
        return self._execute(builder, "GET", list[PublicCurrency])

    def get_orderbook(
        self,
        limit: int | None = None,
        symbols: Sequence[Symbol] | None = None,
    ) -> OrderBook:
        builder = (
            self._builder()
            .segments(self.PUBLIC, self.ORDERBOOK)
            .query_pairs(build_orderbook_query(limit, symbols, self.mapper))
        )
        return self._execute(builder, "GET", OrderBook)

    def get_symbol_orderbook(
        self,
        symbol: Symbol,
        limit: int | None = None,
        volume: Any = None,
    ) -> OrderBookExactSymbol:
        builder = (
            self._builder()
            .segments(self.PUBLIC, self.ORDERBOOK, symbol)
            .query_pairs(build_symbol_orderbook_query(limit, volume, self.mapper))
        )
        return self._execute(builder, "GET", OrderBookExactSymbol)


__all__ = ["HitBTCClient", "PublicClient", "API_ROOT", "DEFAULT_BASE_URL"]
