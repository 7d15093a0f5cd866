"""Typed order commands and response models for the HitBTC REST API."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import TYPE_CHECKING, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .base import OrderType, Side, TimeInForce
from .coin import CoinLike, Symbol

if TYPE_CHECKING:
    from .mapper import DomainMapper

DecimalLike = Union[Decimal, int, float, str]


# ----------------------------------------------------------------------
# Commands (client -> exchange)
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class CreateMarketOrder:
    symbol: Symbol
    side: Side
    quantity: DecimalLike
    client_order_id: str | None = None


@dataclass(frozen=True)
class CreateLimitOrder:
    symbol: Symbol
    side: Side
    quantity: DecimalLike
    price: DecimalLike
    time_in_force: TimeInForce | None = None
    client_order_id: str | None = None


@dataclass(frozen=True)
class CreateOrder:
    """Generic order; the exchange defaults to a GTC limit order when type fields are unset."""

    symbol: Symbol
    side: Side
    quantity: DecimalLike
    order_type: OrderType | None = None
    time_in_force: TimeInForce | None = None
    price: DecimalLike | None = None  # limit and stopLimit
    stop_price: DecimalLike | None = None  # stopLimit and stopMarket
    expire_time: dt.datetime | str | None = None  # GTD only
    client_order_id: str | None = None
    strict_validate: bool | None = None
    post_only: bool | None = None


OrderCommand = Union[CreateMarketOrder, CreateLimitOrder, CreateOrder]


# ----------------------------------------------------------------------
# Wire models (exchange -> client)
# ----------------------------------------------------------------------
class ExchangeModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )


class AccountCurrency(ExchangeModel):
    currency: str
    available: str
    reserved: str


class PublicCurrency(ExchangeModel):
    id: str
    full_name: str
    payin_enabled: bool
    payin_payment_id: bool
    payin_confirmations: int
    payout_enabled: bool
    payout_is_payment_id: bool
    transfer_enabled: bool
    delisted: bool
    payout_fee: str | None = None
    payout_minimal_amount: str | None = None
    precision_payout: int
    precision_transfer: int


class Order(ExchangeModel):
    id: int
    client_order_id: str
    symbol: str
    side: Side
    status: str
    order_type: OrderType = Field(alias="type")
    time_in_force: TimeInForce
    quantity: str
    price: str | None = None
    stop_price: str | None = None
    cum_quantity: str
    created_at: str
    updated_at: str | None = None
    post_only: bool = False
    expire_time: str | None = None


class SymbolInfo(ExchangeModel):
    id: str
    base_currency: str
    quote_currency: str
    quantity_increment: str
    tick_size: str
    take_liquidity_rate: str
    provide_liquidity_rate: str
    fee_currency: str


class Price(ExchangeModel):
    price: str
    size: str


class OrderBookPage(ExchangeModel):
    symbol: str
    ask: list[Price]
    bid: list[Price]
    timestamp: str


OrderBook = dict[str, OrderBookPage]


class OrderBookExactSymbol(ExchangeModel):
    ask: list[Price]
    bid: list[Price]
    timestamp: str
    # only present when the book was requested by volume
    ask_average_price: str | None = None
    bid_average_price: str | None = None


class TradingCommission(ExchangeModel):
    take_liquidity_rate: str
    provide_liquidity_rate: str


class ErrorBody(ExchangeModel):
    code: int
    message: str
    description: str | None = None


class ErrorEnvelope(ExchangeModel):
    error: ErrorBody


# ----------------------------------------------------------------------
# Typed views
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Currency:
    currency: CoinLike
    available: Decimal
    reserved: Decimal

    @classmethod
    def from_model(cls, model: AccountCurrency, mapper: DomainMapper) -> Currency:
        return cls(
            currency=mapper.coin_from_wire(model.currency),
            available=Decimal(model.available),
            reserved=Decimal(model.reserved),
        )


@dataclass(frozen=True)
class PriceLevel:
    amount: Decimal
    rate: Decimal

    @classmethod
    def from_model(cls, price: Price) -> PriceLevel:
        return cls(amount=Decimal(price.size), rate=Decimal(price.price))


@dataclass(frozen=True)
class OrderBookSide:
    """One side of a symbol's book, as seen by someone about to trade on ``side``."""

    symbol: Symbol
    side: Side
    prices: list[PriceLevel] = field(default_factory=list)

    @classmethod
    def from_orderbook(
        cls,
        symbol: Symbol,
        side: Side,
        orderbook: OrderBook,
        mapper: DomainMapper,
    ) -> OrderBookSide:
        key = mapper.symbol_to_wire(symbol)
        try:
            page = orderbook[key]
        except KeyError:
            raise KeyError(f"Symbol {key} is not present in the order book") from None
        levels = page.bid if side is Side.BUY else page.ask
        return cls(symbol=symbol, side=side, prices=[PriceLevel.from_model(level) for level in levels])


__all__ = [
    "DecimalLike",
    "CreateMarketOrder",
    "CreateLimitOrder",
    "CreateOrder",
    "OrderCommand",
    "ExchangeModel",
    "AccountCurrency",
    "PublicCurrency",
    "Order",
    "SymbolInfo",
    "Price",
    "OrderBookPage",
    "OrderBook",
    "OrderBookExactSymbol",
    "TradingCommission",
    "ErrorBody",
    "ErrorEnvelope",
    "Currency",
    "PriceLevel",
    "OrderBookSide",
]
