"""Conversion between typed domain values and their HitBTC wire form."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any, TypeVar

from .base import OrderType, Side, TimeInForce
from .coin import DEFAULT_COIN_TABLE, Coin, CoinLike, CoinTable, Symbol, UnknownCoin, coin_table_for
from .models import CreateLimitOrder, CreateMarketOrder, DecimalLike, OrderCommand

WireEnum = TypeVar("WireEnum", Side, OrderType, TimeInForce)


class DomainMapper:
    """Single place that knows how domain values are spelled on the wire."""

    def __init__(self, coin_table: CoinTable = DEFAULT_COIN_TABLE) -> None:
        self.coin_table = coin_table

    @classmethod
    def for_api_version(cls, api_version: str) -> DomainMapper:
        return cls(coin_table_for(api_version))

    # ------------------------------------------------------------------
    # scalar values
    # ------------------------------------------------------------------
    def coin_to_wire(self, coin: CoinLike) -> str:
        return self.coin_table.to_wire(coin)

    def coin_from_wire(self, code: str) -> CoinLike:
        return self.coin_table.from_wire(code)

    def symbol_to_wire(self, symbol: Symbol) -> str:
        return symbol.to_wire(self.coin_table)

    @staticmethod
    def enum_from_wire(kind: type[WireEnum], value: str) -> WireEnum:
        try:
            return kind(value)
        except ValueError:
            raise ValueError(f"{value!r} is not a valid {kind.__name__} wire value") from None

    @staticmethod
    def format_decimal(value: DecimalLike) -> str:
        """Render a number as a plain decimal string (no exponent, no float noise)."""

        if isinstance(value, bool):
            raise TypeError("Booleans are not decimal amounts")
        if isinstance(value, float):
            # repr gives the shortest string that round-trips the float
            value = repr(value)
        try:
            number = Decimal(value)
        except (InvalidOperation, TypeError) as exc:
            raise ValueError(f"Not a decimal amount: {value!r}") from exc
        if not number.is_finite():
            raise ValueError(f"Amount must be finite, got {value!r}")
        return format(number, "f")

    @staticmethod
    def format_datetime(value: dt.datetime | str) -> str:
        if isinstance(value, str):
            return value
        if value.tzinfo is None:
            value = value.replace(tzinfo=dt.timezone.utc)
        value = value.astimezone(dt.timezone.utc)
        return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"

    def to_wire(self, value: Any) -> str:
        """Wire string for any supported domain value."""

        if isinstance(value, (Coin, UnknownCoin)):
            return self.coin_to_wire(value)
        if isinstance(value, Symbol):
            return self.symbol_to_wire(value)
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, dt.datetime):
            return self.format_datetime(value)
        if isinstance(value, (Decimal, int, float)):
            return self.format_decimal(value)
        if isinstance(value, str):
            return value
        raise TypeError(f"No wire form for {type(value).__name__}")

    def from_wire(self, kind: type, value: str) -> Any:
        if kind is Coin or kind is UnknownCoin:
            return self.coin_from_wire(value)
        if kind in (Side, OrderType, TimeInForce):
            return self.enum_from_wire(kind, value)
        raise TypeError(f"Cannot parse {kind.__name__} from the wire")

    # ------------------------------------------------------------------
    # order commands
    # ------------------------------------------------------------------
    def order_to_wire(self, order: OrderCommand) -> dict[str, Any]:
        """JSON-ready body for an order command; unset optional fields are omitted."""

        body: dict[str, Any] = {}
        if order.client_order_id is not None:
            body["clientOrderId"] = order.client_order_id
        body["symbol"] = self.symbol_to_wire(order.symbol)
        body["side"] = order.side.value

        if isinstance(order, CreateMarketOrder):
            body["quantity"] = self.format_decimal(order.quantity)
            body["type"] = OrderType.MARKET.value
            return body

        if isinstance(order, CreateLimitOrder):
            body["quantity"] = self.format_decimal(order.quantity)
            body["price"] = self.format_decimal(order.price)
            if order.time_in_force is not None:
                body["timeInForce"] = order.time_in_force.value
            return body

        if order.order_type is not None:
            body["type"] = order.order_type.value
        if order.time_in_force is not None:
            body["timeInForce"] = order.time_in_force.value
        body["quantity"] = self.format_decimal(order.quantity)
        if order.price is not None:
            body["price"] = self.format_decimal(order.price)
        if order.stop_price is not None:
            body["stopPrice"] = self.format_decimal(order.stop_price)
        if order.expire_time is not None:
            body["expireTime"] = self.format_datetime(order.expire_time)
        if order.strict_validate is not None:
            body["strictValidate"] = order.strict_validate
        if order.post_only is not None:
            body["postOnly"] = order.post_only
        return body


DEFAULT_MAPPER = DomainMapper()


__all__ = ["DomainMapper", "DEFAULT_MAPPER"]
