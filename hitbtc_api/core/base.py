"""Closed enumerations with one fixed wire string per member."""

from __future__ import annotations

from enum import Enum


class Side(str, Enum):
    SELL = "sell"
    BUY = "buy"


class OrderType(str, Enum):
    LIMIT = "limit"
    MARKET = "market"
    STOP_LIMIT = "stopLimit"
    STOP_MARKET = "stopMarket"


class TimeInForce(str, Enum):
    GOOD_TILL_CANCELLED = "GTC"
    IMMEDIATE_OR_CANCEL = "IOC"
    FILL_OR_KILL = "FOK"
    DAY = "Day"
    GOOD_TILL_DATE = "GTD"


__all__ = ["Side", "OrderType", "TimeInForce"]
