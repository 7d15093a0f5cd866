"""Core exchange integration modules."""

from .auth import CanonicalMessage, Credentials, sign
from .base import OrderType, Side, TimeInForce
from .client import DEFAULT_BASE_URL, HitBTCClient, PublicClient
from .coin import V2_COIN_TABLE, V3_COIN_TABLE, Coin, CoinTable, Symbol, UnknownCoin, coin_table_for
from .errors import (
    ApiError,
    DeserializationError,
    HitBTCError,
    RequestBuildError,
    SignatureComputeError,
    TransportError,
)
from .extractor import ResponseExtractor
from .mapper import DomainMapper
from .models import CreateLimitOrder, CreateMarketOrder, CreateOrder
from .request import PreparedRequest, RequestBuilder
from .transport import RawResponse, RequestsTransport, Transport

__all__ = [
    "CanonicalMessage",
    "Credentials",
    "sign",
    "Side",
    "OrderType",
    "TimeInForce",
    "Coin",
    "UnknownCoin",
    "CoinTable",
    "Symbol",
    "V2_COIN_TABLE",
    "V3_COIN_TABLE",
    "coin_table_for",
    "DomainMapper",
    "CreateMarketOrder",
    "CreateLimitOrder",
    "CreateOrder",
    "RequestBuilder",
    "PreparedRequest",
    "ResponseExtractor",
    "Transport",
    "RawResponse",
    "RequestsTransport",
    "HitBTCClient",
    "PublicClient",
    "DEFAULT_BASE_URL",
    "HitBTCError",
    "TransportError",
    "RequestBuildError",
    "SignatureComputeError",
    "ApiError",
    "DeserializationError",
]
