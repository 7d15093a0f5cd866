"""Client library for the HitBTC REST API."""

from .core import (
    ApiError,
    Credentials,
    DeserializationError,
    HitBTCClient,
    HitBTCError,
    PublicClient,
    RequestBuildError,
    TransportError,
)

__all__ = [
    "Credentials",
    "HitBTCClient",
    "PublicClient",
    "HitBTCError",
    "ApiError",
    "DeserializationError",
    "RequestBuildError",
    "TransportError",
]
