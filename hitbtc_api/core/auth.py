"""Helpers for generating HitBTC ``HS256`` authorization headers."""

from __future__ import annotations

import base64
import hmac
from dataclasses import dataclass
from hashlib import sha256

from .errors import RequestBuildError, SignatureComputeError

_REDACTED = "***"


@dataclass(frozen=True, repr=False)
class Credentials:
    """API key pair. Both halves are hidden from ``repr``/``str``."""

    public_key: str
    private_key: str

    def __post_init__(self) -> None:
        if not self.public_key:
            raise SignatureComputeError("public_key must not be empty")
        if not self.private_key:
            raise SignatureComputeError("private_key must not be empty")

    def __repr__(self) -> str:
        return f"Credentials(public_key={_REDACTED!r}, private_key={_REDACTED!r})"

    __str__ = __repr__


@dataclass(frozen=True)
class CanonicalMessage:
    """The exact string that gets signed: method, timestamp, path and body, unseparated."""

    method: str
    timestamp: str
    path_with_query: str
    body: str = ""

    def __post_init__(self) -> None:
        if not self.method.isalpha():
            raise RequestBuildError(f"Invalid HTTP method: {self.method!r}")
        object.__setattr__(self, "method", self.method.upper())
        if not self.timestamp.isdigit():
            raise RequestBuildError(f"Timestamp must be decimal seconds, got {self.timestamp!r}")
        if not self.path_with_query.startswith("/"):
            raise RequestBuildError(f"Path must be absolute, got {self.path_with_query!r}")

    @property
    def text(self) -> str:
        return f"{self.method}{self.timestamp}{self.path_with_query}{self.body}"

    def __str__(self) -> str:
        return self.text


def sign(credentials: Credentials, message: CanonicalMessage) -> str:
    """Return the ``Authorization`` header value for ``message``."""

    digest = hmac.new(
        credentials.private_key.encode("utf-8"),
        message.text.encode("utf-8"),
        sha256,
    ).hexdigest()
    token = f"{credentials.public_key}:{message.timestamp}:{digest}"
    return f"HS256 {base64.b64encode(token.encode('utf-8')).decode('ascii')}"


__all__ = ["Credentials", "CanonicalMessage", "sign"]
