"""HTTP transport used to deliver prepared requests."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Protocol

import requests

from .errors import TransportError
from .request import PreparedRequest

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class RawResponse:
    status: int
    body: bytes
    headers: Mapping[str, str] = field(default_factory=dict)


class Transport(Protocol):
    def send(self, request: PreparedRequest) -> RawResponse:  # pragma: no cover - protocol hook
        ...


class RequestsTransport:
    """Sends requests through a :class:`requests.Session`."""

    def __init__(self, session: requests.Session | None = None, timeout: float = 10) -> None:
        self.session = session or requests.Session()
        self.timeout = timeout

    def send(self, request: PreparedRequest) -> RawResponse:
        LOGGER.debug("Sending %s %s", request.method, request.url)
        try:
            response = self.session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                data=request.body or None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{request.method} {request.url} failed: {exc}") from exc
        return RawResponse(
            status=response.status_code,
            body=response.content,
            headers=dict(response.headers),
        )

    def close(self) -> None:
        self.session.close()


__all__ = ["RawResponse", "Transport", "RequestsTransport"]
