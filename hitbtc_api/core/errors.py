"""Exception hierarchy shared by the request pipeline."""

from __future__ import annotations


class HitBTCError(RuntimeError):
    """Base exception for HitBTC client failures."""


class TransportError(HitBTCError):
    """The HTTP layer failed before a response was received."""


class RequestBuildError(HitBTCError, ValueError):
    """A request could not be assembled; it is never sent."""


class SignatureComputeError(HitBTCError, ValueError):
    """Credentials cannot produce a signature."""


class ApiError(HitBTCError):
    """Structured error envelope returned by the exchange."""

    def __init__(
        self,
        code: int,
        message: str,
        description: str | None = None,
        *,
        status: int | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.description = description
        self.status = status
        text = f"[{code}] {message}"
        if description:
            text = f"{text}: {description}"
        if status is not None:
            text = f"HTTP {status} {text}"
        super().__init__(text)


class DeserializationError(HitBTCError):
    """Response body did not match the expected schema.

    Keeps the raw bytes and the parser failure so that callers can inspect
    exactly what the server sent.
    """

    def __init__(self, raw: bytes, reason: Exception, *, status: int | None = None) -> None:
        self.raw = raw
        self.reason = reason
        self.status = status
        super().__init__(f"Failed to decode response (status={status}): {reason}")


__all__ = [
    "HitBTCError",
    "TransportError",
    "RequestBuildError",
    "SignatureComputeError",
    "ApiError",
    "DeserializationError",
]
