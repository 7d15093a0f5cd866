"""Decoding of raw HTTP responses into typed values or typed errors."""

from __future__ import annotations

import logging
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import ApiError, DeserializationError
from .models import ErrorEnvelope

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")

_ADAPTERS: dict[Any, TypeAdapter[Any]] = {}


def _adapter(model: Any) -> TypeAdapter[Any]:
    adapter = _ADAPTERS.get(model)
    if adapter is None:
        adapter = TypeAdapter(model)
        _ADAPTERS[model] = adapter
    return adapter


def is_success(status: int) -> bool:
    return 200 <= status < 300


def _decode(model: Any, status: int, body: bytes) -> Any:
    try:
        text = body.decode("utf-8")
        return _adapter(model).validate_json(text)
    except (UnicodeDecodeError, ValidationError) as exc:
        LOGGER.error("Failed to decode %s (status %s): %r", model, status, body[:512])
        raise DeserializationError(body, exc, status=status) from exc


def extract(model: type[T] | Any, status: int, body: bytes) -> T:
    """Decode ``body`` as ``model`` on success, otherwise raise the server's error.

    A failing status whose body is not an error envelope raises
    :class:`DeserializationError`, never a bare success.
    """

    if is_success(status):
        return _decode(model, status, body)
    envelope: ErrorEnvelope = _decode(ErrorEnvelope, status, body)
    error = envelope.error
    raise ApiError(error.code, error.message, error.description, status=status)


class ResponseExtractor:
    """Thin object wrapper so clients can swap decoding in tests."""

    def extract(self, model: type[T] | Any, status: int, body: bytes) -> T:
        return extract(model, status, body)


__all__ = ["ResponseExtractor", "extract", "is_success"]
