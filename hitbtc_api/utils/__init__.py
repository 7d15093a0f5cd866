"""Utility helpers."""

from .logging import RequestLogger, configure_logging

__all__ = ["configure_logging", "RequestLogger"]
