"""Configuration utilities for the HitBTC client."""

from .settings import Settings, load_settings

__all__ = ["Settings", "load_settings"]
