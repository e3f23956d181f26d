"""Core: configuration and constants."""

from firelite.core.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
