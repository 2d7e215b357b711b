"""Core: config, constants, exception handlers, and application bootstrap."""

from wanderbites.core.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
