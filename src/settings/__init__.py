"""Application settings loading."""

from .app import RequestSettings, get_settings


__all__ = ["RequestSettings", "get_settings"]
