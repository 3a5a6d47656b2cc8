"""Environment-backed configuration."""

from .settings import CoreSettings, get_settings

__all__ = ["CoreSettings", "get_settings"]
