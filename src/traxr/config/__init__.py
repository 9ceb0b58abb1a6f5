"""Configuration module for TRAXR.

Usage:
    from traxr.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.local_pools_path)

Note:
    Use `get_settings()` rather than a module-level instance so that
    environment overrides are read at runtime, not at import.
"""

from traxr.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
