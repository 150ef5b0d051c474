"""Configuration module for TokenImage.

Usage:
    from tokenimage.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.redis_url)
"""

from tokenimage.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
