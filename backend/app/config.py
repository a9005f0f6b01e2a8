"""
Application configuration.

Re-exports from devconnect.config so backend modules can use relative imports:
    from ..config import get_settings
"""

from devconnect.config import Settings, get_settings

__all__ = ["Settings", "get_settings"]
