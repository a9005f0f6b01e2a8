"""
Backend services for DevConnect.
"""

from . import profile_service

__all__ = ["profile_service"]
