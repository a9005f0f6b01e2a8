"""
SQLAlchemy ORM models for the backend.

Re-exports from devconnect.models:
    from devconnect.models import User, Profile
"""

from devconnect.models import Base, Profile, User

__all__ = ["Base", "User", "Profile"]
