"""Data access for users and developer profiles."""

from .base import BaseRepository
from .profile_repository import MAX_USER_ID, ProfileLookup, ProfileRepository, parse_user_ref
from .user_repository import UserRepository

__all__ = [
    "BaseRepository",
    "MAX_USER_ID",
    "ProfileLookup",
    "ProfileRepository",
    "UserRepository",
    "parse_user_ref",
]
