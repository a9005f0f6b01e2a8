"""
Shared Enumerations.

Defines enums used across the service for type safety and consistency.
"""

from enum import Enum


class LookupStatus(str, Enum):
    """Outcome of a repository lookup by an externally supplied identifier."""
    FOUND = "found"
    MISSING = "missing"
    MALFORMED_ID = "malformed_id"


class SubRecordKind(str, Enum):
    """Kinds of sub-records embedded in a profile."""
    EXPERIENCE = "experience"
    EDUCATION = "education"


class SocialNetwork(str, Enum):
    """Social links a profile may carry."""
    YOUTUBE = "youtube"
    TWITTER = "twitter"
    FACEBOOK = "facebook"
    LINKEDIN = "linkedin"
    INSTAGRAM = "instagram"
