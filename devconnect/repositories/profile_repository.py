"""Developer profile repository."""

from datetime import datetime, timezone
from typing import Any, NamedTuple

from sqlalchemy.orm import joinedload

from devconnect.enums import LookupStatus, SubRecordKind
from devconnect.models import Profile

from .base import BaseRepository


class ProfileLookup(NamedTuple):
    """Result of looking up a profile by an untrusted user reference."""

    status: LookupStatus
    profile: Profile | None = None

    @property
    def found(self) -> bool:
        return self.status is LookupStatus.FOUND


# Largest value a signed 32-bit INTEGER primary key can hold
MAX_USER_ID = 2**31 - 1


def parse_user_ref(raw: str) -> int | None:
    """
    Parse an externally supplied user id.

    Returns None when the value is not a plain decimal number or when it
    cannot be a key of the users table.
    """
    if not raw or not raw.isascii() or not raw.isdigit():
        return None
    user_id = int(raw)
    if user_id > MAX_USER_ID:
        return None
    return user_id


class ProfileRepository(BaseRepository[Profile]):
    """Repository for Profile operations."""

    model = Profile

    def get_by_user_id(self, user_id: int, with_user: bool = False) -> Profile | None:
        """Get profile by user ID, optionally eager-loading the owning user."""
        query = self.session.query(Profile)
        if with_user:
            query = query.options(joinedload(Profile.user))
        return query.filter(Profile.user_id == user_id).first()

    def find_by_user_ref(self, raw_user_id: str) -> ProfileLookup:
        """
        Look up a profile with its user by a raw identifier from a URL.

        Malformed identifiers are reported as a distinct status instead of
        raising, so callers can decide how to present them.
        """
        user_id = parse_user_ref(raw_user_id)
        if user_id is None:
            return ProfileLookup(LookupStatus.MALFORMED_ID)

        profile = self.get_by_user_id(user_id, with_user=True)
        if profile is None:
            return ProfileLookup(LookupStatus.MISSING)
        return ProfileLookup(LookupStatus.FOUND, profile)

    def list_with_users(self) -> list[Profile]:
        """Get every profile with its user eager-loaded."""
        return (
            self.session.query(Profile)
            .options(joinedload(Profile.user))
            .order_by(Profile.id)
            .all()
        )

    def apply_fields(
        self,
        profile: Profile,
        fields: dict[str, Any],
        social: dict[str, str] | None = None,
    ) -> Profile:
        """
        Set the given scalar fields on a profile and merge social links.
        Keys not present in `fields` or `social` are left untouched.
        """
        for key, value in fields.items():
            if not hasattr(profile, key):
                raise ValueError(f"Unknown profile field: {key}")
            setattr(profile, key, value)

        if social:
            # Reassign so the JSON column is flagged dirty
            profile.social = {**(profile.social or {}), **social}

        profile.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return profile

    def create_for_user(
        self,
        user_id: int,
        fields: dict[str, Any],
        social: dict[str, str] | None = None,
    ) -> Profile:
        """Create a new profile owned by `user_id`."""
        values: dict[str, Any] = {"skills": [], "experience": [], "education": []}
        values.update(fields)
        return self.create(user_id=user_id, social=dict(social or {}), **values)

    def set_sub_records(
        self,
        profile: Profile,
        kind: SubRecordKind,
        records: list[dict[str, Any]],
    ) -> Profile:
        """Replace the experience or education list of a profile."""
        setattr(profile, kind.value, list(records))
        profile.updated_at = datetime.now(timezone.utc)
        self.session.flush()
        return profile

    def delete_by_user_id(self, user_id: int) -> bool:
        """Delete the profile owned by a user. Returns False when none exists."""
        profile = self.get_by_user_id(user_id)
        if profile is None:
            return False
        self.session.delete(profile)
        self.session.flush()
        return True
