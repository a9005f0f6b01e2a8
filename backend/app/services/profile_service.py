"""
Profile management service functions.

Each function takes the request's session explicitly and commits its own
writes.
"""

import uuid
from typing import Any

import httpx
from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from devconnect.enums import SocialNetwork, SubRecordKind
from devconnect.logging import get_logger, log_context
from devconnect.repositories import ProfileLookup, ProfileRepository, UserRepository

from ..error_handlers import error_response
from ..models import Profile, User
from ..schemas import EducationCreateRequest, ExperienceCreateRequest, ProfileUpsertRequest

logger = get_logger("profile.service")

PROFILE_FIELDS = ("company", "website", "location", "bio", "status", "githubusername")
SOCIAL_FIELDS = tuple(network.value for network in SocialNetwork)

NOT_FOUND_INDEX = -1

GITHUB_NOT_FOUND_DETAIL = "No Github Profile Found"


class ProfileNotFoundError(LookupError):
    """Raised when an operation needs the caller's profile and there is none."""

    def __init__(self, user_id: int):
        super().__init__(f"No profile for user {user_id}")
        self.user_id = user_id


def split_skills(raw: str) -> list[str]:
    """Split a comma-separated skills string and trim each entry."""
    return [skill.strip() for skill in raw.split(",")]


def build_profile_fields(payload: ProfileUpsertRequest) -> tuple[dict[str, Any], dict[str, str]]:
    """
    Build the partial update for an upsert.

    Only fields with a non-empty value are included; everything else is left
    as it is on the stored profile.
    """
    fields: dict[str, Any] = {}
    for name in PROFILE_FIELDS:
        value = getattr(payload, name)
        if value:
            fields[name] = value

    if payload.skills:
        fields["skills"] = split_skills(payload.skills)

    social = {name: getattr(payload, name) for name in SOCIAL_FIELDS if getattr(payload, name)}
    return fields, social


# =============================================================================
# Retrieval
# =============================================================================


def get_own_profile(db: Session, user: User) -> Profile | None:
    """Fetch the caller's profile with its user, or None if it does not exist."""
    return ProfileRepository(db).get_by_user_id(user.id, with_user=True)


def list_profiles(db: Session) -> list[Profile]:
    return ProfileRepository(db).list_with_users()


def lookup_profile(db: Session, raw_user_id: str) -> ProfileLookup:
    """Look up a profile by a user id taken from the URL."""
    lookup = ProfileRepository(db).find_by_user_ref(raw_user_id)
    if not lookup.found:
        logger.info("profile_lookup_miss", user_ref=raw_user_id, status=lookup.status.value)
    return lookup


# =============================================================================
# Upsert / delete
# =============================================================================


def upsert_profile(db: Session, user: User, payload: ProfileUpsertRequest) -> Profile:
    """
    Create the caller's profile or apply a partial update to it.

    The existence check and the write are not isolated from each other; a
    concurrent insert for the same user fails on the unique user_id column.
    """
    repo = ProfileRepository(db)
    fields, social = build_profile_fields(payload)

    with log_context(user_id=user.id):
        profile = repo.get_by_user_id(user.id)
        if profile is not None:
            profile = repo.apply_fields(profile, fields, social)
            logger.info("profile_updated", fields=sorted(fields), social=sorted(social))
        else:
            profile = repo.create_for_user(user.id, fields, social)
            logger.info("profile_created", fields=sorted(fields), social=sorted(social))

        db.commit()
        db.refresh(profile)
    return profile


def delete_account(db: Session, user: User) -> None:
    """
    Delete the caller's profile, then the caller's user.

    The two deletes are committed separately. If the second one fails the
    profile stays deleted and the user row remains.
    """
    user_id = user.id
    with log_context(user_id=user_id):
        profile_removed = ProfileRepository(db).delete_by_user_id(user_id)
        db.commit()
        logger.info("profile_deleted", removed=profile_removed)

        UserRepository(db).delete_by_id(user_id)
        db.commit()
        logger.info("user_deleted")


# =============================================================================
# Experience / education
# =============================================================================


def find_sub_record_index(records: list[dict[str, Any]], record_id: str) -> int:
    """Position of the record with ``record_id``, or -1 when absent."""
    for index, record in enumerate(records):
        if record.get("id") == record_id:
            return index
    return NOT_FOUND_INDEX


def remove_at(records: list[dict[str, Any]], index: int) -> list[dict[str, Any]]:
    """
    Return a copy of ``records`` with one element removed at ``index``.

    Negative positions count from the end, so the not-found position removes
    the last record. An empty list is returned unchanged.
    """
    remaining = list(records)
    if remaining:
        del remaining[index]
    return remaining


def _require_profile(repo: ProfileRepository, user: User) -> Profile:
    profile = repo.get_by_user_id(user.id)
    if profile is None:
        raise ProfileNotFoundError(user.id)
    return profile


def add_sub_record(
    db: Session,
    user: User,
    kind: SubRecordKind,
    payload: ExperienceCreateRequest | EducationCreateRequest,
) -> Profile:
    """Prepend a new experience or education record to the caller's profile."""
    repo = ProfileRepository(db)
    profile = _require_profile(repo, user)

    record = {"id": uuid.uuid4().hex, **payload.model_dump(mode="json", by_alias=True)}
    records = [record, *(getattr(profile, kind.value) or [])]
    repo.set_sub_records(profile, kind, records)
    db.commit()
    db.refresh(profile)

    logger.info("sub_record_added", user_id=user.id, kind=kind.value, record_id=record["id"])
    return profile


def remove_sub_record(db: Session, user: User, kind: SubRecordKind, record_id: str) -> Profile:
    """
    Remove one experience or education record from the caller's profile.

    The position is found by a linear scan of record ids. When no id
    matches, the removal still happens at the not-found position (-1), which
    drops the last record.
    """
    repo = ProfileRepository(db)
    profile = _require_profile(repo, user)

    records = getattr(profile, kind.value) or []
    index = find_sub_record_index(records, record_id)
    if index == NOT_FOUND_INDEX:
        logger.warning(
            "sub_record_id_not_matched",
            user_id=user.id,
            kind=kind.value,
            record_id=record_id,
            records=len(records),
        )

    repo.set_sub_records(profile, kind, remove_at(records, index))
    db.commit()
    db.refresh(profile)

    logger.info("sub_record_removed", user_id=user.id, kind=kind.value, index=index)
    return profile


# =============================================================================
# GitHub repository lookup
# =============================================================================


def github_repos_response(username: str, response: httpx.Response) -> JSONResponse:
    """
    Turn the GitHub reply into the response sent to the client.

    A non-200 reply produces a 404 first; the body is still parsed after
    that, and the 404 is what goes out. A parse failure at that point is
    only logged.
    """
    not_found: JSONResponse | None = None
    if response.status_code != status.HTTP_200_OK:
        logger.info("github_profile_not_found", username=username, status=response.status_code)
        not_found = error_response(status.HTTP_404_NOT_FOUND, GITHUB_NOT_FOUND_DETAIL)

    try:
        body = response.json()
    except ValueError as exc:
        if not_found is None:
            raise
        logger.warning("github_body_unparsed", username=username, error=str(exc))
        return not_found

    if not_found is not None:
        logger.warning("github_body_after_response", username=username)
        return not_found

    return JSONResponse(status_code=status.HTTP_200_OK, content=body)
