"""
Profile management endpoints.

Public routes: list profiles, profile by user id, GitHub repo lookup.
Everything else requires an authenticated caller.
"""

from typing import TypeVar

import httpx
from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError
from sqlalchemy.orm import Session

from devconnect.api import github_api
from devconnect.enums import SubRecordKind
from devconnect.logging import get_logger

from ..auth.dependencies import get_current_user
from ..database import get_db
from ..error_handlers import SERVER_ERROR_DETAIL
from ..models import Profile, User
from ..schemas import (
    EducationCreateRequest,
    ExperienceCreateRequest,
    MessageResponse,
    ProfileResponse,
    ProfileUpsertRequest,
    UserSummary,
)
from ..services import profile_service
from ..services.profile_service import ProfileNotFoundError

logger = get_logger("profile")

router = APIRouter(prefix="/profile", tags=["profile"])

NO_PROFILE_DETAIL = "There is no profile for this user"
PROFILE_NOT_FOUND_DETAIL = "Profile not found"

RequestT = TypeVar("RequestT", bound=BaseModel)


def _profile_to_response(profile: Profile) -> ProfileResponse:
    """Convert Profile (with its user loaded) to response."""
    return ProfileResponse(
        id=profile.id,
        user=UserSummary.model_validate(profile.user),
        company=profile.company,
        website=profile.website,
        location=profile.location,
        status=profile.status,
        bio=profile.bio,
        githubusername=profile.githubusername,
        skills=profile.skills or [],
        social=profile.social or {},
        experience=profile.experience or [],
        education=profile.education or [],
        created_at=profile.created_at,
        updated_at=profile.updated_at,
    )


def _server_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=SERVER_ERROR_DETAIL,
    )


def _body_or_empty(model: type[RequestT], payload: RequestT | None) -> RequestT:
    """
    Validate a missing request body as ``{}``.

    Each required field then reports its own message instead of a single
    "body is missing" error.
    """
    if payload is not None:
        return payload
    try:
        return model.model_validate({})
    except ValidationError as exc:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in exc.errors(include_url=False)
        ]
        raise RequestValidationError(errors) from None


@router.get("/me", response_model=ProfileResponse)
def get_my_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Get current user's profile."""
    profile = profile_service.get_own_profile(db, current_user)
    if not profile:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=NO_PROFILE_DETAIL)
    return _profile_to_response(profile)


@router.post("", response_model=ProfileResponse)
@router.post("/", response_model=ProfileResponse, include_in_schema=False)
def upsert_profile(
    payload: ProfileUpsertRequest | None = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Create or update the current user's profile."""
    payload = _body_or_empty(ProfileUpsertRequest, payload)
    profile = profile_service.upsert_profile(db, current_user, payload)
    return _profile_to_response(profile)


@router.get("", response_model=list[ProfileResponse])
@router.get("/", response_model=list[ProfileResponse], include_in_schema=False)
def list_profiles(db: Session = Depends(get_db)):
    """Get all profiles."""
    return [_profile_to_response(profile) for profile in profile_service.list_profiles(db)]


@router.get("/user/{user_id}", response_model=ProfileResponse)
def get_profile_by_user(user_id: str, db: Session = Depends(get_db)):
    """
    Get a profile by user id.

    Unknown and malformed ids both answer "Profile not found".
    """
    lookup = profile_service.lookup_profile(db, user_id)
    if not lookup.found:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=PROFILE_NOT_FOUND_DETAIL,
        )
    return _profile_to_response(lookup.profile)


@router.delete("", response_model=MessageResponse)
@router.delete("/", response_model=MessageResponse, include_in_schema=False)
def delete_profile(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Delete the current user's profile and then the user itself."""
    profile_service.delete_account(db, current_user)
    return MessageResponse(msg="User Removed!")


# =============================================================================
# Experience / education
# =============================================================================


def _add_sub_record(db: Session, user: User, kind: SubRecordKind, payload) -> ProfileResponse:
    try:
        profile = profile_service.add_sub_record(db, user, kind, payload)
    except ProfileNotFoundError:
        logger.error("sub_record_add_without_profile", user_id=user.id, kind=kind.value)
        raise _server_error() from None
    return _profile_to_response(profile)


def _remove_sub_record(db: Session, user: User, kind: SubRecordKind, record_id: str) -> ProfileResponse:
    try:
        profile = profile_service.remove_sub_record(db, user, kind, record_id)
    except ProfileNotFoundError:
        logger.error("sub_record_remove_without_profile", user_id=user.id, kind=kind.value)
        raise _server_error() from None
    return _profile_to_response(profile)


@router.put("/experience", response_model=ProfileResponse)
def add_experience(
    payload: ExperienceCreateRequest | None = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an experience entry at the top of the current user's profile."""
    payload = _body_or_empty(ExperienceCreateRequest, payload)
    return _add_sub_record(db, current_user, SubRecordKind.EXPERIENCE, payload)


@router.delete("/experience/{exp_id}", response_model=ProfileResponse)
def delete_experience(
    exp_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove an experience entry from the current user's profile."""
    return _remove_sub_record(db, current_user, SubRecordKind.EXPERIENCE, exp_id)


@router.put("/education", response_model=ProfileResponse)
def add_education(
    payload: EducationCreateRequest | None = Body(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Add an education entry at the top of the current user's profile."""
    payload = _body_or_empty(EducationCreateRequest, payload)
    return _add_sub_record(db, current_user, SubRecordKind.EDUCATION, payload)


@router.delete("/education/{edu_id}", response_model=ProfileResponse)
def delete_education(
    edu_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Remove an education entry from the current user's profile."""
    return _remove_sub_record(db, current_user, SubRecordKind.EDUCATION, edu_id)


# =============================================================================
# GitHub
# =============================================================================


@router.get("/github/{username}")
async def get_github_repos(username: str) -> JSONResponse:
    """Relay the latest public repositories of a GitHub user."""
    try:
        response = await github_api.fetch_user_repos(username)
    except httpx.HTTPError as exc:
        logger.error("github_request_failed", username=username, error=str(exc))
        raise _server_error() from exc

    try:
        return profile_service.github_repos_response(username, response)
    except ValueError as exc:
        logger.error("github_body_invalid", username=username, error=str(exc))
        raise _server_error() from exc
