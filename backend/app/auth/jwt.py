"""Access tokens signed with the shared JWT secret."""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

from jose import JWTError, jwt

from devconnect.repositories import parse_user_ref

from ..config import get_settings


def create_access_token(claims: dict[str, Any], expires_minutes: int | None = None) -> str:
    """
    Sign ``claims`` with an expiry and a unique ``jti``.

    The account service issues the tokens real clients use; this is for
    tests and local tooling.
    """
    settings = get_settings()
    lifetime = timedelta(minutes=expires_minutes or settings.access_token_expire_minutes)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime, "jti": uuid.uuid4().hex}
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Check signature and expiry. Raises ValueError for any unusable token."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError(f"Invalid token: {exc}") from exc


def token_user_id(token: str) -> int:
    """User id carried in the ``sub`` claim. Raises ValueError when absent or malformed."""
    user_id = parse_user_ref(str(decode_access_token(token).get("sub") or ""))
    if user_id is None:
        raise ValueError("Token subject is not a user id")
    return user_id
