"""
Authentication dependencies for FastAPI routes.

Tokens are issued by the account service; this service only verifies them.
A token is read from the ``Authorization: Bearer`` header first and from
the ``access_token`` cookie second.
"""

from fastapi import Cookie, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from devconnect.repositories import UserRepository

from ..database import get_db
from ..models import User
from .jwt import token_user_id

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="token", auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_token_from_request(
    token_header: str | None = Depends(oauth2_scheme),
    access_token_cookie: str | None = Cookie(None, alias="access_token"),
) -> str:
    token = token_header or access_token_cookie
    if not token:
        raise _unauthorized("No token, authorization denied")
    return token


def get_current_user(
    token: str = Depends(get_token_from_request),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the caller, or answer 401."""
    try:
        user_id = token_user_id(token)
    except ValueError:
        raise _unauthorized("Token is not valid") from None

    user = UserRepository(db).get_by_id(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user
