from typing import Annotated
from uuid import UUID

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from learnhub.auth.models.user import User
from learnhub.core import security
from learnhub.core.exceptions import ForbiddenError, UnauthorizedError
from learnhub.db.session import get_db

bearer_scheme = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)] = None,
    access_token: Annotated[str | None, Cookie()] = None,
) -> str | None:
    """Read the access token from the Authorization header, falling back to the cookie."""
    if credentials is not None and credentials.credentials:
        return credentials.credentials
    return access_token


def _user_id_from_token(token: str) -> UUID:
    payload = security.decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise UnauthorizedError("Could not validate credentials")

    sub = payload.get("sub")
    try:
        return UUID(str(sub))
    except ValueError as e:
        raise UnauthorizedError("Could not validate credentials") from e


async def get_optional_user(
    token: str | None = Depends(get_access_token),
    db: Session = Depends(get_db),
) -> User | None:
    """Resolve the caller if a token was sent; anonymous callers get None.

    A token that is present but invalid is still rejected.
    """
    if not token:
        return None

    user = db.get(User, _user_id_from_token(token))
    if user is None:
        raise UnauthorizedError("User not found")
    if not user.is_active:
        raise ForbiddenError("Account is inactive")
    return user


async def get_current_user(user: User | None = Depends(get_optional_user)) -> User:
    if user is None:
        raise UnauthorizedError("Not authenticated")
    return user
