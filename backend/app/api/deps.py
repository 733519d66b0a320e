"""Shared dependencies for API endpoints.

Authentication uses a bearer JWT (``Authorization: Bearer <token>``) issued
by /auth/register and /auth/login. Role checks are layered on top of the
authenticated user.

Usage:
    @router.get("/me")
    async def get_me(user: CurrentCandidate, db: DbSession) -> ...:
        ...
"""

import uuid
from collections.abc import Awaitable, Callable
from typing import Annotated

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.auth import decode_jwt
from app.core.config import settings
from app.core.database import get_db
from app.core.errors import ForbiddenError, UnauthorizedError
from app.models import User
from app.models.user import ROLE_CANDIDATE, ROLE_EMPLOYER
from app.navigation.sessions import NavigationSessionStore, get_session_store
from app.repositories.user_repository import UserRepository

_bearer = HTTPBearer(auto_error=False)

BearerCredentials = Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer)]
DbSession = Annotated[AsyncSession, Depends(get_db)]


def _user_id_from_credentials(credentials: HTTPAuthorizationCredentials) -> uuid.UUID:
    """Decode the bearer token and return its subject.

    Raises:
        UnauthorizedError: For any token failure. The message never says
            why (expired, bad signature, ...).
    """
    try:
        payload = decode_jwt(
            credentials.credentials,
            settings.auth_secret.get_secret_value(),
        )
        return uuid.UUID(str(payload["sub"]))
    except (jwt.InvalidTokenError, KeyError, ValueError) as exc:
        raise UnauthorizedError() from exc


async def get_current_user_id(credentials: BearerCredentials) -> uuid.UUID:
    """Get current user ID from the bearer token.

    Validation steps:
    1. Read the Authorization: Bearer header
    2. Decode + verify signature (HS256)
    3. Verify exp, aud, iss claims
    4. Extract sub as UUID

    Raises:
        UnauthorizedError: 401 for any auth failure.
    """
    if credentials is None:
        raise UnauthorizedError()
    return _user_id_from_credentials(credentials)


async def get_optional_user_id(credentials: BearerCredentials) -> uuid.UUID | None:
    """Like get_current_user_id, but anonymous requests yield None.

    A token that is present but invalid is still rejected.
    """
    if credentials is None:
        return None
    return _user_id_from_credentials(credentials)


async def get_current_user(
    user_id: Annotated[uuid.UUID, Depends(get_current_user_id)],
    db: DbSession,
) -> User:
    """Get full User object for current user.

    Raises:
        UnauthorizedError: 401 if the user no longer exists.
    """
    user = await UserRepository.get_by_id(db, user_id)
    if user is None:
        raise UnauthorizedError()
    return user


CurrentUserId = Annotated[uuid.UUID, Depends(get_current_user_id)]
OptionalUserId = Annotated[uuid.UUID | None, Depends(get_optional_user_id)]
CurrentUser = Annotated[User, Depends(get_current_user)]


def require_role(role: str) -> Callable[[User], Awaitable[User]]:
    """Build a dependency that only admits users with ``role``.

    Raises (from the dependency):
        ForbiddenError: 403 when the user's role differs.
    """

    async def dependency(user: CurrentUser) -> User:
        if user.role != role:
            raise ForbiddenError()
        return user

    return dependency


CurrentCandidate = Annotated[User, Depends(require_role(ROLE_CANDIDATE))]
CurrentEmployer = Annotated[User, Depends(require_role(ROLE_EMPLOYER))]
SessionStore = Annotated[NavigationSessionStore, Depends(get_session_store)]
