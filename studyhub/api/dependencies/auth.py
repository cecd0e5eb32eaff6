"""
Authentication Dependencies

FastAPI dependencies for user authentication and authorization.

Dependency Hierarchy:
=====================
    get_current_user_token()  ← Extract and validate JWT from header
           │
           ▼
    get_current_user()        ← Load the user row (401 if gone)
           │
           ├── require_moderator()   ← 403 unless user.is_moderator
           │
    get_optional_user()       ← Same, but None for anonymous callers
                                (public listings; a bad token is still 401)

Type Aliases:
=============
    CurrentUser    - Authenticated User row
    OptionalUser   - User row or None
    ModeratorUser  - Authenticated moderator

Usage:
======
    from studyhub.api.dependencies.auth import CurrentUser, OptionalUser

    @router.get("/me")
    async def get_me(current_user: CurrentUser):
        return current_user

    @router.get("/notes")
    async def list_notes(viewer: OptionalUser):
        ...
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studyhub.api.dependencies.database import DbSession
from studyhub.config.settings import settings
from studyhub.shared.core.exceptions import AuthenticationError, AuthorizationError
from studyhub.shared.models.user import User
from studyhub.shared.repositories.user_repository import UserRepository
from studyhub.shared.utils.security import SecurityUtils


# Missing credentials are reported through AuthenticationError so the
# response keeps the envelope shape.
security = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> dict:
    """
    Extract and validate JWT token from Authorization header.

    Raises:
        AuthenticationError: If token is missing or invalid
    """
    if not credentials:
        raise AuthenticationError("Authorization header required")

    return _decode(credentials.credentials)


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
    db: DbSession,
) -> User:
    """
    Load the authenticated user.

    Raises:
        AuthenticationError: If the token has no user or the user no longer exists
    """
    return await _load_user(token, db)


async def get_optional_user(
    db: DbSession,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(security)] = None,
) -> Optional[User]:
    """The authenticated user, or None when no bearer token was sent."""
    if not credentials:
        return None
    return await _load_user(_decode(credentials.credentials), db)


async def require_moderator(
    user: Annotated[User, Depends(get_current_user)],
) -> User:
    if not user.is_moderator:
        raise AuthorizationError("Moderator access required")
    return user


def _decode(token: str) -> dict:
    try:
        return SecurityUtils.decode_access_token(
            token,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError(str(e)) from e


async def _load_user(token: dict, db) -> User:
    try:
        user_id = UUID(token.get("user_id", ""))
    except ValueError:
        raise AuthenticationError("Invalid token payload")

    user = await UserRepository(db).get(user_id)
    if user is None:
        raise AuthenticationError("User no longer exists")
    return user


# ═══════════════════════════════════════════════════════════════════════════════
# TYPE ALIASES
# ═══════════════════════════════════════════════════════════════════════════════

# Authenticated user (most common dependency)
CurrentUser = Annotated[User, Depends(get_current_user)]

# Anonymous or authenticated
OptionalUser = Annotated[Optional[User], Depends(get_optional_user)]

# Authenticated moderator
ModeratorUser = Annotated[User, Depends(require_moderator)]
