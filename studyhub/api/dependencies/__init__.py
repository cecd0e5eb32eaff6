"""
API Dependencies

FastAPI dependencies for injection into route handlers.

Dependencies:
=============
- Database: get_db(), DbSession
- Authentication: get_current_user(), CurrentUser, OptionalUser, ModeratorUser
- Pagination: get_pagination(), Pagination
- Services: get_*_service() functions

Type Aliases:
=============
    # Instead of this:
    async def handler(
        db: AsyncSession = Depends(get_db),
        user: User = Depends(get_current_user)
    ):

    # Write this:
    async def handler(db: DbSession, user: CurrentUser):

FastAPI caches dependencies per request, so the auth dependency and the
service dependencies share the same session.
"""

from studyhub.api.dependencies.database import (
    get_db,
    DbSession,
)
from studyhub.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    get_optional_user,
    require_moderator,
    CurrentUser,
    ModeratorUser,
    OptionalUser,
)
from studyhub.api.dependencies.pagination import (
    get_pagination,
    PageParams,
    Pagination,
)

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "get_optional_user",
    "require_moderator",
    "CurrentUser",
    "ModeratorUser",
    "OptionalUser",
    # Pagination
    "get_pagination",
    "PageParams",
    "Pagination",
]
