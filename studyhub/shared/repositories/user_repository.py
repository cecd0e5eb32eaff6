"""
User Repository

Database operations specific to the User model.
Extends BaseRepository with user-specific query methods.

Common Operations:
==================
- get_by_email()          → Find user by email address (case-insensitive)
- email_exists()          → Check if email is already registered
- get_by_reset_token_hash → Find the user holding a pending reset token
- search()                → Match users by name or email
"""

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern
from studyhub.shared.models.user import User


class UserRepository(BaseRepository[User]):
    """
    Repository for User database operations.

    Emails are stored lowercased by the auth service, and lookups lowercase
    their input as well.
    """

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_by_email(self, email: str) -> Optional[User]:
        """
        Get user by email address.

        SQL Generated:
            SELECT * FROM users WHERE email = 'user@example.com'
        """
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def email_exists(self, email: str) -> bool:
        """Check if email already exists. Used when registering."""
        user = await self.get_by_email(email)
        return user is not None

    async def get_by_reset_token_hash(self, token_hash: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.password_reset_token_hash == token_hash)
        )
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # SEARCH
    # ═══════════════════════════════════════════════════════════════════════════

    async def search(self, query: str, *, limit: int = 10) -> list[User]:
        """Case-insensitive substring match on full name or email."""
        pattern = contains_pattern(query)
        result = await self.session.execute(
            select(User)
            .where(
                or_(
                    func.lower(User.full_name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(User.email).like(pattern, escape=LIKE_ESCAPE),
                )
            )
            .order_by(User.full_name)
            .limit(limit)
        )
        return list(result.scalars().all())
