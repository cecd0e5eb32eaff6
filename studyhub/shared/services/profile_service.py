"""
Profile Service

Account self-service: editing the profile card, changing the password,
listing one's own notes and questions, and deleting the account. Also
builds the public profile shown to other users.

Password-gated operations:
==========================
    change_password(current, new)  ──► wrong current → BusinessRuleError
    delete_account(password)       ──► wrong password → BusinessRuleError

Changing the password clears the stored refresh token, so sessions opened
elsewhere end at their next refresh.
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import BusinessRuleError, ValidationError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import ContentType, User
from studyhub.shared.repositories import (
    NoteRepository,
    QuestionRepository,
    UserRepository,
    content_repository_for,
)
from studyhub.shared.services.common import Page, page_window, require_found
from studyhub.shared.utils.security import SecurityUtils


PROFILE_CONTENT_KINDS = {
    "notes": ContentType.NOTE,
    "questions": ContentType.QUESTION,
}


@dataclass
class PublicProfile:
    user: User
    notes: int
    questions: int


class ProfileService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = UserRepository(session)

    async def get_public_profile(self, user_id: UUID) -> PublicProfile:
        """Profile card plus counts of the user's approved notes and questions."""
        user = require_found(await self.repo.get(user_id), "User", user_id)
        approved = {"user_id": user.id, "is_approved": True}
        return PublicProfile(
            user=user,
            notes=await NoteRepository(self.session).count(filters=approved),
            questions=await QuestionRepository(self.session).count(filters=approved),
        )

    async def update_profile(
        self,
        user: User,
        *,
        full_name: Optional[str] = None,
        bio: Optional[str] = None,
    ) -> User:
        """Apply the given fields. An empty ``bio`` clears it."""
        changed = []
        if full_name is not None:
            user.full_name = full_name.strip()
            changed.append("full_name")
        if bio is not None:
            user.bio = bio.strip() or None
            changed.append("bio")
        if not changed:
            return user

        await self.session.flush()
        logger.info("Profile updated", user_id=str(user.id), fields=changed)
        return user

    async def update_avatar(self, user: User, avatar: str) -> User:
        user = await self.repo.update_instance(user, avatar=avatar)
        logger.info("Avatar updated", user_id=str(user.id))
        return user

    async def change_password(self, user: User, current_password: str, new_password: str) -> None:
        """
        Replace the password after checking the current one.

        Raises:
            BusinessRuleError: Current password is wrong
        """
        if not SecurityUtils.verify_password(current_password, user.password_hash):
            raise BusinessRuleError("Current password is incorrect")

        user.password_hash = SecurityUtils.hash_password(new_password)
        user.refresh_token = None
        await self.session.flush()
        logger.info("Password changed", user_id=str(user.id))

    async def list_my_content(
        self,
        user: User,
        kind: str = "notes",
        *,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> tuple[ContentType, Page]:
        """
        The caller's own notes or questions, approved or not, newest first.

        Raises:
            ValidationError: ``kind`` is neither "notes" nor "questions"
        """
        content_type = PROFILE_CONTENT_KINDS.get(kind)
        if content_type is None:
            raise ValidationError('Invalid content type. Use "notes" or "questions"')

        offset, limit = page_window(page, limit)
        items, total = await content_repository_for(content_type, self.session).list_visible(
            viewer=user,
            include_unapproved=True,
            user_id=user.id,
            offset=offset,
            limit=limit,
        )
        return content_type, Page(items=items, total=total, page=page, limit=limit)

    async def delete_account(self, user: User, password: str) -> None:
        """
        Delete the caller's account. Owned rows go with it through the
        ``ON DELETE CASCADE`` foreign keys.

        Raises:
            BusinessRuleError: Password is wrong
        """
        if not SecurityUtils.verify_password(password, user.password_hash):
            raise BusinessRuleError("Password is incorrect")

        user_id = str(user.id)
        await self.repo.delete_instance(user)
        logger.info("Account deleted", user_id=user_id)
