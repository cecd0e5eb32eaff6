"""
Comment Service

Edits and deletions of existing comments. Comments are created and
listed through the note/question services, which check the parent's
visibility first.
"""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.logging import logger
from studyhub.shared.models import Comment, User
from studyhub.shared.repositories import CommentRepository
from studyhub.shared.services.common import require_found, require_owner


class CommentService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = CommentRepository(session)

    async def update_comment(self, comment_id: UUID, user: User, content: str) -> Comment:
        comment = require_found(await self.repo.get(comment_id), "Comment", comment_id)
        require_owner(comment.user_id, user, "You are not authorized to update this comment")
        return await self.repo.update_instance(comment, content=content)

    async def delete_comment(self, comment_id: UUID, user: User) -> None:
        comment = require_found(await self.repo.get(comment_id), "Comment", comment_id)
        require_owner(comment.user_id, user, "You are not authorized to delete this comment")
        await self.repo.delete_instance(comment)
        logger.info("Comment deleted", comment_id=str(comment_id), user_id=str(user.id))
