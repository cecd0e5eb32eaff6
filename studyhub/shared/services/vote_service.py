"""
Vote Service

Resolves a user's vote request against their existing vote on a note or
question.

Three-Way Branch:
=================
    existing vote   requested      result
    ─────────────   ─────────      ──────────────────────────────────
    none            up | down      insert row            → ADDED
    up              up             delete row            → REMOVED
    up              down           flip direction        → CHANGED
    (and symmetrically for down)

Atomicity:
==========
The whole branch runs in the request's transaction:

    1. SELECT ... FOR UPDATE on the content row serializes concurrent votes
       on the same item (no-op on SQLite).
    2. The insert runs inside a SAVEPOINT. If it loses a race for the
       (user, item) unique constraint, the savepoint is rolled back and the
       branch is re-resolved against the row that won.
    3. Tallies are recounted from the vote rows and written to the content
       row's ``upvotes`` / ``downvotes`` projection before commit.

Usage:
======
    result = await VoteService(db).cast_vote(user, ContentType.NOTE, note_id, "upvote")
    result.action    # VoteAction.ADDED
    result.upvotes   # 1
"""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import ConflictError, ValidationError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import ContentType, User, VoteAction, VoteType
from studyhub.shared.repositories import VoteRepository, content_repository_for
from studyhub.shared.services.common import RESOURCE_NAMES, parse_content_type, require_found


VOTE_MESSAGES = {
    VoteAction.ADDED: "Vote added",
    VoteAction.REMOVED: "Vote removed",
    VoteAction.CHANGED: "Vote updated",
}


@dataclass
class VoteResult:
    action: VoteAction
    upvotes: int
    downvotes: int
    user_vote: Optional[VoteType]

    @property
    def message(self) -> str:
        return VOTE_MESSAGES[self.action]


def parse_vote_type(value: "VoteType | str") -> VoteType:
    try:
        return VoteType(value)
    except ValueError:
        raise ValidationError(
            "Invalid vote type. Must be 'upvote' or 'downvote'",
            details={"vote_type": str(value)},
        )


class VoteService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.vote_repo = VoteRepository(session)

    async def cast_vote(
        self,
        user: User,
        content_type: "ContentType | str",
        content_id: UUID,
        direction: "VoteType | str",
    ) -> VoteResult:
        """
        Apply one vote request.

        Raises:
            ValidationError: Unknown direction or content type
            NotFoundError: Item absent or not visible to the caller
        """
        vote_type = parse_vote_type(direction)
        content_type = parse_content_type(content_type)
        content_repo = content_repository_for(content_type, self.session)

        item = require_found(
            await content_repo.get_visible(content_id, user, for_update=True),
            RESOURCE_NAMES[content_type],
            content_id,
        )

        action, user_vote = await self._resolve(user.id, content_type, content_id, vote_type)

        upvotes, downvotes = await self.vote_repo.tally(content_type, content_id)
        await content_repo.set_vote_tallies(item, upvotes, downvotes)

        logger.info(
            "Vote cast",
            user_id=str(user.id),
            content_type=content_type.value,
            content_id=str(content_id),
            action=action.value,
            upvotes=upvotes,
            downvotes=downvotes,
        )
        return VoteResult(action=action, upvotes=upvotes, downvotes=downvotes, user_vote=user_vote)

    async def current_vote(
        self,
        user: User,
        content_type: ContentType,
        content_id: UUID,
    ) -> Optional[VoteType]:
        vote = await self.vote_repo.get_for_user(user.id, content_type, content_id)
        return vote.vote_type if vote else None

    async def _resolve(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
        vote_type: VoteType,
    ) -> tuple[VoteAction, Optional[VoteType]]:
        existing = await self.vote_repo.get_for_user(user_id, content_type, content_id)

        if existing is None:
            try:
                async with self.session.begin_nested():
                    await self.vote_repo.add(user_id, content_type, content_id, vote_type)
                return VoteAction.ADDED, vote_type
            except IntegrityError:
                # A concurrent request inserted the pair first
                existing = await self.vote_repo.get_for_user(user_id, content_type, content_id)
                if existing is None:
                    raise ConflictError("Vote could not be recorded, please retry")

        if existing.vote_type == vote_type:
            await self.vote_repo.delete_instance(existing)
            return VoteAction.REMOVED, None

        await self.vote_repo.set_direction(existing, vote_type)
        return VoteAction.CHANGED, vote_type
