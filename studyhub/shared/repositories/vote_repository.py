"""
Vote Repository

Row-level access for votes. The branch deciding whether a request adds,
removes or flips a vote lives in VoteService; this repository only reads
and writes the rows and recounts the tallies.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import ContentType, Vote, VoteType
from studyhub.shared.repositories.base import BaseRepository
from studyhub.shared.repositories.targets import target_clause, target_values


class VoteRepository(BaseRepository[Vote]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Vote, session)

    async def get_for_user(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
    ) -> Optional[Vote]:
        """The caller's vote on an item, if any (at most one exists)."""
        result = await self.session.execute(
            select(Vote)
            .where(
                Vote.user_id == user_id,
                target_clause(Vote, content_type, content_id),
            )
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def add(
        self,
        user_id: UUID,
        content_type: ContentType,
        content_id: UUID,
        vote_type: VoteType,
    ) -> Vote:
        """
        Insert a vote.

        Raises ``IntegrityError`` when another transaction already holds the
        (user, item) pair; the caller wraps this in a savepoint.
        """
        vote = Vote(
            user_id=user_id,
            vote_type=vote_type,
            **target_values(content_type, content_id),
        )
        self.session.add(vote)
        await self.session.flush()
        return vote

    async def set_direction(self, vote: Vote, vote_type: VoteType) -> Vote:
        vote.vote_type = vote_type
        await self.session.flush()
        return vote

    async def tally(self, content_type: ContentType, content_id: UUID) -> tuple[int, int]:
        """
        Count (upvotes, downvotes) from the vote rows.

        SQL Generated:
            SELECT vote_type, count(*) FROM votes
            WHERE note_id = ? GROUP BY vote_type
        """
        result = await self.session.execute(
            select(Vote.vote_type, sql_count())
            .where(target_clause(Vote, content_type, content_id))
            .group_by(Vote.vote_type)
        )
        counts = {vote_type: int(n) for vote_type, n in result.all()}
        return counts.get(VoteType.UPVOTE, 0), counts.get(VoteType.DOWNVOTE, 0)

    async def count_rows(self, user_id: UUID, content_type: ContentType, content_id: UUID) -> int:
        return await self._scalar_count(
            select(sql_count())
            .select_from(Vote)
            .where(Vote.user_id == user_id, target_clause(Vote, content_type, content_id))
        )
