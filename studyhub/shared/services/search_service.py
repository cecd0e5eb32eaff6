"""
Search Service

Global search across approved notes, approved questions, public groups and
users. Note and question matches go through the same visibility predicate
as listings, so unapproved items never appear.
"""

from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import ValidationError
from studyhub.shared.models import Group, Note, Question, User
from studyhub.shared.repositories import (
    GroupRepository,
    NoteRepository,
    QuestionRepository,
    UserRepository,
)


@dataclass
class SearchResults:
    notes: list[Note] = field(default_factory=list)
    questions: list[Question] = field(default_factory=list)
    groups: list[Group] = field(default_factory=list)
    users: list[User] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.notes) + len(self.questions) + len(self.groups) + len(self.users)


class SearchService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.note_repo = NoteRepository(session)
        self.question_repo = QuestionRepository(session)
        self.group_repo = GroupRepository(session)
        self.user_repo = UserRepository(session)

    async def search_all(self, query: str, *, limit: int = 10) -> SearchResults:
        query = _clean(query)
        return SearchResults(
            notes=await self.note_repo.search(query, limit=limit),
            questions=await self.question_repo.search(query, limit=limit),
            groups=await self.group_repo.search_public(query, limit=limit),
            users=await self.user_repo.search(query, limit=limit),
        )

    async def search_notes(self, query: str, *, limit: int = 20) -> list[Note]:
        return await self.note_repo.search(_clean(query), limit=limit)

    async def search_questions(self, query: str, *, limit: int = 20) -> list[Question]:
        return await self.question_repo.search(_clean(query), limit=limit)

    async def search_groups(self, query: str, *, limit: int = 20) -> list[Group]:
        return await self.group_repo.search_public(_clean(query), limit=limit)

    async def search_users(self, query: str, *, limit: int = 20) -> list[User]:
        return await self.user_repo.search(_clean(query), limit=limit)


def _clean(query: str) -> str:
    query = query.strip()
    if not query:
        raise ValidationError("Search query is required")
    return query
