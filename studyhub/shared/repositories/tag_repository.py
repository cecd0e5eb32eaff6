"""
Tag Repository

Tags are normalized (trimmed, lowercased) and created on first use.
"""

from typing import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.models import Tag
from studyhub.shared.repositories.base import BaseRepository


def normalize_tags(names: Iterable[str]) -> list[str]:
    """Trim, lowercase, drop blanks and duplicates while keeping order."""
    seen: dict[str, None] = {}
    for name in names:
        cleaned = name.strip().lower()
        if cleaned:
            seen.setdefault(cleaned, None)
    return list(seen)


class TagRepository(BaseRepository[Tag]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Tag, session)

    async def get_or_create_many(self, names: Iterable[str]) -> list[Tag]:
        """Return Tag rows for ``names``, inserting the missing ones."""
        wanted = normalize_tags(names)
        if not wanted:
            return []

        result = await self.session.execute(select(Tag).where(Tag.name.in_(wanted)))
        existing = {tag.name: tag for tag in result.scalars().all()}

        for name in wanted:
            if name not in existing:
                tag = Tag(name=name)
                self.session.add(tag)
                existing[name] = tag

        await self.session.flush()
        return [existing[name] for name in wanted]
