"""
Group Repository

Groups and their memberships.

Common Operations:
==================
- list_groups()        → Paged listing with type/category/search filters
- list_for_user()      → Groups the user belongs to
- get_membership()     → A user's membership row in one group
- list_members()       → Members ordered admins first, then by join time
- count_members()      → Member count, optionally per role
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import case, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from studyhub.shared.models import Group, GroupMember, GroupMessage, GroupRole, GroupType
from studyhub.shared.repositories.base import LIKE_ESCAPE, BaseRepository, contains_pattern


class GroupRepository(BaseRepository[Group]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Group, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # GROUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_groups(
        self,
        *,
        group_type: Optional[GroupType] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        offset: int = 0,
        limit: int = 10,
    ) -> tuple[list[Group], int]:
        conditions = []
        if group_type is not None:
            conditions.append(Group.group_type == group_type)
        if category:
            conditions.append(Group.category == category)
        if search:
            pattern = contains_pattern(search)
            conditions.append(
                or_(
                    func.lower(Group.name).like(pattern, escape=LIKE_ESCAPE),
                    func.lower(Group.description).like(pattern, escape=LIKE_ESCAPE),
                )
            )

        result = await self.session.execute(
            select(Group)
            .where(*conditions)
            .order_by(Group.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        total = await self._scalar_count(select(sql_count()).select_from(Group).where(*conditions))
        return list(result.scalars().all()), total

    async def search_public(self, query: str, *, limit: int = 10) -> list[Group]:
        groups, _ = await self.list_groups(group_type=GroupType.PUBLIC, search=query, limit=limit)
        return groups

    async def list_for_user(self, user_id: UUID) -> list[Group]:
        result = await self.session.execute(
            select(Group)
            .join(GroupMember, GroupMember.group_id == Group.id)
            .where(GroupMember.user_id == user_id)
            .order_by(GroupMember.joined_at.desc())
        )
        return list(result.scalars().all())

    async def delete_group(self, group: Group) -> None:
        """Delete a group with its memberships and messages."""
        await self.session.execute(delete(GroupMessage).where(GroupMessage.group_id == group.id))
        await self.session.execute(delete(GroupMember).where(GroupMember.group_id == group.id))
        await self.delete_instance(group)

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    async def get_membership(self, group_id: UUID, user_id: UUID) -> Optional[GroupMember]:
        result = await self.session.execute(
            select(GroupMember).where(
                GroupMember.group_id == group_id,
                GroupMember.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def add_member(
        self,
        group_id: UUID,
        user_id: UUID,
        role: GroupRole = GroupRole.MEMBER,
    ) -> GroupMember:
        """Insert a membership. Raises ``IntegrityError`` if already a member."""
        member = GroupMember(group_id=group_id, user_id=user_id, role=role)
        self.session.add(member)
        await self.session.flush()
        await self.session.refresh(member)
        return member

    async def remove_member(self, member: GroupMember) -> None:
        await self.session.delete(member)
        await self.session.flush()

    async def set_role(self, member: GroupMember, role: GroupRole) -> GroupMember:
        member.role = role
        await self.session.flush()
        return member

    async def list_members(self, group_id: UUID) -> list[GroupMember]:
        role_rank = case(
            (GroupMember.role == GroupRole.ADMIN, 0),
            (GroupMember.role == GroupRole.MODERATOR, 1),
            else_=2,
        )
        result = await self.session.execute(
            select(GroupMember)
            .where(GroupMember.group_id == group_id)
            .order_by(role_rank, GroupMember.joined_at.asc())
        )
        return list(result.scalars().all())

    async def count_members(self, group_id: UUID, role: Optional[GroupRole] = None) -> int:
        query = select(sql_count()).select_from(GroupMember).where(GroupMember.group_id == group_id)
        if role is not None:
            query = query.where(GroupMember.role == role)
        return await self._scalar_count(query)

    async def roles_for_user(self, user_id: UUID, group_ids: list[UUID]) -> dict[UUID, GroupRole]:
        """The user's role in each of ``group_ids`` they belong to."""
        if not group_ids:
            return {}
        result = await self.session.execute(
            select(GroupMember.group_id, GroupMember.role).where(
                GroupMember.user_id == user_id,
                GroupMember.group_id.in_(group_ids),
            )
        )
        return {group_id: role for group_id, role in result.all()}

    async def member_counts(self, group_ids: list[UUID]) -> dict[UUID, int]:
        if not group_ids:
            return {}
        result = await self.session.execute(
            select(GroupMember.group_id, sql_count())
            .where(GroupMember.group_id.in_(group_ids))
            .group_by(GroupMember.group_id)
        )
        return {group_id: int(n) for group_id, n in result.all()}
