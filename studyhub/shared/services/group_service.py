"""
Group Service

Study groups and their membership rules.

Roles:
======
    ADMIN      may update/delete the group, change roles, remove members
    MODERATOR  regular member with a badge (chat moderation is client-side)
    MEMBER     may read and post in the group chat

Membership Rules:
=================
- The creator joins as ADMIN and receives a "Group Created" notification
- Only PUBLIC groups can be joined directly; existing admins are notified
- The sole admin cannot leave while other members remain
- The last member leaving deletes the group
- Admins cannot remove themselves (they leave instead)
"""

from dataclasses import dataclass
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from studyhub.shared.core.exceptions import AuthorizationError, BusinessRuleError
from studyhub.shared.core.logging import logger
from studyhub.shared.models import Group, GroupMember, GroupRole, GroupType, NotificationType, User
from studyhub.shared.repositories import GroupRepository
from studyhub.shared.services.common import Page, page_window, require_found
from studyhub.shared.services.notification_service import NotificationService


ALREADY_MEMBER = "You are already a member of this group"


@dataclass
class GroupView:
    """A group decorated with the caller's relationship to it."""

    group: Group
    member_count: int
    is_member: bool = False
    role: Optional[GroupRole] = None


class GroupService:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session
        self.repo = GroupRepository(session)
        self.notifications = NotificationService(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # GROUPS
    # ═══════════════════════════════════════════════════════════════════════════

    async def create_group(
        self,
        user: User,
        *,
        name: str,
        description: Optional[str] = None,
        group_type: GroupType = GroupType.PUBLIC,
        category: Optional[str] = None,
        avatar: Optional[str] = None,
    ) -> GroupView:
        group = await self.repo.create(
            name=name,
            description=description,
            group_type=group_type,
            category=category,
            avatar=avatar,
            created_by=user.id,
        )
        await self.repo.add_member(group.id, user.id, GroupRole.ADMIN)

        await self.notifications.notify(
            user.id,
            "Group Created",
            f'Your group "{group.name}" has been created',
            type=NotificationType.SUCCESS,
            data={"group_id": str(group.id)},
        )
        logger.info("Group created", group_id=str(group.id), user_id=str(user.id))
        return GroupView(group=group, member_count=1, is_member=True, role=GroupRole.ADMIN)

    async def list_groups(
        self,
        viewer: Optional[User],
        *,
        group_type: Optional[GroupType] = None,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> Page[GroupView]:
        offset, limit = page_window(page, limit)
        groups, total = await self.repo.list_groups(
            group_type=group_type,
            category=category,
            search=search,
            offset=offset,
            limit=limit,
        )
        return Page(items=await self._decorate(groups, viewer), total=total, page=page, limit=limit)

    async def list_my_groups(self, user: User) -> list[GroupView]:
        return await self._decorate(await self.repo.list_for_user(user.id), user)

    async def get_group(self, group_id: UUID, viewer: Optional[User]) -> GroupView:
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        return (await self._decorate([group], viewer))[0]

    async def update_group(self, group_id: UUID, user: User, **fields: Any) -> GroupView:
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        await self._require_admin(group_id, user, "Only group admins can update the group")
        group = await self.repo.update_instance(group, **fields)
        logger.info("Group updated", group_id=str(group.id), user_id=str(user.id))
        return (await self._decorate([group], user))[0]

    async def delete_group(self, group_id: UUID, user: User) -> None:
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        await self._require_admin(group_id, user, "Only group admins can delete the group")
        await self.repo.delete_group(group)
        logger.info("Group deleted", group_id=str(group_id), user_id=str(user.id))

    # ═══════════════════════════════════════════════════════════════════════════
    # MEMBERSHIP
    # ═══════════════════════════════════════════════════════════════════════════

    async def join_group(self, group_id: UUID, user: User) -> GroupMember:
        group = require_found(await self.repo.get(group_id), "Group", group_id)

        if group.group_type == GroupType.PRIVATE:
            raise BusinessRuleError("This is a private group. You need an invitation to join.")
        if await self.repo.get_membership(group_id, user.id) is not None:
            raise BusinessRuleError(ALREADY_MEMBER)

        try:
            async with self.session.begin_nested():
                member = await self.repo.add_member(group_id, user.id)
        except IntegrityError:
            raise BusinessRuleError(ALREADY_MEMBER)

        admins = [
            m.user_id
            for m in await self.repo.list_members(group_id)
            if m.role == GroupRole.ADMIN and m.user_id != user.id
        ]
        await self.notifications.notify_many(
            admins,
            "New Group Member",
            f"{user.full_name} joined {group.name}",
            data={"group_id": str(group_id), "user_id": str(user.id)},
        )
        logger.info("Group joined", group_id=str(group_id), user_id=str(user.id))
        return member

    async def leave_group(self, group_id: UUID, user: User) -> bool:
        """
        Leave a group.

        Returns:
            True if the group was deleted because the caller was its last member
        """
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        member = await self.repo.get_membership(group_id, user.id)
        if member is None:
            raise BusinessRuleError("You are not a member of this group")

        total = await self.repo.count_members(group_id)
        if member.role == GroupRole.ADMIN and total > 1:
            admins = await self.repo.count_members(group_id, GroupRole.ADMIN)
            if admins == 1:
                raise BusinessRuleError(
                    "You are the only admin. Please assign another admin before leaving."
                )

        if total == 1:
            await self.repo.delete_group(group)
            logger.info("Group deleted after last member left", group_id=str(group_id))
            return True

        await self.repo.remove_member(member)
        logger.info("Group left", group_id=str(group_id), user_id=str(user.id))
        return False

    async def update_member_role(
        self,
        group_id: UUID,
        member_user_id: UUID,
        user: User,
        role: GroupRole,
    ) -> GroupMember:
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        await self._require_admin(group_id, user, "Only group admins can change member roles")
        member = require_found(
            await self.repo.get_membership(group_id, member_user_id),
            "Group member",
            member_user_id,
        )

        if member.role == GroupRole.ADMIN and role != GroupRole.ADMIN:
            if await self.repo.count_members(group_id, GroupRole.ADMIN) == 1:
                raise BusinessRuleError("A group must keep at least one admin")

        member = await self.repo.set_role(member, role)
        await self.notifications.notify(
            member_user_id,
            "Role Updated",
            f"Your role in {group.name} is now {role.value}",
            data={"group_id": str(group_id), "role": role.value},
        )
        return member

    async def remove_member(self, group_id: UUID, member_user_id: UUID, user: User) -> None:
        group = require_found(await self.repo.get(group_id), "Group", group_id)
        await self._require_admin(group_id, user, "Only group admins can remove members")
        if member_user_id == user.id:
            raise BusinessRuleError("Use leave group to remove yourself")

        member = require_found(
            await self.repo.get_membership(group_id, member_user_id),
            "Group member",
            member_user_id,
        )
        await self.repo.remove_member(member)
        await self.notifications.notify(
            member_user_id,
            "Removed from Group",
            f"You have been removed from {group.name}",
            type=NotificationType.WARNING,
            data={"group_id": str(group_id)},
        )
        logger.info(
            "Group member removed",
            group_id=str(group_id),
            member_user_id=str(member_user_id),
            by=str(user.id),
        )

    async def list_members(self, group_id: UUID) -> list[GroupMember]:
        require_found(await self.repo.get(group_id), "Group", group_id)
        return await self.repo.list_members(group_id)

    async def require_membership(self, group_id: UUID, user: User) -> GroupMember:
        """Used by the chat service before any read or write."""
        require_found(await self.repo.get(group_id), "Group", group_id)
        member = await self.repo.get_membership(group_id, user.id)
        if member is None:
            raise AuthorizationError("You must be a member of this group")
        return member

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _require_admin(self, group_id: UUID, user: User, message: str) -> None:
        member = await self.repo.get_membership(group_id, user.id)
        if member is None or member.role != GroupRole.ADMIN:
            raise AuthorizationError(message)

    async def _decorate(self, groups: list[Group], viewer: Optional[User]) -> list[GroupView]:
        ids = [g.id for g in groups]
        counts = await self.repo.member_counts(ids)
        roles = await self.repo.roles_for_user(viewer.id, ids) if viewer is not None else {}

        return [
            GroupView(
                group=g,
                member_count=counts.get(g.id, 0),
                is_member=g.id in roles,
                role=roles.get(g.id),
            )
            for g in groups
        ]
