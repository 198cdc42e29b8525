"""Repository for group membership operations."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.domain.entities import GroupMember, GroupRole
from grouphub.infrastructure.persistence.models import GroupMemberModel
from grouphub.infrastructure.persistence.repositories.group_repository import as_utc


class GroupMemberRepository:
    """Repository for group membership database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: GroupMemberModel) -> GroupMember:
        return GroupMember(
            id=model.id,
            group_id=model.group_id,
            uid=model.uid,
            role=GroupRole(model.role),
            created_at=as_utc(model.created_at),
        )

    async def add_one(self, group_id: str, uid: str, role: GroupRole) -> GroupMember:
        """Add a user to a group.

        Args:
            group_id: Group ID.
            uid: User ID.
            role: Role the user holds in the group.

        Returns:
            The created membership.
        """
        model = GroupMemberModel(
            id=str(uuid.uuid4()),
            group_id=group_id,
            uid=uid,
            role=GroupRole(role).value,
            created_at=datetime.now(timezone.utc),
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def get(self, group_id: str, uid: str) -> GroupMember | None:
        """Get a user's membership in a group.

        Args:
            group_id: Group ID.
            uid: User ID.

        Returns:
            The membership if found, None otherwise.
        """
        result = await self.session.execute(
            select(GroupMemberModel).where(
                (GroupMemberModel.group_id == group_id) & (GroupMemberModel.uid == uid)
            )
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_group(self, group_id: str) -> list[GroupMember]:
        """List the members of a group, oldest first."""
        result = await self.session.execute(
            select(GroupMemberModel)
            .where(GroupMemberModel.group_id == group_id)
            .order_by(GroupMemberModel.created_at)
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def remove_one(self, group_id: str, uid: str) -> bool:
        """Remove a user from a group.

        Args:
            group_id: Group ID.
            uid: User ID.

        Returns:
            True if a membership was removed, False if not found.
        """
        result = await self.session.execute(
            delete(GroupMemberModel).where(
                (GroupMemberModel.group_id == group_id) & (GroupMemberModel.uid == uid)
            )
        )
        await self.session.flush()
        return result.rowcount > 0

    async def remove_all(self, group_id: str) -> int:
        """Remove every membership of a group.

        Args:
            group_id: Group ID.

        Returns:
            Number of memberships removed.
        """
        result = await self.session.execute(
            delete(GroupMemberModel).where(GroupMemberModel.group_id == group_id)
        )
        await self.session.flush()
        return result.rowcount
