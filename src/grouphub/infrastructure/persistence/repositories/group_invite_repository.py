"""Repository for group invite code operations."""

import secrets
import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.domain.entities import GroupInvite, GroupRole
from grouphub.infrastructure.persistence.models import GroupInviteModel
from grouphub.infrastructure.persistence.repositories.group_repository import as_utc

INVITE_CODE_BYTES = 16


class GroupInviteRepository:
    """Repository for group invite code database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: GroupInviteModel) -> GroupInvite:
        return GroupInvite(
            id=model.id,
            group_id=model.group_id,
            code=model.code,
            created_by=model.created_by,
            role=GroupRole(model.role),
            created_at=as_utc(model.created_at),
        )

    async def create_invite_code(
        self,
        group_id: str,
        created_by: str,
        role: GroupRole = GroupRole.DEVELOPER,
    ) -> GroupInvite:
        """Issue a new invite code for a group.

        Args:
            group_id: Group ID.
            created_by: User ID issuing the code.
            role: Role granted when the code is redeemed.

        Returns:
            The created invite.
        """
        model = GroupInviteModel(
            id=str(uuid.uuid4()),
            group_id=group_id,
            code=secrets.token_urlsafe(INVITE_CODE_BYTES),
            created_by=created_by,
            role=GroupRole(role).value,
            created_at=datetime.now(timezone.utc),
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def get_by_code(self, code: str) -> GroupInvite | None:
        """Get an invite by its code.

        Args:
            code: Invite code.

        Returns:
            Invite if found, None otherwise.
        """
        result = await self.session.execute(
            select(GroupInviteModel).where(GroupInviteModel.code == code)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_group(self, group_id: str) -> list[GroupInvite]:
        """List the invite codes of a group, newest first."""
        result = await self.session.execute(
            select(GroupInviteModel)
            .where(GroupInviteModel.group_id == group_id)
            .order_by(GroupInviteModel.created_at.desc())
        )
        return [self._to_entity(model) for model in result.scalars().all()]

    async def delete_many_invite_codes(self, group_id: str) -> int:
        """Delete every invite code of a group.

        Args:
            group_id: Group ID.

        Returns:
            Number of invite codes deleted.
        """
        result = await self.session.execute(
            delete(GroupInviteModel).where(GroupInviteModel.group_id == group_id)
        )
        await self.session.flush()
        return result.rowcount
