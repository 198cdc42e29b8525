"""Repository for group database operations.

The group repository owns the canonical group record. It knows nothing
about members, invites or application records; the group service keeps
those consistent with it.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.domain.entities import Group, normalize_appid
from grouphub.infrastructure.persistence.models import GroupModel

UPDATABLE_FIELDS = frozenset({"name", "appid", "created_by"})


def as_utc(value: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from SQLite."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class GroupRepository:
    """Repository for group database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session. Every statement runs in its
                current transaction.
        """
        self.session = session

    @staticmethod
    def _to_entity(model: GroupModel) -> Group:
        """Convert infrastructure model to domain entity."""
        return Group(
            id=model.id,
            name=model.name,
            created_by=model.created_by,
            appid=model.appid,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )

    async def create(self, name: str, created_by: str, appid: str | None = None) -> Group:
        """Insert a new group.

        Args:
            name: Group name.
            created_by: User id of the creator.
            appid: Optional external application id.

        Returns:
            The created group.
        """
        now = datetime.now(timezone.utc)
        model = GroupModel(
            id=str(uuid.uuid4()),
            name=name,
            created_by=created_by,
            appid=normalize_appid(appid),
            created_at=now,
            updated_at=now,
        )
        self.session.add(model)
        await self.session.flush()
        return self._to_entity(model)

    async def _get_model(self, group_id: str) -> GroupModel | None:
        result = await self.session.execute(
            select(GroupModel).where(GroupModel.id == group_id)
        )
        return result.scalar_one_or_none()

    async def get_by_id(self, group_id: str) -> Group | None:
        """Get a group by ID.

        Args:
            group_id: Group ID.

        Returns:
            Group if found, None otherwise.
        """
        model = await self._get_model(group_id)
        return self._to_entity(model) if model else None

    async def get_by_appid(self, appid: str) -> Group | None:
        """Get the group bound to an external application.

        Args:
            appid: External application id (exact match).

        Returns:
            The oldest matching group, or None.
        """
        result = await self.session.execute(
            select(GroupModel)
            .where(GroupModel.appid == appid)
            .order_by(GroupModel.created_at)
            .limit(1)
        )
        model = result.scalars().first()
        return self._to_entity(model) if model else None

    async def update_fields(self, group_id: str, fields: dict[str, Any]) -> Group | None:
        """Merge fields into a group and refresh its updated_at.

        Args:
            group_id: Group ID.
            fields: Field values to set. Keys must be in UPDATABLE_FIELDS.

        Returns:
            The updated group, or None if it does not exist.

        Raises:
            ValueError: If a field cannot be updated.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update group fields: {', '.join(sorted(unknown))}")

        model = await self._get_model(group_id)
        if model is None:
            return None

        for key, value in fields.items():
            if key == "appid":
                value = normalize_appid(value)
            setattr(model, key, value)
        model.updated_at = datetime.now(timezone.utc)

        await self.session.flush()
        return self._to_entity(model)

    async def delete_by_id(self, group_id: str) -> bool:
        """Delete a group.

        Args:
            group_id: Group ID.

        Returns:
            True if a group was deleted, False if not found.
        """
        result = await self.session.execute(
            delete(GroupModel).where(GroupModel.id == group_id)
        )
        await self.session.flush()
        return result.rowcount > 0

    async def count_user_created(self, uid: str) -> int:
        """Count groups a user created outside any external application.

        Args:
            uid: User ID.

        Returns:
            Number of groups with created_by == uid and no appid.
        """
        result = await self.session.execute(
            select(func.count())
            .select_from(GroupModel)
            .where(GroupModel.created_by == uid, GroupModel.appid.is_(None))
        )
        return result.scalar_one()
