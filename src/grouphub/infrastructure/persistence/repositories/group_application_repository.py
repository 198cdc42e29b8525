"""Repository for group application records."""

import uuid
from datetime import datetime, timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from grouphub.domain.entities import GroupApplication, normalize_appid
from grouphub.infrastructure.persistence.models import GroupApplicationModel
from grouphub.infrastructure.persistence.repositories.group_repository import as_utc


class GroupApplicationRepository:
    """Repository for group application record database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def append(self, group_id: str, appid: str | None) -> GroupApplication:
        """Record the application a group was created under.

        A record is appended for plain groups too, with a NULL appid.

        Args:
            group_id: Group ID.
            appid: External application ID, or None.

        Returns:
            The appended record.
        """
        model = GroupApplicationModel(
            id=str(uuid.uuid4()),
            group_id=group_id,
            appid=normalize_appid(appid),
            created_at=datetime.now(timezone.utc),
        )
        self.session.add(model)
        await self.session.flush()
        return GroupApplication(
            id=model.id,
            group_id=model.group_id,
            appid=model.appid,
            created_at=model.created_at,
        )

    async def list_by_group(self, group_id: str) -> list[GroupApplication]:
        """List the application records of a group."""
        result = await self.session.execute(
            select(GroupApplicationModel).where(GroupApplicationModel.group_id == group_id)
        )
        return [
            GroupApplication(
                id=model.id,
                group_id=model.group_id,
                appid=model.appid,
                created_at=as_utc(model.created_at),
            )
            for model in result.scalars().all()
        ]

    async def remove_all(self, group_id: str) -> int:
        """Remove every application record of a group.

        Args:
            group_id: Group ID.

        Returns:
            Number of records removed.
        """
        result = await self.session.execute(
            delete(GroupApplicationModel).where(GroupApplicationModel.group_id == group_id)
        )
        await self.session.flush()
        return result.rowcount
