"""Service for group lifecycle management.

A group lives in four tables: the group record itself, its memberships,
its invite codes and its application records. This service creates and
deletes them together in one transaction, and builds the role-annotated
group views by joining them.

Sessions are the transaction scope. The service opens its own session from
the factory it was given unless the caller lends one; a lent session is
never closed by the service.
"""

from collections import defaultdict
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import and_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction, async_sessionmaker

from grouphub.core.logging import get_logger
from grouphub.domain.entities import (
    Group,
    GroupRole,
    GroupWithMembers,
    GroupWithRole,
    MemberRole,
    normalize_appid,
)
from grouphub.infrastructure.persistence.models import (
    GroupApplicationModel,
    GroupMemberModel,
    GroupModel,
)
from grouphub.infrastructure.persistence.repositories import (
    GroupApplicationRepository,
    GroupInviteRepository,
    GroupMemberRepository,
    GroupRepository,
)
from grouphub.infrastructure.persistence.repositories.group_repository import (
    UPDATABLE_FIELDS,
    as_utc,
)

logger = get_logger(__name__)


class GroupServiceError(Exception):
    """Base class for group service errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class GroupQueryError(GroupServiceError):
    """Raised when a group query fails in the database.

    The message is deliberately generic; the database error is chained
    as ``__cause__``.
    """


class SessionTeardownError(GroupServiceError):
    """Raised when a session cannot be closed after a successful operation."""


class GroupService:
    """Service for creating, deleting and querying groups."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize the group service.

        Args:
            session_factory: Factory for the sessions this service owns.
        """
        self.session_factory = session_factory

    @asynccontextmanager
    async def _session_scope(
        self,
        session: AsyncSession | None,
        operation: str,
        **context: Any,
    ) -> AsyncGenerator[AsyncSession, None]:
        """Yield the lent session, or open one and always close it afterwards."""
        if session is not None:
            yield session
            return

        owned = self.session_factory()
        try:
            yield owned
        except BaseException:
            await self._end_session(owned, operation, primary_failed=True, **context)
            raise
        await self._end_session(owned, operation, primary_failed=False, **context)

    @staticmethod
    async def _end_session(
        session: AsyncSession,
        operation: str,
        primary_failed: bool,
        **context: Any,
    ) -> None:
        """Close an owned session.

        A close failure is logged. It is raised only when the operation
        itself succeeded, so it never replaces the operation's own error.
        """
        try:
            await session.close()
        except Exception as e:
            logger.error(
                "Failed to end database session",
                operation=operation,
                primary_failed=primary_failed,
                error=str(e),
                **context,
            )
            if not primary_failed:
                raise SessionTeardownError(
                    f"Failed to end database session after {operation}"
                ) from e

    @staticmethod
    def _begin(session: AsyncSession) -> AsyncSessionTransaction:
        """Start a transaction, or a savepoint inside the caller's transaction."""
        if session.in_transaction():
            return session.begin_nested()
        return session.begin()

    async def find_group_by_appid(self, appid: str | None) -> Group | None:
        """Get the group bound to an external application.

        Args:
            appid: External application id.

        Returns:
            The group, or None if no group has this appid.
        """
        appid = normalize_appid(appid)
        if appid is None:
            return None
        async with self._session_scope(None, "find_group_by_appid", appid=appid) as session:
            return await GroupRepository(session).get_by_appid(appid)

    async def find_one(self, group_id: str, session: AsyncSession | None = None) -> Group | None:
        """Get a group by ID.

        Args:
            group_id: Group ID.
            session: Optional session. Reads through it see its uncommitted writes.

        Returns:
            The group, or None if it does not exist.
        """
        async with self._session_scope(session, "find_one", group_id=group_id) as scope:
            return await GroupRepository(scope).get_by_id(group_id)

    async def update(
        self,
        group_id: str,
        fields: dict[str, Any],
        session: AsyncSession | None = None,
    ) -> Group | None:
        """Merge fields into a group, refreshing its updated_at.

        Args:
            group_id: Group ID.
            fields: Values for any of name, appid, created_by.
            session: Optional session to run in.

        Returns:
            The updated group, or None if it does not exist.

        Raises:
            ValueError: If a field cannot be updated.
        """
        unknown = set(fields) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update group fields: {', '.join(sorted(unknown))}")
        if "name" in fields and not fields["name"]:
            raise ValueError("Group name is required")

        async with self._session_scope(session, "update", group_id=group_id) as scope:
            async with self._begin(scope):
                return await GroupRepository(scope).update_fields(group_id, fields)

    async def count_groups(self, uid: str) -> int:
        """Count the groups a user created outside any external application.

        Args:
            uid: User ID.

        Returns:
            Number of user-created groups.
        """
        async with self._session_scope(None, "count_groups", uid=uid) as session:
            return await GroupRepository(session).count_user_created(uid)

    async def find_all(self, uid: str) -> list[GroupWithMembers]:
        """List the user-created groups a user belongs to, with all members.

        Groups bound to an external application are left out.

        Args:
            uid: User ID.

        Returns:
            One entry per group, each carrying every member and role.

        Raises:
            GroupQueryError: If the database query fails.
        """
        try:
            async with self._session_scope(None, "find_all", uid=uid) as session:
                result = await session.execute(
                    select(GroupModel)
                    .select_from(GroupMemberModel)
                    .join(
                        GroupModel,
                        and_(
                            GroupModel.id == GroupMemberModel.group_id,
                            GroupModel.appid.is_(None),
                        ),
                    )
                    .where(GroupMemberModel.uid == uid)
                    .order_by(GroupModel.created_at)
                )
                groups = list(result.scalars().all())

                members: dict[str, list[MemberRole]] = defaultdict(list)
                if groups:
                    rows = await session.execute(
                        select(
                            GroupMemberModel.group_id,
                            GroupMemberModel.role,
                            GroupMemberModel.uid,
                        )
                        .where(GroupMemberModel.group_id.in_([g.id for g in groups]))
                        .order_by(GroupMemberModel.created_at)
                    )
                    for group_id, role, member_uid in rows:
                        members[group_id].append(MemberRole(uid=member_uid, role=GroupRole(role)))
        except SQLAlchemyError as e:
            logger.error("Failed to get groups of user", uid=uid, error=str(e))
            raise GroupQueryError("Failed to get group data") from e

        return [
            GroupWithMembers(
                id=group.id,
                name=group.name,
                created_at=as_utc(group.created_at),
                updated_at=as_utc(group.updated_at),
                members=members[group.id],
            )
            for group in groups
        ]

    async def find_groups_by_appid_and_uid(self, appid: str | None, uid: str) -> list[GroupWithRole]:
        """List the groups of an external application that a user belongs to.

        Args:
            appid: External application id.
            uid: User ID.

        Returns:
            One entry per group, carrying the user's own role.

        Raises:
            GroupQueryError: If the database query fails.
        """
        appid = normalize_appid(appid)
        if appid is None:
            return []

        try:
            async with self._session_scope(
                None, "find_groups_by_appid_and_uid", appid=appid, uid=uid
            ) as session:
                result = await session.execute(
                    select(GroupModel, GroupMemberModel.role)
                    .select_from(GroupApplicationModel)
                    .join(GroupModel, GroupModel.id == GroupApplicationModel.group_id)
                    .join(
                        GroupMemberModel,
                        and_(
                            GroupMemberModel.group_id == GroupApplicationModel.group_id,
                            GroupMemberModel.uid == uid,
                        ),
                    )
                    .where(GroupApplicationModel.appid == appid)
                    .order_by(GroupModel.created_at)
                )
                rows = result.all()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to get groups by appid and uid", appid=appid, uid=uid, error=str(e)
            )
            raise GroupQueryError("Failed to get group data") from e

        return [self._with_role(group, role) for group, role in rows]

    async def find_one_with_role(self, group_id: str, uid: str) -> GroupWithRole | None:
        """Get a group annotated with a user's role in it.

        Args:
            group_id: Group ID.
            uid: User ID.

        Returns:
            The group with the user's role, or None if the user is not a
            member or the group no longer exists.

        Raises:
            GroupQueryError: If the database query fails.
        """
        try:
            async with self._session_scope(
                None, "find_one_with_role", group_id=group_id, uid=uid
            ) as session:
                result = await session.execute(
                    select(GroupModel, GroupMemberModel.role)
                    .select_from(GroupMemberModel)
                    .join(GroupModel, GroupModel.id == GroupMemberModel.group_id)
                    .where(
                        GroupMemberModel.group_id == group_id,
                        GroupMemberModel.uid == uid,
                    )
                )
                row = result.first()
        except SQLAlchemyError as e:
            logger.error(
                "Failed to get group with role", group_id=group_id, uid=uid, error=str(e)
            )
            raise GroupQueryError("Failed to get group data") from e

        if row is None:
            return None
        group, role = row
        return self._with_role(group, role)

    @staticmethod
    def _with_role(group: GroupModel, role: str) -> GroupWithRole:
        """Build the role-annotated view of a group row."""
        return GroupWithRole(
            id=group.id,
            name=group.name,
            created_at=as_utc(group.created_at),
            updated_at=as_utc(group.updated_at),
            role=GroupRole(role),
        )

    async def create(self, name: str, created_by: str, appid: str | None = None) -> Group:
        """Create a group with its owner membership and application record.

        All three rows are written in one transaction; on any failure none
        of them is kept.

        Args:
            name: Group name.
            created_by: User ID of the creator, who becomes the Owner.
            appid: Optional external application id.

        Returns:
            The created group as read back inside the transaction.

        Raises:
            ValueError: If name or created_by is empty.
        """
        if not name:
            raise ValueError("Group name is required")
        if not created_by:
            raise ValueError("Group creator is required")
        appid = normalize_appid(appid)

        async with self._session_scope(None, "create", name=name, created_by=created_by) as session:
            try:
                async with session.begin():
                    created = await GroupRepository(session).create(name, created_by, appid)
                    await GroupMemberRepository(session).add_one(
                        created.id, created_by, GroupRole.OWNER
                    )
                    await GroupApplicationRepository(session).append(created.id, appid)
                    group = await self.find_one(created.id, session)
            except Exception as e:
                logger.error(
                    "Failed to create group",
                    name=name,
                    created_by=created_by,
                    appid=appid,
                    error=str(e),
                )
                raise

        logger.info("Group created", group_id=group.id, created_by=created_by, appid=appid)
        return group

    async def delete(self, group_id: str, session: AsyncSession | None = None) -> Group | None:
        """Delete a group with its memberships, invite codes and application records.

        Args:
            group_id: Group ID.
            session: Optional session. When it is already in a transaction the
                deletion runs in a savepoint and is published by the caller's
                commit; the session is never closed here.

        Returns:
            The group as it was before deletion, or None if it did not exist.
        """
        async with self._session_scope(session, "delete", group_id=group_id) as scope:
            try:
                async with self._begin(scope):
                    group = await self.find_one(group_id, scope)
                    await GroupRepository(scope).delete_by_id(group_id)
                    members = await GroupMemberRepository(scope).remove_all(group_id)
                    invites = await GroupInviteRepository(scope).delete_many_invite_codes(group_id)
                    applications = await GroupApplicationRepository(scope).remove_all(group_id)
            except Exception as e:
                logger.error("Failed to delete group", group_id=group_id, error=str(e))
                raise

        logger.info(
            "Group deleted",
            group_id=group_id,
            existed=group is not None,
            members=members,
            invites=invites,
            applications=applications,
        )
        return group
