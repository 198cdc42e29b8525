"""Pytest configuration for all tests."""

from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from grouphub.domain.services import GroupService
from grouphub.infrastructure.persistence.database import Base, enable_sqlite_transactions
from grouphub.infrastructure.persistence.models import (  # noqa: F401
    GroupApplicationModel,
    GroupInviteModel,
    GroupMemberModel,
    GroupModel,
)


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    """Create an in-memory SQLite engine with all tables."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False,
    )
    enable_sqlite_transactions(engine)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest.fixture
def group_service(session_factory: async_sessionmaker[AsyncSession]) -> GroupService:
    """Group service that opens its sessions from the test engine."""
    return GroupService(session_factory)


@pytest.fixture
def count_rows(session_factory: async_sessionmaker[AsyncSession]):
    """Count committed rows of a table, optionally for one group."""

    async def _count(model: type, group_id: str | None = None) -> int:
        stmt = select(func.count()).select_from(model)
        if group_id is not None:
            column = model.id if model is GroupModel else model.group_id
            stmt = stmt.where(column == group_id)
        async with session_factory() as session:
            result = await session.execute(stmt)
            return result.scalar_one()

    return _count
