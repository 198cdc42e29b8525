"""SQLAlchemy model for the groups table."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from grouphub.infrastructure.persistence.database import Base


class GroupModel(Base):
    """SQLAlchemy model for the groups table.

    Member, application and invite rows reference groups by id without
    foreign-key constraints; the group service keeps them consistent.

    Attributes:
        id: Primary key (UUID string).
        name: Group name.
        created_by: User id of the creator.
        appid: External application id, NULL for user-created groups.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
    """

    __tablename__ = "groups"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Group ID (UUID)",
    )
    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
        comment="Group name",
    )
    created_by: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="User ID of the creator",
    )
    appid: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="External application ID (NULL for user-created groups)",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    __table_args__ = (
        Index("ix_groups_created_by_appid", "created_by", "appid"),
    )

    def __repr__(self) -> str:
        return f"<Group(id={self.id}, name={self.name}, appid={self.appid})>"
