"""SQLAlchemy model for the group_applications table."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from grouphub.infrastructure.persistence.database import Base


class GroupApplicationModel(Base):
    """Application record appended when a group is created.

    Attributes:
        id: Primary key (UUID string).
        group_id: ID of the group.
        appid: External application ID, NULL for user-created groups.
        created_at: Timestamp when the record was appended.
    """

    __tablename__ = "group_applications"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Application record ID (UUID)",
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="ID of the group",
    )
    appid: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="External application ID",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GroupApplication(group_id={self.group_id}, appid={self.appid})>"
