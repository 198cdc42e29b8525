"""SQLAlchemy model for the group_members table."""

from datetime import datetime

from sqlalchemy import DateTime, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from grouphub.infrastructure.persistence.database import Base


class GroupMemberModel(Base):
    """Membership of a user in a group.

    Attributes:
        id: Primary key (UUID string).
        group_id: ID of the group.
        uid: ID of the member user.
        role: Role name (Owner, Admin, Developer).
        created_at: Timestamp when the membership was created.
    """

    __tablename__ = "group_members"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Membership ID (UUID)",
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="ID of the group",
    )
    uid: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="ID of the member user",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Role held in the group",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("group_id", "uid", name="uq_group_members_group_uid"),
    )

    def __repr__(self) -> str:
        return f"<GroupMember(group_id={self.group_id}, uid={self.uid}, role={self.role})>"
