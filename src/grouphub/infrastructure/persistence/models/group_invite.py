"""SQLAlchemy model for the group_invites table."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from grouphub.infrastructure.persistence.database import Base


class GroupInviteModel(Base):
    """Invite code scoped to a group.

    Attributes:
        id: Primary key (UUID string).
        group_id: ID of the group the code grants access to.
        code: Secure random token for redeeming the invite.
        created_by: User ID that issued the code.
        role: Role granted on redemption.
        created_at: Timestamp when the code was issued.
    """

    __tablename__ = "group_invites"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        comment="Invite ID (UUID)",
    )
    group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
        comment="ID of the group",
    )
    code: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        unique=True,
        index=True,
        comment="Secure random token for redeeming the invite",
    )
    created_by: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        comment="User ID of the inviter",
    )
    role: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        comment="Role granted on redemption",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<GroupInvite(id={self.id}, group_id={self.group_id})>"
