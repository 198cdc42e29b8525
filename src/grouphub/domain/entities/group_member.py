"""Group membership entity.

Membership rows are the sole source of truth for who belongs to which
group and with what privilege.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum


class GroupRole(str, Enum):
    """Role a user holds within a group."""

    OWNER = "Owner"
    ADMIN = "Admin"
    DEVELOPER = "Developer"


@dataclass
class GroupMember:
    """A (group, user, role) membership row.

    Attributes:
        id: Unique identifier (UUID string).
        group_id: Group the user belongs to.
        uid: Member user id.
        role: Role held in the group.
        created_at: Timestamp when the user joined.
    """

    id: str
    group_id: str
    uid: str
    role: GroupRole
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.group_id:
            raise ValueError("Group ID is required")
        if not self.uid:
            raise ValueError("Member user ID is required")
        self.role = GroupRole(self.role)

    @property
    def is_owner(self) -> bool:
        return self.role == GroupRole.OWNER
