"""Role-annotated read models for groups.

These are the denormalized rows produced by the group queries: the group
fields joined with membership data.
"""

from dataclasses import dataclass, field
from datetime import datetime

from grouphub.domain.entities.group_member import GroupRole


@dataclass(frozen=True)
class MemberRole:
    """A member of a group and the role they hold."""

    uid: str
    role: GroupRole


@dataclass
class GroupWithMembers:
    """A group together with every member's role.

    Attributes:
        id: Group id.
        name: Group name.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
        members: All membership rows of the group as (uid, role) pairs.
    """

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    members: list[MemberRole] = field(default_factory=list)

    def role_of(self, uid: str) -> GroupRole | None:
        """Get the role a user holds in the group, if any."""
        for member in self.members:
            if member.uid == uid:
                return member.role
        return None


@dataclass
class GroupWithRole:
    """A group annotated with the role of the user who queried it."""

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    role: GroupRole
