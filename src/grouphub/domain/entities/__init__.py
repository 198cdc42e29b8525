"""Domain entities for GroupHub.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from grouphub.domain.entities.group import Group, normalize_appid
from grouphub.domain.entities.group_application import GroupApplication
from grouphub.domain.entities.group_invite import GroupInvite
from grouphub.domain.entities.group_member import GroupMember, GroupRole
from grouphub.domain.entities.group_views import (
    GroupWithMembers,
    GroupWithRole,
    MemberRole,
)

__all__ = [
    "Group",
    "GroupApplication",
    "GroupInvite",
    "GroupMember",
    "GroupRole",
    "GroupWithMembers",
    "GroupWithRole",
    "MemberRole",
    "normalize_appid",
]
