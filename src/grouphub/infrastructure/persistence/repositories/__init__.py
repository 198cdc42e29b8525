"""Persistence repositories for database operations."""

from grouphub.infrastructure.persistence.repositories.group_application_repository import (
    GroupApplicationRepository,
)
from grouphub.infrastructure.persistence.repositories.group_invite_repository import (
    GroupInviteRepository,
)
from grouphub.infrastructure.persistence.repositories.group_member_repository import (
    GroupMemberRepository,
)
from grouphub.infrastructure.persistence.repositories.group_repository import (
    GroupRepository,
)

__all__ = [
    "GroupApplicationRepository",
    "GroupInviteRepository",
    "GroupMemberRepository",
    "GroupRepository",
]
