"""SQLAlchemy models for the GroupHub tables.

All models inherit from the Base class defined in database.py.
"""

from grouphub.infrastructure.persistence.models.group import GroupModel
from grouphub.infrastructure.persistence.models.group_application import (
    GroupApplicationModel,
)
from grouphub.infrastructure.persistence.models.group_invite import GroupInviteModel
from grouphub.infrastructure.persistence.models.group_member import GroupMemberModel

__all__ = [
    "GroupApplicationModel",
    "GroupInviteModel",
    "GroupMemberModel",
    "GroupModel",
]
