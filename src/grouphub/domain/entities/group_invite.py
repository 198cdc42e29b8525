"""Group invite code entity.

Invite codes are redeemable tokens scoped to a single group. Redeeming a
code grants the role stored on it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from grouphub.domain.entities.group_member import GroupRole


@dataclass
class GroupInvite:
    """Invite code for joining a group.

    Attributes:
        id: Unique identifier (UUID string).
        group_id: Group the code grants access to.
        code: URL-safe random token handed to the invitee.
        created_by: User id that issued the code.
        role: Role granted when the code is redeemed.
        created_at: Timestamp when the code was issued.
    """

    id: str
    group_id: str
    code: str
    created_by: str
    role: GroupRole = GroupRole.DEVELOPER
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate invite data after initialization."""
        if not self.group_id:
            raise ValueError("Group ID is required")
        if not self.code:
            raise ValueError("Invite code is required")
        if not self.created_by:
            raise ValueError("Invited by user ID is required")
        self.role = GroupRole(self.role)
