"""Group entity.

A group is a named collection of users. Groups created directly by a user
have no ``appid``; groups owned by an integration carry the external
application id they were created under and are kept out of the user's
personal group listing.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def normalize_appid(appid: str | None) -> str | None:
    """Return the canonical "no application" value for blank appids.

    Args:
        appid: Raw application id as supplied by a caller.

    Returns:
        The appid, or None when it is missing or blank.
    """
    if appid is None:
        return None
    appid = appid.strip()
    return appid or None


@dataclass
class Group:
    """Group entity.

    Attributes:
        id: Unique identifier (UUID string).
        name: Display name of the group.
        created_by: User id of the creator.
        appid: External application id, None for user-created groups.
        created_at: Timestamp when the group was created.
        updated_at: Timestamp when the group was last updated.
    """

    id: str
    name: str
    created_by: str
    appid: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        """Validate group data after initialization."""
        if not self.id:
            raise ValueError("Group ID is required")
        if not self.name:
            raise ValueError("Group name is required")
        if not self.created_by:
            raise ValueError("Group creator is required")
        self.appid = normalize_appid(self.appid)

    @property
    def is_application_scoped(self) -> bool:
        """Check if the group belongs to an external application."""
        return self.appid is not None
