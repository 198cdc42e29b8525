"""Group application record.

One record is appended when a group is created, recording the external
application the group was created under (None for plain groups). The
records are the anchor used to find the groups an application has touched.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class GroupApplication:
    """Application record for a group.

    Attributes:
        id: Unique identifier (UUID string).
        group_id: Group the record belongs to.
        appid: External application id, None for user-created groups.
        created_at: Timestamp when the record was appended.
    """

    id: str
    group_id: str
    appid: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
