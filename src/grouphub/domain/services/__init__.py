"""Domain services for GroupHub.

Services contain business logic that spans more than one repository.
"""

from grouphub.domain.services.group_service import (
    GroupQueryError,
    GroupService,
    GroupServiceError,
    SessionTeardownError,
)

__all__ = [
    "GroupQueryError",
    "GroupService",
    "GroupServiceError",
    "SessionTeardownError",
]
