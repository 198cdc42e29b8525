"""GroupHub - transactional group lifecycle management.

Groups, their memberships, invite codes and application records are
created and torn down together, and read back as role-annotated views.
"""

__version__ = "0.1.0"

from grouphub.domain.services import GroupService

__all__ = ["GroupService", "__version__"]
