"""Infrastructure layer - database adapters (SQLAlchemy).

The infrastructure layer implements the storage the domain services
compose into transactions.
"""

from grouphub.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "init_database",
    "close_database",
]
