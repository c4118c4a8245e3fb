"""Infrastructure layer for the favorites bounded context."""

from favorites.infrastructure.group_repository import GroupRepository
from favorites.infrastructure.store import SqlAlchemyScope, SqlAlchemyStore

__all__ = [
    "GroupRepository",
    "SqlAlchemyScope",
    "SqlAlchemyStore",
]
