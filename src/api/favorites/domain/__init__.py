"""Domain layer for the favorites bounded context."""

from favorites.domain.cache import (
    FavoriteIdCache,
    Loaded,
    ParentCache,
    Resolved,
    Unloaded,
    Unresolved,
)
from favorites.domain.events import DomainEvent, GroupsUpdated, StoreErrorReported
from favorites.domain.forest import Forest
from favorites.domain.group import Group
from favorites.domain.value_objects import Favorite

__all__ = [
    "DomainEvent",
    "Favorite",
    "FavoriteIdCache",
    "Forest",
    "Group",
    "GroupsUpdated",
    "Loaded",
    "ParentCache",
    "Resolved",
    "StoreErrorReported",
    "Unloaded",
    "Unresolved",
]
