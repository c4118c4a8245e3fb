"""Ports (interfaces) for the favorites bounded context.

Ports define the contracts for the store, the reporting collaborators and
the group repository without specifying implementation details.
"""

from favorites.ports.exceptions import GroupNotFoundError, StoreAccessError
from favorites.ports.notifications import ChangeNotifier, ErrorDispatcher
from favorites.ports.repositories import GroupRecord, IGroupRepository
from favorites.ports.store import FavoriteCatalog, GroupIndex, Store, StoreScope

__all__ = [
    "ChangeNotifier",
    "ErrorDispatcher",
    "FavoriteCatalog",
    "GroupIndex",
    "GroupNotFoundError",
    "GroupRecord",
    "IGroupRepository",
    "Store",
    "StoreAccessError",
    "StoreScope",
]
