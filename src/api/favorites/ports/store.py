"""Store protocols (ports) for the favorites bounded context.

The store is a unit-of-work abstraction: each interaction happens inside a
scope that is acquired at the start of an operation and released on every
exit path, including failures.
"""

from __future__ import annotations

from collections.abc import Sequence
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from favorites.domain.group import Group
    from favorites.domain.value_objects import Favorite


@runtime_checkable
class StoreScope(Protocol):
    """A single unit of work against the store.

    Every method may raise StoreAccessError.
    """

    def attach(self, group: Group) -> None:
        """Start tracking the group's persisted row in this unit of work."""
        ...

    def detach(self, group: Group) -> None:
        """Stop tracking the group so it does not leak into other work."""
        ...

    def load_parent_foreign_key(self, group: Group) -> int | None:
        """Return the persisted parent group id of an attached group."""
        ...

    def set_parent_foreign_key(self, group: Group, parent_id: int | None) -> None:
        """Change the persisted parent group id of an attached group."""
        ...

    def commit(self, immediate: bool) -> None:
        """Save pending changes.

        Args:
            immediate: Commit the transaction now; otherwise only flush and
                leave the commit to the enclosing batch.
        """
        ...

    def get_favorite_ids_in_group(self, group_id: int) -> Sequence[int]:
        """Return the ids of every favorite associated with the group."""
        ...

    def insert_membership(self, favorite_id: int, group_id: int) -> None:
        """Persist a favorite-in-group association."""
        ...

    def delete_membership(self, favorite_id: int, group_id: int) -> None:
        """Remove the favorite-in-group association(s)."""
        ...


@runtime_checkable
class Store(Protocol):
    """Factory of scoped units of work."""

    @property
    def save_immediately(self) -> bool:
        """Whether scopes should commit immediately or defer to an enclosing scope."""
        ...

    def begin_scope(self) -> AbstractContextManager[StoreScope]:
        """Open a scope, or reuse the one already open on this store."""
        ...


@runtime_checkable
class GroupIndex(Protocol):
    """In-memory lookup of every group known to the current session."""

    def lookup(self, group_id: int) -> Group | None:
        """Return the group with this id without querying the store."""
        ...


@runtime_checkable
class FavoriteCatalog(Protocol):
    """In-memory lookup of favorites already loaded by the caller."""

    def get(self, favorite_id: int) -> Favorite | None:
        """Return the favorite with this id, or None when it is unknown."""
        ...
