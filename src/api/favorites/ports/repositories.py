"""Repository protocol (port) for group rows.

The repository is used by the GroupService to populate the Forest and to
create or delete groups. Group instances themselves talk to the Store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class GroupRecord:
    """Persisted identity of a group, as read from the store."""

    id: int
    name: str


@runtime_checkable
class IGroupRepository(Protocol):
    """Repository for group rows.

    Every method may raise StoreAccessError.
    """

    def list_all(self) -> list[GroupRecord]:
        """Return every persisted group in a single query, ordered by id."""
        ...

    def add(self, name: str, parent_id: int | None = None) -> int:
        """Persist a new group.

        Args:
            name: The group name
            parent_id: Optional parent group id

        Returns:
            The store-assigned id
        """
        ...

    def delete(self, group_id: int) -> bool:
        """Delete a group, its memberships, and orphan its children to root.

        Returns:
            True if deleted, False if the group did not exist
        """
        ...
