"""Forest of groups for one store-session scope.

The Forest owns every Group record of the session and answers id lookups
without touching the store. Groups reference their parent by id only, so
the Forest is the single place a parent id turns into a Group.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from favorites.domain.group import Group


class Forest:
    """In-memory index of all known groups, keyed by id."""

    def __init__(self, groups: Iterable[Group] = ()):
        self._groups: dict[int, Group] = {}
        for group in groups:
            self.add(group)

    def __len__(self) -> int:
        return len(self._groups)

    def __iter__(self) -> Iterator[Group]:
        return iter(list(self._groups.values()))

    def __contains__(self, group_id: object) -> bool:
        return group_id in self._groups

    def lookup(self, group_id: int) -> Group | None:
        return self._groups.get(group_id)

    def add(self, group: Group) -> None:
        """Register a group.

        Raises:
            ValueError: If another group with the same id is already registered
        """
        existing = self._groups.get(group.id)
        if existing is not None and existing is not group:
            raise ValueError(f"Group {group.id} is already in the forest")
        self._groups[group.id] = group

    def remove(self, group_id: int) -> Group | None:
        """Unregister a group; returns it, or None if it was unknown."""
        return self._groups.pop(group_id, None)

    def replace(self, groups: Iterable[Group]) -> None:
        """Swap the whole content, e.g. after reloading from the store."""
        self._groups = {}
        for group in groups:
            self.add(group)

    def roots(self) -> list[Group]:
        """Groups without a (resolvable) parent.

        Resolves the parent of every group that has not been resolved yet.
        """
        return [group for group in self if group.get_parent() is None]

    def children_of(self, parent: Group) -> list[Group]:
        return [
            group
            for group in self
            if (candidate := group.get_parent()) is not None
            and candidate.store_id_equals(parent)
        ]

    def invalidate_parents(self) -> None:
        for group in self:
            group.invalidate_parent()

    def release_favorite_ids(self) -> None:
        for group in self:
            group.release_favorite_ids()
