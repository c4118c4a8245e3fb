"""Lazily populated caches owned by a Group.

Each cache is an explicit two-state machine, so "has this been loaded yet"
is a checkable state instead of a None sentinel.

The caches are not synchronised. A single logical writer per Group is
assumed; callers that share a Group between threads must serialise access.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from favorites.domain.group import Group


@dataclass(frozen=True)
class Unloaded:
    """The favorite ids have never been queried (or were invalidated)."""


@dataclass
class Loaded:
    """The favorite ids of the last load, plus later adds and removes."""

    ids: set[int] = field(default_factory=set)


class FavoriteIdCache:
    """Set of favorite ids belonging to one group.

    The first read calls the loader once; afterwards additions and removals
    are applied to the set directly without reloading.
    """

    def __init__(self, loader: Callable[[], Iterable[int]]):
        self._loader = loader
        self._state: Unloaded | Loaded = Unloaded()

    @property
    def state(self) -> Unloaded | Loaded:
        return self._state

    @property
    def is_loaded(self) -> bool:
        return isinstance(self._state, Loaded)

    def ensure_loaded(self) -> Loaded:
        """Load the ids unless already loaded. Idempotent."""
        if isinstance(self._state, Loaded):
            return self._state

        loaded = Loaded(ids=set(self._loader()))
        self._state = loaded
        return loaded

    def contains(self, favorite_id: int) -> bool:
        return favorite_id in self.ensure_loaded().ids

    def add(self, favorite_id: int) -> bool:
        """Add the id; returns False when it was already present."""
        loaded = self.ensure_loaded()
        if favorite_id in loaded.ids:
            return False
        loaded.ids.add(favorite_id)
        return True

    def remove(self, favorite_id: int) -> bool:
        """Remove the id; returns False when it was absent."""
        loaded = self.ensure_loaded()
        if favorite_id not in loaded.ids:
            return False
        loaded.ids.remove(favorite_id)
        return True

    def ids(self) -> frozenset[int]:
        """Snapshot of the cached ids, loading them first if needed."""
        return frozenset(self.ensure_loaded().ids)

    def invalidate(self) -> None:
        """Forget the ids; the next access reloads them."""
        self._state = Unloaded()


@dataclass(frozen=True)
class Unresolved:
    """The parent has not been looked up yet."""


@dataclass(frozen=True)
class Resolved:
    """The parent is known; None means the group is a root."""

    parent: Group | None


class ParentCache:
    """Cached parent reference of one group.

    The write path moves straight to Resolved(new parent) instead of
    invalidating, so a successful write never costs a later query.
    """

    def __init__(self) -> None:
        self._state: Unresolved | Resolved = Unresolved()

    @property
    def state(self) -> Unresolved | Resolved:
        return self._state

    @property
    def is_resolved(self) -> bool:
        return isinstance(self._state, Resolved)

    def resolve(self, parent: Group | None) -> None:
        self._state = Resolved(parent=parent)

    def invalidate(self) -> None:
        self._state = Unresolved()
