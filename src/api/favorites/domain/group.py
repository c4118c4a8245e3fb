"""Group entity for the favorites context."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from favorites.domain.cache import FavoriteIdCache, ParentCache, Resolved
from favorites.domain.observability import DefaultGroupProbe, GroupProbe
from favorites.ports.exceptions import StoreAccessError

if TYPE_CHECKING:
    from favorites.domain.value_objects import Favorite
    from favorites.ports.notifications import ChangeNotifier, ErrorDispatcher
    from favorites.ports.store import FavoriteCatalog, GroupIndex, Store


class Group:
    """A named node in the group forest that aggregates favorites.

    The group keeps two lazily populated caches in step with the store:
    the ids of its favorites and its parent. The parent is stored as an id
    and resolved through the GroupIndex, so walking a hierarchy never joins
    in the store; the index must already hold every group of the session.

    Business rules:
    - No group may become its own ancestor
    - Membership writes hit the store before the cache is updated
    - One "group changed" notification follows every successful batch

    Store failures never leave this class: they are handed to the
    ErrorDispatcher and the operation returns (with a fallback where the
    caller needs a value).

    Caches are not synchronised; at most one writer per group at a time.
    """

    def __init__(
        self,
        id: int,
        name: str,
        *,
        store: Store,
        index: GroupIndex,
        errors: ErrorDispatcher,
        notifier: ChangeNotifier,
        catalog: FavoriteCatalog | None = None,
        probe: GroupProbe | None = None,
    ):
        self.id = id
        self.name = name
        self._store = store
        self._index = index
        self._errors = errors
        self._notifier = notifier
        self._catalog = catalog
        self._probe = probe or DefaultGroupProbe()
        self._favorite_ids = FavoriteIdCache(self._load_favorite_ids)
        self._parent = ParentCache()

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Group(id={self.id}, name={self.name!r})>"

    def __str__(self) -> str:
        return f"{self.name} (#{self.id})"

    def store_id_equals(self, other: object) -> bool:
        """True when the other object is a group persisted under the same id."""
        if not isinstance(other, Group):
            return False
        return other.id == self.id

    # Hierarchy

    @property
    def parent(self) -> Group | None:
        return self.get_parent()

    @parent.setter
    def parent(self, new_parent: Group | None) -> None:
        self.set_parent(new_parent)

    def get_parent(self) -> Group | None:
        """Return the parent group, or None for a root.

        The first call reads the parent foreign key from the store and looks
        the id up in the GroupIndex; later calls answer from the cache. A key
        that does not resolve in the index makes the group a root.
        """
        state = self._parent.state
        if isinstance(state, Resolved):
            return state.parent

        try:
            parent = self._load_parent()
        except StoreAccessError as e:
            self._errors.report_action_error(
                "get_parent",
                None,
                self,
                e,
                "Unable to load group parent from database.",
            )
            return None

        self._parent.resolve(parent)
        return parent

    def set_parent(self, new_parent: Group | None) -> None:
        """Persist a new parent, then cache it.

        The cache only changes after the store write succeeded; a failed
        write is reported and leaves the previous parent in place.

        Raises:
            ValueError: If the new parent is this group or one of its descendants
        """
        if new_parent is not None:
            self._ensure_not_ancestor_of(new_parent)

        try:
            self._save_parent(new_parent)
        except StoreAccessError as e:
            self._errors.report_action_error(
                "set_parent",
                new_parent,
                self,
                e,
                "Unable to save new group parent to database.",
            )
            return

        self._parent.resolve(new_parent)
        self._probe.parent_changed(
            self.id, new_parent.id if new_parent is not None else None
        )
        self._report_changed()

    def invalidate_parent(self) -> None:
        """Forget the cached parent; the next access reads the store again."""
        self._parent.invalidate()

    def _ensure_not_ancestor_of(self, new_parent: Group) -> None:
        seen: set[int] = set()
        ancestor: Group | None = new_parent
        while ancestor is not None and ancestor.id not in seen:
            if ancestor.store_id_equals(self):
                raise ValueError(
                    f"Cannot set parent of group {self.id} to {new_parent.id}: "
                    "would create a cycle"
                )
            seen.add(ancestor.id)
            ancestor = ancestor.get_parent()

    def _load_parent(self) -> Group | None:
        with self._store.begin_scope() as scope:
            scope.attach(self)
            try:
                parent_id = scope.load_parent_foreign_key(self)
            finally:
                scope.detach(self)

        if parent_id is None:
            self._probe.parent_resolved(self.id, None)
            return None

        # Only groups already in the index are used, never a fresh query
        parent = self._index.lookup(parent_id)
        if parent is None:
            self._probe.parent_reference_unresolved(self.id, parent_id)
            return None

        self._probe.parent_resolved(self.id, parent.id)
        return parent

    def _save_parent(self, new_parent: Group | None) -> None:
        with self._store.begin_scope() as scope:
            scope.attach(self)
            try:
                scope.set_parent_foreign_key(
                    self, new_parent.id if new_parent is not None else None
                )
                scope.commit(immediate=self._store.save_immediately)
            finally:
                scope.detach(self)

    # Membership

    @property
    def favorite_ids(self) -> frozenset[int]:
        """Ids of the favorites in this group."""
        return self._favorite_ids.ids()

    @property
    def favorites(self) -> list[Favorite]:
        """Favorites of this group, resolved from the injected catalog.

        Ids the catalog does not know are skipped; without a catalog the
        list is empty.
        """
        if self._catalog is None:
            return []

        selected = []
        for favorite_id in sorted(self.favorite_ids):
            favorite = self._catalog.get(favorite_id)
            if favorite is not None:
                selected.append(favorite)
        return selected

    def contains_favorite(self, favorite_id: int) -> bool:
        return self._favorite_ids.contains(favorite_id)

    def release_favorite_ids(self) -> None:
        """Forget the cached favorite ids; the next read reloads them."""
        self._favorite_ids.invalidate()

    def add_favorite(self, favorite: Favorite) -> None:
        self.add_favorites([favorite])

    def add_favorites(self, favorites: Iterable[Favorite]) -> None:
        """Associate favorites with this group.

        Each association is written and committed (or flushed inside an
        enclosing scope) before it is added to the cache. Exactly one change notification follows the whole batch.
        A store failure is reported; cache updates already applied for
        earlier items in the batch are kept.
        """
        favorites = list(favorites)
        try:
            self._insert_memberships(favorites)
        except StoreAccessError as e:
            self._errors.report_action_error(
                "add_favorites",
                favorites,
                self,
                e,
                "Unable to add favorite to database group.",
            )
            return

        self._probe.favorites_added(self.id, [f.id for f in favorites])
        self._report_changed()

    def remove_favorite(self, favorite: Favorite) -> None:
        """Remove one favorite from this group.

        Emits its own change notification in addition to the one from
        remove_favorites, so observers see two.
        """
        self.remove_favorites([favorite])
        self._report_changed()

    def remove_favorites(self, favorites: Iterable[Favorite]) -> None:
        """Dissociate favorites from this group.

        Mirrors add_favorites: store delete, then cache removal per item,
        one notification per batch, failures reported without rollback.
        """
        favorites = list(favorites)
        try:
            self._delete_memberships(favorites)
        except StoreAccessError as e:
            self._errors.report_action_error(
                "remove_favorites",
                favorites,
                self,
                e,
                "Unable to remove favorites from group.",
            )
            return

        self._probe.favorites_removed(self.id, [f.id for f in favorites])
        self._report_changed()

    def _insert_memberships(self, favorites: list[Favorite]) -> None:
        with self._store.begin_scope() as scope:
            for favorite in favorites:
                scope.insert_membership(favorite.id, self.id)
                scope.commit(immediate=self._store.save_immediately)
                self._favorite_ids.add(favorite.id)

    def _delete_memberships(self, favorites: list[Favorite]) -> None:
        with self._store.begin_scope() as scope:
            for favorite in favorites:
                scope.delete_membership(favorite.id, self.id)
                scope.commit(immediate=self._store.save_immediately)
                self._favorite_ids.remove(favorite.id)

    def _load_favorite_ids(self) -> list[int]:
        try:
            with self._store.begin_scope() as scope:
                ids = [
                    favorite_id
                    for favorite_id in scope.get_favorite_ids_in_group(self.id)
                    if favorite_id is not None
                ]
        except StoreAccessError as e:
            return self._errors.report_function_error(
                "load_favorite_ids",
                self,
                e,
                "Unable to load group favorites from database.",
                default=[],
            )

        self._probe.favorite_ids_loaded(self.id, len(ids))
        return ids

    def _report_changed(self) -> None:
        self._notifier.report_groups_updated([self])
