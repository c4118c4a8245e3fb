"""Group application service for the favorites bounded context.

Owns the Forest of one store-session scope: loads it from the repository,
creates and deletes groups, and builds every Group with the same injected
collaborators.
"""

from __future__ import annotations

from collections.abc import Iterator

from favorites.application.observability import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)
from favorites.domain.forest import Forest
from favorites.domain.group import Group
from favorites.domain.observability import GroupProbe
from favorites.ports.exceptions import StoreAccessError
from favorites.ports.notifications import ChangeNotifier, ErrorDispatcher
from favorites.ports.repositories import IGroupRepository
from favorites.ports.store import FavoriteCatalog, Store


class GroupService:
    """Application service for group management.

    The service is the collaborator that keeps the Forest populated, which
    Group parent resolution relies on. Like Group, it never lets a store
    failure escape: failures go through the ErrorDispatcher.
    """

    def __init__(
        self,
        repository: IGroupRepository,
        store: Store,
        errors: ErrorDispatcher,
        notifier: ChangeNotifier,
        catalog: FavoriteCatalog | None = None,
        forest: Forest | None = None,
        probe: GroupServiceProbe | None = None,
        group_probe: GroupProbe | None = None,
    ):
        """Initialize GroupService with dependencies.

        Args:
            repository: Repository for group rows
            store: Unit-of-work store handed to every Group
            errors: Dispatcher receiving absorbed store failures
            notifier: Broadcaster of group changes
            catalog: Optional lookup of already loaded favorites
            forest: Forest to populate (a new one by default)
            probe: Optional domain probe for observability
            group_probe: Optional probe handed to every Group
        """
        self._repository = repository
        self._store = store
        self._errors = errors
        self._notifier = notifier
        self._catalog = catalog
        self._forest = forest if forest is not None else Forest()
        self._probe = probe or DefaultGroupServiceProbe()
        self._group_probe = group_probe

    @property
    def forest(self) -> Forest:
        return self._forest

    def __iter__(self) -> Iterator[Group]:
        return iter(self._forest)

    def __len__(self) -> int:
        return len(self._forest)

    def get(self, group_id: int) -> Group | None:
        return self._forest.lookup(group_id)

    def roots(self) -> list[Group]:
        return self._forest.roots()

    def children_of(self, group: Group) -> list[Group]:
        return self._forest.children_of(group)

    def load(self) -> list[Group]:
        """Replace the forest content with every group in the store.

        On a store failure the current forest is kept and returned.

        Returns:
            The groups now in the forest
        """
        try:
            records = self._repository.list_all()
        except StoreAccessError as e:
            return self._errors.report_function_error(
                "load",
                self,
                e,
                "Unable to load groups from database.",
                default=list(self._forest),
            )

        groups = [self._build(record.id, record.name) for record in records]
        self._forest.replace(groups)
        self._probe.groups_loaded(len(groups))
        return groups

    def create(self, name: str, parent: Group | None = None) -> Group | None:
        """Persist a new group and register it in the forest.

        Args:
            name: Group name (1-255 characters)
            parent: Optional parent group

        Returns:
            The new Group, or None if the store write failed

        Raises:
            ValueError: If name is empty or too long
        """
        if not name or len(name) > 255:
            raise ValueError("Group name must be between 1 and 255 characters")

        parent_id = parent.id if parent is not None else None
        try:
            group_id = self._repository.add(name, parent_id)
        except StoreAccessError as e:
            return self._errors.report_function_error(
                "create",
                name,
                e,
                "Unable to create group in database.",
                default=None,
            )

        group = self._build(group_id, name)
        self._forest.add(group)
        self._probe.group_created(group_id, name, parent_id)
        self._notifier.report_groups_updated([group])
        return group

    def delete(self, group: Group) -> bool:
        """Delete a group; its children become roots.

        Returns:
            True if the group was deleted, False if it did not exist or the
            store write failed
        """
        children = self._forest.children_of(group)
        try:
            deleted = self._repository.delete(group.id)
        except StoreAccessError as e:
            self._errors.report_action_error(
                "delete",
                None,
                group,
                e,
                "Unable to delete group from database.",
            )
            return False

        self._forest.remove(group.id)
        group.release_favorite_ids()
        group.invalidate_parent()
        for child in children:
            child.invalidate_parent()

        if not deleted:
            self._probe.group_not_found(group.id)
            return False

        self._probe.group_deleted(group.id, [child.id for child in children])
        self._notifier.report_groups_updated([group, *children])
        return True

    def release_favorite_ids(self) -> None:
        """Drop every cached favorite-id set, e.g. after favorites were deleted."""
        self._forest.release_favorite_ids()

    def _build(self, group_id: int, name: str) -> Group:
        return Group(
            group_id,
            name,
            store=self._store,
            index=self._forest,
            errors=self._errors,
            notifier=self._notifier,
            catalog=self._catalog,
            probe=self._group_probe,
        )
