"""SQLAlchemy implementation of IGroupRepository.

The repository works inside the store's units of work, so inside a batch its
writes share the batch transaction with the Group operations.
"""

from __future__ import annotations

from sqlalchemy import delete, select, update

from favorites.infrastructure.models import GroupModel, favorites_in_group
from favorites.infrastructure.observability import (
    DefaultGroupRepositoryProbe,
    GroupRepositoryProbe,
)
from favorites.infrastructure.store import SqlAlchemyStore
from favorites.ports.repositories import GroupRecord


class GroupRepository:
    """Repository for group rows backed by SqlAlchemyStore."""

    def __init__(
        self,
        store: SqlAlchemyStore,
        probe: GroupRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository.

        Args:
            store: Store providing the units of work
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultGroupRepositoryProbe()

    def list_all(self) -> list[GroupRecord]:
        """Read every group row in a single query, ordered by id."""
        with self._store.begin_scope() as scope:
            models = scope.session.scalars(
                select(GroupModel).order_by(GroupModel.id)
            ).all()
            records = [GroupRecord(id=model.id, name=model.name) for model in models]

        self._probe.groups_listed(len(records))
        return records

    def add(self, name: str, parent_id: int | None = None) -> int:
        """Insert a group row and return the id assigned by the store."""
        with self._store.begin_scope() as scope:
            model = GroupModel(name=name, parent_group_id=parent_id)
            scope.session.add(model)
            # Flush to obtain the autoincrement id
            scope.session.flush()
            group_id = model.id

        self._probe.group_saved(group_id, name)
        return group_id

    def delete(self, group_id: int) -> bool:
        """Delete a group row with its memberships; children become roots.

        Returns:
            True if deleted, False if not found
        """
        with self._store.begin_scope() as scope:
            session = scope.session
            model = session.get(GroupModel, group_id)
            if model is None:
                self._probe.group_not_found(group_id)
                return False

            session.execute(
                delete(favorites_in_group).where(
                    favorites_in_group.c.group_id == group_id
                )
            )
            session.execute(
                update(GroupModel)
                .where(GroupModel.parent_group_id == group_id)
                .values(parent_group_id=None)
            )
            session.delete(model)
            session.flush()

        self._probe.group_deleted(group_id)
        return True
