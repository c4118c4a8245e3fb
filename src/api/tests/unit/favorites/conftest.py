"""Fixtures for favorites unit tests.

Groups are exercised against an in-memory FakeStore that records every
scope call, so tests can count store round trips and inject failures.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from unittest.mock import create_autospec

import pytest

from favorites.domain import Favorite, Forest, Group
from favorites.domain.observability import GroupProbe
from favorites.ports.exceptions import StoreAccessError
from favorites.ports.notifications import ChangeNotifier, ErrorDispatcher


class FakeScope:
    """Scope over the FakeStore's dictionaries."""

    def __init__(self, store: FakeStore):
        self._store = store

    def attach(self, group: Group) -> None:
        self._store._record("attach", group.id)
        self._store.attached.add(group.id)

    def detach(self, group: Group) -> None:
        self._store._record("detach", group.id)
        self._store.attached.discard(group.id)

    def load_parent_foreign_key(self, group: Group) -> int | None:
        self._store._record("load_parent_foreign_key", group.id)
        return self._store.parent_ids.get(group.id)

    def set_parent_foreign_key(self, group: Group, parent_id: int | None) -> None:
        self._store._record("set_parent_foreign_key", group.id, parent_id)
        self._store.parent_ids[group.id] = parent_id

    def commit(self, immediate: bool) -> None:
        self._store._record("commit", immediate)

    def get_favorite_ids_in_group(self, group_id: int) -> list[int | None]:
        self._store._record("get_favorite_ids_in_group", group_id)
        return [f for f, g in self._store.memberships if g == group_id]

    def insert_membership(self, favorite_id: int, group_id: int) -> None:
        self._store._record("insert_membership", favorite_id, group_id)
        self._store.memberships.append((favorite_id, group_id))

    def delete_membership(self, favorite_id: int, group_id: int) -> None:
        self._store._record("delete_membership", favorite_id, group_id)
        self._store.memberships = [
            row for row in self._store.memberships if row != (favorite_id, group_id)
        ]


class FakeStore:
    """Recording Store double.

    Attributes:
        parent_ids: Persisted parent foreign key per group id
        memberships: Persisted (favorite_id, group_id) rows, duplicates allowed
        calls: Every scope call as (name, *args)
        scopes_opened: Number of begin_scope() calls
        scopes_released: Number of scopes that were exited
    """

    def __init__(self) -> None:
        self.parent_ids: dict[int, int | None] = {}
        self.memberships: list[tuple[int | None, int]] = []
        self.calls: list[tuple] = []
        self.attached: set[int] = set()
        self.scopes_opened = 0
        self.scopes_released = 0
        self.save_immediately = True
        self._failures: dict[str, int] = {}

    def fail(self, operation: str, after: int = 0) -> None:
        """Make `operation` raise StoreAccessError after `after` successful calls."""
        self._failures[operation] = after

    def heal(self) -> None:
        self._failures.clear()

    def count(self, operation: str) -> int:
        return sum(1 for call in self.calls if call[0] == operation)

    @contextmanager
    def begin_scope(self) -> Iterator[FakeScope]:
        self.scopes_opened += 1
        try:
            yield FakeScope(self)
        finally:
            self.scopes_released += 1

    def _record(self, operation: str, *args) -> None:
        remaining = self._failures.get(operation)
        if remaining is not None:
            if remaining == 0:
                raise StoreAccessError(f"{operation} failed")
            self._failures[operation] = remaining - 1
        self.calls.append((operation, *args))


@pytest.fixture
def store() -> FakeStore:
    """Create an empty recording store."""
    return FakeStore()


@pytest.fixture
def errors():
    """Create mock error dispatcher that hands back the caller's fallback."""
    dispatcher = create_autospec(ErrorDispatcher, instance=True)
    dispatcher.report_function_error.side_effect = (
        lambda operation, target, error, message, default: default
    )
    return dispatcher


@pytest.fixture
def notifier():
    """Create mock change notifier."""
    return create_autospec(ChangeNotifier, instance=True)


@pytest.fixture
def group_probe():
    """Create mock group probe."""
    return create_autospec(GroupProbe, instance=True)


@pytest.fixture
def forest() -> Forest:
    return Forest()


@pytest.fixture
def make_group(store, forest, errors, notifier, group_probe):
    """Factory building groups registered in the shared forest."""

    def _make(group_id: int, name: str | None = None, catalog=None) -> Group:
        group = Group(
            group_id,
            name or f"group-{group_id}",
            store=store,
            index=forest,
            errors=errors,
            notifier=notifier,
            catalog=catalog,
            probe=group_probe,
        )
        forest.add(group)
        return group

    return _make


@pytest.fixture
def favorites() -> dict[int, Favorite]:
    """A handful of favorites keyed by id."""
    return {
        favorite_id: Favorite(id=favorite_id, name=f"server-{favorite_id}")
        for favorite_id in (1, 2, 3, 4, 5, 7)
    }
