"""Unit tests for SqlAlchemyStore and SqlAlchemyScope on SQLite."""

from unittest.mock import ANY

import pytest
from sqlalchemy.exc import OperationalError

from favorites.domain import Favorite
from favorites.infrastructure import SqlAlchemyStore
from favorites.infrastructure.store import SqlAlchemyScope
from favorites.ports.exceptions import GroupNotFoundError, StoreAccessError
from favorites.ports.store import Store


class TestScopeLifecycle:
    """Tests for opening, committing and releasing scopes."""

    def test_satisfies_store_protocol(self, store):
        assert isinstance(store, Store)

    def test_outermost_scope_commits_on_exit(self, store, rows, store_probe):
        group_id = rows.group("Servers")
        favorite_id = rows.favorite("web-1")

        with store.begin_scope() as scope:
            scope.insert_membership(favorite_id, group_id)

        assert rows.memberships() == [(favorite_id, group_id)]
        store_probe.scope_opened.assert_called_once()
        store_probe.scope_committed.assert_called_once()
        store_probe.scope_released.assert_called_once()
        assert store.in_scope is False

    def test_error_rolls_back_and_propagates(self, store, rows, store_probe):
        group_id = rows.group("Servers")
        favorite_id = rows.favorite("web-1")

        with pytest.raises(RuntimeError):
            with store.begin_scope() as scope:
                scope.insert_membership(favorite_id, group_id)
                raise RuntimeError("caller failed")

        assert rows.memberships() == []
        store_probe.scope_rolled_back.assert_called_once_with("caller failed")
        store_probe.scope_committed.assert_not_called()
        store_probe.scope_released.assert_called_once()

    def test_sqlalchemy_error_becomes_store_access_error(
        self, store, rows, store_probe
    ):
        """A membership for an unknown favorite violates the foreign key."""
        group_id = rows.group("Servers")

        with pytest.raises(StoreAccessError) as exc_info:
            with store.begin_scope() as scope:
                scope.insert_membership(999, group_id)

        assert exc_info.value.__cause__ is not None
        store_probe.store_operation_failed.assert_called_once_with(ANY)
        assert store.in_scope is False

    def test_nested_scopes_share_one_session(self, store, store_probe):
        with store.begin_scope() as outer:
            assert store.in_scope is True
            with store.begin_scope() as inner:
                assert inner.session is outer.session

        store_probe.scope_opened.assert_called_once()
        store_probe.scope_committed.assert_called_once()

    def test_nested_sqlalchemy_error_is_translated_once(self, store, rows):
        group_id = rows.group("Servers")

        with pytest.raises(StoreAccessError):
            with store.begin_scope():
                with store.begin_scope() as inner:
                    inner.insert_membership(999, group_id)

        assert store.in_scope is False

    def test_only_the_outermost_scope_saves_immediately(self, store):
        with store.begin_scope():
            assert store.save_immediately is True
            with store.begin_scope():
                assert store.save_immediately is False
            assert store.save_immediately is True

        assert store.save_immediately is True

    def test_group_write_in_caller_scope_rolls_back_with_it(
        self, store, rows, make_group
    ):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web"))

        with pytest.raises(RuntimeError):
            with store.begin_scope():
                child.set_parent(parent)
                raise RuntimeError("caller failed")

        assert rows.parent_of(child.id) is None

    def test_group_write_in_caller_scope_commits_on_exit(
        self, store, rows, make_group, store_probe
    ):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web"))

        with store.begin_scope():
            child.set_parent(parent)

        assert rows.parent_of(child.id) == parent.id
        store_probe.scope_committed.assert_called_once()


class TestScopeOperations:
    """Tests for the scope's row-level operations."""

    def test_attach_missing_group_raises(self, store, make_group):
        ghost = make_group(42)

        with pytest.raises(GroupNotFoundError) as exc_info:
            with store.begin_scope() as scope:
                scope.attach(ghost)

        assert exc_info.value.group_id == 42
        assert isinstance(exc_info.value, StoreAccessError)

    def test_parent_foreign_key_round_trip(self, store, rows, make_group):
        parent_id = rows.group("Production")
        child = make_group(rows.group("Web"))

        with store.begin_scope() as scope:
            scope.attach(child)
            scope.set_parent_foreign_key(child, parent_id)
            scope.commit(immediate=True)
            assert scope.load_parent_foreign_key(child) == parent_id
            scope.detach(child)

        assert rows.parent_of(child.id) == parent_id

    def test_foreign_key_access_requires_attach(self, store, rows, make_group):
        group = make_group(rows.group("Web"))

        with pytest.raises(ValueError, match="not attached"):
            with store.begin_scope() as scope:
                scope.load_parent_foreign_key(group)

    def test_detach_expunges_row(self, store, rows, make_group):
        group = make_group(rows.group("Web"))

        with store.begin_scope() as scope:
            scope.attach(group)
            assert len(scope.session.identity_map) == 1
            scope.detach(group)
            assert len(scope.session.identity_map) == 0

    def test_get_favorite_ids_in_group(self, store, rows):
        group_id = rows.group("Servers")
        other_id = rows.group("Other")
        first = rows.favorite("web-1")
        second = rows.favorite("web-2")
        rows.membership(first, group_id)
        rows.membership(second, group_id)
        rows.membership(second, other_id)

        with store.begin_scope() as scope:
            ids = scope.get_favorite_ids_in_group(group_id)

        assert sorted(ids) == [first, second]

    def test_duplicate_memberships_are_stored(self, store, rows):
        group_id = rows.group("Servers")
        favorite_id = rows.favorite("web-1")

        with store.begin_scope() as scope:
            scope.insert_membership(favorite_id, group_id)
            scope.insert_membership(favorite_id, group_id)

        assert rows.memberships() == [(favorite_id, group_id)] * 2

    def test_delete_membership_removes_all_matching_rows(self, store, rows):
        group_id = rows.group("Servers")
        favorite_id = rows.favorite("web-1")
        rows.membership(favorite_id, group_id)
        rows.membership(favorite_id, group_id)

        with store.begin_scope() as scope:
            scope.delete_membership(favorite_id, group_id)

        assert rows.memberships() == []


class TestBatch:
    """Tests for deferred-commit batches."""

    def test_save_immediately_is_false_inside_batch(self, store, store_probe):
        assert store.save_immediately is True

        with store.batch():
            assert store.save_immediately is False

        assert store.save_immediately is True
        store_probe.batch_started.assert_called_once()
        store_probe.batch_finished.assert_called_once()

    def test_store_wide_mode_applies_outside_batch(self, session_factory):
        deferred = SqlAlchemyStore(session_factory, save_immediately=False)

        assert deferred.save_immediately is False

    def test_group_writes_commit_when_batch_exits(self, store, rows, make_group):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web"))
        favorite = Favorite(id=rows.favorite("web-1"))

        with store.batch():
            child.set_parent(parent)
            child.add_favorite(favorite)

        assert rows.parent_of(child.id) == parent.id
        assert rows.memberships() == [(favorite.id, child.id)]

    def test_batch_failure_rolls_back_every_write(self, store, rows, make_group):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web"))
        favorite = Favorite(id=rows.favorite("web-1"))

        with pytest.raises(RuntimeError):
            with store.batch():
                child.set_parent(parent)
                child.add_favorite(favorite)
                raise RuntimeError("abort")

        assert rows.parent_of(child.id) is None
        assert rows.memberships() == []
        assert store.save_immediately is True


class TestGroupOverStore:
    """Tests for Group operations against the real store."""

    def test_parent_is_queried_once(self, store, rows, make_group, store_probe):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web", parent_id=parent.id))

        assert child.get_parent() is parent
        assert child.get_parent() is parent

        store_probe.scope_opened.assert_called_once()

    def test_set_parent_persists(self, store, rows, make_group):
        parent = make_group(rows.group("Production"))
        child = make_group(rows.group("Web"))

        child.set_parent(parent)

        assert rows.parent_of(child.id) == parent.id

    def test_membership_changes_persist(self, store, rows, make_group):
        group = make_group(rows.group("Servers"))
        first = Favorite(id=rows.favorite("web-1"))
        second = Favorite(id=rows.favorite("web-2"))

        group.add_favorites([first, second])
        group.remove_favorite(first)

        assert rows.memberships() == [(second.id, group.id)]
        assert group.favorite_ids == frozenset({second.id})

    def test_unknown_favorite_is_reported_not_raised(
        self, store, rows, make_group, errors, notifier
    ):
        group = make_group(rows.group("Servers"))
        batch = [Favorite(id=999)]

        group.add_favorites(batch)

        errors.report_action_error.assert_called_once_with(
            "add_favorites",
            batch,
            group,
            ANY,
            "Unable to add favorite to database group.",
        )
        notifier.report_groups_updated.assert_not_called()
        assert rows.memberships() == []

    def test_deleted_row_is_reported_on_parent_read(
        self, store, rows, make_group, errors
    ):
        ghost = make_group(77)

        assert ghost.get_parent() is None

        errors.report_action_error.assert_called_once_with(
            "get_parent",
            None,
            ghost,
            ANY,
            "Unable to load group parent from database.",
        )

    def test_partial_add_keeps_rows_and_cache_in_step(
        self, store, rows, make_group, errors
    ):
        """Favorites inserted before a failing one stay persisted."""
        group = make_group(rows.group("Servers"))
        known = Favorite(id=rows.favorite("web-1"))

        group.add_favorites([known, Favorite(id=999)])

        errors.report_action_error.assert_called_once()
        assert rows.memberships() == [(known.id, group.id)]
        assert group.favorite_ids == frozenset({known.id})

    def test_partial_remove_keeps_rows_and_cache_in_step(
        self, store, rows, make_group, errors, monkeypatch
    ):
        group = make_group(rows.group("Servers"))
        first = Favorite(id=rows.favorite("web-1"))
        second = Favorite(id=rows.favorite("web-2"))
        rows.membership(first.id, group.id)
        rows.membership(second.id, group.id)
        assert group.favorite_ids == frozenset({first.id, second.id})

        delete_membership = SqlAlchemyScope.delete_membership

        def fail_on_second(scope, favorite_id, group_id):
            if favorite_id == second.id:
                raise OperationalError("DELETE", {}, Exception("disk I/O error"))
            delete_membership(scope, favorite_id, group_id)

        monkeypatch.setattr(SqlAlchemyScope, "delete_membership", fail_on_second)

        group.remove_favorites([first, second])

        errors.report_action_error.assert_called_once()
        assert rows.memberships() == [(second.id, group.id)]
        assert group.favorite_ids == frozenset({second.id})
