"""SQLAlchemy implementation of the unit-of-work Store.

A scope wraps one ORM session. Scopes opened while another scope (or a
batch) is active on the same store reuse its session, so nested group
operations share a transaction and only the outermost scope commits.
Every SQLAlchemy failure leaves the store as StoreAccessError.

A store instance serves one logical writer; it is not thread-safe.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from favorites.infrastructure.models import GroupModel, favorites_in_group
from favorites.infrastructure.observability import DefaultStoreProbe, StoreProbe
from favorites.ports.exceptions import GroupNotFoundError, StoreAccessError

if TYPE_CHECKING:
    from favorites.domain.group import Group


class SqlAlchemyScope:
    """One unit of work over an ORM session.

    Groups are attached by loading their row into the session and detached
    by expunging it again, so rows never outlive the operation that needed
    them.
    """

    def __init__(self, session: Session):
        self._session = session
        self._attached: dict[int, GroupModel] = {}

    @property
    def session(self) -> Session:
        return self._session

    def attach(self, group: Group) -> None:
        """Load the group's row into the session.

        Raises:
            GroupNotFoundError: If the row no longer exists
        """
        model = self._session.get(GroupModel, group.id)
        if model is None:
            raise GroupNotFoundError(group.id)
        self._attached[group.id] = model

    def detach(self, group: Group) -> None:
        model = self._attached.pop(group.id, None)
        if model is not None and model in self._session:
            self._session.expunge(model)

    def load_parent_foreign_key(self, group: Group) -> int | None:
        return self._attached_model(group).parent_group_id

    def set_parent_foreign_key(self, group: Group, parent_id: int | None) -> None:
        self._attached_model(group).parent_group_id = parent_id

    def commit(self, immediate: bool) -> None:
        """Commit now, or flush and leave the commit to the enclosing batch."""
        if immediate:
            self._session.commit()
        else:
            self._session.flush()

    def get_favorite_ids_in_group(self, group_id: int) -> Sequence[int]:
        stmt = select(favorites_in_group.c.favorite_id).where(
            favorites_in_group.c.group_id == group_id
        )
        return list(self._session.scalars(stmt))

    def insert_membership(self, favorite_id: int, group_id: int) -> None:
        self._session.execute(
            insert(favorites_in_group).values(
                favorite_id=favorite_id,
                group_id=group_id,
            )
        )

    def delete_membership(self, favorite_id: int, group_id: int) -> None:
        self._session.execute(
            delete(favorites_in_group).where(
                and_(
                    favorites_in_group.c.favorite_id == favorite_id,
                    favorites_in_group.c.group_id == group_id,
                )
            )
        )

    def _attached_model(self, group: Group) -> GroupModel:
        model = self._attached.get(group.id)
        if model is None:
            raise ValueError(f"Group {group.id} is not attached to this scope")
        return model


class SqlAlchemyStore:
    """Store handing out SqlAlchemyScope units of work."""

    def __init__(
        self,
        session_factory: Callable[[], Session],
        save_immediately: bool = True,
        probe: StoreProbe | None = None,
    ):
        """Initialize the store.

        Args:
            session_factory: Creates a new session (usually a sessionmaker)
            save_immediately: Store-wide transaction mode; when False, scopes
                only flush and the caller commits through an outer scope
            probe: Optional domain probe for observability
        """
        self._session_factory = session_factory
        self._save_immediately = save_immediately
        self._probe = probe or DefaultStoreProbe()
        self._session: Session | None = None
        self._batch_depth = 0
        self._scope_depth = 0

    @property
    def save_immediately(self) -> bool:
        """False inside a batch or inside a scope nested in another scope."""
        return (
            self._save_immediately
            and self._batch_depth == 0
            and self._scope_depth <= 1
        )

    @property
    def in_scope(self) -> bool:
        return self._session is not None

    @contextmanager
    def begin_scope(self) -> Iterator[SqlAlchemyScope]:
        """Open a scope, or reuse the session of the scope already open.

        The outermost scope commits on normal exit, rolls back on error and
        always closes its session.

        Raises:
            StoreAccessError: If any store call inside the scope fails
        """
        if self._session is not None:
            self._scope_depth += 1
            try:
                yield SqlAlchemyScope(self._session)
            except SQLAlchemyError as e:
                self._probe.store_operation_failed(str(e))
                raise StoreAccessError(f"Store operation failed: {e}") from e
            finally:
                self._scope_depth -= 1
            return

        session = self._session_factory()
        self._session = session
        self._scope_depth = 1
        self._probe.scope_opened()
        try:
            yield SqlAlchemyScope(session)
            session.commit()
            self._probe.scope_committed()
        except SQLAlchemyError as e:
            self._probe.store_operation_failed(str(e))
            self._rollback(session, e)
            raise StoreAccessError(f"Store operation failed: {e}") from e
        except Exception as e:
            self._rollback(session, e)
            raise
        finally:
            self._session = None
            self._scope_depth = 0
            session.close()
            self._probe.scope_released()

    @contextmanager
    def batch(self) -> Iterator[None]:
        """Defer commits of every scope opened inside until the batch ends.

        Raises:
            StoreAccessError: If the final commit fails
        """
        with self.begin_scope():
            self._batch_depth += 1
            self._probe.batch_started()
            try:
                yield
            finally:
                self._batch_depth -= 1
                self._probe.batch_finished()

    def _rollback(self, session: Session, error: Exception) -> None:
        try:
            session.rollback()
        except SQLAlchemyError as rollback_error:
            self._probe.rollback_failed(str(rollback_error))
        self._probe.scope_rolled_back(str(error))
