"""Fixtures for the SQLAlchemy store tests.

Each test gets a fresh in-memory SQLite database with the favorites schema.
The `store` fixture overrides the recording fake, so groups built with
`make_group` here talk to the real SqlAlchemyStore.
"""

from unittest.mock import create_autospec

import pytest
from sqlalchemy import insert, select
from sqlalchemy.orm import sessionmaker

from favorites.infrastructure import SqlAlchemyStore
from favorites.infrastructure.models import FavoriteModel, GroupModel, favorites_in_group
from favorites.infrastructure.observability import StoreProbe
from infrastructure.database.engines import create_engine
from infrastructure.database.models import create_schema
from infrastructure.settings import DatabaseSettings


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine with the schema created."""
    engine = create_engine(DatabaseSettings(url="sqlite://"))
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(engine, expire_on_commit=False)


@pytest.fixture
def store_probe():
    """Create mock store probe."""
    return create_autospec(StoreProbe, instance=True)


@pytest.fixture
def store(session_factory, store_probe) -> SqlAlchemyStore:
    return SqlAlchemyStore(session_factory, probe=store_probe)


@pytest.fixture
def rows(session_factory):
    """Helpers to seed and inspect rows outside of the store under test."""
    return Rows(session_factory)


class Rows:
    def __init__(self, session_factory):
        self._session_factory = session_factory

    def group(self, name: str, parent_id: int | None = None) -> int:
        with self._session_factory() as session, session.begin():
            model = GroupModel(name=name, parent_group_id=parent_id)
            session.add(model)
            session.flush()
            return model.id

    def favorite(self, name: str) -> int:
        with self._session_factory() as session, session.begin():
            model = FavoriteModel(name=name)
            session.add(model)
            session.flush()
            return model.id

    def membership(self, favorite_id: int, group_id: int) -> None:
        with self._session_factory() as session, session.begin():
            session.execute(
                insert(favorites_in_group).values(
                    favorite_id=favorite_id, group_id=group_id
                )
            )

    def memberships(self) -> list[tuple[int, int]]:
        with self._session_factory() as session:
            result = session.execute(
                select(favorites_in_group.c.favorite_id, favorites_in_group.c.group_id)
            )
            return sorted((row[0], row[1]) for row in result)

    def parent_of(self, group_id: int) -> int | None:
        with self._session_factory() as session:
            return session.get(GroupModel, group_id).parent_group_id

    def group_ids(self) -> list[int]:
        with self._session_factory() as session:
            return list(session.scalars(select(GroupModel.id).order_by(GroupModel.id)))
