"""Integration test fixtures.

Each test runs the full stack (settings, engine, schema, store, service)
against its own SQLite database file.
"""

import pytest
import structlog

from favorites.domain import Favorite
from favorites.infrastructure.models import FavoriteModel
from infrastructure.database.dependencies import (
    close_database_connections,
    get_sessionmaker,
)
from infrastructure.settings import get_database_settings, get_settings


class DictCatalog:
    """FavoriteCatalog over favorites the caller already loaded."""

    def __init__(self) -> None:
        self._favorites: dict[int, Favorite] = {}

    def extend(self, favorites: list[Favorite]) -> None:
        for favorite in favorites:
            self._favorites[favorite.id] = favorite

    def get(self, favorite_id: int) -> Favorite | None:
        return self._favorites.get(favorite_id)


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    """Point the application settings at a fresh SQLite file."""
    url = f"sqlite:///{tmp_path / 'favorites.db'}"
    monkeypatch.setenv("FAVORITES_DB_URL", url)
    monkeypatch.setenv("FAVORITES_LOG_LEVEL", "WARNING")
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    close_database_connections()
    yield url
    close_database_connections()
    get_settings.cache_clear()
    get_database_settings.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def seed_favorites():
    """Insert favorite rows and return them as domain values."""

    def _seed(*names: str) -> list[Favorite]:
        models = [FavoriteModel(name=name) for name in names]
        with get_sessionmaker()() as session, session.begin():
            session.add_all(models)
        return [Favorite(id=model.id, name=model.name) for model in models]

    return _seed


@pytest.fixture
def catalog() -> DictCatalog:
    return DictCatalog()
