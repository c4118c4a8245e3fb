"""Composition root for the favorites bounded context.

Wires the SQLAlchemy store, repository, dispatcher and notifier into a
GroupService. One service (and one store) represents one store-session
scope: build a new one per logical session.
"""

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.orm import Session

from favorites.application import (
    DefaultErrorDispatcher,
    EventChangeNotifier,
    GroupService,
)
from favorites.infrastructure import GroupRepository, SqlAlchemyStore

# Registers the favorites tables on the shared metadata
from favorites.infrastructure import models as _models  # noqa: F401
from favorites.ports.store import FavoriteCatalog
from infrastructure.database.dependencies import get_engine, get_sessionmaker
from infrastructure.database.models import create_schema
from infrastructure.logging import configure_logging
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings, get_settings


def create_store(
    session_factory: Callable[[], Session] | None = None,
    save_immediately: bool | None = None,
) -> SqlAlchemyStore:
    """Build a store over the given (or the application's) session factory.

    Args:
        session_factory: Session factory; defaults to the shared sessionmaker
        save_immediately: Transaction mode; defaults to the configured value
    """
    if save_immediately is None:
        save_immediately = get_database_settings().save_immediately
    return SqlAlchemyStore(
        session_factory or get_sessionmaker(),
        save_immediately=save_immediately,
    )


def create_group_service(
    store: SqlAlchemyStore | None = None,
    catalog: FavoriteCatalog | None = None,
    errors: DefaultErrorDispatcher | None = None,
    notifier: EventChangeNotifier | None = None,
) -> GroupService:
    """Build a GroupService with an empty forest.

    Call load() on the result to populate the forest from the store.
    """
    store = store or create_store()
    return GroupService(
        repository=GroupRepository(store),
        store=store,
        errors=errors or DefaultErrorDispatcher(),
        notifier=notifier or EventChangeNotifier(),
        catalog=catalog,
    )


def bootstrap(catalog: FavoriteCatalog | None = None) -> GroupService:
    """Configure logging, ensure the schema exists and load every group.

    Raises:
        DatabaseConnectionError: If the engine cannot be created
        SQLAlchemyError: If the schema cannot be created
    """
    settings = get_settings()
    configure_logging(settings.log_level, settings.log_format)

    tables = create_schema(get_engine())
    DefaultDatabaseProbe().schema_created(tables)

    service = create_group_service(catalog=catalog)
    service.load()
    return service
