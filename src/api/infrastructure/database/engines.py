"""Database engine creation for SQLAlchemy.

This module provides the factory for the synchronous engine backing the
favorites store, with connection pooling suited to the configured backend.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from sqlalchemy import create_engine as sqlalchemy_create_engine
from sqlalchemy import event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

if TYPE_CHECKING:
    from infrastructure.settings import DatabaseSettings

__all__ = [
    "create_engine",
    "engine_options",
]


def create_engine(settings: DatabaseSettings) -> Engine:
    """Create the engine for store operations.

    Args:
        settings: Database connection settings

    Returns:
        Configured engine
    """
    url = settings.sqlalchemy_url
    engine = sqlalchemy_create_engine(url, **engine_options(url, settings))

    if make_url(url).get_backend_name() == "sqlite":
        # SQLite ignores ON DELETE clauses unless foreign keys are switched on
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def engine_options(url: str, settings: DatabaseSettings) -> dict[str, Any]:
    """Build keyword arguments for create_engine based on the backend.

    An in-memory SQLite database lives inside a single connection, so it gets a
    StaticPool shared across threads; every other backend gets a fixed-size
    pool with no overflow.

    Args:
        url: SQLAlchemy URL string
        settings: Database connection settings

    Returns:
        Keyword arguments for sqlalchemy.create_engine
    """
    parsed = make_url(url)
    options: dict[str, Any] = {
        "echo": settings.echo,
        "pool_pre_ping": True,
    }

    if parsed.get_backend_name() == "sqlite" and parsed.database in (
        None,
        "",
        ":memory:",
    ):
        options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_size"] = settings.pool_size
        options["max_overflow"] = 0

    return options


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
