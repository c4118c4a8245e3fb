"""Database dependency providers.

Provides the process-wide engine and session factory used to build stores,
with thread-safe lazy initialisation.
"""

from __future__ import annotations

import threading

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from infrastructure.database.engines import create_engine
from infrastructure.database.exceptions import DatabaseConnectionError
from infrastructure.observability import DefaultDatabaseProbe
from infrastructure.settings import get_database_settings

_probe = DefaultDatabaseProbe()

# Created on first use
_engine: Engine | None = None
_sessionmaker: sessionmaker[Session] | None = None

_engine_lock = threading.Lock()


def get_engine() -> Engine:
    """Get the database engine (singleton).

    Creates the engine on first call and caches it for subsequent calls.
    Uses double-check locking for thread-safe initialization and creates
    the sessionmaker alongside the engine.

    Returns:
        Configured engine

    Raises:
        DatabaseConnectionError: If the engine cannot be created
    """
    global _engine, _sessionmaker
    if _engine is None:
        with _engine_lock:
            if _engine is None:
                settings = get_database_settings()
                try:
                    _engine = create_engine(settings)
                except (SQLAlchemyError, ImportError) as e:
                    _probe.engine_creation_failed(
                        url=settings.connection_string, error=e
                    )
                    raise DatabaseConnectionError(
                        f"Failed to create database engine: {e}"
                    ) from e
                _sessionmaker = sessionmaker(_engine, expire_on_commit=False)
                _probe.engine_created(
                    url=settings.connection_string, pool_size=settings.pool_size
                )
    return _engine


def get_sessionmaker() -> sessionmaker[Session]:
    """Get the session factory bound to the singleton engine."""
    get_engine()
    assert _sessionmaker is not None
    return _sessionmaker


def close_database_connections() -> None:
    """Dispose the engine and reset the cached factory.

    Should be called on shutdown. Also allows reinitialization, which tests
    rely on after changing settings.
    """
    global _engine, _sessionmaker

    if _engine is not None:
        _engine.dispose()
        _probe.engine_disposed()
        _engine = None
        _sessionmaker = None
