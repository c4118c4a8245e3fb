"""Database-specific exceptions shared by every bounded context."""


class DatabaseError(Exception):
    """Base exception for database operations."""

    pass


class DatabaseConnectionError(DatabaseError):
    """Raised when an engine or connection cannot be established."""

    pass
