"""Domain probes for infrastructure observability.

Domain probes provide a high-level instrumentation API oriented around
domain semantics, keeping infrastructure code clean and testable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DatabaseProbe(Protocol):
    """Domain probe for engine lifecycle and schema management."""

    def engine_created(self, url: str, pool_size: int) -> None:
        """Record that an engine was created for the given (masked) URL."""
        ...

    def engine_creation_failed(self, url: str, error: Exception) -> None:
        """Record that an engine could not be created."""
        ...

    def engine_disposed(self) -> None:
        """Record that the engine and its pool were disposed."""
        ...

    def schema_created(self, tables: list[str]) -> None:
        """Record that the schema was created or verified."""
        ...

    def with_context(self, context: ObservationContext) -> DatabaseProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDatabaseProbe:
    """Default implementation of DatabaseProbe using structlog.

    Supports observation context for including request-scoped metadata
    with all log events.
    """

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultDatabaseProbe:
        """Create a new probe with observation context bound."""
        return DefaultDatabaseProbe(logger=self._logger, context=context)

    def engine_created(self, url: str, pool_size: int) -> None:
        """Record that an engine was created for the given (masked) URL."""
        self._logger.info(
            "database_engine_created",
            url=url,
            pool_size=pool_size,
            **self._get_context_kwargs(),
        )

    def engine_creation_failed(self, url: str, error: Exception) -> None:
        """Record that an engine could not be created."""
        self._logger.error(
            "database_engine_creation_failed",
            url=url,
            error=str(error),
            **self._get_context_kwargs(),
        )

    def engine_disposed(self) -> None:
        """Record that the engine and its pool were disposed."""
        self._logger.info(
            "database_engine_disposed",
            **self._get_context_kwargs(),
        )

    def schema_created(self, tables: list[str]) -> None:
        """Record that the schema was created or verified."""
        self._logger.info(
            "database_schema_created",
            tables=tables,
            **self._get_context_kwargs(),
        )
