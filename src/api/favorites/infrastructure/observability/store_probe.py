"""Domain probe for store and repository operations.

Following Domain-Oriented Observability patterns, these probes capture the
unit-of-work lifecycle and group row persistence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class StoreProbe(Protocol):
    """Domain probe for the unit-of-work store."""

    def scope_opened(self) -> None:
        """Record that a new outermost scope (session) was opened."""
        ...

    def scope_committed(self) -> None:
        """Record that an outermost scope committed."""
        ...

    def scope_rolled_back(self, error: str) -> None:
        """Record that an outermost scope rolled back after a failure."""
        ...

    def scope_released(self) -> None:
        """Record that the session of an outermost scope was closed."""
        ...

    def store_operation_failed(self, error: str) -> None:
        """Record that a store call failed and was translated."""
        ...

    def rollback_failed(self, error: str) -> None:
        """Record that rolling back a failed scope itself failed."""
        ...

    def batch_started(self) -> None:
        """Record that a deferred-commit batch started."""
        ...

    def batch_finished(self) -> None:
        """Record that a deferred-commit batch finished."""
        ...

    def with_context(self, context: ObservationContext) -> StoreProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultStoreProbe:
    """Default implementation of StoreProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultStoreProbe:
        """Create a new probe with observation context bound."""
        return DefaultStoreProbe(logger=self._logger, context=context)

    def scope_opened(self) -> None:
        self._logger.debug("store_scope_opened", **self._get_context_kwargs())

    def scope_committed(self) -> None:
        self._logger.debug("store_scope_committed", **self._get_context_kwargs())

    def scope_rolled_back(self, error: str) -> None:
        self._logger.warning(
            "store_scope_rolled_back",
            error=error,
            **self._get_context_kwargs(),
        )

    def scope_released(self) -> None:
        self._logger.debug("store_scope_released", **self._get_context_kwargs())

    def store_operation_failed(self, error: str) -> None:
        self._logger.error(
            "store_operation_failed",
            error=error,
            **self._get_context_kwargs(),
        )

    def rollback_failed(self, error: str) -> None:
        self._logger.error(
            "store_rollback_failed",
            error=error,
            **self._get_context_kwargs(),
        )

    def batch_started(self) -> None:
        self._logger.debug("store_batch_started", **self._get_context_kwargs())

    def batch_finished(self) -> None:
        self._logger.debug("store_batch_finished", **self._get_context_kwargs())


class GroupRepositoryProbe(Protocol):
    """Domain probe for group repository operations."""

    def groups_listed(self, count: int) -> None:
        """Record that all group rows were read."""
        ...

    def group_saved(self, group_id: int, name: str) -> None:
        """Record that a group row was inserted."""
        ...

    def group_deleted(self, group_id: int) -> None:
        """Record that a group row was deleted."""
        ...

    def group_not_found(self, group_id: int) -> None:
        """Record that a group row was not found."""
        ...

    def with_context(self, context: ObservationContext) -> GroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupRepositoryProbe:
    """Default implementation of GroupRepositoryProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupRepositoryProbe(logger=self._logger, context=context)

    def groups_listed(self, count: int) -> None:
        """Record that all group rows were read."""
        self._logger.debug(
            "groups_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def group_saved(self, group_id: int, name: str) -> None:
        """Record that a group row was inserted."""
        self._logger.info(
            "group_saved",
            group_id=group_id,
            name=name,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: int) -> None:
        """Record that a group row was deleted."""
        self._logger.info(
            "group_row_deleted",
            group_id=group_id,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: int) -> None:
        """Record that a group row was not found."""
        self._logger.debug(
            "group_row_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )
