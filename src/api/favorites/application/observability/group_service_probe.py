"""Protocol for group application service observability.

Defines the interface for domain probes that capture application-level
events for loading, creating and deleting groups.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupServiceProbe(Protocol):
    """Domain probe for group application service operations."""

    def groups_loaded(self, count: int) -> None:
        """Record that the forest was (re)loaded from the store."""
        ...

    def group_created(self, group_id: int, name: str, parent_id: int | None) -> None:
        """Record that a group was created."""
        ...

    def group_deleted(self, group_id: int, orphaned_children: list[int]) -> None:
        """Record that a group was deleted and its children became roots."""
        ...

    def group_not_found(self, group_id: int) -> None:
        """Record that a group to delete no longer existed in the store."""
        ...

    def with_context(self, context: ObservationContext) -> GroupServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupServiceProbe:
    """Default implementation of GroupServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupServiceProbe(logger=self._logger, context=context)

    def groups_loaded(self, count: int) -> None:
        """Record that the forest was (re)loaded from the store."""
        self._logger.info(
            "groups_loaded",
            count=count,
            **self._get_context_kwargs(),
        )

    def group_created(self, group_id: int, name: str, parent_id: int | None) -> None:
        """Record that a group was created."""
        self._logger.info(
            "group_created",
            group_id=group_id,
            name=name,
            parent_id=parent_id,
            **self._get_context_kwargs(),
        )

    def group_deleted(self, group_id: int, orphaned_children: list[int]) -> None:
        """Record that a group was deleted and its children became roots."""
        self._logger.info(
            "group_deleted",
            group_id=group_id,
            orphaned_children=orphaned_children,
            **self._get_context_kwargs(),
        )

    def group_not_found(self, group_id: int) -> None:
        """Record that a group to delete no longer existed in the store."""
        self._logger.debug(
            "group_not_found",
            group_id=group_id,
            **self._get_context_kwargs(),
        )
