"""Observability probes for the Group entity.

Domain probes for Group following the Domain Oriented Observability pattern.
Probes emit structured logs for cache loads, parent resolution and
membership changes.

See: https://martinfowler.com/articles/domain-oriented-observability.html
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class GroupProbe(Protocol):
    """Protocol for Group observability probes."""

    def favorite_ids_loaded(self, group_id: int, count: int) -> None:
        """Probe emitted when the favorite-id cache was populated from the store."""
        ...

    def parent_resolved(self, group_id: int, parent_id: int | None) -> None:
        """Probe emitted when the parent was resolved through the Forest.

        Args:
            group_id: The group whose parent was resolved
            parent_id: The resolved parent, None for a root
        """
        ...

    def parent_reference_unresolved(self, group_id: int, parent_id: int) -> None:
        """Probe emitted when the persisted parent id is missing from the Forest.

        The group is treated as a root.
        """
        ...

    def parent_changed(self, group_id: int, parent_id: int | None) -> None:
        """Probe emitted after a new parent was written to the store."""
        ...

    def favorites_added(self, group_id: int, favorite_ids: list[int]) -> None:
        """Probe emitted after membership rows were inserted."""
        ...

    def favorites_removed(self, group_id: int, favorite_ids: list[int]) -> None:
        """Probe emitted after membership rows were deleted."""
        ...

    def with_context(self, context: ObservationContext) -> GroupProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultGroupProbe:
    """Default implementation of GroupProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultGroupProbe:
        """Create a new probe with observation context bound."""
        return DefaultGroupProbe(logger=self._logger, context=context)

    def favorite_ids_loaded(self, group_id: int, count: int) -> None:
        self._logger.debug(
            "group_favorite_ids_loaded",
            group_id=group_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def parent_resolved(self, group_id: int, parent_id: int | None) -> None:
        self._logger.debug(
            "group_parent_resolved",
            group_id=group_id,
            parent_id=parent_id,
            **self._get_context_kwargs(),
        )

    def parent_reference_unresolved(self, group_id: int, parent_id: int) -> None:
        self._logger.warning(
            "group_parent_reference_unresolved",
            group_id=group_id,
            parent_id=parent_id,
            **self._get_context_kwargs(),
        )

    def parent_changed(self, group_id: int, parent_id: int | None) -> None:
        self._logger.info(
            "group_parent_changed",
            group_id=group_id,
            parent_id=parent_id,
            **self._get_context_kwargs(),
        )

    def favorites_added(self, group_id: int, favorite_ids: list[int]) -> None:
        self._logger.info(
            "group_favorites_added",
            group_id=group_id,
            favorite_ids=favorite_ids,
            **self._get_context_kwargs(),
        )

    def favorites_removed(self, group_id: int, favorite_ids: list[int]) -> None:
        self._logger.info(
            "group_favorites_removed",
            group_id=group_id,
            favorite_ids=favorite_ids,
            **self._get_context_kwargs(),
        )
