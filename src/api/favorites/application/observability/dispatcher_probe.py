"""Protocol for error dispatcher and change notifier observability.

Defines the interface for domain probes that surface absorbed store
failures and change broadcasts.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class DispatcherProbe(Protocol):
    """Domain probe for the reporting collaborators of a Group."""

    def action_error_reported(
        self,
        operation: str,
        target: str,
        message: str,
        error: str,
    ) -> None:
        """Record a store failure of an operation without a return value."""
        ...

    def function_error_reported(
        self,
        operation: str,
        target: str,
        message: str,
        error: str,
    ) -> None:
        """Record a store failure answered with a fallback value."""
        ...

    def groups_updated(self, group_ids: list[int], subscriber_count: int) -> None:
        """Record that a change notification was broadcast."""
        ...

    def subscriber_failed(self, event_type: str, error: str) -> None:
        """Record that a subscriber raised while handling an event."""
        ...

    def with_context(self, context: ObservationContext) -> DispatcherProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultDispatcherProbe:
    """Default implementation of DispatcherProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultDispatcherProbe:
        """Create a new probe with observation context bound."""
        return DefaultDispatcherProbe(logger=self._logger, context=context)

    def action_error_reported(
        self,
        operation: str,
        target: str,
        message: str,
        error: str,
    ) -> None:
        """Record a store failure of an operation without a return value."""
        self._logger.error(
            "store_action_failed",
            operation=operation,
            target=target,
            message=message,
            error=error,
            **self._get_context_kwargs(),
        )

    def function_error_reported(
        self,
        operation: str,
        target: str,
        message: str,
        error: str,
    ) -> None:
        """Record a store failure answered with a fallback value."""
        self._logger.error(
            "store_function_failed",
            operation=operation,
            target=target,
            message=message,
            error=error,
            **self._get_context_kwargs(),
        )

    def groups_updated(self, group_ids: list[int], subscriber_count: int) -> None:
        """Record that a change notification was broadcast."""
        self._logger.debug(
            "groups_updated",
            group_ids=group_ids,
            subscriber_count=subscriber_count,
            **self._get_context_kwargs(),
        )

    def subscriber_failed(self, event_type: str, error: str) -> None:
        """Record that a subscriber raised while handling an event."""
        self._logger.warning(
            "event_subscriber_failed",
            event_type=event_type,
            error=error,
            **self._get_context_kwargs(),
        )
