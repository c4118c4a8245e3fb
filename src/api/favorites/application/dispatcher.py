"""Error dispatcher and change notifier for the favorites context.

These are the two reporting collaborators injected into every Group. The
dispatcher is the single place where absorbed store failures surface; the
notifier tells observers which groups changed after a successful write.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, TypeVar

from favorites.application.observability import (
    DefaultDispatcherProbe,
    DispatcherProbe,
)
from favorites.domain.events import GroupsUpdated, StoreErrorReported

if TYPE_CHECKING:
    from favorites.domain.events import DomainEvent
    from favorites.domain.group import Group

T = TypeVar("T")

ErrorHandler = Callable[[StoreErrorReported], None]
ChangeHandler = Callable[[GroupsUpdated], None]


class _Subscribers:
    """Synchronous fan-out of one event type.

    A failing handler is logged and skipped; it never undoes or interrupts
    the operation that raised the event.
    """

    def __init__(self, probe: DispatcherProbe):
        self._probe = probe
        self._handlers: list[Callable[[Any], None]] = []

    def __len__(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: Callable[[Any], None]) -> None:
        if handler not in self._handlers:
            self._handlers.append(handler)

    def unsubscribe(self, handler: Callable[[Any], None]) -> None:
        if handler in self._handlers:
            self._handlers.remove(handler)

    def publish(self, event: DomainEvent) -> None:
        for handler in list(self._handlers):
            try:
                handler(event)
            except Exception as e:
                self._probe.subscriber_failed(type(event).__name__, str(e))


class DefaultErrorDispatcher:
    """Logs absorbed store failures and publishes them to subscribers."""

    def __init__(self, probe: DispatcherProbe | None = None):
        self._probe = probe or DefaultDispatcherProbe()
        self._subscribers = _Subscribers(self._probe)

    def subscribe(self, handler: ErrorHandler) -> None:
        self._subscribers.subscribe(handler)

    def unsubscribe(self, handler: ErrorHandler) -> None:
        self._subscribers.unsubscribe(handler)

    def report_action_error(
        self,
        operation: str,
        args: Any,
        target: Any,
        error: Exception,
        message: str,
    ) -> None:
        """Report a failed operation that has no return value."""
        self._probe.action_error_reported(
            operation=operation,
            target=repr(target),
            message=message,
            error=str(error),
        )
        self._publish(operation, args, target, error, message)

    def report_function_error(
        self,
        operation: str,
        target: Any,
        error: Exception,
        message: str,
        default: T,
    ) -> T:
        """Report a failed operation and hand back the caller's fallback."""
        self._probe.function_error_reported(
            operation=operation,
            target=repr(target),
            message=message,
            error=str(error),
        )
        self._publish(operation, None, target, error, message)
        return default

    def _publish(
        self,
        operation: str,
        args: Any,
        target: Any,
        error: Exception,
        message: str,
    ) -> None:
        self._subscribers.publish(
            StoreErrorReported(
                operation=operation,
                message=message,
                error=error,
                target=target,
                args=args,
                occurred_at=datetime.now(UTC),
            )
        )


class EventChangeNotifier:
    """Broadcasts GroupsUpdated events to subscribed observers."""

    def __init__(self, probe: DispatcherProbe | None = None):
        self._probe = probe or DefaultDispatcherProbe()
        self._subscribers = _Subscribers(self._probe)

    def subscribe(self, handler: ChangeHandler) -> None:
        self._subscribers.subscribe(handler)

    def unsubscribe(self, handler: ChangeHandler) -> None:
        self._subscribers.unsubscribe(handler)

    def report_groups_updated(self, groups: Sequence[Group]) -> None:
        event = GroupsUpdated(
            group_ids=tuple(group.id for group in groups),
            occurred_at=datetime.now(UTC),
        )
        self._probe.groups_updated(list(event.group_ids), len(self._subscribers))
        self._subscribers.publish(event)
