"""Reporting protocols (ports) used at the Group boundary.

Both collaborators are injected into every Group so tests can substitute
fakes and assert call counts and arguments.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any, Protocol, TypeVar, runtime_checkable

if TYPE_CHECKING:
    from favorites.domain.group import Group

T = TypeVar("T")


@runtime_checkable
class ErrorDispatcher(Protocol):
    """Absorbs store failures and reports them."""

    def report_action_error(
        self,
        operation: str,
        args: Any,
        target: Any,
        error: Exception,
        message: str,
    ) -> None:
        """Report a failure of an operation that has no return value.

        Args:
            operation: Name of the failing operation
            args: Input the operation was called with (may be None)
            target: Object the operation was acting on
            error: The underlying store error
            message: Human readable description
        """
        ...

    def report_function_error(
        self,
        operation: str,
        target: Any,
        error: Exception,
        message: str,
        default: T,
    ) -> T:
        """Report a failure of an operation whose caller needs a result.

        Returns:
            The call-site supplied default, so the caller can continue in a
            degraded but defined state.
        """
        ...


@runtime_checkable
class ChangeNotifier(Protocol):
    """Broadcasts that groups changed after a successful store write."""

    def report_groups_updated(self, groups: Sequence[Group]) -> None:
        """Announce that membership or hierarchy of the groups changed."""
        ...
