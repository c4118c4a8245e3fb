"""Domain events for the favorites bounded context.

Events are immutable facts delivered to observers (UI, other caches) after
the corresponding store write or failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class GroupsUpdated:
    """Event raised when membership or hierarchy of groups changed.

    Attributes:
        group_ids: Ids of the changed groups, in the order they were reported
        occurred_at: When the event occurred (UTC)
    """

    group_ids: tuple[int, ...]
    occurred_at: datetime


@dataclass(frozen=True)
class StoreErrorReported:
    """Event raised when a store failure was absorbed at a Group boundary.

    Attributes:
        operation: Name of the failing operation
        message: Human readable description
        error: The underlying store error
        target: Object the operation was acting on
        args: Input the operation was called with (None for reads)
        occurred_at: When the event occurred (UTC)
    """

    operation: str
    message: str
    error: Exception
    target: Any
    args: Any
    occurred_at: datetime


DomainEvent = GroupsUpdated | StoreErrorReported

__all__ = [
    "DomainEvent",
    "GroupsUpdated",
    "StoreErrorReported",
]
