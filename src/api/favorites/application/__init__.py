"""Application layer for the favorites bounded context."""

from favorites.application.dispatcher import (
    DefaultErrorDispatcher,
    EventChangeNotifier,
)
from favorites.application.services import GroupService

__all__ = [
    "DefaultErrorDispatcher",
    "EventChangeNotifier",
    "GroupService",
]
