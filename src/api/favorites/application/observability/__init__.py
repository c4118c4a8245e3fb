"""Domain-Oriented Observability for the favorites application layer."""

from favorites.application.observability.dispatcher_probe import (
    DefaultDispatcherProbe,
    DispatcherProbe,
)
from favorites.application.observability.group_service_probe import (
    DefaultGroupServiceProbe,
    GroupServiceProbe,
)

__all__ = [
    "DefaultDispatcherProbe",
    "DefaultGroupServiceProbe",
    "DispatcherProbe",
    "GroupServiceProbe",
]
