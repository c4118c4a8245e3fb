"""Domain-Oriented Observability for the favorites domain layer."""

from favorites.domain.observability.group_probe import (
    DefaultGroupProbe,
    GroupProbe,
)

__all__ = [
    "DefaultGroupProbe",
    "GroupProbe",
]
