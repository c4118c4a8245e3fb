"""Observability probes for the favorites infrastructure layer."""

from favorites.infrastructure.observability.store_probe import (
    DefaultGroupRepositoryProbe,
    DefaultStoreProbe,
    GroupRepositoryProbe,
    StoreProbe,
)

__all__ = [
    "DefaultGroupRepositoryProbe",
    "DefaultStoreProbe",
    "GroupRepositoryProbe",
    "StoreProbe",
]
