"""SQLAlchemy ORM models for the favorites bounded context."""

from favorites.infrastructure.models.favorite import FavoriteModel, favorites_in_group
from favorites.infrastructure.models.group import GroupModel

__all__ = [
    "FavoriteModel",
    "GroupModel",
    "favorites_in_group",
]
