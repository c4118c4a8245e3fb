"""Application services for the favorites bounded context."""

from favorites.application.services.group_service import GroupService

__all__ = ["GroupService"]
