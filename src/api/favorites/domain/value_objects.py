"""Value objects for the favorites domain."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Favorite:
    """A saved favorite, as far as group membership is concerned.

    The connection details of a favorite belong to another part of the
    application; groups only need its identity.
    """

    id: int
    name: str = ""

    def __str__(self) -> str:
        """Return the name, falling back to the id."""
        return self.name or str(self.id)
