"""SQLAlchemy ORM model for favorites and their group membership.

Only the identity of a favorite is modelled here; its connection details are
owned elsewhere.
"""

from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class FavoriteModel(Base, TimestampMixin):
    """ORM model for the favorites table (identity only)."""

    __tablename__ = "favorites"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<FavoriteModel(id={self.id}, name={self.name})>"


# No primary key or unique constraint: adding the same favorite twice stores
# two rows; the in-memory cache still holds the id once.
favorites_in_group = Table(
    "favorites_in_group",
    Base.metadata,
    Column(
        "favorite_id",
        Integer,
        ForeignKey("favorites.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
    Column(
        "group_id",
        Integer,
        ForeignKey("groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    ),
)
