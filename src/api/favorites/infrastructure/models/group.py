"""SQLAlchemy ORM model for the groups table.

Group membership is not a column here; it lives in the favorites_in_group
association table.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base, TimestampMixin


class GroupModel(Base, TimestampMixin):
    """ORM model for the groups table.

    Foreign Key Constraint:
    - parent_group_id references groups.id with SET NULL delete, so the
      children of a deleted group become roots
    """

    __tablename__ = "groups"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    parent_group_id: Mapped[int | None] = mapped_column(
        Integer,
        ForeignKey("groups.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<GroupModel(id={self.id}, name={self.name}, "
            f"parent_group_id={self.parent_group_id})>"
        )
