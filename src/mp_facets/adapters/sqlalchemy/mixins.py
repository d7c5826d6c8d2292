"""SQLAlchemy ORM mixins – SoftDeleteMixin."""
from __future__ import annotations

import datetime
from typing import Any

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


class SoftDeleteMixin:
    """Adds a ``deleted_at`` nullable timestamp column for soft-deletion.

    Usage::

        class Product(SoftDeleteMixin, Base):
            __tablename__ = "product"
            id: Mapped[int] = mapped_column(primary_key=True)

    ``deleted_at`` is ``NULL`` for live rows and holds a naive UTC timestamp
    once soft-deleted. The entity store excludes deleted rows from every
    base query, and candidate sources ignore them when counting hits.
    """

    deleted_at: Mapped[datetime.datetime | None] = mapped_column(
        DateTime(),
        nullable=True,
        default=None,
        index=True,
    )

    @classmethod
    def not_deleted_filter(cls, target: Any = None) -> Any:
        """Return ``deleted_at IS NULL`` for this class or for an alias of it."""
        return (target if target is not None else cls).deleted_at.is_(None)  # type: ignore[attr-defined]

    def soft_delete(self) -> None:
        """Mark this row as deleted by setting ``deleted_at`` to now (naive UTC)."""
        self.deleted_at = datetime.datetime.now(datetime.UTC).replace(tzinfo=None)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


def is_soft_deletable(entity: Any) -> bool:
    return isinstance(entity, type) and issubclass(entity, SoftDeleteMixin)


__all__ = ["SoftDeleteMixin", "is_soft_deletable"]
