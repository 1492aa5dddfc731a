"""Declarative bases for the credential store tables.

    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   └── User
        ├── Session
        └── Device

Repositories map rows to domain entities; entities never subclass these.
Tables run on PostgreSQL in deployment and SQLite in tests, so columns stick
to portable types (Uuid, timezone-aware DateTime, JSON with a JSONB variant).
"""

from datetime import UTC, datetime
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def ensure_utc(value: datetime | None) -> datetime | None:
    """Treat naive datetimes (SQLite) as UTC; aware values pass through."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


class BaseModel(DeclarativeBase):
    """Root of every table: UUID primary key plus creation time."""

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(Uuid, primary_key=True, default=uuid4)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


class BaseMutableModel(BaseModel):
    """Base for rows that change after insert (users)."""

    __abstract__ = True

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
