"""Session database model for multi-device session management.

One row per authenticated client. The current token pair lives on the row;
refresh rotation overwrites it with a conditional UPDATE.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseModel


class Session(BaseModel):
    """Session model.

    Fields:
        id, created_at: From BaseModel
        user_id: Foreign key to users table (cascade delete)
        access_token: Current JWT (unique, used by logout)
        refresh_token: Current opaque refresh token (unique)
        device_id: Client device identifier (indexed)
        device_info: Parsed device info ("Chrome on Mac OS X")
        ip_address: Client IP at session creation
        user_agent: Full user agent string
        last_used_at: Last issuance or rotation
        expires_at: Absolute expiry

    Indexes:
        - ix_sessions_user_id: (user_id) for revoke-all
        - idx_sessions_user_device: (user_id, device_id) for device revocation
        - ix_sessions_expires_at: (expires_at) for cleanup queries
    """

    __tablename__ = "sessions"

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who owns this session",
    )
    access_token: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Current JWT access token",
    )
    refresh_token: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        comment="Current opaque refresh token (64 hex chars)",
    )
    device_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        index=True,
        comment="Client-supplied id or IP/UA fingerprint",
    )
    device_info: Mapped[str | None] = mapped_column(String(255), nullable=True)
    ip_address: Mapped[str | None] = mapped_column(String(45), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    last_used_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    __table_args__ = (Index("idx_sessions_user_device", "user_id", "device_id"),)
