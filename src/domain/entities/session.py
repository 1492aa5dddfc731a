"""Session domain entity.

One Session per authenticated client. The row binds a user, a device and the
currently valid token pair. Refresh rotation overwrites the token values in
place, so an old refresh token can never be found again.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID


@dataclass(slots=True, kw_only=True)
class Session:
    """Session domain entity.

    Attributes:
        id: Unique session identifier.
        user_id: User who owns this session.
        access_token: Current JWT access token (used to revoke on logout).
        refresh_token: Current opaque refresh token (unique, single-use).
        device_id: Identifier of the device this session runs on.
        device_info: Human-readable device summary ("Chrome on Mac OS X").
        ip_address: Client IP at session creation.
        user_agent: Full user agent string.
        created_at: When the session was issued.
        last_used_at: Last issuance or refresh.
        expires_at: Absolute expiry (refresh token lifetime).
    """

    id: UUID
    user_id: UUID
    access_token: str
    refresh_token: str
    device_id: str
    device_info: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    last_used_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    expires_at: datetime

    def is_expired(self, now: datetime | None = None) -> bool:
        """Check whether the absolute expiry has passed."""
        return (now or datetime.now(UTC)) >= self.expires_at
