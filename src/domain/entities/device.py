"""Device domain entity.

Tracked independently of sessions: a device stays listed after its sessions
expire, until the user removes it.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import UUID

from src.domain.enums import DevicePlatform


@dataclass(slots=True, kw_only=True)
class Device:
    """A client endpoint (browser or app install) seen for a user.

    Attributes:
        id: Row identifier.
        user_id: Owner.
        device_id: Stable client identifier, unique per user.
        platform: ios, android or web.
        name: Friendly name ("iPhone", "Windows PC").
        last_used_at: Last time the device authenticated.
        created_at: First sighting.
    """

    id: UUID
    user_id: UUID
    device_id: str
    platform: DevicePlatform
    name: str
    last_used_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
