"""Device queries (read operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class ListUserDevices:
    """List the devices a user has signed in from.

    Attributes:
        user_id: User identifier.
        current_device_id: Device id of the calling request (to mark it).
    """

    user_id: UUID
    current_device_id: str | None = None
