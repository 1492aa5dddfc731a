"""Device commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class RemoveDevice:
    """Forget a device and revoke its sessions."""

    user_id: UUID
    device_id: str
