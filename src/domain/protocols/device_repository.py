"""Device repository protocol."""

from typing import Protocol
from uuid import UUID

from src.domain.entities.device import Device


class DeviceRepository(Protocol):
    """Device repository protocol (port).

    Devices are unique per (user_id, device_id).
    """

    async def upsert(self, device: Device) -> None:
        """Insert the device or refresh platform, name and last_used_at.

        Single INSERT ... ON CONFLICT statement, safe under concurrent logins
        from the same device.
        """
        ...

    async def list_for_user(self, user_id: UUID) -> list[Device]:
        """List a user's devices, most recently used first."""
        ...

    async def delete(self, user_id: UUID, device_id: str) -> bool:
        """Delete one device. Returns False if it did not exist."""
        ...
