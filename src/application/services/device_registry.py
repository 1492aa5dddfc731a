"""Device registry.

Resolves which device a request comes from and keeps the per-user device
list current. Removing a device also revokes the sessions it holds.
"""

from datetime import UTC, datetime
from uuid import UUID

from uuid_extensions import uuid7

from src.application.services.token_service import SessionTokenService
from src.core.fingerprinting import (
    detect_platform,
    generate_device_name,
    resolve_device_id,
)
from src.domain.entities.device import Device
from src.domain.enums import DevicePlatform
from src.domain.protocols import DeviceRepository


class DeviceRegistry:
    """Device identification and bookkeeping.

    Usage:
        device_id = registry.resolve_device_id(supplied, ip_address, user_agent)
        await registry.record(user_id=user.id, device_id=device_id, user_agent=ua)
    """

    def __init__(
        self,
        device_repo: DeviceRepository,
        token_service: SessionTokenService,
    ) -> None:
        self._device_repo = device_repo
        self._token_service = token_service

    def resolve_device_id(
        self,
        supplied_device_id: str | None,
        ip_address: str | None,
        user_agent: str | None,
    ) -> str:
        """Client-supplied id when present, otherwise an IP/UA fingerprint."""
        return resolve_device_id(supplied_device_id, ip_address, user_agent)

    async def record(
        self,
        *,
        user_id: UUID,
        device_id: str,
        user_agent: str | None,
        platform: DevicePlatform | None = None,
        name: str | None = None,
    ) -> Device:
        """Upsert the device.

        Platform and name come from the client when it sends them, otherwise
        they are inferred from the User-Agent.
        """
        now = datetime.now(UTC)
        device = Device(
            id=uuid7(),
            user_id=user_id,
            device_id=device_id,
            platform=platform or DevicePlatform(detect_platform(user_agent)),
            name=name or generate_device_name(user_agent),
            last_used_at=now,
            created_at=now,
        )
        await self._device_repo.upsert(device)
        return device

    async def list_for_user(self, user_id: UUID) -> list[Device]:
        """Devices of a user, most recently used first."""
        return await self._device_repo.list_for_user(user_id)

    async def remove(self, user_id: UUID, device_id: str) -> None:
        """Revoke the device's sessions, then forget the device.

        Unknown devices are a no-op.
        """
        await self._token_service.revoke_by_device(user_id, device_id)
        await self._device_repo.delete(user_id, device_id)
