"""List devices query handler."""

from dataclasses import dataclass
from datetime import datetime

from src.application.queries.device_queries import ListUserDevices
from src.application.services.device_registry import DeviceRegistry
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.enums import DevicePlatform


@dataclass(frozen=True, kw_only=True)
class DeviceListItem:
    """Individual device in list result."""

    device_id: str
    platform: DevicePlatform
    name: str | None
    last_used_at: datetime
    created_at: datetime
    is_current: bool


@dataclass(frozen=True, kw_only=True)
class DeviceListResult:
    """Device list query result."""

    devices: list[DeviceListItem]
    total_count: int


class ListDevicesHandler:
    """Handler for listing a user's devices, most recently used first."""

    def __init__(self, device_registry: DeviceRegistry) -> None:
        self._device_registry = device_registry

    async def handle(self, query: ListUserDevices) -> Result[DeviceListResult, DomainError]:
        devices = await self._device_registry.list_for_user(query.user_id)

        items = [
            DeviceListItem(
                device_id=device.device_id,
                platform=device.platform,
                name=device.name,
                last_used_at=device.last_used_at,
                created_at=device.created_at,
                is_current=device.device_id == query.current_device_id,
            )
            for device in devices
        ]

        return Success(value=DeviceListResult(devices=items, total_count=len(items)))
