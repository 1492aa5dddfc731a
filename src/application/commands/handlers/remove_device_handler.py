"""Remove device handler. Revokes the device's sessions, then forgets it."""

from src.application.commands.device_commands import RemoveDevice
from src.application.services.device_registry import DeviceRegistry
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.errors import AuthConfirmation
from src.domain.protocols import LoggerProtocol


class RemoveDeviceHandler:
    def __init__(self, device_registry: DeviceRegistry, logger: LoggerProtocol) -> None:
        self._device_registry = device_registry
        self._logger = logger

    async def handle(self, cmd: RemoveDevice) -> Result[str, DomainError]:
        await self._device_registry.remove(cmd.user_id, cmd.device_id)
        self._logger.info(
            "device_removed", user_id=str(cmd.user_id), device_id=cmd.device_id
        )
        return Success(value=AuthConfirmation.DEVICE_REMOVED)
