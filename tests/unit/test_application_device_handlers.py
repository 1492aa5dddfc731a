"""Unit tests for device handlers and the current-user query."""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.commands.device_commands import RemoveDevice
from src.application.commands.handlers.remove_device_handler import RemoveDeviceHandler
from src.application.queries import GetCurrentUser, ListUserDevices
from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.application.queries.handlers.list_devices_handler import ListDevicesHandler
from src.core.errors import NotFoundError
from src.core.result import Failure, Success
from src.domain.entities.device import Device
from src.domain.enums import DevicePlatform
from src.domain.errors import AuthConfirmation
from tests.conftest import create_user


def make_device(user_id, device_id, minutes_ago) -> Device:
    used = datetime.now(UTC) - timedelta(minutes=minutes_ago)
    return Device(
        id=uuid4(),
        user_id=user_id,
        device_id=device_id,
        platform=DevicePlatform.WEB,
        name="Mac",
        last_used_at=used,
        created_at=used,
    )


@pytest.mark.unit
class TestListDevicesHandler:
    """Test the device list query."""

    @pytest.mark.asyncio
    async def test_marks_current_device(self):
        # Arrange
        user_id = uuid4()
        registry = AsyncMock()
        registry.list_for_user.return_value = [
            make_device(user_id, "laptop", 1),
            make_device(user_id, "phone", 30),
        ]
        handler = ListDevicesHandler(registry)

        # Act
        result = await handler.handle(
            ListUserDevices(user_id=user_id, current_device_id="phone")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.total_count == 2
        assert [d.device_id for d in result.value.devices] == ["laptop", "phone"]
        assert [d.is_current for d in result.value.devices] == [False, True]

    @pytest.mark.asyncio
    async def test_empty_list(self):
        registry = AsyncMock()
        registry.list_for_user.return_value = []

        result = await ListDevicesHandler(registry).handle(ListUserDevices(user_id=uuid4()))

        assert result.value.devices == []
        assert result.value.total_count == 0


@pytest.mark.unit
class TestRemoveDeviceHandler:
    """Test device removal."""

    @pytest.mark.asyncio
    async def test_remove_delegates_to_registry(self, mock_logger):
        registry = AsyncMock()
        handler = RemoveDeviceHandler(registry, mock_logger)
        user_id = uuid4()

        result = await handler.handle(RemoveDevice(user_id=user_id, device_id="phone"))

        assert result == Success(value=AuthConfirmation.DEVICE_REMOVED)
        registry.remove.assert_awaited_once_with(user_id, "phone")


@pytest.mark.unit
class TestGetCurrentUserHandler:
    """Test the /me query."""

    @pytest.mark.asyncio
    async def test_returns_summary(self):
        user = create_user(mfa_secret="enc:S")
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = user

        result = await GetCurrentUserHandler(user_repo).handle(GetCurrentUser(user_id=user.id))

        assert isinstance(result, Success)
        assert result.value.email == "alice@example.com"
        assert not hasattr(result.value, "mfa_secret")

    @pytest.mark.asyncio
    async def test_deactivated_user_not_found(self):
        user_repo = AsyncMock()
        user_repo.find_by_id.return_value = create_user(deleted_at=datetime.now(UTC))

        result = await GetCurrentUserHandler(user_repo).handle(GetCurrentUser(user_id=uuid4()))

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
