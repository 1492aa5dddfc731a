"""Unit tests for SessionStarter."""

from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.auth_commands import ClientContext
from src.application.dtos.auth_dtos import AuthTokens
from src.application.services.session_starter import SessionStarter
from src.domain.enums import DevicePlatform
from tests.conftest import create_user


@pytest.mark.unit
class TestSessionStarter:
    """Test the shared last step of every login."""

    @pytest.mark.asyncio
    async def test_start_issues_session_records_device_and_stamps_login(self):
        # Arrange
        user = create_user()
        user_repo = AsyncMock()
        token_service = AsyncMock()
        token_service.issue_session.return_value = AuthTokens(
            access_token="a", refresh_token="r"
        )
        device_registry = AsyncMock()
        device_registry.resolve_device_id = Mock(return_value="install-1")
        starter = SessionStarter(user_repo, token_service, device_registry)
        client = ClientContext(
            device_id="install-1", ip_address="10.0.0.1", user_agent="UA"
        )

        # Act
        result = await starter.start(user, client)

        # Assert
        token_service.issue_session.assert_awaited_once_with(
            user_id=user.id,
            device_id="install-1",
            ip_address="10.0.0.1",
            user_agent="UA",
        )
        device_registry.record.assert_awaited_once_with(
            user_id=user.id,
            device_id="install-1",
            user_agent="UA",
            platform=None,
            name=None,
        )
        assert user.last_login_at is not None
        user_repo.touch_last_login.assert_awaited_once_with(user.id, user.last_login_at)
        assert result.user.id == user.id
        assert result.tokens.access_token == "a"

    @pytest.mark.asyncio
    async def test_start_passes_client_platform_and_name_to_registry(self):
        user = create_user()
        token_service = AsyncMock()
        token_service.issue_session.return_value = AuthTokens(
            access_token="a", refresh_token="r"
        )
        device_registry = AsyncMock()
        device_registry.resolve_device_id = Mock(return_value="install-1")
        starter = SessionStarter(AsyncMock(), token_service, device_registry)
        client = ClientContext(
            device_id="install-1",
            user_agent="okhttp/4.12",
            platform=DevicePlatform.IOS,
            device_name="Jo's iPhone",
        )

        await starter.start(user, client)

        device_registry.record.assert_awaited_once_with(
            user_id=user.id,
            device_id="install-1",
            user_agent="okhttp/4.12",
            platform=DevicePlatform.IOS,
            name="Jo's iPhone",
        )

    @pytest.mark.asyncio
    async def test_start_never_writes_the_whole_user(self):
        """Only last_login_at is persisted, so stale fields cannot be written back."""
        user = create_user()
        user_repo = AsyncMock()
        token_service = AsyncMock()
        token_service.issue_session.return_value = AuthTokens(
            access_token="a", refresh_token="r"
        )
        device_registry = AsyncMock()
        device_registry.resolve_device_id = Mock(return_value="install-1")

        await SessionStarter(user_repo, token_service, device_registry).start(
            user, ClientContext()
        )

        assert [name for name, _, _ in user_repo.mock_calls] == ["touch_last_login"]
