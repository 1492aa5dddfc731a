"""Unit tests for SessionTokenService.

Tests cover:
- Session issuance (row contents, token pair)
- Refresh rotation (unknown token, lost race, success)
- Revocation by access token, user and device
- Temporary and access token verification
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.services.token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Success
from src.domain.entities.session import Session
from src.domain.protocols import DeviceEnrichmentResult


def build_service(mock_logger, session_repo=None, jwt_service=None):
    jwt = jwt_service or Mock()
    if jwt_service is None:
        jwt.generate_access_token.return_value = "access-jwt"
        jwt.generate_temporary_token.return_value = "temp-jwt"

    refresh_svc = Mock()
    refresh_svc.generate_token.return_value = "f" * 64
    refresh_svc.calculate_expiration.return_value = datetime.now(UTC) + timedelta(days=7)

    enricher = AsyncMock()
    enricher.enrich.return_value = DeviceEnrichmentResult(device_info="Chrome on Mac OS X")

    service = SessionTokenService(
        session_repo=session_repo or AsyncMock(),
        jwt_service=jwt,
        refresh_token_service=refresh_svc,
        device_enricher=enricher,
        logger=mock_logger,
        access_token_expire_minutes=15,
    )
    return service, jwt, refresh_svc


def make_session(user_id=None, refresh_token="old-refresh") -> Session:
    return Session(
        id=uuid4(),
        user_id=user_id or uuid4(),
        access_token="old-access",
        refresh_token=refresh_token,
        device_id="device-1",
        expires_at=datetime.now(UTC) + timedelta(days=7),
    )


@pytest.mark.unit
class TestIssueSession:
    """Test session creation."""

    @pytest.mark.asyncio
    async def test_issue_session_persists_row_and_returns_pair(self, mock_logger):
        """A session row holds the issued pair and the enriched device info."""
        # Arrange
        session_repo = AsyncMock()
        service, _, _ = build_service(mock_logger, session_repo=session_repo)
        user_id = uuid4()

        # Act
        tokens = await service.issue_session(
            user_id=user_id,
            device_id="device-1",
            ip_address="10.0.0.1",
            user_agent="Mozilla/5.0",
        )

        # Assert
        assert tokens.access_token == "access-jwt"
        assert tokens.refresh_token == "f" * 64
        assert tokens.token_type == "bearer"
        assert tokens.expires_in == 900

        created: Session = session_repo.create.call_args.args[0]
        assert created.user_id == user_id
        assert created.device_id == "device-1"
        assert created.device_info == "Chrome on Mac OS X"
        assert created.access_token == "access-jwt"
        assert created.ip_address == "10.0.0.1"


@pytest.mark.unit
class TestRefresh:
    """Test refresh token rotation."""

    @pytest.mark.asyncio
    async def test_unknown_refresh_token_returns_none(self, mock_logger):
        session_repo = AsyncMock()
        session_repo.find_by_refresh_token.return_value = None
        service, _, _ = build_service(mock_logger, session_repo=session_repo)

        assert await service.refresh("nope") is None
        session_repo.rotate_tokens.assert_not_called()

    @pytest.mark.asyncio
    async def test_rotation_replaces_pair(self, mock_logger):
        """The old refresh token is the CAS guard of the rotation."""
        # Arrange
        session = make_session()
        session_repo = AsyncMock()
        session_repo.find_by_refresh_token.return_value = session
        session_repo.rotate_tokens.return_value = True
        service, _, _ = build_service(mock_logger, session_repo=session_repo)

        # Act
        tokens = await service.refresh("old-refresh")

        # Assert
        assert tokens is not None
        assert tokens.access_token == "access-jwt"
        kwargs = session_repo.rotate_tokens.call_args.kwargs
        assert kwargs["session_id"] == session.id
        assert kwargs["old_refresh_token"] == "old-refresh"
        assert kwargs["refresh_token"] == "f" * 64

    @pytest.mark.asyncio
    async def test_lost_rotation_race_returns_none(self, mock_logger):
        """A concurrent rotation that won first makes this refresh fail."""
        session_repo = AsyncMock()
        session_repo.find_by_refresh_token.return_value = make_session()
        session_repo.rotate_tokens.return_value = False
        service, _, _ = build_service(mock_logger, session_repo=session_repo)

        assert await service.refresh("old-refresh") is None
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args[0] == "refresh_rotation_lost"


@pytest.mark.unit
class TestRevocation:
    """Test session revocation."""

    @pytest.mark.asyncio
    async def test_revoke_deletes_by_access_token(self, mock_logger):
        session_repo = AsyncMock()
        service, _, _ = build_service(mock_logger, session_repo=session_repo)

        await service.revoke("access-jwt")

        session_repo.delete_by_access_token.assert_awaited_once_with("access-jwt")

    @pytest.mark.asyncio
    async def test_revoke_all_returns_count(self, mock_logger):
        session_repo = AsyncMock()
        session_repo.delete_all_for_user.return_value = 3
        service, _, _ = build_service(mock_logger, session_repo=session_repo)

        assert await service.revoke_all(uuid4()) == 3

    @pytest.mark.asyncio
    async def test_revoke_by_device(self, mock_logger):
        session_repo = AsyncMock()
        session_repo.delete_by_device.return_value = 1
        service, _, _ = build_service(mock_logger, session_repo=session_repo)
        user_id = uuid4()

        assert await service.revoke_by_device(user_id, "device-1") == 1
        session_repo.delete_by_device.assert_awaited_once_with(user_id, "device-1")


@pytest.mark.unit
class TestTokenVerification:
    """Test JWT subject resolution."""

    def test_valid_temporary_token_returns_user_id(self, mock_logger):
        user_id = uuid4()
        jwt = Mock()
        jwt.validate_temporary_token.return_value = Success(value={"sub": str(user_id)})
        service, _, _ = build_service(mock_logger, jwt_service=jwt)

        assert service.verify_temporary_token("temp") == user_id

    def test_invalid_access_token_returns_none(self, mock_logger):
        jwt = Mock()
        jwt.validate_access_token.return_value = Failure(
            error=AuthenticationError(code=ErrorCode.TOKEN_INVALID, message="bad")
        )
        service, _, _ = build_service(mock_logger, jwt_service=jwt)

        assert service.verify_access_token("garbage") is None

    def test_non_uuid_subject_returns_none(self, mock_logger):
        jwt = Mock()
        jwt.validate_access_token.return_value = Success(value={"sub": "not-a-uuid"})
        service, _, _ = build_service(mock_logger, jwt_service=jwt)

        assert service.verify_access_token("token") is None
