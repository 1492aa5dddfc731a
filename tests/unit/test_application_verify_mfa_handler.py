"""Unit tests for VerifyMfaHandler.

Tests cover:
- Valid code completes login
- Invalid or wrong-type temp token
- Account without MFA secret
- Wrong code
- Unreadable secret surfaces as DecryptError
"""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from src.application.commands.auth_commands import VerifyMfaLogin
from src.application.commands.handlers.verify_mfa_handler import VerifyMfaHandler
from src.application.dtos.auth_dtos import AuthResult, AuthTokens, UserSummary
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DecryptError
from src.core.result import Failure, Success
from src.domain.protocols import LOGIN_WINDOW
from tests.conftest import create_user


def build_handler(mock_logger, user=None, user_id=None, verify_result=None):
    user_repo = AsyncMock()
    user_repo.find_by_id.return_value = user

    token_service = Mock()
    token_service.verify_temporary_token.return_value = user_id

    mfa_verifier = AsyncMock()
    mfa_verifier.verify.return_value = verify_result or Success(value=True)

    session_starter = AsyncMock()
    if user is not None:
        session_starter.start.return_value = AuthResult(
            user=UserSummary.from_entity(user),
            tokens=AuthTokens(access_token="a", refresh_token="r"),
        )

    handler = VerifyMfaHandler(
        user_repo=user_repo,
        token_service=token_service,
        mfa_verifier=mfa_verifier,
        session_starter=session_starter,
        logger=mock_logger,
    )
    return handler, mfa_verifier, session_starter


def mfa_user():
    return create_user(mfa_enabled=True, mfa_secret="encrypted", backup_codes=[])


@pytest.mark.unit
class TestVerifyMfaHandler:
    """Test the second login step."""

    @pytest.mark.asyncio
    async def test_valid_code_starts_session(self, mock_logger):
        # Arrange
        user = mfa_user()
        handler, mfa_verifier, session_starter = build_handler(
            mock_logger, user=user, user_id=user.id
        )

        # Act
        result = await handler.handle(VerifyMfaLogin(temp_token="temp", code="123456"))

        # Assert
        assert isinstance(result, Success)
        assert result.value.tokens.access_token == "a"
        mfa_verifier.verify.assert_awaited_once_with(user, "123456", LOGIN_WINDOW)
        session_starter.start.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_invalid_temp_token(self, mock_logger):
        """Access tokens and garbage both fail temp token validation."""
        handler, mfa_verifier, _ = build_handler(mock_logger, user_id=None)

        result = await handler.handle(VerifyMfaLogin(temp_token="access", code="123456"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.TOKEN_INVALID
        mfa_verifier.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_without_secret(self, mock_logger):
        user = create_user()
        handler, mfa_verifier, _ = build_handler(mock_logger, user=user, user_id=user.id)

        result = await handler.handle(VerifyMfaLogin(temp_token="temp", code="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.MFA_NOT_CONFIGURED
        mfa_verifier.verify.assert_not_called()

    @pytest.mark.asyncio
    async def test_user_deleted_after_token_issued(self, mock_logger):
        handler, _, _ = build_handler(mock_logger, user=None, user_id=uuid4())

        result = await handler.handle(VerifyMfaLogin(temp_token="temp", code="123456"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.MFA_NOT_CONFIGURED

    @pytest.mark.asyncio
    async def test_wrong_code(self, mock_logger):
        user = mfa_user()
        handler, _, session_starter = build_handler(
            mock_logger, user=user, user_id=user.id, verify_result=Success(value=False)
        )

        result = await handler.handle(VerifyMfaLogin(temp_token="temp", code="000000"))

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.MFA_CODE_INVALID
        session_starter.start.assert_not_called()

    @pytest.mark.asyncio
    async def test_unreadable_secret(self, mock_logger):
        user = mfa_user()
        error = DecryptError(code=ErrorCode.DECRYPTION_FAILED, message="tampered")
        handler, _, _ = build_handler(
            mock_logger, user=user, user_id=user.id, verify_result=Failure(error=error)
        )

        result = await handler.handle(VerifyMfaLogin(temp_token="temp", code="123456"))

        assert result == Failure(error=error)
        mock_logger.error.assert_called_once()
