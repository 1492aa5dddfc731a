"""Unit tests for LoginUserHandler.

Tests cover:
- Successful login without MFA (tokens issued)
- Login with MFA enabled (temp token only, no session)
- Unknown email (dummy hash check, generic error)
- Wrong password
- Deactivated account (reported only after a correct password)
"""

from datetime import UTC, datetime
from unittest.mock import AsyncMock, Mock

import pytest

from src.application.commands.auth_commands import LoginUser
from src.application.commands.handlers.login_user_handler import LoginUserHandler
from src.application.dtos.auth_dtos import AuthResult, AuthTokens, UserSummary
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Success
from src.domain.errors import AuthMessage
from tests.conftest import create_user


def build_handler(mock_logger, user=None, password_ok=True):
    user_repo = AsyncMock()
    user_repo.find_by_email.return_value = user

    password_service = Mock()
    password_service.verify_password.return_value = password_ok

    token_service = Mock()
    token_service.issue_temporary_token.return_value = "temp-jwt"

    session_starter = AsyncMock()
    if user is not None:
        session_starter.start.return_value = AuthResult(
            user=UserSummary.from_entity(user),
            tokens=AuthTokens(access_token="a", refresh_token="r"),
        )

    handler = LoginUserHandler(
        user_repo=user_repo,
        password_service=password_service,
        token_service=token_service,
        session_starter=session_starter,
        logger=mock_logger,
    )
    return handler, password_service, token_service, session_starter


@pytest.mark.unit
class TestLoginUserHandlerSuccess:
    """Test successful login scenarios."""

    @pytest.mark.asyncio
    async def test_login_without_mfa_returns_tokens(self, mock_logger):
        # Arrange
        user = create_user()
        handler, password_service, token_service, session_starter = build_handler(
            mock_logger, user=user
        )

        # Act
        result = await handler.handle(
            LoginUser(email=" Alice@Example.com ", password="SecurePass123")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.requires_mfa is False
        assert result.value.auth.tokens.access_token == "a"
        assert result.value.temp_token is None
        password_service.verify_password.assert_called_once_with(
            "SecurePass123", user.password_hash
        )
        token_service.issue_temporary_token.assert_not_called()
        session_starter.start.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_login_with_mfa_returns_temp_token_only(self, mock_logger):
        """No session exists until the second factor is verified."""
        # Arrange
        user = create_user(mfa_enabled=True, mfa_secret="encrypted")
        handler, _, token_service, session_starter = build_handler(mock_logger, user=user)

        # Act
        result = await handler.handle(
            LoginUser(email="alice@example.com", password="SecurePass123")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.requires_mfa is True
        assert result.value.temp_token == "temp-jwt"
        assert result.value.auth is None
        token_service.issue_temporary_token.assert_called_once_with(user.id)
        session_starter.start.assert_not_called()


@pytest.mark.unit
class TestLoginUserHandlerFailure:
    """Test login failure scenarios."""

    @pytest.mark.asyncio
    async def test_unknown_email_runs_dummy_check(self, mock_logger):
        """Unknown emails cost one bcrypt check, like a wrong password."""
        # Arrange
        handler, password_service, _, session_starter = build_handler(mock_logger)

        # Act
        result = await handler.handle(
            LoginUser(email="ghost@example.com", password="SecurePass123")
        )

        # Assert
        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthenticationError)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == AuthMessage.INVALID_CREDENTIALS
        password_service.dummy_verify.assert_called_once_with("SecurePass123")
        password_service.verify_password.assert_not_called()
        session_starter.start.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password_same_error_as_unknown_email(self, mock_logger):
        user = create_user()
        handler, *_ = build_handler(mock_logger, user=user, password_ok=False)

        result = await handler.handle(
            LoginUser(email="alice@example.com", password="WrongPass123")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == AuthMessage.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_deactivated_account_with_wrong_password_looks_unknown(
        self, mock_logger
    ):
        """A wrong guess must not reveal that the account exists."""
        # Arrange
        user = create_user(deleted_at=datetime.now(UTC))
        handler, password_service, _, session_starter = build_handler(
            mock_logger, user=user, password_ok=False
        )

        # Act
        result = await handler.handle(
            LoginUser(email="alice@example.com", password="WrongPass123")
        )

        # Assert
        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == AuthMessage.INVALID_CREDENTIALS
        password_service.verify_password.assert_called_once_with(
            "WrongPass123", user.password_hash
        )
        session_starter.start.assert_not_called()

    @pytest.mark.asyncio
    async def test_deactivated_account_with_correct_password_rejected(
        self, mock_logger
    ):
        user = create_user(deleted_at=datetime.now(UTC))
        handler, password_service, token_service, session_starter = build_handler(
            mock_logger, user=user
        )

        result = await handler.handle(
            LoginUser(email="alice@example.com", password="SecurePass123")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ACCOUNT_DEACTIVATED
        assert result.error.message == AuthMessage.ACCOUNT_DEACTIVATED
        password_service.verify_password.assert_called_once()
        token_service.issue_temporary_token.assert_not_called()
        session_starter.start.assert_not_called()
