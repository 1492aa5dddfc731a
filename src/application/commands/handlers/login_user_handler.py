"""Login handler.

State machine:
    UNAUTHENTICATED -> PASSWORD_VERIFIED -> SESSION_ISSUED
    UNAUTHENTICATED -> PASSWORD_VERIFIED -> MFA_PENDING (temp token, no session)

Every credential failure returns the same generic message so callers cannot
tell an unknown email from a wrong password. Unknown emails still pay for one
bcrypt check, and a deactivated account is reported only after the password
matched.
"""

import asyncio

from src.application.commands.auth_commands import LoginUser
from src.application.dtos.auth_dtos import LoginResult
from src.application.services.session_starter import SessionStarter
from src.application.services.token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class LoginUserHandler:
    """Handler for password login."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        token_service: SessionTokenService,
        session_starter: SessionStarter,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._token_service = token_service
        self._session_starter = session_starter
        self._logger = logger

    async def handle(self, cmd: LoginUser) -> Result[LoginResult, DomainError]:
        """Handle login command.

        Returns:
            Success(LoginResult) with tokens, or with requires_mfa=True and a
            temp token. Failure(AuthenticationError) otherwise.
        """
        user = await self._user_repo.find_by_email(cmd.email.strip().lower())

        if user is None:
            await asyncio.to_thread(self._password_service.dummy_verify, cmd.password)
            self._logger.info("login_failed", reason="unknown_email")
            return Failure(error=_invalid_credentials())

        password_ok = await asyncio.to_thread(
            self._password_service.verify_password, cmd.password, user.password_hash
        )
        if not password_ok:
            self._logger.info("login_failed", user_id=str(user.id), reason="bad_password")
            return Failure(error=_invalid_credentials())

        # Only a caller who knows the password learns the account is deactivated.
        if user.is_deactivated():
            self._logger.info("login_failed", user_id=str(user.id), reason="deactivated")
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.ACCOUNT_DEACTIVATED,
                    message=AuthMessage.ACCOUNT_DEACTIVATED,
                )
            )

        if user.mfa_enabled:
            temp_token = self._token_service.issue_temporary_token(user.id)
            self._logger.info("login_mfa_required", user_id=str(user.id))
            return Success(value=LoginResult(requires_mfa=True, temp_token=temp_token))

        auth = await self._session_starter.start(user, cmd.client)
        self._logger.info("login_succeeded", user_id=str(user.id))
        return Success(value=LoginResult(requires_mfa=False, auth=auth))


def _invalid_credentials() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.INVALID_CREDENTIALS,
        message=AuthMessage.INVALID_CREDENTIALS,
    )
