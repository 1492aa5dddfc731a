"""Password reset confirmation handler.

A valid token sets the new password, clears the token (single use) and
revokes every session of the account. Password and token change in one
conditional UPDATE; of two confirmations racing on one token only the one
that wins it revokes sessions.
"""

import asyncio

from src.application.commands.password_commands import ConfirmPasswordReset
from src.application.services.token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthConfirmation, AuthMessage
from src.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    PasswordResetTokenServiceProtocol,
    UserRepository,
)


class ConfirmPasswordResetHandler:
    """Handler for completing a password reset."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        reset_token_service: PasswordResetTokenServiceProtocol,
        token_service: SessionTokenService,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._reset_token_service = reset_token_service
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: ConfirmPasswordReset) -> Result[str, DomainError]:
        """Handle reset confirmation.

        Returns:
            Success(message), or Failure(ValidationError) when the token is
            unknown, expired or already used.
        """
        token_hash = self._reset_token_service.hash_token(cmd.token)
        user = await self._user_repo.find_by_reset_token_hash(token_hash)

        if user is None:
            self._logger.info("password_reset_failed", reason="invalid_token")
            return Failure(error=_invalid_token())

        new_hash = await asyncio.to_thread(
            self._password_service.hash_password, cmd.new_password
        )
        consumed = await self._user_repo.complete_password_reset(
            user.id, token_hash, new_hash
        )
        if not consumed:
            # Used by a concurrent confirmation, expired or deactivated
            # while the new password was hashing.
            self._logger.info(
                "password_reset_failed", user_id=str(user.id), reason="token_consumed"
            )
            return Failure(error=_invalid_token())
        user.complete_password_reset(new_hash)

        revoked = await self._token_service.revoke_all(user.id)
        self._logger.info(
            "password_reset_completed",
            user_id=str(user.id),
            sessions_revoked=revoked,
        )

        return Success(value=AuthConfirmation.PASSWORD_RESET_COMPLETE)


def _invalid_token() -> ValidationError:
    return ValidationError(
        code=ErrorCode.RESET_TOKEN_INVALID,
        message=AuthMessage.INVALID_RESET_TOKEN,
        field="token",
    )
