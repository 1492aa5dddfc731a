"""MFA disable handler.

Requires both the current password and a valid MFA code (TOTP ±1 step or a
backup code). Clears secret and backup codes together.
"""

import asyncio

from src.application.commands.mfa_commands import DisableMfa
from src.application.services.mfa_verifier import MfaVerifier
from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthConfirmation, AuthMessage
from src.domain.protocols import (
    LOGIN_WINDOW,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class DisableMfaHandler:
    """Handler for turning MFA off."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        mfa_verifier: MfaVerifier,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._mfa_verifier = mfa_verifier
        self._logger = logger

    async def handle(self, cmd: DisableMfa) -> Result[str, DomainError]:
        """Handle MFA disable command.

        Returns:
            Success(message), Failure(AuthenticationError) for a wrong
            password or code, Failure(ValidationError) if MFA is off.
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message=AuthMessage.USER_NOT_FOUND,
                    resource_type="User",
                    resource_id=str(cmd.user_id),
                )
            )

        password_ok = await asyncio.to_thread(
            self._password_service.verify_password, cmd.password, user.password_hash
        )
        if not password_ok:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message=AuthMessage.INVALID_PASSWORD,
                )
            )

        # Nothing to verify a code against once MFA is off.
        if not user.mfa_enabled:
            return Failure(error=_not_enabled())

        match await self._mfa_verifier.verify(user, cmd.code, LOGIN_WINDOW):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=False):
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.MFA_CODE_INVALID,
                        message=AuthMessage.INVALID_CODE,
                    )
                )
            case Success(value=True):
                pass

        if not await self._user_repo.clear_mfa(user.id):
            return Failure(error=_not_enabled())
        user.disable_mfa()
        self._logger.info("mfa_disabled", user_id=str(user.id))
        return Success(value=AuthConfirmation.MFA_DISABLED)


def _not_enabled() -> ValidationError:
    return ValidationError(
        code=ErrorCode.MFA_NOT_ENABLED,
        message=AuthMessage.MFA_NOT_ENABLED,
    )
