"""MFA setup handler.

Generates a TOTP secret, stores it encrypted as pending (MFA stays off), and
returns the secret with its QR code. Abandoning setup leaves login unchanged;
re-running it replaces the pending secret.
"""

import asyncio

from src.application.commands.mfa_commands import SetupMfa
from src.application.dtos.auth_dtos import MfaSetupResult
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    EncryptionProtocol,
    LoggerProtocol,
    TOTPProtocol,
    UserRepository,
)


class SetupMfaHandler:
    """Handler for MFA enrollment step one."""

    def __init__(
        self,
        user_repo: UserRepository,
        encryption_service: EncryptionProtocol,
        totp_service: TOTPProtocol,
        logger: LoggerProtocol,
        issuer: str = "Wyndo",
    ) -> None:
        self._user_repo = user_repo
        self._encryption = encryption_service
        self._totp = totp_service
        self._logger = logger
        self._issuer = issuer

    async def handle(self, cmd: SetupMfa) -> Result[MfaSetupResult, DomainError]:
        """Handle MFA setup command.

        Returns:
            Success(MfaSetupResult), Failure(ConflictError) if MFA is already
            enabled, Failure(EncryptionError) if the secret cannot be sealed.
        """
        user = await self._user_repo.find_by_id(cmd.user_id)
        if user is None:
            return Failure(error=_user_not_found(cmd))

        if user.mfa_enabled:
            return Failure(error=_already_enabled())

        enrollment = self._totp.generate_secret(f"{self._issuer} ({user.email})")

        match await asyncio.to_thread(self._encryption.encrypt, enrollment.secret):
            case Failure(error=error):
                self._logger.error(
                    "mfa_secret_encrypt_failed",
                    user_id=str(user.id),
                    error_code=error.code.value,
                )
                return Failure(error=error)
            case Success(value=encrypted_secret):
                user.start_mfa_setup(encrypted_secret)

        if not await self._user_repo.store_pending_mfa_secret(user.id, encrypted_secret):
            # Enabled by a concurrent request after the read above.
            return Failure(error=_already_enabled())
        self._logger.info("mfa_setup_started", user_id=str(user.id))

        return Success(
            value=MfaSetupResult(
                secret=enrollment.secret,
                qr_code=enrollment.qr_code,
                otpauth_url=enrollment.otpauth_url,
            )
        )


def _user_not_found(cmd: SetupMfa) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message=AuthMessage.USER_NOT_FOUND,
        resource_type="User",
        resource_id=str(cmd.user_id),
    )


def _already_enabled() -> ConflictError:
    return ConflictError(
        code=ErrorCode.MFA_ALREADY_ENABLED,
        message=AuthMessage.MFA_ALREADY_ENABLED,
        resource_type="User",
        conflicting_field="mfa_enabled",
    )
