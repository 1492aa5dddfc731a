"""MFA enable handler.

Verifies a code against the pending secret (±2 steps), then turns MFA on
with ten fresh backup codes. The plaintext codes are returned once and also
emailed (best-effort); only encrypted copies are stored.
"""

import asyncio

from src.application.commands.mfa_commands import EnableMfa
from src.application.dtos.auth_dtos import MfaEnableResult
from src.application.services.mfa_verifier import MfaVerifier
from src.application.services.notifications import notify_best_effort
from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthConfirmation, AuthMessage
from src.domain.protocols import (
    ENABLE_WINDOW,
    EmailProtocol,
    EncryptionProtocol,
    LoggerProtocol,
    TOTPProtocol,
    UserRepository,
)


class EnableMfaHandler:
    """Handler for MFA enrollment step two."""

    def __init__(
        self,
        user_repo: UserRepository,
        encryption_service: EncryptionProtocol,
        totp_service: TOTPProtocol,
        mfa_verifier: MfaVerifier,
        email_service: EmailProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._encryption = encryption_service
        self._totp = totp_service
        self._mfa_verifier = mfa_verifier
        self._email_service = email_service
        self._logger = logger

    async def handle(self, cmd: EnableMfa) -> Result[MfaEnableResult, DomainError]:
        """Handle MFA enable command.

        Returns:
            Success(MfaEnableResult) with the plaintext backup codes.
            Failure(ValidationError) if setup was not run first.
            Failure(AuthenticationError) if the code is wrong.
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

        if user.mfa_enabled:
            return Failure(
                error=ConflictError(
                    code=ErrorCode.MFA_ALREADY_ENABLED,
                    message=AuthMessage.MFA_ALREADY_ENABLED,
                    resource_type="User",
                    conflicting_field="mfa_enabled",
                )
            )

        pending_secret = user.mfa_secret
        if pending_secret is None or not user.has_pending_mfa_setup():
            return Failure(
                error=ValidationError(
                    code=ErrorCode.MFA_NOT_SETUP,
                    message=AuthMessage.MFA_SETUP_REQUIRED,
                )
            )

        match await self._mfa_verifier.decrypt_secret(user):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=secret):
                pass

        if not self._totp.verify_code(secret, cmd.code, ENABLE_WINDOW):
            self._logger.info("mfa_enable_failed", user_id=str(user.id))
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.MFA_CODE_INVALID,
                    message=AuthMessage.INVALID_CODE,
                )
            )

        backup_codes = self._totp.generate_backup_codes()
        encrypted_codes: list[str] = []
        for code in backup_codes:
            match await asyncio.to_thread(self._encryption.encrypt, code):
                case Failure(error=error):
                    return Failure(error=error)
                case Success(value=blob):
                    encrypted_codes.append(blob)

        activated = await self._user_repo.activate_mfa(
            user.id, pending_secret, encrypted_codes
        )
        if not activated:
            self._logger.info("mfa_enable_conflict", user_id=str(user.id))
            return Failure(
                error=ConflictError(
                    code=ErrorCode.MFA_SETUP_CHANGED,
                    message=AuthMessage.MFA_SETUP_CHANGED,
                    resource_type="User",
                    conflicting_field="mfa_secret",
                )
            )
        user.enable_mfa(encrypted_codes)
        self._logger.info("mfa_enabled", user_id=str(user.id))

        await notify_best_effort(
            self._logger,
            "backup_codes_email",
            lambda: self._email_service.send_backup_codes_email(user.email, backup_codes),
            user_id=str(user.id),
        )

        return Success(
            value=MfaEnableResult(
                message=AuthConfirmation.MFA_ENABLED,
                backup_codes=backup_codes,
            )
        )
