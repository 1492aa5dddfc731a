"""MFA code verification shared by login and MFA disable.

A code is accepted if it is a valid TOTP code for the user's secret, or if
it matches one of the user's unused backup codes. A matched backup code is
consumed with a compare-and-set on the stored list, so two concurrent
requests with the same code cannot both succeed.
"""

import asyncio
import hmac

from src.core.enums import ErrorCode
from src.core.errors import DecryptError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.protocols import (
    EncryptionProtocol,
    LoggerProtocol,
    TOTPProtocol,
    UserRepository,
)


class MfaVerifier:
    """Check TOTP codes, fall back to single-use backup codes."""

    def __init__(
        self,
        user_repo: UserRepository,
        encryption_service: EncryptionProtocol,
        totp_service: TOTPProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._encryption = encryption_service
        self._totp = totp_service
        self._logger = logger

    async def decrypt_secret(self, user: User) -> Result[str, DecryptError]:
        """Decrypt the stored TOTP secret off the event loop."""
        if user.mfa_secret is None:
            return Failure(
                error=DecryptError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="No MFA secret stored",
                )
            )
        return await asyncio.to_thread(self._encryption.decrypt, user.mfa_secret)

    async def verify(
        self, user: User, code: str, window: int
    ) -> Result[bool, DecryptError]:
        """Verify a TOTP code, then try the backup codes.

        Returns:
            Success(True) if accepted (a backup code is consumed),
            Success(False) if rejected, Failure(DecryptError) if the stored
            secret cannot be decrypted.
        """
        match await self.decrypt_secret(user):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=secret):
                pass

        if self._totp.verify_code(secret, code, window):
            return Success(value=True)

        return Success(value=await self._consume_backup_code(user, code))

    async def _consume_backup_code(self, user: User, code: str) -> bool:
        stored = user.backup_codes or []
        candidate = code.strip().upper()

        for index, blob in enumerate(stored):
            match await asyncio.to_thread(self._encryption.decrypt, blob):
                case Failure(error=error):
                    self._logger.warning(
                        "backup_code_undecryptable",
                        user_id=str(user.id),
                        index=index,
                        error_code=error.code.value,
                    )
                    continue
                case Success(value=plain):
                    pass

            if not hmac.compare_digest(plain.encode("utf-8"), candidate.encode("utf-8")):
                continue

            remaining = stored[:index] + stored[index + 1 :]
            consumed = await self._user_repo.replace_backup_codes(
                user.id, expected=stored, remaining=remaining
            )
            if consumed:
                user.backup_codes = remaining
                self._logger.info(
                    "backup_code_consumed",
                    user_id=str(user.id),
                    remaining=len(remaining),
                )
            return consumed

        return False

