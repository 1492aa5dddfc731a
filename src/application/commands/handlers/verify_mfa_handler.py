"""MFA login verification handler.

Completes MFA_PENDING -> SESSION_ISSUED. Accepts a TOTP code (±1 step) or an
unused backup code, which is consumed.

The temporary token is not consumed: it stays valid until it expires.
"""

from src.application.commands.auth_commands import VerifyMfaLogin
from src.application.dtos.auth_dtos import AuthResult
from src.application.services.mfa_verifier import MfaVerifier
from src.application.services.session_starter import SessionStarter
from src.application.services.token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.protocols import LOGIN_WINDOW, LoggerProtocol, UserRepository


class VerifyMfaHandler:
    """Handler for the second login step."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: SessionTokenService,
        mfa_verifier: MfaVerifier,
        session_starter: SessionStarter,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._mfa_verifier = mfa_verifier
        self._session_starter = session_starter
        self._logger = logger

    async def handle(self, cmd: VerifyMfaLogin) -> Result[AuthResult, DomainError]:
        """Handle MFA verification command.

        Returns:
            Success(AuthResult) on a valid code.
            Failure(AuthenticationError) for a bad temp token, an account
            without MFA, or a wrong code. Failure(DecryptError) if the stored
            secret is unreadable.
        """
        user_id = self._token_service.verify_temporary_token(cmd.temp_token)
        if user_id is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthMessage.INVALID_TOKEN,
                )
            )

        user = await self._user_repo.find_by_id(user_id)
        if user is None or user.is_deactivated() or user.mfa_secret is None:
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.MFA_NOT_CONFIGURED,
                    message=AuthMessage.MFA_NOT_CONFIGURED,
                )
            )

        match await self._mfa_verifier.verify(user, cmd.code, LOGIN_WINDOW):
            case Failure(error=error):
                self._logger.error(
                    "mfa_secret_unreadable",
                    user_id=str(user.id),
                    error_code=error.code.value,
                )
                return Failure(error=error)
            case Success(value=False):
                self._logger.info("mfa_verify_failed", user_id=str(user.id))
                return Failure(
                    error=AuthenticationError(
                        code=ErrorCode.MFA_CODE_INVALID,
                        message=AuthMessage.INVALID_MFA_CODE,
                    )
                )
            case Success(value=True):
                pass

        auth = await self._session_starter.start(user, cmd.client)
        self._logger.info("login_succeeded", user_id=str(user.id), mfa=True)
        return Success(value=auth)
