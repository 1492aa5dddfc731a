"""Password reset request handler.

The response never reveals whether the email belongs to an account. Only the
SHA256 of the emailed token is stored; a new request replaces any
outstanding token.
"""

from src.application.commands.password_commands import RequestPasswordReset
from src.application.services.notifications import notify_best_effort
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.errors import AuthConfirmation
from src.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordResetTokenServiceProtocol,
    UserRepository,
)


class RequestPasswordResetHandler:
    """Handler for "forgot password"."""

    def __init__(
        self,
        user_repo: UserRepository,
        reset_token_service: PasswordResetTokenServiceProtocol,
        email_service: EmailProtocol,
        logger: LoggerProtocol,
        app_url: str,
    ) -> None:
        self._user_repo = user_repo
        self._reset_token_service = reset_token_service
        self._email_service = email_service
        self._logger = logger
        self._app_url = app_url.rstrip("/")

    async def handle(self, cmd: RequestPasswordReset) -> Result[str, DomainError]:
        """Handle reset request.

        Returns:
            Success(generic message) in every case.
        """
        user = await self._user_repo.find_by_email(cmd.email.strip().lower())

        if user is None or user.is_deactivated():
            self._logger.info("password_reset_requested", matched=False)
            return Success(value=AuthConfirmation.PASSWORD_RESET_REQUESTED)

        token = self._reset_token_service.generate_token()
        token_hash = self._reset_token_service.hash_token(token)
        expires_at = self._reset_token_service.calculate_expiration()
        user.set_password_reset(token_hash, expires_at)
        await self._user_repo.set_reset_token(user.id, token_hash, expires_at)
        self._logger.info("password_reset_requested", matched=True, user_id=str(user.id))

        reset_url = f"{self._app_url}/auth/reset-password?token={token}"
        await notify_best_effort(
            self._logger,
            "password_reset_email",
            lambda: self._email_service.send_password_reset_email(user.email, reset_url),
            user_id=str(user.id),
        )

        return Success(value=AuthConfirmation.PASSWORD_RESET_REQUESTED)
