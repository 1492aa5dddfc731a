"""Logout handlers.

Both are idempotent: logging out twice, or with a session that was already
revoked elsewhere, still succeeds.
"""

from src.application.commands.auth_commands import LogoutAllSessions, LogoutUser
from src.application.services.token_service import SessionTokenService
from src.core.errors import DomainError
from src.core.result import Result, Success
from src.domain.errors import AuthConfirmation
from src.domain.protocols import LoggerProtocol


class LogoutUserHandler:
    """Revoke the current session."""

    def __init__(self, token_service: SessionTokenService, logger: LoggerProtocol) -> None:
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: LogoutUser) -> Result[str, DomainError]:
        await self._token_service.revoke(cmd.access_token)
        self._logger.info("logout")
        return Success(value=AuthConfirmation.LOGGED_OUT)


class LogoutAllSessionsHandler:
    """Revoke every session of the user."""

    def __init__(self, token_service: SessionTokenService, logger: LoggerProtocol) -> None:
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: LogoutAllSessions) -> Result[str, DomainError]:
        count = await self._token_service.revoke_all(cmd.user_id)
        self._logger.info("logout_all", user_id=str(cmd.user_id), count=count)
        return Success(value=AuthConfirmation.LOGGED_OUT_ALL)
