"""Refresh token handler.

Rotates the session's token pair. Each refresh token works once: the
rotation overwrites it, and a concurrent second use loses the conditional
UPDATE.
"""

from src.application.commands.auth_commands import RefreshAccessToken
from src.application.dtos.auth_dtos import AuthTokens
from src.application.services.token_service import SessionTokenService
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.protocols import LoggerProtocol


class RefreshAccessTokenHandler:
    """Handler for refresh token rotation."""

    def __init__(
        self,
        token_service: SessionTokenService,
        logger: LoggerProtocol,
    ) -> None:
        self._token_service = token_service
        self._logger = logger

    async def handle(self, cmd: RefreshAccessToken) -> Result[AuthTokens, DomainError]:
        """Handle refresh command.

        Returns:
            Success(AuthTokens) with the new pair.
            Failure(AuthenticationError) if the token is unknown, expired or reused.
        """
        tokens = await self._token_service.refresh(cmd.refresh_token)
        if tokens is None:
            self._logger.info("refresh_rejected")
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.TOKEN_INVALID,
                    message=AuthMessage.INVALID_REFRESH_TOKEN,
                )
            )
        return Success(value=tokens)
