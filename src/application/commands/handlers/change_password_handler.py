"""Change password handler (authenticated).

Existing sessions are left alone; only the password reset flow revokes them.
"""

import asyncio

from src.application.commands.password_commands import ChangePassword
from src.application.services.notifications import notify_best_effort
from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError, DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthConfirmation, AuthMessage
from src.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class ChangePasswordHandler:
    """Handler for password change with current-password confirmation."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        email_service: EmailProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._user_repo = user_repo
        self._password_service = password_service
        self._email_service = email_service
        self._logger = logger

    async def handle(self, cmd: ChangePassword) -> Result[str, DomainError]:
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

        current_ok = await asyncio.to_thread(
            self._password_service.verify_password,
            cmd.current_password,
            user.password_hash,
        )
        if not current_ok:
            self._logger.info("password_change_failed", user_id=str(user.id))
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message=AuthMessage.CURRENT_PASSWORD_INCORRECT,
                )
            )

        new_hash = await asyncio.to_thread(
            self._password_service.hash_password, cmd.new_password
        )
        user.change_password(new_hash)
        await self._user_repo.set_password_hash(user.id, new_hash)
        self._logger.info("password_changed", user_id=str(user.id))

        await notify_best_effort(
            self._logger,
            "password_changed_email",
            lambda: self._email_service.send_password_changed_notification(user.email),
            user_id=str(user.id),
        )

        return Success(value=AuthConfirmation.PASSWORD_CHANGED)
