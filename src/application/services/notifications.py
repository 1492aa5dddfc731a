"""Best-effort notification dispatch.

Emails sent by auth flows (welcome, reset link, backup codes, password
changed) never decide the outcome of the request. A failure becomes a
TransientError, is logged at warning, and is dropped.
"""

from collections.abc import Awaitable, Callable
from typing import Any

from src.core.enums import ErrorCode
from src.core.errors import TransientError
from src.core.result import Failure, Result, Success
from src.domain.protocols import LoggerProtocol


async def notify_best_effort(
    logger: LoggerProtocol,
    operation: str,
    send: Callable[[], Awaitable[None]],
    **context: Any,
) -> Result[None, TransientError]:
    """Run send() and convert any failure into a logged TransientError.

    Example:
        await notify_best_effort(
            self._logger,
            "welcome_email",
            lambda: self._email_service.send_welcome_email(user.email, user.name),
            user_id=str(user.id),
        )
    """
    try:
        await send()
    except Exception as e:  # noqa: BLE001
        error = TransientError(
            code=ErrorCode.NOTIFICATION_FAILED,
            message=str(e) or type(e).__name__,
            operation=operation,
        )
        logger.warning(
            "notification_failed",
            operation=operation,
            error_type=type(e).__name__,
            error_message=error.message,
            **context,
        )
        return Failure(error=error)
    return Success(value=None)
