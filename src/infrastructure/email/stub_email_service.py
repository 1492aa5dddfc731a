"""Stub email service.

Logs outbound notifications instead of sending them. Selected by the
container; recipients and links are logged, backup codes are not.
"""

from src.domain.protocols.logger_protocol import LoggerProtocol


class StubEmailService:
    """EmailProtocol implementation that writes to the structured log.

    Example:
        >>> service = StubEmailService(logger=get_logger(), from_address="noreply@wyndo.app")
        >>> await service.send_welcome_email("alice@example.com", "Alice")
    """

    def __init__(self, logger: LoggerProtocol, from_address: str = "noreply@wyndo.app") -> None:
        self._logger = logger.bind(email_service="stub", from_address=from_address)

    async def send_welcome_email(self, to_email: str, name: str | None) -> None:
        self._logger.info(
            "email_stub_sent",
            template="welcome",
            to_email=to_email,
            name=name,
        )

    async def send_password_reset_email(self, to_email: str, reset_url: str) -> None:
        # The URL carries a live token; only development logs ever see it.
        self._logger.info(
            "email_stub_sent",
            template="password_reset",
            to_email=to_email,
            reset_url=reset_url,
        )

    async def send_backup_codes_email(
        self, to_email: str, backup_codes: list[str]
    ) -> None:
        self._logger.info(
            "email_stub_sent",
            template="backup_codes",
            to_email=to_email,
            code_count=len(backup_codes),
        )

    async def send_password_changed_notification(self, to_email: str) -> None:
        self._logger.info(
            "email_stub_sent",
            template="password_changed",
            to_email=to_email,
        )
