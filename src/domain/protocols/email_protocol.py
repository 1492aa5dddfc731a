"""EmailProtocol - Port for outbound user notifications.

Defines the interface for transactional email. Infrastructure provides
implementations (StubEmailService logs instead of sending). The container
picks one, the auth core never branches on a provider.
"""

from typing import Protocol


class EmailProtocol(Protocol):
    """Email service protocol (port).

    All methods are best-effort from the caller's point of view: handlers
    catch and log failures, they never fail the request.

    Methods:
        send_welcome_email: Greet a newly registered user
        send_password_reset_email: Send password reset link
        send_backup_codes_email: Deliver MFA backup codes
        send_password_changed_notification: Notify user of password change
    """

    async def send_welcome_email(self, to_email: str, name: str | None) -> None:
        """Send the welcome email after registration."""
        ...

    async def send_password_reset_email(self, to_email: str, reset_url: str) -> None:
        """Send password reset link to user.

        Args:
            to_email: Recipient email address.
            reset_url: Full URL with the plaintext reset token.
        """
        ...

    async def send_backup_codes_email(
        self, to_email: str, backup_codes: list[str]
    ) -> None:
        """Send MFA backup codes after MFA is enabled."""
        ...

    async def send_password_changed_notification(self, to_email: str) -> None:
        """Notify user that their password was changed."""
        ...
