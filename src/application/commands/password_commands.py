"""Password commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID

from src.domain.types import Email, Password


@dataclass(frozen=True, kw_only=True)
class ChangePassword:
    """Change password of an authenticated user.

    Existing sessions stay valid.
    """

    user_id: UUID
    current_password: str
    new_password: Password


@dataclass(frozen=True, kw_only=True)
class RequestPasswordReset:
    """Email a reset link if an active account uses this address."""

    email: Email


@dataclass(frozen=True, kw_only=True)
class ConfirmPasswordReset:
    """Set a new password with an emailed reset token.

    Revokes every session of the account.
    """

    token: str
    new_password: Password
