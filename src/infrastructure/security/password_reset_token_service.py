"""Password reset token service.

Generates unguessable reset tokens. Only the SHA-256 digest is persisted on
the user, the plaintext travels once inside the reset email.
"""

import hashlib
import secrets
from datetime import UTC, datetime, timedelta

RESET_TOKEN_BYTES = 32


class PasswordResetTokenService:
    """Password reset token generation service.

    Usage:
        service = PasswordResetTokenService(expiration_hours=1)

        token = service.generate_token()
        user.set_password_reset(
            service.hash_token(token), service.calculate_expiration()
        )
        reset_url = f"{settings.app_url}/auth/reset-password?token={token}"
    """

    def __init__(self, expiration_hours: int = 1) -> None:
        """Initialize password reset token service.

        Args:
            expiration_hours: Token lifetime in hours (default: 1).
        """
        self._expiration_hours = expiration_hours

    def generate_token(self) -> str:
        """Generate password reset token.

        Returns:
            64-character hex string (32 bytes of entropy).
        """
        return secrets.token_hex(RESET_TOKEN_BYTES)

    def hash_token(self, token: str) -> str:
        """Digest a token for storage and lookup.

        Example:
            >>> service.hash_token("abc") == hashlib.sha256(b"abc").hexdigest()
            True
        """
        return hashlib.sha256(token.encode("utf-8")).hexdigest()

    def calculate_expiration(self) -> datetime:
        """Calculate token expiry from now."""
        return datetime.now(UTC) + timedelta(hours=self._expiration_hours)
