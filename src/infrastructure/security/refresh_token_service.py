"""Refresh token service.

Opaque refresh tokens (NOT JWT): 32 random bytes rendered as 64 hex
characters. The token is stored on the session row and overwritten on every
rotation, so a used token can never match again.
"""

import secrets
from datetime import UTC, datetime, timedelta

REFRESH_TOKEN_BYTES = 32


class RefreshTokenService:
    """Refresh token generation service.

    Usage:
        service = RefreshTokenService(expiration_days=7)
        token = service.generate_token()
        expires_at = service.calculate_expiration()
    """

    def __init__(self, expiration_days: int = 7) -> None:
        """Initialize refresh token service.

        Args:
            expiration_days: Absolute session lifetime in days (default: 7).
                Rotation does not extend it.
        """
        self._expiration_days = expiration_days

    def generate_token(self) -> str:
        """Generate a refresh token.

        Example:
            >>> len(RefreshTokenService().generate_token())
            64
        """
        return secrets.token_hex(REFRESH_TOKEN_BYTES)

    def calculate_expiration(self) -> datetime:
        """Calculate session expiry from now."""
        return datetime.now(UTC) + timedelta(days=self._expiration_days)
