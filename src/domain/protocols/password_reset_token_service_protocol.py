"""Password reset token service protocol."""

from datetime import datetime
from typing import Protocol


class PasswordResetTokenServiceProtocol(Protocol):
    """Generate reset tokens, hash them for storage, compute expiry.

    Only the SHA-256 digest of the token is stored. The plaintext leaves the
    system once, inside the reset email.
    """

    def generate_token(self) -> str:
        """Return 32 random bytes as 64 hex characters."""
        ...

    def hash_token(self, token: str) -> str:
        """Return the SHA-256 hex digest of a token."""
        ...

    def calculate_expiration(self) -> datetime:
        """Return now + reset lifetime (1 hour by default)."""
        ...
