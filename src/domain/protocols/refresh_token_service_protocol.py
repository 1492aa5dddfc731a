"""Refresh token service protocol.

Opaque refresh tokens (not JWT). The plaintext is stored on the session row
so rotation can compare-and-set it in a single UPDATE.
"""

from datetime import datetime
from typing import Protocol


class RefreshTokenServiceProtocol(Protocol):
    """Generate opaque refresh tokens and compute their expiry."""

    def generate_token(self) -> str:
        """Return 32 random bytes as 64 hex characters."""
        ...

    def calculate_expiration(self) -> datetime:
        """Return now + refresh lifetime (7 days by default)."""
        ...
