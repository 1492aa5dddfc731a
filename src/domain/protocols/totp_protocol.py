"""TOTP protocol for multi-factor authentication."""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

# Accepted clock drift in 30s steps. Enabling tolerates more because the
# user is typing from a freshly scanned app.
LOGIN_WINDOW = 1
ENABLE_WINDOW = 2


@dataclass(frozen=True, slots=True, kw_only=True)
class TOTPSecret:
    """Freshly generated TOTP secret with its enrollment artifacts.

    Attributes:
        secret: Base32 shared secret (plaintext, never persisted as is).
        otpauth_url: otpauth:// provisioning URI.
        qr_code: PNG data URI encoding otpauth_url.
    """

    secret: str
    otpauth_url: str
    qr_code: str


class TOTPProtocol(Protocol):
    """Time-based one-time password engine (RFC 6238, 30s steps, 6 digits)."""

    def generate_secret(self, label: str) -> TOTPSecret:
        """Generate a secret and its QR code for an authenticator app."""
        ...

    def verify_code(
        self,
        secret: str,
        code: str,
        window: int,
        for_time: datetime | None = None,
    ) -> bool:
        """Check a code against the secret, tolerating window steps of drift.

        Never raises. Malformed codes return False.
        """
        ...

    def generate_backup_codes(self, count: int = 10) -> list[str]:
        """Generate single-use backup codes (8 uppercase hex characters)."""
        ...
