"""TOTP service for multi-factor authentication (adapter).

Implements TOTPProtocol with pyotp (RFC 6238: SHA1, 6 digits, 30s steps)
and renders enrollment QR codes with qrcode.

Verification windows:
    - LOGIN_WINDOW (1 step, ±30s): login, MFA disable
    - ENABLE_WINDOW (2 steps, ±60s): first verification when enabling, where
      the user is still typing from a freshly scanned app
"""

import base64
import io
import secrets
from datetime import datetime

import pyotp
import qrcode

from src.domain.protocols.totp_protocol import ENABLE_WINDOW, LOGIN_WINDOW, TOTPSecret

__all__ = ["ENABLE_WINDOW", "LOGIN_WINDOW", "TOTPService"]

SECRET_LENGTH = 32
CODE_DIGITS = 6
BACKUP_CODE_BYTES = 4
BACKUP_CODE_COUNT = 10


class TOTPService:
    """TOTP secret generation and code verification.

    Usage:
        totp = TOTPService(issuer="Wyndo")
        enrollment = totp.generate_secret("Wyndo (alice@example.com)")
        totp.verify_code(enrollment.secret, "123456", window=LOGIN_WINDOW)
    """

    def __init__(self, issuer: str) -> None:
        self._issuer = issuer

    def generate_secret(self, label: str) -> TOTPSecret:
        """Generate a base32 secret with its otpauth URL and QR code.

        Args:
            label: Account label shown in the authenticator app.
        """
        secret = pyotp.random_base32(length=SECRET_LENGTH)
        otpauth_url = pyotp.TOTP(secret).provisioning_uri(
            name=label, issuer_name=self._issuer
        )
        return TOTPSecret(
            secret=secret,
            otpauth_url=otpauth_url,
            qr_code=self._render_qr_code(otpauth_url),
        )

    def verify_code(
        self,
        secret: str,
        code: str,
        window: int,
        for_time: datetime | None = None,
    ) -> bool:
        """Verify a 6-digit code, accepting ±window steps of clock drift.

        Returns:
            False for malformed codes instead of raising.
        """
        if len(code) != CODE_DIGITS or not code.isdigit():
            return False
        totp = pyotp.TOTP(secret)
        if for_time is None:
            return totp.verify(code, valid_window=window)
        return totp.verify(code, for_time=for_time, valid_window=window)

    def generate_backup_codes(self, count: int = BACKUP_CODE_COUNT) -> list[str]:
        """Generate single-use backup codes.

        Example:
            >>> codes = TOTPService("Wyndo").generate_backup_codes()
            >>> len(codes), len(codes[0])
            (10, 8)
        """
        return [secrets.token_bytes(BACKUP_CODE_BYTES).hex().upper() for _ in range(count)]

    def _render_qr_code(self, data: str) -> str:
        image = qrcode.make(data)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        encoded = base64.b64encode(buffer.getvalue()).decode("ascii")
        return f"data:image/png;base64,{encoded}"
