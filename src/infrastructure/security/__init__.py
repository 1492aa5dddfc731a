"""Security infrastructure adapters.

This package contains security-related infrastructure implementations:
- Password hashing (bcrypt)
- JWT access and MFA-pending token generation/validation
- Refresh token generation (opaque hex tokens)
- Password reset token generation and digesting
- AES-256-GCM encryption of secrets at rest
- TOTP secrets, QR codes and backup codes
"""

from src.infrastructure.security.bcrypt_password_service import BcryptPasswordService
from src.infrastructure.security.encryption_service import EncryptionService
from src.infrastructure.security.jwt_service import JWTService
from src.infrastructure.security.password_reset_token_service import (
    PasswordResetTokenService,
)
from src.infrastructure.security.refresh_token_service import RefreshTokenService
from src.infrastructure.security.totp_service import (
    ENABLE_WINDOW,
    LOGIN_WINDOW,
    TOTPService,
)

__all__ = [
    "BcryptPasswordService",
    "ENABLE_WINDOW",
    "EncryptionService",
    "JWTService",
    "LOGIN_WINDOW",
    "PasswordResetTokenService",
    "RefreshTokenService",
    "TOTPService",
]
