"""Validated string types shared by request schemas.

Each alias bundles length bounds (``Field``) with a domain validator
(``AfterValidator``), so a schema field declared as ``Email`` is already
normalized by the time a handler sees it:

    class LoginRequest(BaseModel):
        email: Email
        password: str
"""

from typing import Annotated

from pydantic import AfterValidator, Field

from src.domain.validators import (
    validate_email,
    validate_mfa_code,
    validate_strong_password,
    validate_token_format,
)

# Lowercased and stripped, e.g. "Alice@Example.COM" -> "alice@example.com".
Email = Annotated[
    str,
    Field(min_length=5, max_length=255, examples=["owner@example.com"]),
    AfterValidator(validate_email),
]

# 8+ characters with upper, lower and digit; at most 72 UTF-8 bytes (bcrypt).
Password = Annotated[
    str,
    Field(min_length=8, max_length=72, examples=["SecurePass123"]),
    AfterValidator(validate_strong_password),
]

# 6-digit TOTP code, or 8-hex backup code returned uppercased.
MfaCode = Annotated[
    str,
    Field(min_length=6, max_length=16, examples=["123456", "A1B2C3D4"]),
    AfterValidator(validate_mfa_code),
]

ResetToken = Annotated[
    str,
    Field(min_length=64, max_length=64, description="64 hex characters"),
    AfterValidator(validate_token_format),
]

RefreshToken = Annotated[str, Field(min_length=1, max_length=128)]
