"""Centralized validation functions (DRY principle).

All validation logic defined once, reused everywhere via Annotated types.
Validators are pure functions that raise ValueError on validation failure.
"""

import re

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_HEX_PATTERN = re.compile(r"^[a-fA-F0-9]+$")


def validate_email(v: str) -> str:
    """Validate email format.

    Args:
        v: Email address to validate.

    Returns:
        Normalized email (lowercase, surrounding whitespace removed).

    Raises:
        ValueError: If email format is invalid.

    Example:
        >>> validate_email("User@Example.COM")
        'user@example.com'
        >>> validate_email("invalid")
        ValueError: Invalid email format
    """
    v = v.strip()
    if not _EMAIL_PATTERN.match(v):
        raise ValueError("Invalid email format")
    return v.lower()


def validate_strong_password(v: str) -> str:
    """Validate password strength.

    Requirements: at least 8 characters with an uppercase letter, a
    lowercase letter and a digit. Special characters are allowed but not
    required.

    Raises:
        ValueError: If password doesn't meet requirements.

    Example:
        >>> validate_strong_password("Password1")
        'Password1'
        >>> validate_strong_password("weak")
        ValueError: Password must be at least 8 characters
    """
    if len(v) < 8:
        raise ValueError("Password must be at least 8 characters")
    if not any(c.isupper() for c in v):
        raise ValueError("Password must contain uppercase letter")
    if not any(c.islower() for c in v):
        raise ValueError("Password must contain lowercase letter")
    if not any(c.isdigit() for c in v):
        raise ValueError("Password must contain digit")
    if len(v.encode("utf-8")) > 72:
        raise ValueError("Password must be at most 72 bytes")
    return v


def validate_token_format(v: str) -> str:
    """Validate token format (hex string).

    Used for password reset tokens and refresh tokens.

    Raises:
        ValueError: If token is empty or not hexadecimal.
    """
    if not v:
        raise ValueError("Token cannot be empty")
    if not _HEX_PATTERN.match(v):
        raise ValueError("Token must be hexadecimal")
    return v


def validate_mfa_code(v: str) -> str:
    """Validate an MFA code shape.

    Accepts a 6-digit TOTP code or an 8-character hex backup code. Surrounding
    whitespace is removed and backup codes are uppercased.

    Example:
        >>> validate_mfa_code(" 123456 ")
        '123456'
        >>> validate_mfa_code("a1b2c3d4")
        'A1B2C3D4'
    """
    v = v.strip()
    if len(v) == 6 and v.isdigit():
        return v
    if len(v) == 8 and _HEX_PATTERN.match(v):
        return v.upper()
    raise ValueError("Code must be a 6-digit code or an 8-character backup code")
