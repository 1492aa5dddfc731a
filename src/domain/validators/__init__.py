"""Domain validators.

Pure validation functions used by the Annotated types in src.domain.types.
"""

from src.domain.validators.functions import (
    validate_email,
    validate_mfa_code,
    validate_strong_password,
    validate_token_format,
)

__all__ = [
    "validate_email",
    "validate_mfa_code",
    "validate_strong_password",
    "validate_token_format",
]
