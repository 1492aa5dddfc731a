"""Core errors package.

Usage:
    from src.core.errors import DomainError, ValidationError, DecryptError
"""

from src.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DecryptError,
    EncryptionError,
    NotFoundError,
    TransientError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "EncryptionError",
    "DecryptError",
    "TransientError",
]
