"""Common error classes used across all layers.

Error Types (HTTP status applied by the presentation layer):
- ValidationError: Malformed input (400)
- AuthenticationError: Bad credentials or token (401)
- AuthorizationError: Valid identity, insufficient state (403)
- NotFoundError: Unknown resource (404)
- ConflictError: Duplicate or conflicting state (409)
- EncryptionError / DecryptError: Secret-at-rest failures (opaque 500)
- TransientError: Best-effort side effect failed (logged, never surfaced)

Usage:
    from src.core.errors import ValidationError
    from src.core.enums import ErrorCode
    from src.core.result import Failure

    return Failure(error=ValidationError(
        code=ErrorCode.MFA_NOT_SETUP,
        message="Please setup MFA first",
    ))
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Device).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate email, MFA already enabled).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (invalid credentials, token or MFA code)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure (identity is valid, state is not).

    Attributes:
        required_permission: Permission or state that was required.
    """

    required_permission: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EncryptionError(DomainError):
    """Encryption of a secret failed (key invalid, cipher failure)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class DecryptError(EncryptionError):
    """Ciphertext could not be decrypted (malformed blob or tag mismatch)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class TransientError(DomainError):
    """Best-effort side effect failed (email, notification).

    Logged by the handler that produced it; never returned to a client.

    Attributes:
        operation: Name of the side effect that failed.
    """

    operation: str
