"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*, MFA_NOT_SETUP)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS, *_ALREADY_ENABLED)
- Authentication errors (INVALID_CREDENTIALS, TOKEN_*, MFA_CODE_INVALID)
- Authorization errors (SUBSCRIPTION_REQUIRED)
- Encryption errors (ENCRYPTION_*, DECRYPTION_FAILED)
- Side-effect errors (NOTIFICATION_FAILED)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    INVALID_EMAIL = "invalid_email"
    INVALID_PASSWORD = "invalid_password"
    PASSWORD_TOO_WEAK = "password_too_weak"
    VALIDATION_FAILED = "validation_failed"
    RESET_TOKEN_INVALID = "reset_token_invalid"
    MFA_NOT_SETUP = "mfa_not_setup"
    MFA_NOT_ENABLED = "mfa_not_enabled"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    DEVICE_NOT_FOUND = "device_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"
    MFA_ALREADY_ENABLED = "mfa_already_enabled"
    MFA_SETUP_CHANGED = "mfa_setup_changed"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_DEACTIVATED = "account_deactivated"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"
    MFA_CODE_INVALID = "mfa_code_invalid"
    MFA_NOT_CONFIGURED = "mfa_not_configured"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"
    SUBSCRIPTION_REQUIRED = "subscription_required"

    # Encryption errors
    ENCRYPTION_KEY_INVALID = "encryption_key_invalid"
    ENCRYPTION_FAILED = "encryption_failed"
    DECRYPTION_FAILED = "decryption_failed"
    INVALID_INPUT = "invalid_input"

    # Best-effort side effects
    NOTIFICATION_FAILED = "notification_failed"
    IDENTITY_PROVIDER_NOT_CONFIGURED = "identity_provider_not_configured"
