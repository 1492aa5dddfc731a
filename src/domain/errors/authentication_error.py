"""Authentication message constants.

Client-facing messages for every auth failure and confirmation. Handlers
wrap them in core DomainError subclasses (the subclass decides the HTTP
status); the strings themselves are stable API.

Architecture:
    - Domain layer constants (no infrastructure dependencies)
    - Used in Result types (railway-oriented programming)
    - Never raised as exceptions

Usage:
    from src.core.errors import AuthenticationError
    from src.core.enums import ErrorCode
    from src.domain.errors import AuthMessage

    return Failure(
        error=AuthenticationError(
            code=ErrorCode.INVALID_CREDENTIALS,
            message=AuthMessage.INVALID_CREDENTIALS,
        )
    )
"""


class AuthMessage:
    """Authentication message constants.

    Error Categories:
        - Credential errors: INVALID_CREDENTIALS, ACCOUNT_DEACTIVATED
        - Token errors: INVALID_TOKEN, INVALID_REFRESH_TOKEN, INVALID_RESET_TOKEN
        - MFA errors: MFA_NOT_CONFIGURED, INVALID_MFA_CODE, MFA_SETUP_REQUIRED
        - Account errors: EMAIL_ALREADY_REGISTERED, SUBSCRIPTION_REQUIRED
    """

    # Credential errors
    INVALID_CREDENTIALS = "Invalid email or password"
    ACCOUNT_DEACTIVATED = "Account has been deactivated"
    INVALID_PASSWORD = "Invalid password"
    CURRENT_PASSWORD_INCORRECT = "Current password is incorrect"

    # Token errors
    INVALID_TOKEN = "Invalid or expired token"
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    INVALID_RESET_TOKEN = "Invalid or expired reset token"

    # MFA errors
    MFA_NOT_CONFIGURED = "MFA not configured"
    INVALID_MFA_CODE = "Invalid MFA code"
    MFA_SETUP_REQUIRED = "Please setup MFA first"
    INVALID_CODE = "Invalid code"
    MFA_ALREADY_ENABLED = "MFA already enabled"
    MFA_NOT_ENABLED = "MFA is not enabled"
    MFA_SETUP_CHANGED = "MFA setup was restarted; verify a code for the latest secret"

    # Account errors
    EMAIL_ALREADY_REGISTERED = "Email already registered"
    SUBSCRIPTION_REQUIRED = "Subscription required"
    USER_NOT_FOUND = "User not found"
    DEVICE_NOT_FOUND = "Device not found"


class AuthConfirmation:
    """Confirmation messages returned in successful responses."""

    PASSWORD_RESET_REQUESTED = (
        "If an account exists, a password reset email has been sent."
    )
    PASSWORD_RESET_COMPLETE = (
        "Password reset successful. Please login with your new password."
    )
    PASSWORD_CHANGED = "Password changed successfully"
    LOGGED_OUT = "Logged out successfully"
    LOGGED_OUT_ALL = "Logged out from all devices"
    DEVICE_REMOVED = "Device removed"
    MFA_ENABLED = "MFA enabled successfully"
    MFA_DISABLED = "MFA disabled successfully"
