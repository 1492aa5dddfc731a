"""Authentication commands (CQRS write operations).

Commands represent user intent to change system state.
All commands are immutable (frozen=True) and use keyword-only arguments (kw_only=True).

Pattern:
- Commands are data containers (no logic)
- Handlers execute business logic
- Handlers return Result types
- Field validation happens in the request schemas (Annotated types)
"""

from dataclasses import dataclass, field
from uuid import UUID

from src.domain.enums import DevicePlatform
from src.domain.types import Email, Password


@dataclass(frozen=True, kw_only=True)
class ClientContext:
    """Where a request came from, used to identify the device.

    Attributes:
        device_id: Client-supplied device id (body or X-Device-Id header).
        ip_address: Client IP address.
        user_agent: User-Agent header.
        platform: Client-declared platform, wins over the UA guess.
        device_name: Client-declared device name, wins over the UA guess.
    """

    device_id: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    platform: DevicePlatform | None = None
    device_name: str | None = None


@dataclass(frozen=True, kw_only=True)
class RegisterUser:
    """Register new user account and start a session.

    Example:
        >>> command = RegisterUser(
        ...     email="user@example.com",
        ...     password="SecurePass123",
        ...     name="Alice",
        ... )
        >>> result = await handler.handle(command)
    """

    email: Email
    password: Password
    name: str
    business_name: str | None = None
    trade_type: str | None = None
    client: ClientContext = field(default_factory=ClientContext)


@dataclass(frozen=True, kw_only=True)
class LoginUser:
    """Authenticate with email and password.

    Returns tokens directly, or a temporary token when MFA is enabled.
    """

    email: str
    password: str
    client: ClientContext = field(default_factory=ClientContext)


@dataclass(frozen=True, kw_only=True)
class VerifyMfaLogin:
    """Complete an MFA-pending login with a TOTP or backup code."""

    temp_token: str
    code: str
    client: ClientContext = field(default_factory=ClientContext)


@dataclass(frozen=True, kw_only=True)
class RefreshAccessToken:
    """Rotate the token pair of a session (single use of refresh_token)."""

    refresh_token: str


@dataclass(frozen=True, kw_only=True)
class LogoutUser:
    """Revoke the session that issued access_token."""

    access_token: str


@dataclass(frozen=True, kw_only=True)
class LogoutAllSessions:
    """Revoke every session of a user."""

    user_id: UUID
