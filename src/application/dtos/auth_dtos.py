"""Authentication DTOs (Data Transfer Objects).

Result dataclasses carried from handlers back to the presentation layer.

DTOs:
    - AuthTokens: Access/refresh token pair of a session
    - UserSummary: Public view of a User
    - AuthResult: User plus tokens (register, login, MFA verify)
    - LoginResult: Either an AuthResult or an MFA challenge
    - MfaSetupResult: Secret and QR code for authenticator enrollment
    - MfaEnableResult: Backup codes shown once
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from src.domain.entities.user import User
from src.domain.enums import SubscriptionStatus, SubscriptionTier


@dataclass(frozen=True, kw_only=True)
class AuthTokens:
    """Tokens returned to the client.

    Attributes:
        access_token: JWT access token (short-lived, 15 minutes).
        refresh_token: Opaque refresh token (single use, 7 days).
        token_type: Token type (always "bearer").
        expires_in: Access token expiration in seconds.
    """

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = 900  # 15 minutes in seconds


@dataclass(frozen=True, kw_only=True)
class UserSummary:
    """User fields safe to return to the account owner."""

    id: UUID
    email: str
    name: str | None
    business_name: str | None
    trade_type: str | None
    subscription_tier: SubscriptionTier
    subscription_status: SubscriptionStatus
    trial_ends_at: datetime | None
    mfa_enabled: bool
    created_at: datetime

    @classmethod
    def from_entity(cls, user: User) -> "UserSummary":
        return cls(
            id=user.id,
            email=user.email,
            name=user.name,
            business_name=user.business_name,
            trade_type=user.trade_type,
            subscription_tier=user.subscription_tier,
            subscription_status=user.subscription_status,
            trial_ends_at=user.trial_ends_at,
            mfa_enabled=user.mfa_enabled,
            created_at=user.created_at,
        )


@dataclass(frozen=True, kw_only=True)
class AuthResult:
    """Authenticated user with a freshly issued session."""

    user: UserSummary
    tokens: AuthTokens


@dataclass(frozen=True, kw_only=True)
class LoginResult:
    """Outcome of a password login.

    Exactly one of auth or temp_token is set: when requires_mfa is True the
    client must call the MFA verify endpoint with temp_token.
    """

    requires_mfa: bool
    auth: AuthResult | None = None
    temp_token: str | None = None


@dataclass(frozen=True, kw_only=True)
class MfaSetupResult:
    """Enrollment material for an authenticator app."""

    secret: str
    qr_code: str
    otpauth_url: str


@dataclass(frozen=True, kw_only=True)
class MfaEnableResult:
    """Plaintext backup codes, returned once."""

    message: str
    backup_codes: list[str]
