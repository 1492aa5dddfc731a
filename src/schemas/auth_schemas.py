"""Authentication request/response schemas.

Pydantic models for API request validation and response serialization.
Kept separate from domain entities - these are HTTP-layer concerns.

Endpoints (prefix /api/v1/auth):
    POST   /register                  - Create account and first session
    POST   /login                     - Password login (may require MFA)
    POST   /mfa/verify                - Complete an MFA login
    POST   /refresh                   - Rotate the refresh token
    POST   /logout, /logout-all       - Revoke sessions
    GET    /me                        - Current user
    POST   /mfa/setup|enable|disable  - MFA enrollment
    POST   /password/reset[/confirm]  - Forgot-password flow
    POST   /password/change           - Authenticated password change
    GET    /devices                   - Device list
    DELETE /devices/{device_id}       - Forget a device
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from src.application.dtos.auth_dtos import AuthResult, AuthTokens, UserSummary
from src.domain.enums import DevicePlatform, SubscriptionStatus, SubscriptionTier
from src.domain.types import Email, MfaCode, Password, RefreshToken, ResetToken


# =============================================================================
# Shared
# =============================================================================


class DeviceInfo(BaseModel):
    """Client-supplied device metadata.

    Mobile apps send a stable install id; browsers usually omit it and get an
    IP/User-Agent fingerprint instead.
    """

    device_id: str | None = Field(
        None,
        min_length=1,
        max_length=255,
        description="Stable client device identifier",
        examples=["5f0c1d9e-ios-install"],
    )
    platform: DevicePlatform | None = Field(
        None,
        description="Overrides the platform inferred from the User-Agent",
        examples=["ios"],
    )
    name: str | None = Field(
        None,
        min_length=1,
        max_length=100,
        description="Overrides the device name inferred from the User-Agent",
        examples=["Jo's iPhone"],
    )


class MessageResponse(BaseModel):
    """Plain confirmation message."""

    message: str = Field(..., description="Human-readable confirmation")


class UserResponse(BaseModel):
    """User fields returned to the account owner."""

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
    def from_summary(cls, user: UserSummary) -> "UserResponse":
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


class TokenResponse(BaseModel):
    """Access/refresh token pair."""

    access_token: str = Field(..., description="JWT access token (15 min expiry)")
    refresh_token: str = Field(..., description="Opaque refresh token (single use)")
    token_type: str = Field(
        default="bearer", description="Token type for Authorization header"
    )
    expires_in: int = Field(
        default=900, description="Access token expiration in seconds"
    )

    @classmethod
    def from_tokens(cls, tokens: AuthTokens) -> "TokenResponse":
        return cls(
            access_token=tokens.access_token,
            refresh_token=tokens.refresh_token,
            token_type=tokens.token_type,
            expires_in=tokens.expires_in,
        )


class AuthResponse(BaseModel):
    """User with a freshly issued session."""

    user: UserResponse
    tokens: TokenResponse

    @classmethod
    def from_result(cls, result: AuthResult) -> "AuthResponse":
        return cls(
            user=UserResponse.from_summary(result.user),
            tokens=TokenResponse.from_tokens(result.tokens),
        )


# =============================================================================
# Registration and login
# =============================================================================


class RegisterRequest(BaseModel):
    """POST /register. Returns: 201 Created."""

    email: Email
    password: Password
    name: str = Field(..., min_length=1, max_length=100, description="Display name")
    business_name: str | None = Field(None, max_length=200)
    trade_type: str | None = Field(None, max_length=100)
    device_info: DeviceInfo | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "owner@example.com",
                "password": "SecurePass123",
                "name": "Sam Rivera",
                "business_name": "Rivera Plumbing",
                "trade_type": "plumbing",
            }
        }
    )


class LoginRequest(BaseModel):
    """POST /login."""

    email: Email
    password: str = Field(..., min_length=1, max_length=128)
    device_info: DeviceInfo | None = None


class LoginResponse(BaseModel):
    """Either a session or an MFA challenge.

    With requires_mfa=True only temp_token is set; call /mfa/verify next.
    """

    requires_mfa: bool = False
    user: UserResponse | None = None
    tokens: TokenResponse | None = None
    temp_token: str | None = None


class MfaVerifyRequest(BaseModel):
    """POST /mfa/verify."""

    temp_token: str = Field(..., min_length=1, max_length=2048)
    code: MfaCode
    device_info: DeviceInfo | None = None


class RefreshRequest(BaseModel):
    """POST /refresh."""

    refresh_token: RefreshToken


# =============================================================================
# Current user
# =============================================================================


class MeResponse(BaseModel):
    """GET /me."""

    user: UserResponse


# =============================================================================
# MFA
# =============================================================================


class MfaSetupResponse(BaseModel):
    """Enrollment material for an authenticator app."""

    secret: str = Field(..., description="Base32 TOTP secret")
    qr_code: str = Field(..., description="PNG data URI of the otpauth URL")
    otpauth_url: str = Field(..., description="otpauth:// provisioning URI")


class MfaEnableRequest(BaseModel):
    """POST /mfa/enable."""

    code: MfaCode


class MfaEnableResponse(BaseModel):
    """Backup codes are shown exactly once."""

    message: str
    backup_codes: list[str]


class MfaDisableRequest(BaseModel):
    """POST /mfa/disable."""

    password: str = Field(..., min_length=1, max_length=128)
    code: MfaCode


# =============================================================================
# Passwords
# =============================================================================


class PasswordResetRequest(BaseModel):
    """POST /password/reset."""

    email: Email


class PasswordResetConfirmRequest(BaseModel):
    """POST /password/reset/confirm."""

    token: ResetToken
    password: Password


class PasswordChangeRequest(BaseModel):
    """POST /password/change."""

    current_password: str = Field(..., min_length=1, max_length=128)
    new_password: Password


# =============================================================================
# Devices
# =============================================================================


class DeviceResponse(BaseModel):
    device_id: str
    platform: DevicePlatform
    name: str | None
    last_used_at: datetime
    created_at: datetime
    is_current: bool


class DeviceListResponse(BaseModel):
    devices: list[DeviceResponse]
    total_count: int
