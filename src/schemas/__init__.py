"""Request/response schemas for API endpoints.

Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import LoginRequest, AuthResponse
"""

from src.schemas.auth_schemas import (
    AuthResponse,
    DeviceInfo,
    DeviceListResponse,
    DeviceResponse,
    LoginRequest,
    LoginResponse,
    MeResponse,
    MessageResponse,
    MfaDisableRequest,
    MfaEnableRequest,
    MfaEnableResponse,
    MfaSetupResponse,
    MfaVerifyRequest,
    PasswordChangeRequest,
    PasswordResetConfirmRequest,
    PasswordResetRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)

__all__ = [
    "AuthResponse",
    "DeviceInfo",
    "DeviceListResponse",
    "DeviceResponse",
    "LoginRequest",
    "LoginResponse",
    "MeResponse",
    "MessageResponse",
    "MfaDisableRequest",
    "MfaEnableRequest",
    "MfaEnableResponse",
    "MfaSetupResponse",
    "MfaVerifyRequest",
    "PasswordChangeRequest",
    "PasswordResetConfirmRequest",
    "PasswordResetRequest",
    "RefreshRequest",
    "RegisterRequest",
    "TokenResponse",
    "UserResponse",
]
