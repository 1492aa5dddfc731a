"""Application DTOs (handler results)."""

from src.application.dtos.auth_dtos import (
    AuthResult,
    AuthTokens,
    LoginResult,
    MfaEnableResult,
    MfaSetupResult,
    UserSummary,
)

__all__ = [
    "AuthResult",
    "AuthTokens",
    "LoginResult",
    "MfaEnableResult",
    "MfaSetupResult",
    "UserSummary",
]
