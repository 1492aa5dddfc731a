"""Application commands (CQRS write side)."""

from src.application.commands.auth_commands import (
    ClientContext,
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshAccessToken,
    RegisterUser,
    VerifyMfaLogin,
)
from src.application.commands.device_commands import RemoveDevice
from src.application.commands.mfa_commands import DisableMfa, EnableMfa, SetupMfa
from src.application.commands.password_commands import (
    ChangePassword,
    ConfirmPasswordReset,
    RequestPasswordReset,
)

__all__ = [
    "ChangePassword",
    "ClientContext",
    "ConfirmPasswordReset",
    "DisableMfa",
    "EnableMfa",
    "LoginUser",
    "LogoutAllSessions",
    "LogoutUser",
    "RefreshAccessToken",
    "RegisterUser",
    "RemoveDevice",
    "RequestPasswordReset",
    "SetupMfa",
    "VerifyMfaLogin",
]
