"""Authentication handler dependency factories.

Request-scoped handler instances for:
- Registration, login, MFA login verification
- Token refresh, logout (single and all sessions)
- MFA setup, enable, disable
- Password change and reset (request and confirm)
- Current user and device management

Usage:
    @router.post("/login")
    async def login(
        handler: LoginUserHandler = Depends(get_login_user_handler),
    ):
        result = await handler.handle(command)
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from src.core.config import settings
from src.core.container.auth_services import (
    get_device_registry,
    get_mfa_verifier,
    get_session_starter,
    get_session_token_service,
)
from src.core.container.infrastructure import (
    get_email_service,
    get_encryption_service,
    get_logger,
    get_password_reset_token_service,
    get_password_service,
    get_totp_service,
)
from src.core.container.repositories import get_user_repository

if TYPE_CHECKING:
    from src.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )
    from src.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )
    from src.application.commands.handlers.disable_mfa_handler import (
        DisableMfaHandler,
    )
    from src.application.commands.handlers.enable_mfa_handler import EnableMfaHandler
    from src.application.commands.handlers.login_user_handler import LoginUserHandler
    from src.application.commands.handlers.logout_user_handler import (
        LogoutAllSessionsHandler,
        LogoutUserHandler,
    )
    from src.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )
    from src.application.commands.handlers.remove_device_handler import (
        RemoveDeviceHandler,
    )
    from src.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )
    from src.application.commands.handlers.setup_mfa_handler import SetupMfaHandler
    from src.application.commands.handlers.verify_mfa_handler import VerifyMfaHandler
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )
    from src.application.queries.handlers.list_devices_handler import (
        ListDevicesHandler,
    )
    from src.application.services import (
        DeviceRegistry,
        MfaVerifier,
        SessionStarter,
        SessionTokenService,
    )
    from src.infrastructure.persistence.repositories import UserRepository


# ============================================================================
# Login Flow Handler Factories
# ============================================================================


async def get_register_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    session_starter: "SessionStarter" = Depends(get_session_starter),
) -> "RegisterUserHandler":
    """Get RegisterUser command handler (request-scoped)."""
    from src.application.commands.handlers.register_user_handler import (
        RegisterUserHandler,
    )

    return RegisterUserHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        session_starter=session_starter,
        email_service=get_email_service(),
        logger=get_logger(),
        trial_period_days=settings.trial_period_days,
    )


async def get_login_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_service: "SessionTokenService" = Depends(get_session_token_service),
    session_starter: "SessionStarter" = Depends(get_session_starter),
) -> "LoginUserHandler":
    """Get LoginUser command handler (request-scoped)."""
    from src.application.commands.handlers.login_user_handler import (
        LoginUserHandler,
    )

    return LoginUserHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        token_service=token_service,
        session_starter=session_starter,
        logger=get_logger(),
    )


async def get_verify_mfa_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_service: "SessionTokenService" = Depends(get_session_token_service),
    mfa_verifier: "MfaVerifier" = Depends(get_mfa_verifier),
    session_starter: "SessionStarter" = Depends(get_session_starter),
) -> "VerifyMfaHandler":
    """Get VerifyMfaLogin command handler (request-scoped)."""
    from src.application.commands.handlers.verify_mfa_handler import (
        VerifyMfaHandler,
    )

    return VerifyMfaHandler(
        user_repo=user_repo,
        token_service=token_service,
        mfa_verifier=mfa_verifier,
        session_starter=session_starter,
        logger=get_logger(),
    )


async def get_refresh_token_handler(
    token_service: "SessionTokenService" = Depends(get_session_token_service),
) -> "RefreshAccessTokenHandler":
    from src.application.commands.handlers.refresh_access_token_handler import (
        RefreshAccessTokenHandler,
    )

    return RefreshAccessTokenHandler(token_service=token_service, logger=get_logger())


async def get_logout_user_handler(
    token_service: "SessionTokenService" = Depends(get_session_token_service),
) -> "LogoutUserHandler":
    from src.application.commands.handlers.logout_user_handler import (
        LogoutUserHandler,
    )

    return LogoutUserHandler(token_service=token_service, logger=get_logger())


async def get_logout_all_handler(
    token_service: "SessionTokenService" = Depends(get_session_token_service),
) -> "LogoutAllSessionsHandler":
    from src.application.commands.handlers.logout_user_handler import (
        LogoutAllSessionsHandler,
    )

    return LogoutAllSessionsHandler(token_service=token_service, logger=get_logger())


# ============================================================================
# MFA Handler Factories
# ============================================================================


async def get_setup_mfa_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "SetupMfaHandler":
    from src.application.commands.handlers.setup_mfa_handler import SetupMfaHandler

    return SetupMfaHandler(
        user_repo=user_repo,
        encryption_service=get_encryption_service(),
        totp_service=get_totp_service(),
        logger=get_logger(),
        issuer=settings.mfa_issuer,
    )


async def get_enable_mfa_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    mfa_verifier: "MfaVerifier" = Depends(get_mfa_verifier),
) -> "EnableMfaHandler":
    from src.application.commands.handlers.enable_mfa_handler import (
        EnableMfaHandler,
    )

    return EnableMfaHandler(
        user_repo=user_repo,
        encryption_service=get_encryption_service(),
        totp_service=get_totp_service(),
        mfa_verifier=mfa_verifier,
        email_service=get_email_service(),
        logger=get_logger(),
    )


async def get_disable_mfa_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    mfa_verifier: "MfaVerifier" = Depends(get_mfa_verifier),
) -> "DisableMfaHandler":
    from src.application.commands.handlers.disable_mfa_handler import (
        DisableMfaHandler,
    )

    return DisableMfaHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        mfa_verifier=mfa_verifier,
        logger=get_logger(),
    )


# ============================================================================
# Password Handler Factories
# ============================================================================


async def get_change_password_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "ChangePasswordHandler":
    from src.application.commands.handlers.change_password_handler import (
        ChangePasswordHandler,
    )

    return ChangePasswordHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        email_service=get_email_service(),
        logger=get_logger(),
    )


async def get_request_password_reset_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "RequestPasswordResetHandler":
    from src.application.commands.handlers.request_password_reset_handler import (
        RequestPasswordResetHandler,
    )

    return RequestPasswordResetHandler(
        user_repo=user_repo,
        reset_token_service=get_password_reset_token_service(),
        email_service=get_email_service(),
        logger=get_logger(),
        app_url=settings.app_url,
    )


async def get_confirm_password_reset_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_service: "SessionTokenService" = Depends(get_session_token_service),
) -> "ConfirmPasswordResetHandler":
    from src.application.commands.handlers.confirm_password_reset_handler import (
        ConfirmPasswordResetHandler,
    )

    return ConfirmPasswordResetHandler(
        user_repo=user_repo,
        password_service=get_password_service(),
        reset_token_service=get_password_reset_token_service(),
        token_service=token_service,
        logger=get_logger(),
    )


# ============================================================================
# Account Handler Factories
# ============================================================================


async def get_current_user_handler(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "GetCurrentUserHandler":
    from src.application.queries.handlers.get_current_user_handler import (
        GetCurrentUserHandler,
    )

    return GetCurrentUserHandler(user_repo=user_repo)


async def get_list_devices_handler(
    device_registry: "DeviceRegistry" = Depends(get_device_registry),
) -> "ListDevicesHandler":
    from src.application.queries.handlers.list_devices_handler import (
        ListDevicesHandler,
    )

    return ListDevicesHandler(device_registry=device_registry)


async def get_remove_device_handler(
    device_registry: "DeviceRegistry" = Depends(get_device_registry),
) -> "RemoveDeviceHandler":
    from src.application.commands.handlers.remove_device_handler import (
        RemoveDeviceHandler,
    )

    return RemoveDeviceHandler(device_registry=device_registry, logger=get_logger())
