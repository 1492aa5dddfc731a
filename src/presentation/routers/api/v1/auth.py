"""Authentication router.

Endpoints (prefix /api/v1/auth):
    POST   /register                 - Create account, first session (201)
    POST   /login                    - Password login, or MFA challenge
    POST   /mfa/verify               - Complete an MFA login
    POST   /refresh                  - Rotate refresh token
    POST   /logout                   - Revoke current session
    POST   /logout-all               - Revoke every session
    GET    /me                       - Current user
    POST   /mfa/setup                - Start MFA enrollment
    POST   /mfa/enable               - Confirm enrollment, get backup codes
    POST   /mfa/disable              - Turn MFA off
    POST   /password/reset           - Email a reset link
    POST   /password/reset/confirm   - Set a new password with a reset token
    POST   /password/change          - Change password (authenticated)
    GET    /devices                  - Device list
    DELETE /devices/{device_id}      - Forget a device and revoke its sessions

Routes stay thin: build a command, call the handler, map the Result.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, Path, Request, status
from fastapi.responses import JSONResponse

from src.application.commands import (
    ChangePassword,
    ClientContext,
    ConfirmPasswordReset,
    DisableMfa,
    EnableMfa,
    LoginUser,
    LogoutAllSessions,
    LogoutUser,
    RefreshAccessToken,
    RegisterUser,
    RemoveDevice,
    RequestPasswordReset,
    SetupMfa,
    VerifyMfaLogin,
)
from src.application.commands.handlers.change_password_handler import (
    ChangePasswordHandler,
)
from src.application.commands.handlers.confirm_password_reset_handler import (
    ConfirmPasswordResetHandler,
)
from src.application.commands.handlers.disable_mfa_handler import DisableMfaHandler
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
from src.application.queries import GetCurrentUser, ListUserDevices
from src.application.queries.handlers.get_current_user_handler import (
    GetCurrentUserHandler,
)
from src.application.queries.handlers.list_devices_handler import ListDevicesHandler
from src.core.container import (
    get_change_password_handler,
    get_confirm_password_reset_handler,
    get_current_user_handler,
    get_disable_mfa_handler,
    get_enable_mfa_handler,
    get_list_devices_handler,
    get_login_user_handler,
    get_logout_all_handler,
    get_logout_user_handler,
    get_refresh_token_handler,
    get_register_user_handler,
    get_remove_device_handler,
    get_request_password_reset_handler,
    get_setup_mfa_handler,
    get_verify_mfa_handler,
)
from src.core.errors import DomainError
from src.core.fingerprinting import resolve_device_id
from src.core.result import Failure, Success
from src.presentation.routers.api.middleware.auth_dependencies import (
    CurrentUser,
    get_current_user,
)
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
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

router = APIRouter(prefix="/auth", tags=["Authentication"])

DeviceIdHeader = Annotated[str | None, Header(alias="X-Device-Id", max_length=255)]
AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]


def _client_context(
    request: Request,
    device_info: DeviceInfo | None,
    header_device_id: str | None,
) -> ClientContext:
    """Device id from the body, then the X-Device-Id header.

    When both are missing the handler falls back to an IP/UA fingerprint.
    Body platform and name, when sent, replace the values guessed from the UA.
    """
    info = device_info or DeviceInfo()
    return ClientContext(
        device_id=info.device_id or header_device_id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        platform=info.platform,
        device_name=info.name,
    )


def _error(request: Request, error: DomainError) -> JSONResponse:
    return ErrorResponseBuilder.from_domain_error(error, request, get_trace_id())


# =============================================================================
# Registration, login, tokens
# =============================================================================


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=AuthResponse,
    summary="Register",
    description="Create an account on a 14-day trial and sign in.",
)
async def register(
    request: Request,
    data: RegisterRequest,
    x_device_id: DeviceIdHeader = None,
    handler: RegisterUserHandler = Depends(get_register_user_handler),
) -> AuthResponse | JSONResponse:
    command = RegisterUser(
        email=data.email,
        password=data.password,
        name=data.name,
        business_name=data.business_name,
        trade_type=data.trade_type,
        client=_client_context(request, data.device_info, x_device_id),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=auth):
            return AuthResponse.from_result(auth)
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/login",
    response_model=LoginResponse,
    response_model_exclude_none=True,
    summary="Login",
    description="Returns tokens, or requires_mfa with a temp token.",
)
async def login(
    request: Request,
    data: LoginRequest,
    x_device_id: DeviceIdHeader = None,
    handler: LoginUserHandler = Depends(get_login_user_handler),
) -> LoginResponse | JSONResponse:
    command = LoginUser(
        email=data.email,
        password=data.password,
        client=_client_context(request, data.device_info, x_device_id),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=login_result) if login_result.requires_mfa:
            return LoginResponse(requires_mfa=True, temp_token=login_result.temp_token)
        case Success(value=login_result):
            auth = AuthResponse.from_result(login_result.auth)
            return LoginResponse(requires_mfa=False, user=auth.user, tokens=auth.tokens)
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/mfa/verify",
    response_model=AuthResponse,
    summary="Verify MFA login",
    description="Exchange a temp token and TOTP or backup code for tokens.",
)
async def verify_mfa(
    request: Request,
    data: MfaVerifyRequest,
    x_device_id: DeviceIdHeader = None,
    handler: VerifyMfaHandler = Depends(get_verify_mfa_handler),
) -> AuthResponse | JSONResponse:
    command = VerifyMfaLogin(
        temp_token=data.temp_token,
        code=data.code,
        client=_client_context(request, data.device_info, x_device_id),
    )
    result = await handler.handle(command)

    match result:
        case Success(value=auth):
            return AuthResponse.from_result(auth)
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    summary="Refresh tokens",
    description="Single use: the submitted refresh token stops working.",
)
async def refresh(
    request: Request,
    data: RefreshRequest,
    handler: RefreshAccessTokenHandler = Depends(get_refresh_token_handler),
) -> TokenResponse | JSONResponse:
    result = await handler.handle(RefreshAccessToken(refresh_token=data.refresh_token))

    match result:
        case Success(value=tokens):
            return TokenResponse.from_tokens(tokens)
        case Failure(error=error):
            return _error(request, error)


@router.post("/logout", response_model=MessageResponse, summary="Logout")
async def logout(
    request: Request,
    current_user: AuthenticatedUser,
    handler: LogoutUserHandler = Depends(get_logout_user_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(LogoutUser(access_token=current_user.access_token))

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


@router.post("/logout-all", response_model=MessageResponse, summary="Logout everywhere")
async def logout_all(
    request: Request,
    current_user: AuthenticatedUser,
    handler: LogoutAllSessionsHandler = Depends(get_logout_all_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(LogoutAllSessions(user_id=current_user.user_id))

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


@router.get("/me", response_model=MeResponse, summary="Current user")
async def me(
    request: Request,
    current_user: AuthenticatedUser,
    handler: GetCurrentUserHandler = Depends(get_current_user_handler),
) -> MeResponse | JSONResponse:
    result = await handler.handle(GetCurrentUser(user_id=current_user.user_id))

    match result:
        case Success(value=user):
            return MeResponse(user=UserResponse.from_summary(user))
        case Failure(error=error):
            return _error(request, error)


# =============================================================================
# MFA
# =============================================================================


@router.post(
    "/mfa/setup",
    response_model=MfaSetupResponse,
    summary="Start MFA setup",
    description="MFA stays off until /mfa/enable confirms a code.",
)
async def setup_mfa(
    request: Request,
    current_user: AuthenticatedUser,
    handler: SetupMfaHandler = Depends(get_setup_mfa_handler),
) -> MfaSetupResponse | JSONResponse:
    result = await handler.handle(SetupMfa(user_id=current_user.user_id))

    match result:
        case Success(value=setup):
            return MfaSetupResponse(
                secret=setup.secret,
                qr_code=setup.qr_code,
                otpauth_url=setup.otpauth_url,
            )
        case Failure(error=error):
            return _error(request, error)


@router.post("/mfa/enable", response_model=MfaEnableResponse, summary="Enable MFA")
async def enable_mfa(
    request: Request,
    data: MfaEnableRequest,
    current_user: AuthenticatedUser,
    handler: EnableMfaHandler = Depends(get_enable_mfa_handler),
) -> MfaEnableResponse | JSONResponse:
    result = await handler.handle(EnableMfa(user_id=current_user.user_id, code=data.code))

    match result:
        case Success(value=enabled):
            return MfaEnableResponse(
                message=enabled.message,
                backup_codes=enabled.backup_codes,
            )
        case Failure(error=error):
            return _error(request, error)


@router.post("/mfa/disable", response_model=MessageResponse, summary="Disable MFA")
async def disable_mfa(
    request: Request,
    data: MfaDisableRequest,
    current_user: AuthenticatedUser,
    handler: DisableMfaHandler = Depends(get_disable_mfa_handler),
) -> MessageResponse | JSONResponse:
    command = DisableMfa(
        user_id=current_user.user_id,
        password=data.password,
        code=data.code,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


# =============================================================================
# Passwords
# =============================================================================


@router.post(
    "/password/reset",
    response_model=MessageResponse,
    summary="Request password reset",
    description="Same response whether or not the email has an account.",
)
async def request_password_reset(
    request: Request,
    data: PasswordResetRequest,
    handler: RequestPasswordResetHandler = Depends(get_request_password_reset_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(RequestPasswordReset(email=data.email))

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


@router.post(
    "/password/reset/confirm",
    response_model=MessageResponse,
    summary="Confirm password reset",
    description="Sets the new password and signs out every session.",
)
async def confirm_password_reset(
    request: Request,
    data: PasswordResetConfirmRequest,
    handler: ConfirmPasswordResetHandler = Depends(get_confirm_password_reset_handler),
) -> MessageResponse | JSONResponse:
    command = ConfirmPasswordReset(token=data.token, new_password=data.password)
    result = await handler.handle(command)

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


@router.post("/password/change", response_model=MessageResponse, summary="Change password")
async def change_password(
    request: Request,
    data: PasswordChangeRequest,
    current_user: AuthenticatedUser,
    handler: ChangePasswordHandler = Depends(get_change_password_handler),
) -> MessageResponse | JSONResponse:
    command = ChangePassword(
        user_id=current_user.user_id,
        current_password=data.current_password,
        new_password=data.new_password,
    )
    result = await handler.handle(command)

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)


# =============================================================================
# Devices
# =============================================================================


@router.get("/devices", response_model=DeviceListResponse, summary="List devices")
async def list_devices(
    request: Request,
    current_user: AuthenticatedUser,
    x_device_id: DeviceIdHeader = None,
    handler: ListDevicesHandler = Depends(get_list_devices_handler),
) -> DeviceListResponse | JSONResponse:
    current_device_id = resolve_device_id(
        x_device_id,
        request.client.host if request.client else None,
        request.headers.get("user-agent"),
    )
    query = ListUserDevices(
        user_id=current_user.user_id,
        current_device_id=current_device_id,
    )
    result = await handler.handle(query)

    match result:
        case Success(value=device_list):
            return DeviceListResponse(
                devices=[
                    DeviceResponse(
                        device_id=item.device_id,
                        platform=item.platform,
                        name=item.name,
                        last_used_at=item.last_used_at,
                        created_at=item.created_at,
                        is_current=item.is_current,
                    )
                    for item in device_list.devices
                ],
                total_count=device_list.total_count,
            )
        case Failure(error=error):
            return _error(request, error)


@router.delete(
    "/devices/{device_id}",
    response_model=MessageResponse,
    summary="Remove device",
    description="Revokes the device's sessions. Unknown devices also return 200.",
)
async def remove_device(
    request: Request,
    current_user: AuthenticatedUser,
    device_id: Annotated[str, Path(min_length=1, max_length=255)],
    handler: RemoveDeviceHandler = Depends(get_remove_device_handler),
) -> MessageResponse | JSONResponse:
    result = await handler.handle(
        RemoveDevice(user_id=current_user.user_id, device_id=device_id)
    )

    match result:
        case Success(value=message):
            return MessageResponse(message=message)
        case Failure(error=error):
            return _error(request, error)
