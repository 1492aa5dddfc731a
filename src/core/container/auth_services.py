"""Application service dependency factories (request-scoped).

Services hold request-scoped repositories, so they are rebuilt per request.
FastAPI caches each dependency within a request, so a handler and the
services it receives share one SessionTokenService and one database session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends

from src.core.config import settings
from src.core.container.infrastructure import (
    get_device_enricher,
    get_encryption_service,
    get_jwt_service,
    get_logger,
    get_refresh_token_service,
    get_totp_service,
)
from src.core.container.repositories import (
    get_device_repository,
    get_session_repository,
    get_user_repository,
)

if TYPE_CHECKING:
    from src.application.services import (
        DeviceRegistry,
        MfaVerifier,
        SessionStarter,
        SessionTokenService,
    )
    from src.infrastructure.persistence.repositories import (
        DeviceRepository,
        SessionRepository,
        UserRepository,
    )


async def get_session_token_service(
    session_repo: "SessionRepository" = Depends(get_session_repository),
) -> "SessionTokenService":
    """Get session token service (issue, rotate, revoke)."""
    from src.application.services import SessionTokenService

    return SessionTokenService(
        session_repo=session_repo,
        jwt_service=get_jwt_service(),
        refresh_token_service=get_refresh_token_service(),
        device_enricher=get_device_enricher(),
        logger=get_logger(),
        access_token_expire_minutes=settings.access_token_expire_minutes,
    )


async def get_device_registry(
    device_repo: "DeviceRepository" = Depends(get_device_repository),
    token_service: "SessionTokenService" = Depends(get_session_token_service),
) -> "DeviceRegistry":
    from src.application.services import DeviceRegistry

    return DeviceRegistry(device_repo=device_repo, token_service=token_service)


async def get_session_starter(
    user_repo: "UserRepository" = Depends(get_user_repository),
    token_service: "SessionTokenService" = Depends(get_session_token_service),
    device_registry: "DeviceRegistry" = Depends(get_device_registry),
) -> "SessionStarter":
    from src.application.services import SessionStarter

    return SessionStarter(
        user_repo=user_repo,
        token_service=token_service,
        device_registry=device_registry,
    )


async def get_mfa_verifier(
    user_repo: "UserRepository" = Depends(get_user_repository),
) -> "MfaVerifier":
    from src.application.services import MfaVerifier

    return MfaVerifier(
        user_repo=user_repo,
        encryption_service=get_encryption_service(),
        totp_service=get_totp_service(),
        logger=get_logger(),
    )
