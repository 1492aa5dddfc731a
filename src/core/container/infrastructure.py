"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Database (PostgreSQL / SQLite)
- Logging (structlog console)
- Password hashing (bcrypt)
- Token generation (JWT, refresh, password reset)
- Encryption (AES-256-GCM)
- TOTP (pyotp)
- Email (stub)
- External identity verification (disabled)
- Device enrichment (user-agents)

Adapter selection happens here (composition root); handlers only ever see
protocols.
"""

from functools import lru_cache
from typing import TYPE_CHECKING, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import settings
from src.infrastructure.persistence.database import Database

if TYPE_CHECKING:
    from src.domain.protocols import (
        DeviceEnricher,
        EmailProtocol,
        ExternalIdentityVerifier,
        LoggerProtocol,
        PasswordHashingProtocol,
        PasswordResetTokenServiceProtocol,
        RefreshTokenServiceProtocol,
        TokenGenerationProtocol,
        TOTPProtocol,
    )
    from src.infrastructure.security import EncryptionService


# ============================================================================
# Application-Scoped Dependencies (Singletons)
# ============================================================================


@lru_cache()
def get_database() -> Database:
    """Get database manager singleton (app-scoped).

    Use get_db_session() for per-request sessions.
    """
    return Database(
        database_url=settings.database_url,
        echo=settings.db_echo,
    )


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    - development/production: ConsoleAdapter (human-readable)
    - testing/ci: ConsoleAdapter (JSON)
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    use_json = settings.is_testing or settings.is_ci
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)


@lru_cache()
def get_encryption_service() -> "EncryptionService":
    """Get encryption service singleton (app-scoped).

    Raises:
        RuntimeError: If the encryption key is invalid. Fails at startup
            rather than on the first MFA request.
    """
    from src.core.result import Failure, Success
    from src.infrastructure.security import EncryptionService

    result = EncryptionService.create(settings.encryption_key)

    match result:
        case Success(value=service):
            return service
        case Failure(error=err):
            raise RuntimeError(
                f"Failed to initialize encryption service: {err.message}"
            )


# ============================================================================
# Security Services (Application-Scoped)
# ============================================================================


@lru_cache()
def get_password_service() -> "PasswordHashingProtocol":
    """Get bcrypt password service singleton (cost from BCRYPT_ROUNDS)."""
    from src.infrastructure.security import BcryptPasswordService

    return BcryptPasswordService(cost_factor=settings.bcrypt_rounds)


@lru_cache()
def get_jwt_service() -> "TokenGenerationProtocol":
    """Get JWT service singleton (HS256 access and MFA-pending tokens)."""
    from src.infrastructure.security import JWTService

    return JWTService(
        secret_key=settings.secret_key,
        expiration_minutes=settings.access_token_expire_minutes,
        temporary_expiration_minutes=settings.temp_token_expire_minutes,
    )


@lru_cache()
def get_refresh_token_service() -> "RefreshTokenServiceProtocol":
    from src.infrastructure.security import RefreshTokenService

    return RefreshTokenService(expiration_days=settings.refresh_token_expire_days)


@lru_cache()
def get_password_reset_token_service() -> "PasswordResetTokenServiceProtocol":
    from src.infrastructure.security import PasswordResetTokenService

    return PasswordResetTokenService(
        expiration_hours=settings.password_reset_expire_hours
    )


@lru_cache()
def get_totp_service() -> "TOTPProtocol":
    """Get TOTP service singleton (issuer shown in authenticator apps)."""
    from src.infrastructure.security import TOTPService

    return TOTPService(issuer=settings.mfa_issuer)


# ============================================================================
# Outbound Boundaries (Application-Scoped)
# ============================================================================


@lru_cache()
def get_email_service() -> "EmailProtocol":
    """Get email service singleton (app-scoped).

    Every environment uses StubEmailService until a delivery provider is
    wired in; swapping it only touches this factory.
    """
    from src.infrastructure.email import StubEmailService

    return StubEmailService(
        logger=get_logger(),
        from_address=settings.email_from_address,
    )


@lru_cache()
def get_identity_verifier() -> "ExternalIdentityVerifier":
    """Get external identity verifier singleton (no provider configured).

    Capability seam for verifying identities asserted by an external
    provider. No social sign-in endpoint calls it yet, so every request
    gets IDENTITY_PROVIDER_NOT_CONFIGURED.
    """
    from src.infrastructure.identity import DisabledIdentityVerifier

    return DisabledIdentityVerifier()


@lru_cache()
def get_device_enricher() -> "DeviceEnricher":
    from src.infrastructure.enrichers import UserAgentDeviceEnricher

    return UserAgentDeviceEnricher()


# ============================================================================
# Request-Scoped Dependencies (Per-Request)
# ============================================================================


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """Get database session (request-scoped).

    Commits on success, rolls back on exception, always closes.

    Usage:
        @router.get("/me")
        async def me(session: AsyncSession = Depends(get_db_session)):
            ...
    """
    db = get_database()
    async with db.get_session() as session:
        yield session
