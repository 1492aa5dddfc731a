"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.

Usage:
    from src.domain.protocols import PasswordHashingProtocol, UserRepository
"""

# Service protocols
from src.domain.protocols.email_protocol import EmailProtocol
from src.domain.protocols.encryption_protocol import EncryptionProtocol
from src.domain.protocols.identity_verifier_protocol import (
    ExternalIdentity,
    ExternalIdentityVerifier,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.password_hashing_protocol import PasswordHashingProtocol
from src.domain.protocols.password_reset_token_service_protocol import (
    PasswordResetTokenServiceProtocol,
)
from src.domain.protocols.refresh_token_service_protocol import (
    RefreshTokenServiceProtocol,
)
from src.domain.protocols.session_enricher_protocol import (
    DeviceEnricher,
    DeviceEnrichmentResult,
)
from src.domain.protocols.token_generation_protocol import TokenGenerationProtocol
from src.domain.protocols.totp_protocol import (
    ENABLE_WINDOW,
    LOGIN_WINDOW,
    TOTPProtocol,
    TOTPSecret,
)

# Repository protocols
from src.domain.protocols.device_repository import DeviceRepository
from src.domain.protocols.session_repository import SessionRepository
from src.domain.protocols.user_repository import UserRepository

__all__ = [
    # Service protocols
    "DeviceEnricher",
    "DeviceEnrichmentResult",
    "ENABLE_WINDOW",
    "EmailProtocol",
    "EncryptionProtocol",
    "ExternalIdentity",
    "ExternalIdentityVerifier",
    "LOGIN_WINDOW",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "PasswordResetTokenServiceProtocol",
    "RefreshTokenServiceProtocol",
    "TOTPProtocol",
    "TOTPSecret",
    "TokenGenerationProtocol",
    # Repository protocols
    "DeviceRepository",
    "SessionRepository",
    "UserRepository",
]
