"""Container module - Centralized dependency injection.

Re-exports every factory so callers import from one place:

    from src.core.container import get_logger, get_login_user_handler

The container is organized into modules:
- infrastructure: App-scoped singletons (db, logging, security, email)
- repositories: Request-scoped repository factories
- auth_services: Request-scoped application services
- auth_handlers: Request-scoped command and query handlers
"""

# Infrastructure services
from src.core.container.infrastructure import (
    get_database,
    get_db_session,
    get_device_enricher,
    get_email_service,
    get_encryption_service,
    get_identity_verifier,
    get_jwt_service,
    get_logger,
    get_password_reset_token_service,
    get_password_service,
    get_refresh_token_service,
    get_totp_service,
)

# Repositories
from src.core.container.repositories import (
    get_device_repository,
    get_session_repository,
    get_user_repository,
)

# Application services
from src.core.container.auth_services import (
    get_device_registry,
    get_mfa_verifier,
    get_session_starter,
    get_session_token_service,
)

# Handlers
from src.core.container.auth_handlers import (
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

__all__ = [
    # Infrastructure
    "get_database",
    "get_db_session",
    "get_device_enricher",
    "get_email_service",
    "get_encryption_service",
    "get_identity_verifier",
    "get_jwt_service",
    "get_logger",
    "get_password_reset_token_service",
    "get_password_service",
    "get_refresh_token_service",
    "get_totp_service",
    # Repositories
    "get_device_repository",
    "get_session_repository",
    "get_user_repository",
    # Services
    "get_device_registry",
    "get_mfa_verifier",
    "get_session_starter",
    "get_session_token_service",
    # Handlers
    "get_change_password_handler",
    "get_confirm_password_reset_handler",
    "get_current_user_handler",
    "get_disable_mfa_handler",
    "get_enable_mfa_handler",
    "get_list_devices_handler",
    "get_login_user_handler",
    "get_logout_all_handler",
    "get_logout_user_handler",
    "get_refresh_token_handler",
    "get_register_user_handler",
    "get_remove_device_handler",
    "get_request_password_reset_handler",
    "get_setup_mfa_handler",
    "get_verify_mfa_handler",
]
