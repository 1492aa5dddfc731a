"""Application services shared by command and query handlers."""

from src.application.services.device_registry import DeviceRegistry
from src.application.services.mfa_verifier import MfaVerifier
from src.application.services.notifications import notify_best_effort
from src.application.services.session_starter import SessionStarter
from src.application.services.token_service import SessionTokenService

__all__ = [
    "DeviceRegistry",
    "MfaVerifier",
    "SessionStarter",
    "SessionTokenService",
    "notify_best_effort",
]
