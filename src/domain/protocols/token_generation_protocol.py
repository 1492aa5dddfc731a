"""Token generation protocol for JWT access and MFA-pending tokens.

Architecture:
    - Domain layer protocol (port)
    - Infrastructure adapter: src/infrastructure/security/jwt_service.py
"""

from typing import Any, Protocol
from uuid import UUID

from src.core.errors import AuthenticationError
from src.core.result import Result


class TokenGenerationProtocol(Protocol):
    """JWT generation and validation.

    Two token types share the signing key and are told apart by the
    ``type`` claim: "access" for API calls and "mfa_temp" for the short
    window between password check and MFA code.

    Usage:
        def __init__(self, token_service: TokenGenerationProtocol):
            self._tokens = token_service

        access_token = self._tokens.generate_access_token(user.id)
    """

    def generate_access_token(self, user_id: UUID) -> str:
        """Generate a signed access token (15 minutes by default)."""
        ...

    def generate_temporary_token(self, user_id: UUID) -> str:
        """Generate a signed mfa_temp token (10 minutes by default)."""
        ...

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate signature, expiry and the "access" type claim.

        Returns:
            Success(payload) or Failure(AuthenticationError).
        """
        ...

    def validate_temporary_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate signature, expiry and the "mfa_temp" type claim."""
        ...
