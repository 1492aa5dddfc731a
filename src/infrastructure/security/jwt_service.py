"""JWT token service (adapter).

This service implements the TokenGenerationProtocol using PyJWT with HMAC-SHA256.

Architecture:
    - Implements TokenGenerationProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - HMAC-SHA256 (HS256) algorithm
    - 256-bit secret key minimum
    - Unique JWT ID (jti) so two tokens minted in the same second differ
    - "type" claim separates access tokens from MFA-pending tokens
"""

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage

ACCESS_TOKEN_TYPE = "access"
TEMPORARY_TOKEN_TYPE = "mfa_temp"


class JWTService:
    """JWT token generation and validation service.

    Usage:
        from src.core.container import get_jwt_service

        jwt_service = get_jwt_service()
        token = jwt_service.generate_access_token(user_id)

        match jwt_service.validate_access_token(token):
            case Success(value=payload):
                user_id = UUID(payload["sub"])
            case Failure(error=error):
                ...
    """

    def __init__(
        self,
        secret_key: str,
        expiration_minutes: int = 15,
        temporary_expiration_minutes: int = 10,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: Secret key for HMAC-SHA256 signing (>= 32 bytes).
            expiration_minutes: Access token lifetime (default: 15).
            temporary_expiration_minutes: mfa_temp token lifetime (default: 10).

        Raises:
            ValueError: If secret_key is too short (< 32 bytes).
        """
        if len(secret_key) < 32:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expiration_minutes = expiration_minutes
        self._temporary_expiration_minutes = temporary_expiration_minutes
        self._algorithm = "HS256"

    def generate_access_token(self, user_id: UUID) -> str:
        """Generate JWT access token.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> len(service.generate_access_token(uuid7()).split("."))
            3
        """
        return self._encode(user_id, ACCESS_TOKEN_TYPE, self._expiration_minutes)

    def generate_temporary_token(self, user_id: UUID) -> str:
        """Generate the short-lived token that stands between password and MFA.

        Not persisted. Valid until exp, it is not consumed on use.
        """
        return self._encode(
            user_id, TEMPORARY_TOKEN_TYPE, self._temporary_expiration_minutes
        )

    def validate_access_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate JWT access token and extract payload.

        Returns:
            Success(payload) if valid, Failure(AuthenticationError) if the
            token is malformed, expired, badly signed or not an access token.
        """
        return self._decode(token, ACCESS_TOKEN_TYPE)

    def validate_temporary_token(
        self, token: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        """Validate an mfa_temp token and extract payload."""
        return self._decode(token, TEMPORARY_TOKEN_TYPE)

    def _encode(self, user_id: UUID, token_type: str, minutes: int) -> str:
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=minutes)

        payload = {
            "sub": str(user_id),  # Subject (user ID)
            "type": token_type,
            "iat": int(now.timestamp()),  # Issued at
            "exp": int(expires_at.timestamp()),  # Expires at
            "jti": str(uuid7()),  # JWT ID (unique identifier)
        }

        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def _decode(
        self, token: str, expected_type: str
    ) -> Result[dict[str, Any], AuthenticationError]:
        try:
            # PyJWT validates signature and exp
            payload: dict[str, Any] = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp", "iat"]},
            )
        except InvalidTokenError:
            return Failure(error=_invalid_token())

        if payload.get("type") != expected_type:
            return Failure(error=_invalid_token())

        return Success(value=payload)


def _invalid_token() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.TOKEN_INVALID,
        message=AuthMessage.INVALID_TOKEN,
    )
