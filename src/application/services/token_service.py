"""Session token service.

Issues, rotates and revokes sessions. A session row holds the current
access/refresh token pair; rotation replaces both in one conditional UPDATE
so a refresh token works exactly once, even under concurrent requests.

Token types:
    - Access token: JWT ("access"), 15 minutes, stateless validation
    - Refresh token: 64 hex chars, stored on the session, 7 days absolute
    - Temporary token: JWT ("mfa_temp"), 10 minutes, never persisted
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from src.application.dtos.auth_dtos import AuthTokens
from src.core.result import Failure, Result, Success
from src.domain.entities.session import Session
from src.domain.protocols import (
    DeviceEnricher,
    LoggerProtocol,
    RefreshTokenServiceProtocol,
    SessionRepository,
    TokenGenerationProtocol,
)


class SessionTokenService:
    """Session lifecycle operations shared by the auth handlers.

    Failure modes are None returns, never exceptions: an unknown, expired or
    already-rotated refresh token and an invalid JWT all yield None.
    """

    def __init__(
        self,
        session_repo: SessionRepository,
        jwt_service: TokenGenerationProtocol,
        refresh_token_service: RefreshTokenServiceProtocol,
        device_enricher: DeviceEnricher,
        logger: LoggerProtocol,
        access_token_expire_minutes: int = 15,
    ) -> None:
        self._session_repo = session_repo
        self._jwt_service = jwt_service
        self._refresh_token_service = refresh_token_service
        self._device_enricher = device_enricher
        self._logger = logger
        self._expires_in = access_token_expire_minutes * 60

    async def issue_session(
        self,
        *,
        user_id: UUID,
        device_id: str,
        ip_address: str | None,
        user_agent: str | None,
    ) -> AuthTokens:
        """Create a session row and return its token pair."""
        access_token = self._jwt_service.generate_access_token(user_id)
        refresh_token = self._refresh_token_service.generate_token()
        enrichment = await self._device_enricher.enrich(user_agent)
        now = datetime.now(UTC)

        session = Session(
            id=uuid7(),
            user_id=user_id,
            access_token=access_token,
            refresh_token=refresh_token,
            device_id=device_id,
            device_info=enrichment.device_info,
            ip_address=ip_address,
            user_agent=user_agent,
            created_at=now,
            last_used_at=now,
            expires_at=self._refresh_token_service.calculate_expiration(),
        )
        await self._session_repo.create(session)

        self._logger.info(
            "session_issued",
            user_id=str(user_id),
            session_id=str(session.id),
            device_info=enrichment.device_info,
        )
        return self._token_pair(access_token, refresh_token)

    async def refresh(self, refresh_token: str) -> AuthTokens | None:
        """Rotate the token pair of the session holding refresh_token.

        Returns:
            New tokens, or None if the token is unknown, expired, or was
            rotated by a concurrent request first.
        """
        session = await self._session_repo.find_by_refresh_token(refresh_token)
        if session is None:
            return None

        access_token = self._jwt_service.generate_access_token(session.user_id)
        new_refresh_token = self._refresh_token_service.generate_token()

        rotated = await self._session_repo.rotate_tokens(
            session_id=session.id,
            old_refresh_token=refresh_token,
            access_token=access_token,
            refresh_token=new_refresh_token,
            used_at=datetime.now(UTC),
        )
        if not rotated:
            self._logger.warning(
                "refresh_rotation_lost",
                user_id=str(session.user_id),
                session_id=str(session.id),
            )
            return None

        return self._token_pair(access_token, new_refresh_token)

    async def revoke(self, access_token: str) -> None:
        """Delete the session that issued access_token (idempotent)."""
        await self._session_repo.delete_by_access_token(access_token)

    async def revoke_all(self, user_id: UUID) -> int:
        """Delete every session of a user. Returns the number removed."""
        count = await self._session_repo.delete_all_for_user(user_id)
        self._logger.info("sessions_revoked", user_id=str(user_id), count=count)
        return count

    async def revoke_by_device(self, user_id: UUID, device_id: str) -> int:
        """Delete the sessions of one device. Returns the number removed."""
        return await self._session_repo.delete_by_device(user_id, device_id)

    def issue_temporary_token(self, user_id: UUID) -> str:
        """Mint the MFA-pending token returned by a password login."""
        return self._jwt_service.generate_temporary_token(user_id)

    def verify_temporary_token(self, token: str) -> UUID | None:
        """Resolve an mfa_temp token to its user id."""
        return _subject(self._jwt_service.validate_temporary_token(token))

    def verify_access_token(self, token: str) -> UUID | None:
        """Resolve an access token to its user id (mfa_temp tokens rejected)."""
        return _subject(self._jwt_service.validate_access_token(token))

    def _token_pair(self, access_token: str, refresh_token: str) -> AuthTokens:
        return AuthTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=self._expires_in,
        )


def _subject(result: Result[dict[str, Any], Any]) -> UUID | None:
    match result:
        case Success(value=payload):
            try:
                return UUID(str(payload["sub"]))
            except (KeyError, ValueError):
                return None
        case Failure():
            return None
