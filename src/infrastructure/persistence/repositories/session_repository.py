"""SessionRepository - SQLAlchemy implementation of SessionRepository protocol.

Expiry is always compared inside SQL against a bound UTC timestamp, never in
Python against loaded values.
"""

from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.session import Session
from src.infrastructure.persistence.base import ensure_utc
from src.infrastructure.persistence.models.session import Session as SessionModel


class SessionRepository:
    """SQLAlchemy implementation of SessionRepository protocol.

    Example:
        >>> repo = SessionRepository(session)
        >>> await repo.create(session_entity)
        >>> rotated = await repo.rotate_tokens(session_id=..., old_refresh_token=..., ...)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def create(self, session: Session) -> None:
        """Insert a new session row."""
        self.session.add(self._to_model(session))
        await self.session.commit()

    async def find_by_refresh_token(self, refresh_token: str) -> Session | None:
        """Find an unexpired session by its current refresh token."""
        stmt = select(SessionModel).where(
            SessionModel.refresh_token == refresh_token,
            SessionModel.expires_at > datetime.now(UTC),
        )
        result = await self.session.execute(stmt)
        session_model = result.scalar_one_or_none()

        if session_model is None:
            return None

        return self._to_domain(session_model)

    async def rotate_tokens(
        self,
        *,
        session_id: UUID,
        old_refresh_token: str,
        access_token: str,
        refresh_token: str,
        used_at: datetime,
    ) -> bool:
        """Swap the token pair in one conditional UPDATE.

        Returns:
            True only if this call replaced old_refresh_token. A concurrent
            rotation or an expiry in between leaves rowcount at 0.
        """
        stmt = (
            update(SessionModel)
            .where(
                SessionModel.id == session_id,
                SessionModel.refresh_token == old_refresh_token,
                SessionModel.expires_at > used_at,
            )
            .values(
                access_token=access_token,
                refresh_token=refresh_token,
                last_used_at=used_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def delete_by_access_token(self, access_token: str) -> int:
        """Delete the session issued with this access token."""
        stmt = delete(SessionModel).where(SessionModel.access_token == access_token)
        return await self._execute_delete(stmt)

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every session of a user."""
        stmt = delete(SessionModel).where(SessionModel.user_id == user_id)
        return await self._execute_delete(stmt)

    async def delete_by_device(self, user_id: UUID, device_id: str) -> int:
        """Delete the sessions of one device (uses idx_sessions_user_device)."""
        stmt = delete(SessionModel).where(
            SessionModel.user_id == user_id,
            SessionModel.device_id == device_id,
        )
        return await self._execute_delete(stmt)

    async def _execute_delete(self, stmt) -> int:  # type: ignore[no-untyped-def]
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        await self.session.commit()
        return int(result.rowcount)  # type: ignore[attr-defined]

    def _to_domain(self, session_model: SessionModel) -> Session:
        """Convert database model to domain entity."""
        return Session(
            id=session_model.id,
            user_id=session_model.user_id,
            access_token=session_model.access_token,
            refresh_token=session_model.refresh_token,
            device_id=session_model.device_id,
            device_info=session_model.device_info,
            ip_address=session_model.ip_address,
            user_agent=session_model.user_agent,
            created_at=ensure_utc(session_model.created_at),  # type: ignore[arg-type]
            last_used_at=ensure_utc(session_model.last_used_at),  # type: ignore[arg-type]
            expires_at=ensure_utc(session_model.expires_at),  # type: ignore[arg-type]
        )

    def _to_model(self, session: Session) -> SessionModel:
        """Convert domain entity to database model."""
        return SessionModel(
            id=session.id,
            user_id=session.user_id,
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            device_id=session.device_id,
            device_info=session.device_info,
            ip_address=session.ip_address,
            user_agent=session.user_agent,
            created_at=session.created_at,
            last_used_at=session.last_used_at,
            expires_at=session.expires_at,
        )
