"""Session repository protocol for persistence abstraction.

This module defines the port (interface) for session persistence.
Infrastructure layer implements the adapter.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.session import Session


class SessionRepository(Protocol):
    """Session repository protocol (port) for persistence.

    Rotation and revocation are single statements so that concurrent
    requests cannot both succeed with the same refresh token.
    """

    async def create(self, session: Session) -> None:
        """Insert a new session row."""
        ...

    async def find_by_refresh_token(self, refresh_token: str) -> Session | None:
        """Find the session holding this refresh token, if not expired."""
        ...

    async def rotate_tokens(
        self,
        *,
        session_id: UUID,
        old_refresh_token: str,
        access_token: str,
        refresh_token: str,
        used_at: datetime,
    ) -> bool:
        """Replace the token pair if the old refresh token is still current.

        Conditional UPDATE on (id, refresh_token, expires_at > now).

        Returns:
            True if exactly one row changed.
        """
        ...

    async def delete_by_access_token(self, access_token: str) -> int:
        """Delete the session issued with this access token."""
        ...

    async def delete_all_for_user(self, user_id: UUID) -> int:
        """Delete every session of a user. Returns rows deleted."""
        ...

    async def delete_by_device(self, user_id: UUID, device_id: str) -> int:
        """Delete the sessions of one device. Returns rows deleted."""
        ...
