"""Repository dependency factories.

Request-scoped repository instances. Within one request FastAPI caches
get_db_session, so every repository shares the same session.
"""

from typing import TYPE_CHECKING

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.container.infrastructure import get_db_session

if TYPE_CHECKING:
    from src.infrastructure.persistence.repositories import (
        DeviceRepository,
        SessionRepository,
        UserRepository,
    )


async def get_user_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "UserRepository":
    from src.infrastructure.persistence.repositories import UserRepository

    return UserRepository(session=session)


async def get_session_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "SessionRepository":
    from src.infrastructure.persistence.repositories import SessionRepository

    return SessionRepository(session=session)


async def get_device_repository(
    session: AsyncSession = Depends(get_db_session),
) -> "DeviceRepository":
    from src.infrastructure.persistence.repositories import DeviceRepository

    return DeviceRepository(session=session)
