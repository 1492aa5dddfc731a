"""Async engine and session factory for the credential store.

Repositories never create sessions themselves; they receive one from
``Database.get_session()`` (via the container's request-scoped
``get_db_session``), so one request maps to one transaction.

Supported URLs:
- postgresql+asyncpg://... (deployment)
- sqlite+aiosqlite:///path.db (tests, local tooling)
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)


def _engine_options(database_url: str, echo: bool, pool_size: int) -> dict[str, Any]:
    """Driver-specific engine keyword arguments."""
    options: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}

    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
        return options

    options["pool_size"] = pool_size
    options["max_overflow"] = 0
    if database_url.startswith("postgresql+asyncpg"):
        options["connect_args"] = {"server_settings": {"jit": "off"}, "timeout": 30}
    return options


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    # SQLite ships with FK enforcement off; sessions and devices rely on
    # ON DELETE CASCADE from users.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and hands out transactional sessions.

    Example:
        db = Database("sqlite+aiosqlite:///./wyndo.db")
        async with db.get_session() as session:
            await UserRepository(session).save(user)
        await db.close()
    """

    def __init__(self, database_url: str, echo: bool = False, pool_size: int = 20) -> None:
        self.engine: AsyncEngine = create_async_engine(
            database_url, **_engine_options(database_url, echo, pool_size)
        )
        if database_url.startswith("sqlite"):
            event.listen(self.engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

        self.async_session = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Yield a session that commits on clean exit and rolls back on error."""
        async with self.async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        """Create every table on BaseModel.metadata.

        Tests and local tooling only; deployments run Alembic migrations.
        """
        from src.infrastructure.persistence.models import BaseModel

        async with self.engine.begin() as conn:
            await conn.run_sync(BaseModel.metadata.create_all)

    async def close(self) -> None:
        """Dispose of pooled connections (application shutdown)."""
        await self.engine.dispose()

    async def check_connection(self) -> bool:
        """Round-trip ``SELECT 1``; False when the database is unreachable."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError):
            return False
        return True
