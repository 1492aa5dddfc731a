"""DeviceRepository - SQLAlchemy implementation of DeviceRepository protocol.

Upserts use the dialect-specific INSERT ... ON CONFLICT of whichever backend
the session is bound to (PostgreSQL in deployment, SQLite in tests).
"""

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.device import Device
from src.domain.enums import DevicePlatform
from src.infrastructure.persistence.base import ensure_utc
from src.infrastructure.persistence.models.device import Device as DeviceModel


class DeviceRepository:
    """SQLAlchemy implementation of DeviceRepository protocol."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def upsert(self, device: Device) -> None:
        """Insert the device or refresh platform, name and last_used_at.

        Raises:
            NotImplementedError: If bound to a dialect without ON CONFLICT support.
        """
        values = {
            "id": device.id,
            "user_id": device.user_id,
            "device_id": device.device_id,
            "platform": device.platform.value,
            "name": device.name,
            "last_used_at": device.last_used_at,
            "created_at": device.created_at,
        }

        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            stmt = pg_insert(DeviceModel).values(**values)
        elif dialect == "sqlite":
            stmt = sqlite_insert(DeviceModel).values(**values)
        else:
            raise NotImplementedError(f"Device upsert not supported on {dialect}")

        stmt = stmt.on_conflict_do_update(
            index_elements=[DeviceModel.user_id, DeviceModel.device_id],
            set_={
                "platform": stmt.excluded.platform,
                "name": stmt.excluded.name,
                "last_used_at": stmt.excluded.last_used_at,
            },
        )
        await self.session.execute(stmt)
        await self.session.commit()

    async def list_for_user(self, user_id: UUID) -> list[Device]:
        """List a user's devices, most recently used first."""
        stmt = (
            select(DeviceModel)
            .where(DeviceModel.user_id == user_id)
            .order_by(DeviceModel.last_used_at.desc())
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(model) for model in result.scalars().all()]

    async def delete(self, user_id: UUID, device_id: str) -> bool:
        """Delete one device. Returns False if it did not exist."""
        stmt = (
            delete(DeviceModel)
            .where(
                DeviceModel.user_id == user_id,
                DeviceModel.device_id == device_id,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0  # type: ignore[attr-defined]

    def _to_domain(self, device_model: DeviceModel) -> Device:
        """Convert database model to domain entity."""
        return Device(
            id=device_model.id,
            user_id=device_model.user_id,
            device_id=device_model.device_id,
            platform=DevicePlatform(device_model.platform),
            name=device_model.name,
            last_used_at=ensure_utc(device_model.last_used_at),  # type: ignore[arg-type]
            created_at=ensure_utc(device_model.created_at),  # type: ignore[arg-type]
        )
