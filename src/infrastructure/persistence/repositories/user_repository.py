"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture.
Maps between domain User entities and database UserModel.
"""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.user import User
from src.domain.enums import SubscriptionStatus, SubscriptionTier
from src.infrastructure.persistence.base import ensure_utc
from src.infrastructure.persistence.models.user import User as UserModel


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    This class does NOT inherit from UserRepository protocol (Protocol uses
    structural typing). Write methods commit immediately. Apart from save(),
    every write is a targeted UPDATE of the columns it owns; conditional
    writes return False when their WHERE no longer matches.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(session)
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID.

        Returns:
            Domain User entity if found, None otherwise.
        """
        return await self._fetch_one(UserModel.id == user_id)

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address (case-insensitive)."""
        return await self._fetch_one(func.lower(UserModel.email) == email.lower())

    async def exists_by_email(self, email: str) -> bool:
        """Check if user with email exists."""
        stmt = select(UserModel.id).where(func.lower(UserModel.email) == email.lower())
        result = await self.session.execute(stmt)
        return result.first() is not None

    async def find_by_reset_token_hash(self, token_hash: str) -> User | None:
        """Find the active user holding an unexpired reset digest."""
        return await self._fetch_one(
            UserModel.password_reset_token_hash == token_hash,
            UserModel.password_reset_token_expires_at > datetime.now(UTC),
            UserModel.deleted_at.is_(None),
        )

    async def save(self, user: User) -> None:
        """Create new user in database.

        Raises:
            IntegrityError: If email already exists (concurrent registration).
        """
        user_model = self._to_model(user)
        self.session.add(user_model)
        await self.session.commit()

    async def touch_last_login(self, user_id: UUID, at: datetime) -> None:
        """Stamp last_login_at without touching any other column."""
        await self._write(UserModel.id == user_id, last_login_at=at)

    async def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the password hash (authenticated password change)."""
        await self._write(UserModel.id == user_id, password_hash=password_hash)

    async def set_reset_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        """Store a reset digest, replacing any earlier one."""
        await self._write(
            UserModel.id == user_id,
            password_reset_token_hash=token_hash,
            password_reset_token_expires_at=expires_at,
        )

    async def complete_password_reset(
        self,
        user_id: UUID,
        token_hash: str,
        password_hash: str,
    ) -> bool:
        """Swap in the new password only while the reset digest is still live.

        The digest is cleared in the same statement, so of two concurrent
        confirmations with one token exactly one sees rowcount 1.
        """
        return await self._write(
            UserModel.id == user_id,
            UserModel.password_reset_token_hash == token_hash,
            UserModel.password_reset_token_expires_at > datetime.now(UTC),
            UserModel.deleted_at.is_(None),
            password_hash=password_hash,
            password_reset_token_hash=None,
            password_reset_token_expires_at=None,
        )

    async def store_pending_mfa_secret(self, user_id: UUID, encrypted_secret: str) -> bool:
        """Store a not-yet-confirmed TOTP secret; False once MFA is enabled."""
        return await self._write(
            UserModel.id == user_id,
            UserModel.mfa_enabled.is_(False),
            mfa_secret=encrypted_secret,
        )

    async def activate_mfa(
        self,
        user_id: UUID,
        encrypted_secret: str,
        backup_codes: list[str],
    ) -> bool:
        """Enable MFA if the pending secret is still the one the code matched.

        A second setup between verification and this write replaces the
        secret, and then nothing is updated.
        """
        return await self._write(
            UserModel.id == user_id,
            UserModel.mfa_enabled.is_(False),
            UserModel.mfa_secret == encrypted_secret,
            mfa_enabled=True,
            backup_codes=backup_codes,
        )

    async def clear_mfa(self, user_id: UUID) -> bool:
        """Disable MFA and drop the secret and backup codes."""
        return await self._write(
            UserModel.id == user_id,
            UserModel.mfa_enabled.is_(True),
            mfa_enabled=False,
            mfa_secret=None,
            backup_codes=None,
        )

    async def replace_backup_codes(
        self,
        user_id: UUID,
        expected: list[str],
        remaining: list[str],
    ) -> bool:
        """Compare-and-set the backup code list.

        A concurrent consumer that read the same list loses: its WHERE no
        longer matches and rowcount is 0.
        """
        return await self._write(
            UserModel.id == user_id,
            UserModel.mfa_enabled.is_(True),
            UserModel.backup_codes == expected,
            backup_codes=remaining,
        )

    async def _write(self, *criteria: ColumnElement[bool], **values: Any) -> bool:
        """Single-statement UPDATE of the named columns, committed at once.

        Columns not named keep whatever is in the row, so a caller holding a
        stale entity cannot roll back another request's write.
        """
        stmt = (
            update(UserModel)
            .where(*criteria)
            .values(**values, updated_at=datetime.now(UTC))
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount == 1  # type: ignore[attr-defined]

    async def _fetch_one(self, *criteria: ColumnElement[bool]) -> User | None:
        # populate_existing: rows already in the identity map may predate a
        # bulk UPDATE issued through _write.
        stmt = (
            select(UserModel)
            .where(*criteria)
            .execution_options(populate_existing=True)
        )
        result = await self.session.execute(stmt)
        user_model = result.scalar_one_or_none()

        if user_model is None:
            return None

        return self._to_domain(user_model)

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            name=user_model.name,
            business_name=user_model.business_name,
            trade_type=user_model.trade_type,
            subscription_tier=SubscriptionTier(user_model.subscription_tier),
            subscription_status=SubscriptionStatus(user_model.subscription_status),
            trial_ends_at=ensure_utc(user_model.trial_ends_at),
            mfa_enabled=user_model.mfa_enabled,
            mfa_secret=user_model.mfa_secret,
            backup_codes=(
                list(user_model.backup_codes)
                if user_model.backup_codes is not None
                else None
            ),
            password_reset_token_hash=user_model.password_reset_token_hash,
            password_reset_token_expires_at=ensure_utc(
                user_model.password_reset_token_expires_at
            ),
            deleted_at=ensure_utc(user_model.deleted_at),
            last_login_at=ensure_utc(user_model.last_login_at),
            created_at=ensure_utc(user_model.created_at),  # type: ignore[arg-type]
            updated_at=ensure_utc(user_model.updated_at),  # type: ignore[arg-type]
        )

    def _to_model(self, user: User) -> UserModel:
        """Convert domain entity to database model."""
        return UserModel(
            id=user.id,
            email=user.email,
            password_hash=user.password_hash,
            name=user.name,
            business_name=user.business_name,
            trade_type=user.trade_type,
            subscription_tier=user.subscription_tier.value,
            subscription_status=user.subscription_status.value,
            trial_ends_at=user.trial_ends_at,
            mfa_enabled=user.mfa_enabled,
            mfa_secret=user.mfa_secret,
            backup_codes=user.backup_codes,
            password_reset_token_hash=user.password_reset_token_hash,
            password_reset_token_expires_at=user.password_reset_token_expires_at,
            deleted_at=user.deleted_at,
            last_login_at=user.last_login_at,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
