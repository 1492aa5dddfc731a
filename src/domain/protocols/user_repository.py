"""UserRepository protocol for user persistence.

Port (interface) for hexagonal architecture.
Infrastructure layer implements this protocol.
"""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from src.domain.entities.user import User


class UserRepository(Protocol):
    """User repository protocol (port).

    This is a Protocol (not ABC) for structural typing.
    Implementations don't need to inherit from this.

    Methods:
        find_by_id: Retrieve user by ID
        find_by_email: Retrieve user by email
        exists_by_email: Cheap duplicate check for registration
        find_by_reset_token_hash: Resolve an unexpired password reset token
        save: Create new user
        touch_last_login: Stamp last login time
        set_password_hash: Authenticated password change
        set_reset_token: Store a password reset digest
        complete_password_reset: Conditional, single-use reset confirmation
        store_pending_mfa_secret: Begin MFA setup
        activate_mfa: Conditional MFA enable
        clear_mfa: Conditional MFA disable
        replace_backup_codes: Compare-and-set on the backup code list
    """

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find user by ID (soft-deleted users included)."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find user by email address.

        Email comparison is case-insensitive (stored lowercase).
        """
        ...

    async def exists_by_email(self, email: str) -> bool:
        """Check whether an account already uses this email."""
        ...

    async def find_by_reset_token_hash(self, token_hash: str) -> User | None:
        """Find the active user holding this reset digest, if not expired.

        Expiry is evaluated by the database against the current time.
        """
        ...

    async def save(self, user: User) -> None:
        """Create new user in database."""
        ...

    async def touch_last_login(self, user_id: UUID, at: datetime) -> None:
        """Record a successful login time; no other column is written."""
        ...

    async def set_password_hash(self, user_id: UUID, password_hash: str) -> None:
        """Replace the stored password hash."""
        ...

    async def set_reset_token(
        self,
        user_id: UUID,
        token_hash: str,
        expires_at: datetime,
    ) -> None:
        """Store a password reset digest and its expiry."""
        ...

    async def complete_password_reset(
        self,
        user_id: UUID,
        token_hash: str,
        password_hash: str,
    ) -> bool:
        """Set the new password and clear the reset digest in one step.

        Returns:
            False if the digest no longer matches, has expired, or the user
            was deactivated. The password is unchanged in that case.
        """
        ...

    async def store_pending_mfa_secret(self, user_id: UUID, encrypted_secret: str) -> bool:
        """Store an unconfirmed TOTP secret. False if MFA is already enabled."""
        ...

    async def activate_mfa(
        self,
        user_id: UUID,
        encrypted_secret: str,
        backup_codes: list[str],
    ) -> bool:
        """Enable MFA with these backup codes.

        Returns:
            False if MFA is already enabled or the pending secret is no
            longer encrypted_secret.
        """
        ...

    async def clear_mfa(self, user_id: UUID) -> bool:
        """Disable MFA. False if it was not enabled."""
        ...

    async def replace_backup_codes(
        self,
        user_id: UUID,
        expected: list[str],
        remaining: list[str],
    ) -> bool:
        """Atomically swap the backup code list if it still equals expected.

        Returns:
            True if this call consumed the code, False if a concurrent call
            changed the list first.
        """
        ...
