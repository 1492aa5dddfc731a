"""MFA commands (CQRS write operations)."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class SetupMfa:
    """Generate and store a pending TOTP secret (MFA stays disabled)."""

    user_id: UUID


@dataclass(frozen=True, kw_only=True)
class EnableMfa:
    """Turn MFA on after verifying a code against the pending secret."""

    user_id: UUID
    code: str


@dataclass(frozen=True, kw_only=True)
class DisableMfa:
    """Turn MFA off. Requires the password and a current MFA code."""

    user_id: UUID
    password: str
    code: str
