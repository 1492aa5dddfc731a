"""User domain entity for authentication.

Pure business logic, no framework dependencies.

MFA lifecycle:
    - start_mfa_setup(): stores a pending (encrypted) secret, MFA stays off
    - enable_mfa(): flips the flag once a code was verified against that secret
    - disable_mfa(): clears secret, backup codes and flag together

Invariant: mfa_enabled implies mfa_secret is not None.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import assert_never
from uuid import UUID

from src.domain.enums import SubscriptionStatus, SubscriptionTier


@dataclass(slots=True, kw_only=True)
class User:
    """User domain entity with authentication business rules.

    Attributes:
        id: Unique user identifier.
        email: Lowercase email address (unique).
        password_hash: Bcrypt hash, None for external-identity-only accounts.
        name: Display name.
        business_name: Trading name shown on invoices.
        trade_type: Trade category (plumber, electrician, ...).
        subscription_tier: Current plan.
        subscription_status: Billing state of the plan.
        trial_ends_at: End of the registration trial window.
        mfa_enabled: Whether a TOTP code is required at login.
        mfa_secret: Encrypted TOTP secret (pending or active).
        backup_codes: Encrypted single-use backup codes.
        password_reset_token_hash: SHA256 of the outstanding reset token.
        password_reset_token_expires_at: Expiry of the outstanding reset token.
        deleted_at: Soft-delete marker (deactivated accounts cannot log in).
        last_login_at: Last time a session was issued.
        created_at: Timestamp when user was created.
        updated_at: Timestamp when user was last updated.

    Example:
        >>> user = User(id=uuid7(), email="alice@x.com", password_hash="$2b$12$...")
        >>> user.is_deactivated()
        False
    """

    id: UUID
    email: str
    password_hash: str | None
    name: str | None = None
    business_name: str | None = None
    trade_type: str | None = None
    subscription_tier: SubscriptionTier = SubscriptionTier.FREE
    subscription_status: SubscriptionStatus = SubscriptionStatus.TRIAL
    trial_ends_at: datetime | None = None

    # MFA
    mfa_enabled: bool = False
    mfa_secret: str | None = None
    backup_codes: list[str] | None = None

    # Password reset
    password_reset_token_hash: str | None = None
    password_reset_token_expires_at: datetime | None = None

    deleted_at: datetime | None = None
    last_login_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def is_deactivated(self) -> bool:
        """Soft-deleted accounts cannot authenticate."""
        return self.deleted_at is not None

    def has_pending_mfa_setup(self) -> bool:
        """True when a secret was stored by setup but MFA is not yet enabled."""
        return self.mfa_secret is not None and not self.mfa_enabled

    def start_mfa_setup(self, encrypted_secret: str) -> None:
        """Store a freshly generated secret without enabling MFA.

        Abandoning setup leaves the account usable with password only.
        """
        self.mfa_secret = encrypted_secret
        self.mfa_enabled = False
        self.updated_at = datetime.now(UTC)

    def enable_mfa(self, encrypted_backup_codes: list[str]) -> None:
        """Require MFA at login from now on.

        Raises:
            ValueError: If no secret was stored by setup first.
        """
        if self.mfa_secret is None:
            raise ValueError("Cannot enable MFA without a stored secret")
        self.mfa_enabled = True
        self.backup_codes = list(encrypted_backup_codes)
        self.updated_at = datetime.now(UTC)

    def disable_mfa(self) -> None:
        """Turn MFA off and forget secret and backup codes."""
        self.mfa_enabled = False
        self.mfa_secret = None
        self.backup_codes = None
        self.updated_at = datetime.now(UTC)

    def change_password(self, password_hash: str) -> None:
        """Replace the stored password hash."""
        self.password_hash = password_hash
        self.updated_at = datetime.now(UTC)

    def set_password_reset(self, token_hash: str, expires_at: datetime) -> None:
        """Remember the hash of an emailed reset token."""
        self.password_reset_token_hash = token_hash
        self.password_reset_token_expires_at = expires_at
        self.updated_at = datetime.now(UTC)

    def complete_password_reset(self, password_hash: str) -> None:
        """Set the new password and consume the outstanding reset token."""
        self.password_hash = password_hash
        self.password_reset_token_hash = None
        self.password_reset_token_expires_at = None
        self.updated_at = datetime.now(UTC)

    def record_login(self) -> datetime:
        """Stamp last_login_at when a session is issued and return it."""
        now = datetime.now(UTC)
        self.last_login_at = now
        self.updated_at = now
        return now

    def requires_active_subscription(self) -> bool:
        """Whether the plan is gated on billing status.

        FREE accounts never are; every paid tier is.
        """
        match self.subscription_tier:
            case SubscriptionTier.FREE:
                return False
            case (
                SubscriptionTier.PROFESSIONAL
                | SubscriptionTier.BUSINESS
                | SubscriptionTier.ENTERPRISE
            ):
                return True
            case _ as unreachable:
                assert_never(unreachable)

    def has_subscription_access(self) -> bool:
        """Check billing state allows API access.

        Returns:
            bool: False only for paid tiers that are PAST_DUE or CANCELED.
        """
        if not self.requires_active_subscription():
            return True
        return self.subscription_status in (
            SubscriptionStatus.ACTIVE,
            SubscriptionStatus.TRIAL,
        )
