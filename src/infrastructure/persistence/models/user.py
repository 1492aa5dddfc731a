"""User database model for authentication.

Stores credentials, subscription state and MFA material. Secrets are never
plaintext here: password_hash is bcrypt, mfa_secret and every backup code are
AES-256-GCM blobs, the reset token is a SHA-256 digest.
"""

from datetime import datetime

from sqlalchemy import JSON, Boolean, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel

# JSONB on PostgreSQL gives the backup code list an equality operator, which
# the compare-and-set consumption relies on.
BackupCodesType = JSON(none_as_null=True).with_variant(
    JSONB(none_as_null=True), "postgresql"
)


class User(BaseMutableModel):
    """User model for authentication and account management.

    Fields:
        id, created_at, updated_at: From BaseMutableModel
        email: Unique email address (lowercase, indexed)
        password_hash: Bcrypt hash, NULL for external-identity-only accounts
        name, business_name, trade_type: Profile
        subscription_tier: FREE / PROFESSIONAL / BUSINESS / ENTERPRISE
        subscription_status: TRIAL / ACTIVE / PAST_DUE / CANCELED
        trial_ends_at: End of the registration trial
        mfa_enabled, mfa_secret, backup_codes: MFA state (encrypted)
        password_reset_token_hash, password_reset_token_expires_at: Reset state
        deleted_at: Soft delete marker
        last_login_at: Last session issued

    Indexes:
        - ix_users_email: (email) for login queries
        - ix_users_password_reset_token_hash: reset confirmation lookups
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (unique, lowercase)",
    )
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="Bcrypt hashed password",
    )

    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    business_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    trade_type: Mapped[str | None] = mapped_column(String(100), nullable=True)

    # Subscription
    subscription_tier: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="FREE",
        comment="Subscription tier (FREE, PROFESSIONAL, BUSINESS, ENTERPRISE)",
    )
    subscription_status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default="TRIAL",
        comment="Billing status (TRIAL, ACTIVE, PAST_DUE, CANCELED)",
    )
    trial_ends_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    # MFA
    mfa_enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        comment="Whether a TOTP code is required at login",
    )
    mfa_secret: Mapped[str | None] = mapped_column(
        String(512),
        nullable=True,
        comment="Encrypted TOTP secret (salt:iv:tag:ciphertext)",
    )
    backup_codes: Mapped[list[str] | None] = mapped_column(
        BackupCodesType,
        nullable=True,
        comment="Encrypted single-use backup codes",
    )

    # Password reset
    password_reset_token_hash: Mapped[str | None] = mapped_column(
        String(64),
        nullable=True,
        index=True,
        comment="SHA-256 of the outstanding reset token",
    )
    password_reset_token_expires_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Soft delete marker (deactivated accounts cannot log in)",
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
