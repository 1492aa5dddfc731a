"""Registration handler.

Flow:
1. Check email uniqueness (email already normalized by the Email type)
2. Hash password (off the event loop)
3. Create User on the FREE tier with a trial window
4. Start a session and record the device
5. Send welcome email (best-effort)
6. Return Success(AuthResult)

Architecture:
- Application layer ONLY imports from domain layer (entities, protocols)
- NO infrastructure imports (repositories are injected via protocols)
"""

import asyncio
from datetime import UTC, datetime, timedelta

from uuid_extensions import uuid7

from src.application.commands.auth_commands import RegisterUser
from src.application.dtos.auth_dtos import AuthResult
from src.application.services.notifications import notify_best_effort
from src.application.services.session_starter import SessionStarter
from src.core.enums import ErrorCode
from src.core.errors import ConflictError, DomainError
from src.core.result import Failure, Result, Success
from src.domain.entities.user import User
from src.domain.enums import SubscriptionStatus, SubscriptionTier
from src.domain.errors import AuthMessage
from src.domain.protocols import (
    EmailProtocol,
    LoggerProtocol,
    PasswordHashingProtocol,
    UserRepository,
)


class RegisterUserHandler:
    """Handler for user registration command."""

    def __init__(
        self,
        user_repo: UserRepository,
        password_service: PasswordHashingProtocol,
        session_starter: SessionStarter,
        email_service: EmailProtocol,
        logger: LoggerProtocol,
        trial_period_days: int = 14,
    ) -> None:
        """Initialize registration handler with dependencies.

        Args:
            user_repo: User repository for persistence.
            password_service: Password hashing service.
            session_starter: Issues the first session.
            email_service: Notifier for the welcome email.
            logger: Structured logger.
            trial_period_days: Length of the trial granted at signup.
        """
        self._user_repo = user_repo
        self._password_service = password_service
        self._session_starter = session_starter
        self._email_service = email_service
        self._logger = logger
        self._trial_period_days = trial_period_days

    async def handle(self, cmd: RegisterUser) -> Result[AuthResult, DomainError]:
        """Handle user registration command.

        Returns:
            Success(AuthResult) with the new user and its first token pair.
            Failure(ConflictError) if the email is already registered.
        """
        email = cmd.email.lower()

        if await self._user_repo.exists_by_email(email):
            self._logger.info("registration_rejected", reason="email_exists")
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message=AuthMessage.EMAIL_ALREADY_REGISTERED,
                    resource_type="User",
                    conflicting_field="email",
                )
            )

        password_hash = await asyncio.to_thread(
            self._password_service.hash_password, cmd.password
        )

        now = datetime.now(UTC)
        user = User(
            id=uuid7(),
            email=email,
            password_hash=password_hash,
            name=cmd.name,
            business_name=cmd.business_name,
            trade_type=cmd.trade_type,
            subscription_tier=SubscriptionTier.FREE,
            subscription_status=SubscriptionStatus.TRIAL,
            trial_ends_at=now + timedelta(days=self._trial_period_days),
            created_at=now,
            updated_at=now,
        )
        await self._user_repo.save(user)

        auth = await self._session_starter.start(user, cmd.client)
        self._logger.info("user_registered", user_id=str(user.id))

        await notify_best_effort(
            self._logger,
            "welcome_email",
            lambda: self._email_service.send_welcome_email(user.email, user.name),
            user_id=str(user.id),
        )

        return Success(value=auth)
