"""Session start shared by register, login and MFA verification.

The last step of every successful authentication is the same: resolve the
device, issue a session, record the device and stamp last_login_at.
"""

from src.application.commands.auth_commands import ClientContext
from src.application.dtos.auth_dtos import AuthResult, UserSummary
from src.application.services.device_registry import DeviceRegistry
from src.application.services.token_service import SessionTokenService
from src.domain.entities.user import User
from src.domain.protocols import UserRepository


class SessionStarter:
    """Turn an authenticated user into an AuthResult."""

    def __init__(
        self,
        user_repo: UserRepository,
        token_service: SessionTokenService,
        device_registry: DeviceRegistry,
    ) -> None:
        self._user_repo = user_repo
        self._token_service = token_service
        self._device_registry = device_registry

    async def start(self, user: User, client: ClientContext) -> AuthResult:
        device_id = self._device_registry.resolve_device_id(
            client.device_id, client.ip_address, client.user_agent
        )
        tokens = await self._token_service.issue_session(
            user_id=user.id,
            device_id=device_id,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
        )
        await self._device_registry.record(
            user_id=user.id,
            device_id=device_id,
            user_agent=client.user_agent,
            platform=client.platform,
            name=client.device_name,
        )

        logged_in_at = user.record_login()
        await self._user_repo.touch_last_login(user.id, logged_in_at)

        return AuthResult(user=UserSummary.from_entity(user), tokens=tokens)
