"""Get current user query handler."""

from src.application.dtos.auth_dtos import UserSummary
from src.application.queries.user_queries import GetCurrentUser
from src.core.enums import ErrorCode
from src.core.errors import DomainError, NotFoundError
from src.core.result import Failure, Result, Success
from src.domain.errors import AuthMessage
from src.domain.protocols import UserRepository


class GetCurrentUserHandler:
    """Handler returning the caller's own profile.

    A token can outlive its user (deleted or deactivated account); both are
    reported as not found.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self._user_repo = user_repo

    async def handle(self, query: GetCurrentUser) -> Result[UserSummary, DomainError]:
        user = await self._user_repo.find_by_id(query.user_id)
        if user is None or user.is_deactivated():
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message=AuthMessage.USER_NOT_FOUND,
                    resource_type="User",
                    resource_id=str(query.user_id),
                )
            )
        return Success(value=UserSummary.from_entity(user))
