"""Bearer authentication dependencies.

Access tokens are verified statelessly (signature, expiry, type). The user
is then loaded so deactivated accounts and lapsed paid subscriptions are
turned away:

    missing/invalid token, unknown or deactivated user -> 401
    paid tier without ACTIVE/TRIAL status               -> 403

Usage:
    @router.get("/me")
    async def me(current_user: CurrentUser = Depends(get_current_user)):
        ...
"""

from dataclasses import dataclass
from typing import Annotated
from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.application.services import SessionTokenService
from src.core.container import get_session_token_service, get_user_repository
from src.domain.errors import AuthMessage
from src.domain.protocols import UserRepository

# auto_error=False so a missing header is a 401 Problem Detail, not a 403
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CurrentUser:
    """Authenticated caller.

    Attributes:
        user_id: User's unique identifier (JWT 'sub' claim).
        email: User's email address.
        access_token: Raw bearer token (logout revokes its session).
    """

    user_id: UUID
    email: str
    access_token: str


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
    token_service: Annotated[
        SessionTokenService, Depends(get_session_token_service)
    ],
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
) -> CurrentUser:
    """Resolve the caller from the Authorization header.

    Raises:
        HTTPException 401: Token missing, invalid or expired, or the user is
            gone or deactivated.
        HTTPException 403: Paid tier whose subscription has lapsed.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    user_id = token_service.verify_access_token(credentials.credentials)
    if user_id is None:
        raise _unauthorized(AuthMessage.INVALID_TOKEN)

    user = await user_repo.find_by_id(user_id)
    if user is None or user.is_deactivated():
        raise _unauthorized(AuthMessage.INVALID_TOKEN)

    if not user.has_subscription_access():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=AuthMessage.SUBSCRIPTION_REQUIRED,
        )

    return CurrentUser(
        user_id=user.id,
        email=user.email,
        access_token=credentials.credentials,
    )
