"""User queries (read operations). Queries NEVER change state."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True, kw_only=True)
class GetCurrentUser:
    """Get the profile of the authenticated user.

    Attributes:
        user_id: User identifier taken from the access token.
    """

    user_id: UUID
