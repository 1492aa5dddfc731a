"""External identity verifier protocol.

Capability boundary for social or enterprise sign-in. The auth core only
depends on this port; whether any provider is wired in is a container
decision.
"""

from dataclasses import dataclass
from typing import Protocol

from src.core.errors import AuthenticationError
from src.core.result import Result


@dataclass(frozen=True, slots=True, kw_only=True)
class ExternalIdentity:
    """Identity asserted by an external provider.

    Attributes:
        provider: Provider slug (e.g. "google").
        subject: Provider-side user identifier.
        email: Verified email reported by the provider.
        name: Display name reported by the provider.
    """

    provider: str
    subject: str
    email: str
    name: str | None = None


class ExternalIdentityVerifier(Protocol):
    """Verify a provider-issued credential and return the identity behind it."""

    async def verify(
        self, provider: str, credential: str
    ) -> Result[ExternalIdentity, AuthenticationError]:
        """Verify a provider credential (ID token, assertion)."""
        ...
