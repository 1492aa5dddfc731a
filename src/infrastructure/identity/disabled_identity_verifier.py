"""External identity verifier used when no provider is configured."""

from src.core.enums import ErrorCode
from src.core.errors import AuthenticationError
from src.core.result import Failure, Result
from src.domain.protocols.identity_verifier_protocol import ExternalIdentity


class DisabledIdentityVerifier:
    """Rejects every external credential.

    Lets the auth core depend on ExternalIdentityVerifier without any social
    sign-in provider being wired in.
    """

    async def verify(
        self, provider: str, credential: str
    ) -> Result[ExternalIdentity, AuthenticationError]:
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.IDENTITY_PROVIDER_NOT_CONFIGURED,
                message=f"External identity provider '{provider}' is not configured",
                details={"provider": provider},
            )
        )
