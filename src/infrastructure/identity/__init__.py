"""External identity verifier adapters."""

from src.infrastructure.identity.disabled_identity_verifier import (
    DisabledIdentityVerifier,
)

__all__ = ["DisabledIdentityVerifier"]
