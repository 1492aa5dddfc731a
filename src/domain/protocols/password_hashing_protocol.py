"""Password hashing protocol for domain layer.

Infrastructure layer provides the concrete implementation (bcrypt).

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (BcryptPasswordService)
    - No framework dependencies in domain
"""

from typing import Protocol


class PasswordHashingProtocol(Protocol):
    """Password hashing and verification interface.

    Both operations are CPU-bound. Async callers run them through
    asyncio.to_thread.

    Usage:
        password_hash = self._password_service.hash_password("SecurePass123")
        is_valid = self._password_service.verify_password("SecurePass123", password_hash)
    """

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Returns:
            Hashed password string (bcrypt format: $2b$12$...). Same input
            produces different hashes (random salt).
        """
        ...

    def verify_password(self, password: str, password_hash: str | None) -> bool:
        """Verify a plaintext password against a hash.

        Returns:
            True if password matches hash, False otherwise. Never raises,
            malformed or missing hashes return False after comparable work.
        """
        ...

    def dummy_verify(self, password: str) -> None:
        """Spend one verification worth of time on a fixed hash.

        Used when there is no stored hash to compare against (unknown email)
        so the response time does not reveal whether the account exists.
        """
        ...
