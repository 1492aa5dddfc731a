"""Bcrypt password hashing service (adapter).

This service implements the PasswordHashingProtocol using bcrypt.

Architecture:
    - Implements PasswordHashingProtocol (no inheritance required)
    - Structural typing via Protocol
    - Injected via dependency container

Security:
    - Cost factor from settings (12 in production, ~250ms per hash)
    - Random salt embedded in every hash
    - Malformed hashes and unknown accounts still cost one bcrypt check,
      so response time does not reveal which case occurred
"""

import bcrypt


class BcryptPasswordService:
    """Bcrypt password hashing service.

    Usage:
        from src.core.container import get_password_service

        password_service = get_password_service()
        password_hash = password_service.hash_password("SecurePass123")
        is_valid = password_service.verify_password("SecurePass123", password_hash)
    """

    def __init__(self, cost_factor: int = 12) -> None:
        """Initialize bcrypt password service.

        Args:
            cost_factor: Bcrypt cost factor (default: 12).
                Each +1 doubles computation time. Values below 10 are only
                meant for test suites.

        Raises:
            ValueError: If cost_factor is outside 4-20.
        """
        if cost_factor < 4:
            msg = "Cost factor must be at least 4"
            raise ValueError(msg)
        if cost_factor > 20:
            msg = "Cost factor above 20 is impractically slow"
            raise ValueError(msg)

        self._cost_factor = cost_factor
        # Same cost as real hashes so the dummy check takes as long.
        self._dummy_hash = bcrypt.hashpw(
            b"timing-equalizer", bcrypt.gensalt(rounds=cost_factor)
        )

    def hash_password(self, password: str) -> str:
        """Hash a plaintext password using bcrypt.

        Returns:
            Hashed password string (bcrypt format: $2b$<cost>$...), 60 characters.

        Example:
            >>> service = BcryptPasswordService(cost_factor=12)
            >>> service.hash_password("SecurePass123") != service.hash_password("SecurePass123")
            True
        """
        salt = bcrypt.gensalt(rounds=self._cost_factor)
        password_hash = bcrypt.hashpw(password.encode("utf-8"), salt)
        return password_hash.decode("utf-8")

    def verify_password(self, password: str, password_hash: str | None) -> bool:
        """Verify a plaintext password against a bcrypt hash.

        Returns:
            True if password matches hash, False otherwise.

        Example:
            >>> service.verify_password("SecurePass123", "invalid_hash")
            False

        Note:
            - Constant-time comparison inside bcrypt.checkpw
            - Missing or malformed hashes run a dummy check, then return False
        """
        if not password or not password_hash:
            self.dummy_verify(password or "")
            return False
        try:
            return bcrypt.checkpw(
                password.encode("utf-8"), password_hash.encode("utf-8")
            )
        except (ValueError, TypeError):
            # Invalid hash format
            self.dummy_verify(password)
            return False

    def dummy_verify(self, password: str) -> None:
        """Run one bcrypt check against a fixed hash and discard the result."""
        bcrypt.checkpw(password.encode("utf-8")[:72], self._dummy_hash)
