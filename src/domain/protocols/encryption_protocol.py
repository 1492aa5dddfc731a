"""Encryption protocol for secrets at rest.

Defines the port for encryption/decryption of MFA secrets and backup codes.
Infrastructure layer implements it with AES-256-GCM.

Architecture:
    - Domain layer protocol (port)
    - Infrastructure adapter: src/infrastructure/security/encryption_service.py
"""

from typing import Protocol

from src.core.errors import DecryptError, EncryptionError
from src.core.result import Result


class EncryptionProtocol(Protocol):
    """Protocol for encryption/decryption operations.

    Stored format is four colon-separated hex fields:
    salt:iv:tag:ciphertext. Every call uses a fresh salt and IV, so equal
    plaintexts never produce equal ciphertexts.

    Example:
        >>> match encryption.encrypt("JBSWY3DPEHPK3PXP"):
        ...     case Success(value=blob):
        ...         user.start_mfa_setup(blob)
    """

    def encrypt(self, plaintext: str) -> Result[str, EncryptionError]:
        """Encrypt a string.

        Returns:
            Success(blob) or Failure(EncryptionError).
        """
        ...

    def decrypt(self, blob: str) -> Result[str, DecryptError]:
        """Decrypt a blob produced by encrypt().

        Returns:
            Success(plaintext), or Failure(DecryptError) for malformed input,
            a wrong key, or tampered data.
        """
        ...
