"""Encryption service for secrets at rest.

AES-256-GCM with a per-call PBKDF2-HMAC-SHA256 key derivation, used for TOTP
secrets and MFA backup codes.

Security Properties:
    - Confidentiality: Only holder of the key material can decrypt
    - Integrity: Tampering is detected via the GCM authentication tag
    - Uniqueness: Random salt and IV per call, equal inputs never repeat

Stored Format:
    salt_hex:iv_hex:tag_hex:ciphertext_hex
    (64-byte salt, 16-byte IV, 16-byte tag)

Architecture:
    - Infrastructure adapter (catches cryptography exceptions)
    - Returns Result types (railway-oriented programming)
    - Uses domain error codes (ErrorCode enum)

Performance:
    100,000 PBKDF2 iterations cost tens of milliseconds per call. Async
    callers run encrypt/decrypt through asyncio.to_thread.
"""

import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from src.core.enums import ErrorCode
from src.core.errors import DecryptError, EncryptionError
from src.core.result import Failure, Result, Success

SALT_SIZE = 64
IV_SIZE = 16
TAG_SIZE = 16
KEY_SIZE = 32  # AES-256
KDF_ITERATIONS = 100_000
MIN_KEY_MATERIAL_LENGTH = 32


class EncryptionService:
    """AES-256-GCM encryption service for short secrets.

    Usage:
        >>> from src.core.config import get_settings
        >>> match EncryptionService.create(get_settings().encryption_key):
        ...     case Success(value=service):
        ...         blob = service.encrypt("JBSWY3DPEHPK3PXP")
        ...     case Failure(error=error):
        ...         # Handle invalid key
        ...         ...

    Thread Safety:
        Stateless apart from the key material. Safe to share across threads.
    """

    def __init__(self, key_material: bytes) -> None:
        """Initialize with validated key material.

        Use EncryptionService.create() factory instead of direct construction.
        """
        self._key_material = key_material

    @classmethod
    def create(cls, key: str) -> Result["EncryptionService", EncryptionError]:
        """Create encryption service with validated key material.

        Args:
            key: Secret string of at least 32 characters.

        Returns:
            Success(EncryptionService) if key is valid.
            Failure(EncryptionError) if key is empty or too short.
        """
        if len(key) < MIN_KEY_MATERIAL_LENGTH:
            return Failure(
                error=EncryptionError(
                    code=ErrorCode.ENCRYPTION_KEY_INVALID,
                    message=(
                        f"Encryption key must be at least {MIN_KEY_MATERIAL_LENGTH} "
                        f"characters, got {len(key)}"
                    ),
                    details={
                        "minimum_length": str(MIN_KEY_MATERIAL_LENGTH),
                        "actual_length": str(len(key)),
                    },
                )
            )
        return Success(value=cls(key.encode("utf-8")))

    def encrypt(self, plaintext: str) -> Result[str, EncryptionError]:
        """Encrypt a string.

        Returns:
            Success(str) in salt:iv:tag:ciphertext hex format.
            Failure(EncryptionError) if the cipher fails.
        """
        salt = os.urandom(SALT_SIZE)
        iv = os.urandom(IV_SIZE)
        try:
            aesgcm = AESGCM(self._derive_key(salt))
            sealed = aesgcm.encrypt(iv, plaintext.encode("utf-8"), associated_data=None)
        except (ValueError, OverflowError) as e:
            return Failure(
                error=EncryptionError(
                    code=ErrorCode.ENCRYPTION_FAILED,
                    message=f"Encryption failed: {e}",
                )
            )

        # AESGCM appends the tag to the ciphertext
        ciphertext, tag = sealed[:-TAG_SIZE], sealed[-TAG_SIZE:]
        return Success(value=":".join(part.hex() for part in (salt, iv, tag, ciphertext)))

    def decrypt(self, blob: str) -> Result[str, DecryptError]:
        """Decrypt a blob produced by encrypt().

        Returns:
            Success(str) with the original plaintext.
            Failure(DecryptError) if the blob is malformed, the key is wrong
            or the data was tampered with.
        """
        parts = blob.split(":")
        if len(parts) != 4:
            return Failure(error=_malformed(f"expected 4 fields, got {len(parts)}"))

        try:
            salt, iv, tag, ciphertext = (bytes.fromhex(part) for part in parts)
        except ValueError:
            return Failure(error=_malformed("fields must be hexadecimal"))

        if len(salt) != SALT_SIZE or len(iv) != IV_SIZE or len(tag) != TAG_SIZE:
            return Failure(error=_malformed("unexpected field length"))

        try:
            aesgcm = AESGCM(self._derive_key(salt))
            plaintext = aesgcm.decrypt(iv, ciphertext + tag, associated_data=None)
        except InvalidTag:
            return Failure(
                error=DecryptError(
                    code=ErrorCode.DECRYPTION_FAILED,
                    message="Failed to decrypt: invalid key or tampered data",
                )
            )

        try:
            return Success(value=plaintext.decode("utf-8"))
        except UnicodeDecodeError:
            return Failure(error=_malformed("plaintext is not valid UTF-8"))

    def _derive_key(self, salt: bytes) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_SIZE,
            salt=salt,
            iterations=KDF_ITERATIONS,
        )
        return kdf.derive(self._key_material)


def _malformed(reason: str) -> DecryptError:
    return DecryptError(
        code=ErrorCode.DECRYPTION_FAILED,
        message="Encrypted data is malformed",
        details={"reason": reason},
    )
