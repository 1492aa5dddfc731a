"""Result types for railway-oriented programming.

Handlers and security adapters return a Result instead of raising, so every
failure path (bad credentials, tampered ciphertext, expired token) is visible
in the signature and exhaustively handled by the caller.

Usage:
    def decrypt(blob: str) -> Result[str, DecryptError]:
        if blob.count(":") != 3:
            return Failure(error=DecryptError(...))
        return Success(value=plaintext)

    match service.decrypt(blob):
        case Success(value=secret):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Represents a successful operation result.

    Attributes:
        value: The successful result value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Represents a failed operation result.

    Attributes:
        error: The error that occurred.
    """

    error: E


Result: TypeAlias = Success[T] | Failure[E]
