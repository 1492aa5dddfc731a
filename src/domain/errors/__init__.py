"""Domain errors package.

Message constants shared by handlers and the presentation layer. Error
classes themselves live in src.core.errors.
"""

from src.domain.errors.authentication_error import AuthConfirmation, AuthMessage

__all__ = ["AuthConfirmation", "AuthMessage"]
