"""Database models for persistence layer.

These are infrastructure concerns and should not be imported by the domain
layer. Domain entities (dataclasses) live in src/domain/entities/ and are
mapped to and from these models by the repositories.

Importing this package registers every table on BaseModel.metadata (used by
Database.create_all and Alembic autogenerate).
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.models.device import Device
from src.infrastructure.persistence.models.session import Session
from src.infrastructure.persistence.models.user import User

__all__ = ["BaseModel", "Device", "Session", "User"]
