"""Repository implementations (SQLAlchemy adapters).

Each repository implements a domain protocol from src.domain.protocols by
structural typing and maps database models to domain entities.
"""

from src.infrastructure.persistence.repositories.device_repository import (
    DeviceRepository,
)
from src.infrastructure.persistence.repositories.session_repository import (
    SessionRepository,
)
from src.infrastructure.persistence.repositories.user_repository import (
    UserRepository,
)

__all__ = ["DeviceRepository", "SessionRepository", "UserRepository"]
