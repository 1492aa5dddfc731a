"""Domain entities."""

from src.domain.entities.device import Device
from src.domain.entities.session import Session
from src.domain.entities.user import User

__all__ = ["Device", "Session", "User"]
