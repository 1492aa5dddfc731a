"""API v1 routers.

Resources:
    /api/v1/auth    - Authentication, sessions, MFA, passwords, devices
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.routers.api.v1.auth import router as auth_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)
v1_router.include_router(auth_router)

__all__ = [
    "v1_router",
]
