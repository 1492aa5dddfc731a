"""System router for non-versioned application endpoints.

Root and health endpoints for load balancers and basic diagnostics. They are
side-effect free.
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_database, get_logger

system_router = APIRouter(tags=["System"])


@system_router.get("/")
async def root() -> dict[str, str]:
    """Root endpoint - basic status check."""
    return {
        "message": f"{settings.app_name} API",
        "status": "operational",
        "version": settings.app_version,
    }


@system_router.get("/health")
async def health() -> JSONResponse:
    """Health check including database reachability.

    Returns:
        200 {"status": "healthy"} or 503 {"status": "unhealthy"}.
    """
    if await get_database().check_connection():
        return JSONResponse(content={"status": "healthy"})

    get_logger().warning("health_check_failed", component="database")
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "unhealthy"},
    )
