"""Exception handlers that keep every error response in RFC 9457 shape.

Domain failures never reach these handlers; routers turn them into problems
through ErrorResponseBuilder. What lands here:

- starlette HTTPException: bearer-auth rejections and unknown routes
- RequestValidationError: schema failures, reported as 400 with field errors
- anything else: logged, then an opaque 500
"""

from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from src.core.config import settings
from src.core.container import get_logger
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_TITLES: dict[int, tuple[str, str]] = {
    400: ("Bad Request", "bad-request"),
    401: ("Authentication Required", "unauthorized"),
    403: ("Access Denied", "forbidden"),
    404: ("Resource Not Found", "not-found"),
    405: ("Method Not Allowed", "method-not-allowed"),
    409: ("Resource Conflict", "conflict"),
    503: ("Service Unavailable", "service-unavailable"),
}


def _problem(
    request: Request,
    status_code: int,
    *,
    detail: str,
    slug: str | None = None,
    title: str | None = None,
    errors: list[ErrorDetail] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    default_title, default_slug = _TITLES.get(status_code, ("Error", "error"))
    problem = ProblemDetails(
        type=f"{settings.api_base_url}/errors/{slug or default_slug}",
        title=title or default_title,
        status=status_code,
        detail=detail,
        instance=str(request.url.path),
        errors=errors,
        trace_id=get_trace_id(),
    )
    return JSONResponse(
        status_code=status_code,
        content=problem.model_dump(exclude_none=True),
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    assert isinstance(exc, HTTPException)
    return _problem(
        request,
        exc.status_code,
        detail=exc.detail if isinstance(exc.detail, str) else str(exc.detail),
        headers=exc.headers,
    )


def _field_name(location: tuple[Any, ...] | list[Any]) -> str:
    # ("body", "device_info", "device_id") -> "device_info.device_id"
    parts = [str(part) for part in location if part != "body"]
    return ".".join(parts) or "unknown"


async def validation_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Report schema failures as a 400 problem with one entry per field.

    Example body for a weak password on /register:
        {"title": "Bad Request", "status": 400,
         "errors": [{"field": "password", "code": "value_error", ...}]}
    """
    assert isinstance(exc, RequestValidationError)

    field_errors = [
        ErrorDetail(
            field=_field_name(error.get("loc", ())),
            code=error.get("type", "validation_error"),
            message=error.get("msg", "Validation failed"),
        )
        for error in exc.errors()
    ]
    return _problem(
        request,
        status.HTTP_400_BAD_REQUEST,
        slug="validation-failed",
        detail="Request validation failed. Check 'errors' for details.",
        errors=field_errors or None,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    get_logger().error(
        "unhandled_exception",
        error=exc,
        path=str(request.url.path),
        method=request.method,
    )
    return _problem(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        slug="internal-server-error",
        title="Internal Server Error",
        detail="An unexpected error occurred. Please contact support with the trace ID.",
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the three handlers above to ``app``."""
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
