"""Error response builder for RFC 9457 Problem Details.

Maps a DomainError returned by a handler to an HTTP status and problem
document. The error class decides the status:

    ValidationError      -> 400
    AuthenticationError  -> 401
    AuthorizationError   -> 403
    NotFoundError        -> 404
    ConflictError        -> 409
    EncryptionError      -> 500 (DecryptError included, detail withheld)
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from src.core.config import settings
from src.core.container import get_logger
from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from src.presentation.routers.api.v1.errors.problem_details import (
    ErrorDetail,
    ProblemDetails,
)

_GENERIC_SERVER_DETAIL = (
    "An unexpected error occurred. Please contact support with the trace ID."
)


class ErrorResponseBuilder:
    """Build RFC 9457 Problem Details error responses.

    Example:
        >>> match result:
        ...     case Failure(error=error):
        ...         return ErrorResponseBuilder.from_domain_error(
        ...             error, request, get_trace_id()
        ...         )
    """

    @staticmethod
    def from_domain_error(
        error: DomainError,
        request: Request,
        trace_id: str | None,
    ) -> JSONResponse:
        """Convert a DomainError to an RFC 9457 JSON response."""
        status_code, title = ErrorResponseBuilder.status_for(error)

        if status_code >= 500:
            get_logger().error(
                "domain_error_internal",
                error_code=error.code.value,
                error_type=type(error).__name__,
                path=str(request.url.path),
            )

        # Internal messages of 500-class errors never reach the client.
        detail = error.message if status_code < 500 else _GENERIC_SERVER_DETAIL
        code = error.code.value if status_code < 500 else "internal-server-error"

        problem = ProblemDetails(
            type=f"{settings.api_base_url}/errors/{code}",
            title=title,
            status=status_code,
            detail=detail,
            instance=str(request.url.path),
            errors=None,
            trace_id=trace_id,
        )

        if isinstance(error, ValidationError) and error.field:
            problem.errors = [
                ErrorDetail(
                    field=error.field,
                    code=error.code.value,
                    message=error.message,
                )
            ]

        headers = (
            {"WWW-Authenticate": "Bearer"}
            if status_code == status.HTTP_401_UNAUTHORIZED
            else None
        )

        return JSONResponse(
            status_code=status_code,
            content=problem.model_dump(exclude_none=True),
            headers=headers,
        )

    @staticmethod
    def status_for(error: DomainError) -> tuple[int, str]:
        """Return (HTTP status, title) for a domain error class.

        Example:
            >>> ErrorResponseBuilder.status_for(conflict_error)
            (409, 'Resource Conflict')
        """
        match error:
            case ValidationError():
                return status.HTTP_400_BAD_REQUEST, "Bad Request"
            case AuthenticationError():
                return status.HTTP_401_UNAUTHORIZED, "Authentication Required"
            case AuthorizationError():
                return status.HTTP_403_FORBIDDEN, "Access Denied"
            case NotFoundError():
                return status.HTTP_404_NOT_FOUND, "Resource Not Found"
            case ConflictError():
                return status.HTTP_409_CONFLICT, "Resource Conflict"
            case _:
                # EncryptionError, DecryptError
                return status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
