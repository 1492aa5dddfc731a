"""RFC 9457 Problem Details models.

Every error the API returns, whether a domain failure, a request validation
failure or an unhandled exception, is serialized through ProblemDetails.
"""

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """Field-level error inside a validation problem."""

    field: str = Field(..., description="Field name", examples=["password"])
    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")


class ProblemDetails(BaseModel):
    """RFC 9457 problem document.

    Examples:
        >>> ProblemDetails(
        ...     type="https://api.wyndo.app/errors/invalid_credentials",
        ...     title="Authentication Required",
        ...     status=401,
        ...     detail="Invalid email or password",
        ...     instance="/api/v1/auth/login",
        ... )
    """

    type: str = Field(..., description="URI identifying the problem type")
    title: str = Field(..., description="Short summary of the problem type")
    status: int = Field(..., description="HTTP status code", examples=[401])
    detail: str = Field(..., description="Explanation of this occurrence")
    instance: str = Field(..., description="Request path", examples=["/api/v1/auth/login"])
    errors: list[ErrorDetail] | None = Field(None, description="Field errors")
    trace_id: str | None = Field(None, description="Request trace ID")
