"""Unit tests for ErrorResponseBuilder (DomainError -> RFC 9457)."""

import json
from unittest.mock import Mock, patch

import pytest

from src.core.enums import ErrorCode
from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    DecryptError,
    EncryptionError,
    NotFoundError,
    ValidationError,
)
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder


def fake_request(path: str = "/api/v1/auth/login") -> Mock:
    request = Mock()
    request.url.path = path
    return request


@pytest.mark.unit
class TestStatusMapping:
    """Test that the error class decides the HTTP status."""

    @pytest.mark.parametrize(
        ("error", "expected"),
        [
            (ValidationError(code=ErrorCode.MFA_NOT_SETUP, message="m"), 400),
            (AuthenticationError(code=ErrorCode.INVALID_CREDENTIALS, message="m"), 401),
            (AuthorizationError(code=ErrorCode.SUBSCRIPTION_REQUIRED, message="m"), 403),
            (
                NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="m",
                    resource_type="User",
                    resource_id="1",
                ),
                404,
            ),
            (
                ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="m",
                    resource_type="User",
                ),
                409,
            ),
            (EncryptionError(code=ErrorCode.ENCRYPTION_FAILED, message="m"), 500),
            (DecryptError(code=ErrorCode.DECRYPTION_FAILED, message="m"), 500),
        ],
    )
    def test_status_for(self, error, expected):
        status_code, _ = ErrorResponseBuilder.status_for(error)

        assert status_code == expected


@pytest.mark.unit
class TestProblemDocument:
    """Test the rendered problem document."""

    def test_authentication_error_has_challenge_header(self):
        error = AuthenticationError(
            code=ErrorCode.INVALID_CREDENTIALS, message="Invalid email or password"
        )

        response = ErrorResponseBuilder.from_domain_error(error, fake_request(), "trace-1")

        body = json.loads(response.body)
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert body["detail"] == "Invalid email or password"
        assert body["instance"] == "/api/v1/auth/login"
        assert body["trace_id"] == "trace-1"
        assert body["type"].endswith("/errors/invalid_credentials")

    def test_validation_error_lists_field(self):
        error = ValidationError(
            code=ErrorCode.RESET_TOKEN_INVALID,
            message="Invalid or expired reset token",
            field="token",
        )

        response = ErrorResponseBuilder.from_domain_error(error, fake_request(), None)

        body = json.loads(response.body)
        assert response.status_code == 400
        assert body["errors"] == [
            {
                "field": "token",
                "code": "reset_token_invalid",
                "message": "Invalid or expired reset token",
            }
        ]
        assert "trace_id" not in body

    def test_internal_error_detail_withheld(self):
        """Decrypt failures are logged, the client sees a generic message."""
        error = DecryptError(code=ErrorCode.DECRYPTION_FAILED, message="bad tag for key")
        logger = Mock()

        with patch(
            "src.presentation.routers.api.v1.errors.error_response_builder.get_logger",
            return_value=logger,
        ):
            response = ErrorResponseBuilder.from_domain_error(
                error, fake_request("/api/v1/auth/mfa/verify"), "trace-2"
            )

        body = json.loads(response.body)
        assert response.status_code == 500
        assert "bad tag" not in body["detail"]
        logger.error.assert_called_once()
        assert logger.error.call_args.args[0] == "domain_error_internal"
