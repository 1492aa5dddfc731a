"""Integration tests for the pyotp-backed TOTP service.

Drift windows are checked with fixed timestamps, not the wall clock.
"""

from datetime import UTC, datetime, timedelta

import pyotp
import pytest

from src.domain.protocols import ENABLE_WINDOW, LOGIN_WINDOW
from src.infrastructure.security.totp_service import TOTPService

NOW = datetime(2026, 10, 19, 9, 0, 0, tzinfo=UTC)
STEP = timedelta(seconds=30)


@pytest.fixture
def service():
    return TOTPService(issuer="Wyndo")


@pytest.fixture
def secret(service):
    return service.generate_secret("Wyndo (alice@example.com)").secret


@pytest.mark.integration
class TestTotpGeneration:
    """Test enrollment material."""

    def test_generate_secret(self, service):
        enrollment = service.generate_secret("Wyndo (alice@example.com)")

        assert len(enrollment.secret) == 32
        assert enrollment.otpauth_url.startswith("otpauth://totp/")
        assert "issuer=Wyndo" in enrollment.otpauth_url
        assert enrollment.qr_code.startswith("data:image/png;base64,")

    def test_backup_codes(self, service):
        codes = service.generate_backup_codes()

        assert len(codes) == 10
        assert len(set(codes)) == 10
        assert all(len(code) == 8 and code == code.upper() for code in codes)
        assert all(int(code, 16) >= 0 for code in codes)


@pytest.mark.integration
class TestTotpWindows:
    """Test clock drift tolerance."""

    def test_current_code_accepted(self, service, secret):
        code = pyotp.TOTP(secret).at(NOW)

        assert service.verify_code(secret, code, LOGIN_WINDOW, for_time=NOW) is True

    def test_login_window_accepts_one_step(self, service, secret):
        code = pyotp.TOTP(secret).at(NOW - STEP)

        assert service.verify_code(secret, code, LOGIN_WINDOW, for_time=NOW) is True

    def test_login_window_rejects_two_steps(self, service, secret):
        code = pyotp.TOTP(secret).at(NOW - 2 * STEP)

        assert service.verify_code(secret, code, LOGIN_WINDOW, for_time=NOW) is False

    def test_enable_window_accepts_two_steps(self, service, secret):
        code = pyotp.TOTP(secret).at(NOW + 2 * STEP)

        assert service.verify_code(secret, code, ENABLE_WINDOW, for_time=NOW) is True

    @pytest.mark.parametrize("offset", [-3, 3])
    def test_enable_window_rejects_three_steps(self, service, secret, offset):
        code = pyotp.TOTP(secret).at(NOW + offset * STEP)

        assert service.verify_code(secret, code, ENABLE_WINDOW, for_time=NOW) is False

    @pytest.mark.parametrize("code", ["12345", "abcdef", "1234567", ""])
    def test_malformed_code_rejected(self, service, secret, code):
        assert service.verify_code(secret, code, LOGIN_WINDOW, for_time=NOW) is False
