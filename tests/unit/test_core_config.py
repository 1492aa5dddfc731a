"""Unit tests for Settings validation."""

import pytest
from pydantic import ValidationError

from src.core.config import Settings
from src.core.enums import Environment

VALID = {
    "database_url": "sqlite+aiosqlite:///./x.db",
    "secret_key": "s" * 32,
    "encryption_key": "e" * 32,
}


@pytest.mark.unit
class TestSettings:
    """Test settings validators and derived properties."""

    def test_defaults(self):
        settings = Settings(**VALID)

        assert settings.access_token_expire_minutes == 15
        assert settings.refresh_token_expire_days == 7
        assert settings.temp_token_expire_minutes == 10
        assert settings.trial_period_days == 14

    @pytest.mark.parametrize("field", ["secret_key", "encryption_key"])
    def test_short_keys_rejected(self, field):
        with pytest.raises(ValidationError):
            Settings(**{**VALID, field: "short"})

    @pytest.mark.parametrize("rounds", [3, 21])
    def test_bcrypt_rounds_bounds(self, rounds):
        with pytest.raises(ValidationError):
            Settings(**VALID, bcrypt_rounds=rounds)

    def test_urls_lose_trailing_slash(self):
        settings = Settings(**VALID, app_url="https://app.wyndo.app/")

        assert settings.app_url == "https://app.wyndo.app"

    def test_cors_origin_list_parsing(self):
        settings = Settings(**VALID, cors_origins="https://a.io, https://b.io,,")

        assert settings.cors_origin_list == ["https://a.io", "https://b.io"]

    def test_environment_flags(self):
        settings = Settings(**VALID, environment=Environment.TESTING)

        assert settings.is_testing is True
        assert settings.is_production is False
