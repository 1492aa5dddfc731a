"""Unit tests for device identification helpers."""

import pytest

from src.core.fingerprinting import (
    DEVICE_ID_LENGTH,
    detect_platform,
    generate_device_fingerprint,
    generate_device_name,
    resolve_device_id,
)

IPHONE_UA = "Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X) AppleWebKit/605.1.15"
ANDROID_UA = "Mozilla/5.0 (Linux; Android 14; Pixel 8) AppleWebKit/537.36"
MAC_UA = "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36"
WINDOWS_UA = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"


@pytest.mark.unit
class TestDeviceFingerprint:
    """Test fingerprint derivation."""

    def test_fingerprint_is_deterministic(self):
        first = generate_device_fingerprint("10.0.0.1", MAC_UA)
        second = generate_device_fingerprint("10.0.0.1", MAC_UA)

        assert first == second
        assert len(first) == DEVICE_ID_LENGTH

    def test_fingerprint_differs_by_ip(self):
        assert generate_device_fingerprint("10.0.0.1", MAC_UA) != (
            generate_device_fingerprint("10.0.0.2", MAC_UA)
        )

    def test_missing_components_still_hash(self):
        assert len(generate_device_fingerprint(None, None)) == DEVICE_ID_LENGTH

    def test_supplied_device_id_wins(self):
        assert resolve_device_id("install-123", "10.0.0.1", MAC_UA) == "install-123"

    def test_empty_supplied_id_falls_back_to_fingerprint(self):
        assert resolve_device_id("", "10.0.0.1", MAC_UA) == (
            generate_device_fingerprint("10.0.0.1", MAC_UA)
        )


@pytest.mark.unit
class TestPlatformAndName:
    """Test User-Agent inference."""

    @pytest.mark.parametrize(
        ("user_agent", "platform", "name"),
        [
            (IPHONE_UA, "ios", "iPhone"),
            ("Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)", "ios", "iPad"),
            (ANDROID_UA, "android", "Android Device"),
            (MAC_UA, "web", "Mac"),
            (WINDOWS_UA, "web", "Windows PC"),
            ("Mozilla/5.0 (X11; Linux x86_64)", "web", "Linux"),
            (None, "web", "Unknown Device"),
        ],
    )
    def test_inference(self, user_agent, platform, name):
        assert detect_platform(user_agent) == platform
        assert generate_device_name(user_agent) == name
