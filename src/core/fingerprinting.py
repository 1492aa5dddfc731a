"""Device identification helpers.

A device id is either supplied by the client (mobile apps send a stable
install id) or derived from the request's IP address and User-Agent. Platform
and friendly name are inferred from the User-Agent so the device list in
account settings reads "iPhone" or "Windows PC" rather than a hash.

Security:
- SHA256 hash truncated to 32 hex characters
- Not reversible, no PII stored beyond what the session already holds
"""

import hashlib
import logging

logger = logging.getLogger(__name__)

DEVICE_ID_LENGTH = 32


def generate_device_fingerprint(ip_address: str | None, user_agent: str | None) -> str:
    """Derive a stable device id from client IP and User-Agent.

    Args:
        ip_address: Client IP (may be None behind some proxies).
        user_agent: User-Agent header (may be None).

    Returns:
        32 hex characters (first half of a SHA256 digest).

    Examples:
        >>> generate_device_fingerprint("10.0.0.1", "Mozilla/5.0")
        'f1c0...'  # 32 characters

    Notes:
        - Same IP + browser produce the same id, so repeat logins upsert one device
        - Missing components hash as the string "None", still deterministic
    """
    fingerprint_string = f"{ip_address}-{user_agent}"
    fingerprint_hash = hashlib.sha256(fingerprint_string.encode("utf-8")).hexdigest()

    logger.debug(f"Generated device fingerprint: {fingerprint_hash[:8]}...")

    return fingerprint_hash[:DEVICE_ID_LENGTH]


def resolve_device_id(
    supplied_device_id: str | None,
    ip_address: str | None,
    user_agent: str | None,
) -> str:
    """Return the client-supplied device id, or a fingerprint when absent."""
    if supplied_device_id:
        return supplied_device_id
    return generate_device_fingerprint(ip_address, user_agent)


def detect_platform(user_agent: str | None) -> str:
    """Infer the client platform from a User-Agent string.

    Examples:
        >>> detect_platform("Mozilla/5.0 (iPhone; CPU iPhone OS 17_0 like Mac OS X)")
        'ios'
        >>> detect_platform("okhttp/4.9 Android")
        'android'
        >>> detect_platform(None)
        'web'
    """
    ua_lower = (user_agent or "").lower()

    if "iphone" in ua_lower or "ipad" in ua_lower or "ipod" in ua_lower:
        return "ios"
    if "android" in ua_lower:
        return "android"
    return "web"


def generate_device_name(user_agent: str | None) -> str:
    """Build a friendly device name for the device list.

    Order matters: iOS and Android UAs also mention "Mac OS X" and "Linux".

    Examples:
        >>> generate_device_name("Mozilla/5.0 (iPad; CPU OS 16_0 like Mac OS X)")
        'iPad'
        >>> generate_device_name("Mozilla/5.0 (X11; Linux x86_64)")
        'Linux'
        >>> generate_device_name("")
        'Unknown Device'
    """
    ua_lower = (user_agent or "").lower()

    if "iphone" in ua_lower:
        return "iPhone"
    if "ipad" in ua_lower:
        return "iPad"
    if "android" in ua_lower:
        return "Android Device"
    if "macintosh" in ua_lower or "mac os x" in ua_lower:
        return "Mac"
    if "windows" in ua_lower:
        return "Windows PC"
    if "linux" in ua_lower:
        return "Linux"
    return "Unknown Device"
