"""Device enricher protocol.

Turns a raw User-Agent into the human-readable summary stored on a session
("Chrome on Mac OS X").
"""

from dataclasses import dataclass
from typing import Protocol


@dataclass(slots=True, kw_only=True)
class DeviceEnrichmentResult:
    """Result of device information enrichment.

    Attributes:
        device_info: Human-readable device info ("Chrome on Mac OS X").
        browser: Browser family ("Chrome", "Mobile Safari").
        os: Operating system family ("Mac OS X", "iOS").
        device_type: "mobile", "tablet", "desktop" or "other".
        is_bot: Whether the user agent looks like a crawler.
    """

    device_info: str | None = None
    browser: str | None = None
    os: str | None = None
    device_type: str | None = None
    is_bot: bool = False


class DeviceEnricher(Protocol):
    """Device enricher protocol (port) for user agent parsing.

    Behavior:
        - Fail-open: Returns empty result on errors
        - Best-effort: Unknown agents return partial data
    """

    async def enrich(self, user_agent: str | None) -> DeviceEnrichmentResult:
        """Parse a user agent string. Empty result on missing or bad input."""
        ...
