"""Device enricher implementation using user-agents library.

Parses user agent strings to extract browser, OS, and device category.
Implements DeviceEnricher protocol with fail-open behavior.
"""

import logging

from user_agents import parse as parse_user_agent  # type: ignore[import-untyped]
from user_agents.parsers import UserAgent  # type: ignore[import-untyped]

from src.domain.protocols.session_enricher_protocol import DeviceEnrichmentResult

logger = logging.getLogger(__name__)

_UNKNOWN_FAMILIES = {"Other", ""}


class UserAgentDeviceEnricher:
    """Device enricher using the user-agents library.

    Behavior:
        - Fail-open: Returns empty result on parse errors
        - Non-blocking: Pure string parsing (<1ms)
    """

    async def enrich(self, user_agent: str | None) -> DeviceEnrichmentResult:
        """Parse user agent string to extract device information.

        Returns:
            DeviceEnrichmentResult, empty (all None) on missing or unparsable input.
        """
        if not user_agent:
            return DeviceEnrichmentResult()

        try:
            ua: UserAgent = parse_user_agent(user_agent)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(
                "Failed to parse user agent",
                extra={"user_agent": user_agent[:100], "error": str(e)},
            )
            return DeviceEnrichmentResult()

        browser = _known(ua.browser.family)
        os_name = _known(ua.os.family)

        return DeviceEnrichmentResult(
            device_info=self._build_device_info(browser, os_name),
            browser=browser,
            os=os_name,
            device_type=self._determine_device_type(ua),
            is_bot=ua.is_bot,
        )

    def _determine_device_type(self, ua: UserAgent) -> str:
        if ua.is_mobile:
            return "mobile"
        if ua.is_tablet:
            return "tablet"
        if ua.is_pc:
            return "desktop"
        return "other"

    def _build_device_info(self, browser: str | None, os_name: str | None) -> str | None:
        """Build human-readable device info ("Chrome on Mac OS X")."""
        if browser and os_name:
            return f"{browser} on {os_name}"
        if browser:
            return browser
        if os_name:
            return f"Unknown browser on {os_name}"
        return None


def _known(family: str | None) -> str | None:
    if family is None or family in _UNKNOWN_FAMILIES:
        return None
    return family
