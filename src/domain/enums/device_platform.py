"""Client platform of a tracked device."""

from enum import Enum


class DevicePlatform(str, Enum):
    """Platform inferred from the client User-Agent."""

    IOS = "ios"
    ANDROID = "android"
    WEB = "web"
