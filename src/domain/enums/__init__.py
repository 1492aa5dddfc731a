"""Domain enums.

Usage:
    from src.domain.enums import SubscriptionTier, SubscriptionStatus, DevicePlatform
"""

from src.domain.enums.device_platform import DevicePlatform
from src.domain.enums.subscription_status import SubscriptionStatus
from src.domain.enums.subscription_tier import SubscriptionTier

__all__ = [
    "DevicePlatform",
    "SubscriptionStatus",
    "SubscriptionTier",
]
