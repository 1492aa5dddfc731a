"""Subscription tiers.

Closed set of plans a user can be on. Ordering matters for feature gating:
a higher tier includes every capability of the tiers below it.

Usage:
    from src.domain.enums import SubscriptionTier

    if user.subscription_tier.includes(SubscriptionTier.BUSINESS):
        ...
"""

from enum import Enum


class SubscriptionTier(str, Enum):
    """Subscription plan of a user account."""

    FREE = "FREE"
    PROFESSIONAL = "PROFESSIONAL"
    BUSINESS = "BUSINESS"
    ENTERPRISE = "ENTERPRISE"

    @property
    def level(self) -> int:
        """Position in the tier hierarchy (FREE = 0)."""
        return _TIER_ORDER.index(self)

    def includes(self, required: "SubscriptionTier") -> bool:
        """Check whether this tier grants access to features of ``required``."""
        return self.level >= required.level


_TIER_ORDER: list[SubscriptionTier] = [
    SubscriptionTier.FREE,
    SubscriptionTier.PROFESSIONAL,
    SubscriptionTier.BUSINESS,
    SubscriptionTier.ENTERPRISE,
]
