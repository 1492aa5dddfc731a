"""Subscription billing status."""

from enum import Enum


class SubscriptionStatus(str, Enum):
    """Billing state of a user's subscription.

    New accounts start in TRIAL. PAST_DUE and CANCELED paid accounts lose
    access until billing is resolved; FREE accounts are never gated.
    """

    TRIAL = "TRIAL"
    ACTIVE = "ACTIVE"
    PAST_DUE = "PAST_DUE"
    CANCELED = "CANCELED"
