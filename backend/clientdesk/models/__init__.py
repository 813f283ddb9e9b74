"""
Domain enumerations.
"""

from clientdesk.models.client import (
    BILLING_CYCLE_MONTHS,
    BillingCycle,
    ClientStatus,
    ExpiryUrgency,
    SubscriptionDisplayStatus,
    SubscriptionStatus,
)

__all__ = [
    "BILLING_CYCLE_MONTHS",
    "BillingCycle",
    "ClientStatus",
    "ExpiryUrgency",
    "SubscriptionDisplayStatus",
    "SubscriptionStatus",
]
