"""
Client and subscription status enumerations.
"""

import enum


class ClientStatus(str, enum.Enum):
    """Canonical client status shown by every view."""
    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    BLOCKED = "blocked"


class SubscriptionStatus(str, enum.Enum):
    """Subscription status as assigned by the backend."""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    PENDING = "pending"


class SubscriptionDisplayStatus(str, enum.Enum):
    """Subscription status as derived for display at a point in time."""
    ACTIVE = "active"
    CANCELLED = "cancelled"
    EXPIRED = "expired"
    INACTIVE = "inactive"


class BillingCycle(str, enum.Enum):
    """
    Billing cycle enumeration.

    Plans are priced ``monthly | yearly`` while assignments bill
    ``monthly | quarterly | annually``; "yearly" reads as ANNUALLY.
    """
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            text = value.strip().lower()
            if text == "yearly":
                return cls.ANNUALLY
            for member in cls:
                if member.value == text:
                    return member
        return None


class ExpiryUrgency(str, enum.Enum):
    """How close a subscription is to its expiry."""
    OVERDUE = "overdue"
    CRITICAL = "critical"
    WARNING = "warning"
    OK = "ok"
    UNKNOWN = "unknown"


BILLING_CYCLE_MONTHS = {
    BillingCycle.MONTHLY: 1,
    BillingCycle.QUARTERLY: 3,
    BillingCycle.ANNUALLY: 12,
}
