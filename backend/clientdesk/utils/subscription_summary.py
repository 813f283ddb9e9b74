"""
Per-subscription figures the client profile shows: progress, time left, price.
"""

from typing import Any, Dict, Iterable, Mapping, Optional

from clientdesk.models.client import ClientStatus, SubscriptionDisplayStatus, SubscriptionStatus
from clientdesk.utils.client_transform import is_populated
from clientdesk.utils.dates import (
    Timestamp,
    days_until,
    expiry_urgency,
    next_billing_date,
    parse_timestamp,
    progress_percent,
    utc_now,
)
from clientdesk.utils.pricing import (
    ZERO,
    clamp_discount,
    discount_amount,
    effective_price,
    select_base_price,
    to_cents,
    to_decimal,
)


def plan_price(subscription: Mapping[str, Any]) -> Any:
    plan = subscription.get("plan")
    return plan.get("price") if is_populated(plan) else None


def subscription_display_status(
    subscription: Optional[Mapping[str, Any]],
    now: Timestamp = None,
) -> SubscriptionDisplayStatus:
    """
    Status to badge a subscription with at ``now``.

    No subscription reads as inactive, a cancelled one stays cancelled, and
    anything past its expiry is expired regardless of the stored status.
    """
    if not subscription:
        return SubscriptionDisplayStatus.INACTIVE
    if str(subscription.get("status") or "").lower() == SubscriptionStatus.CANCELLED.value:
        return SubscriptionDisplayStatus.CANCELLED
    expires = parse_timestamp(subscription.get("expiresAt"))
    now_dt = parse_timestamp(now) if now is not None else utc_now()
    if expires is not None and now_dt is not None and expires < now_dt:
        return SubscriptionDisplayStatus.EXPIRED
    return SubscriptionDisplayStatus.ACTIVE


def summarize_subscription(subscription: Mapping[str, Any], now: Timestamp = None) -> Dict[str, Any]:
    now = now if now is not None else utc_now()
    base = select_base_price(subscription.get("customPrice"), plan_price(subscription))
    discount = subscription.get("discount")
    days_remaining = days_until(subscription.get("expiresAt"), now)
    return {
        "status": subscription_display_status(subscription, now),
        "progress_percent": progress_percent(subscription.get("startDate"), subscription.get("expiresAt"), now),
        "days_remaining": days_remaining,
        "urgency": expiry_urgency(days_remaining),
        "next_billing_date": next_billing_date(
            subscription.get("startDate"),
            subscription.get("expiresAt"),
            subscription.get("billingCycle"),
            now,
        ),
        "base_price": to_cents(base),
        "discount_percent": clamp_discount(discount),
        "discount_amount": discount_amount(base, discount),
        "final_price": effective_price(base, discount),
    }


def summarize_clients(clients: Iterable[Mapping[str, Any]], now: Timestamp = None) -> Dict[str, Any]:
    """
    Headline numbers for the clients page over normalized records.

    Recurring revenue counts the stored ``amount`` of every subscription that
    is active at ``now``.
    """
    now = now if now is not None else utc_now()
    total = active = pending = paying = 0
    recurring = ZERO
    for client in clients:
        total += 1
        if client.get("status") == ClientStatus.ACTIVE.value:
            active += 1
        elif client.get("status") == ClientStatus.PENDING.value:
            pending += 1
        subscription = client.get("subscription")
        if subscription_display_status(subscription, now) == SubscriptionDisplayStatus.ACTIVE:
            amount = to_decimal(subscription.get("amount"))
            if amount > 0:
                paying += 1
                recurring += amount
    return {
        "total": total,
        "active": active,
        "pending": pending,
        "recurring_revenue": to_cents(recurring),
        "average_value": to_cents(recurring / paying) if paying else to_cents(ZERO),
    }
