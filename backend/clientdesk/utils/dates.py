"""
Date range math for subscriptions.

Every function here runs while building a response and must never raise on
bad input: unparseable or inverted ranges degrade to ``0`` progress or a
``None`` day count instead.
"""

import math
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

from clientdesk.models.client import BILLING_CYCLE_MONTHS, BillingCycle, ExpiryUrgency

Timestamp = Union[str, date, datetime, None]

SECONDS_PER_DAY = 86_400


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse an ISO-8601 string, ``date`` or ``datetime`` into an aware UTC datetime.

    Date-only strings mean midnight UTC; naive values are taken as UTC.
    Returns None for anything that cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str) and value.strip():
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def progress_percent(start: Timestamp, end: Timestamp, now: Timestamp = None) -> int:
    """
    Percentage of the ``start``..``end`` range elapsed at ``now``, in [0, 100].

    Returns 0 when either bound is unparseable or ``end <= start``.
    """
    start_dt = parse_timestamp(start)
    end_dt = parse_timestamp(end)
    now_dt = parse_timestamp(now) if now is not None else utc_now()
    if start_dt is None or end_dt is None or now_dt is None or end_dt <= start_dt:
        return 0
    if now_dt <= start_dt:
        return 0
    if now_dt >= end_dt:
        return 100
    elapsed = (now_dt - start_dt).total_seconds()
    total = (end_dt - start_dt).total_seconds()
    return min(100, max(0, _round_half_up(elapsed / total * 100)))


def days_until(target: Timestamp, now: Timestamp = None) -> Optional[int]:
    """
    Whole days from ``now`` until ``target``, rounded up; negative when past.

    None means "no data", which callers must keep apart from zero days.
    """
    target_dt = parse_timestamp(target)
    now_dt = parse_timestamp(now) if now is not None else utc_now()
    if target_dt is None or now_dt is None:
        return None
    return math.ceil((target_dt - now_dt).total_seconds() / SECONDS_PER_DAY)


def add_months(start: datetime, months: int) -> datetime:
    """
    Add months while keeping day in valid range (e.g., Jan 31 + 1 month => Feb 28/29).
    """
    y = start.year + (start.month - 1 + months) // 12
    m = (start.month - 1 + months) % 12 + 1
    # last day of target month
    if m == 12:
        next_month = date(y + 1, 1, 1)
    else:
        next_month = date(y, m + 1, 1)
    last_day = next_month - timedelta(days=1)
    day = min(start.day, last_day.day)
    return start.replace(year=y, month=m, day=day)


def billing_cycle_months(cycle: Any) -> int:
    """Months per billing cycle; unknown cycles bill monthly."""
    try:
        return BILLING_CYCLE_MONTHS[BillingCycle(cycle)]
    except (ValueError, TypeError):
        return 1


def next_billing_date(
    start_date: Timestamp,
    expires_at: Timestamp,
    billing_cycle: Any = None,
    now: Timestamp = None,
) -> Optional[datetime]:
    """
    Next renewal date of a subscription.

    The expiry date is the renewal anchor when it parses. Otherwise the
    billing cycle is stepped forward from the start date until it is no
    longer in the past.
    """
    expires = parse_timestamp(expires_at)
    if expires is not None:
        return expires

    start = parse_timestamp(start_date)
    now_dt = parse_timestamp(now) if now is not None else utc_now()
    if start is None or now_dt is None:
        return None

    step = billing_cycle_months(billing_cycle)
    cycles = 0
    candidate = start
    while candidate < now_dt:
        cycles += 1
        candidate = add_months(start, step * cycles)
    return candidate


def expiry_urgency(days: Optional[int]) -> ExpiryUrgency:
    if days is None:
        return ExpiryUrgency.UNKNOWN
    if days < 0:
        return ExpiryUrgency.OVERDUE
    if days < 7:
        return ExpiryUrgency.CRITICAL
    if days < 30:
        return ExpiryUrgency.WARNING
    return ExpiryUrgency.OK
