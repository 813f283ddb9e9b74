"""
Normalize backend client records into the view model every endpoint returns.

Backend records are only partially populated: ``user`` and ``plan`` may be
bare ids or full objects, the subscription can be missing, timestamps can be
absent. ``normalize_client`` fills all of that in once, with defaults that
depend only on the record and the ``now`` it is given, so running it twice
gives the same result as running it once.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, Iterable, List, Mapping, Optional

from clientdesk.core.config import settings
from clientdesk.core.exceptions import InvalidRecord
from clientdesk.models.client import SubscriptionStatus
from clientdesk.utils.client_status import resolve_status
from clientdesk.utils.dates import Timestamp, parse_timestamp, utc_now

UNKNOWN_USER_ID = "unknown"
DEFAULT_PLAN = "basic"


def is_populated(value: Any) -> bool:
    """True when a relationship field holds a full object (with an id) rather than a bare id."""
    return isinstance(value, Mapping) and bool(value.get("_id"))


def to_iso(value: datetime) -> str:
    """Millisecond ISO-8601 in UTC with a ``Z`` suffix, the backend's own format."""
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _text(value: Any) -> str:
    """Display fields are strings; numbers such as phone numbers are stringified."""
    if value is None or isinstance(value, str):
        return value or ""
    return str(value)


def _resolve_user(raw: Mapping[str, Any]) -> Dict[str, Any]:
    user = raw.get("user")
    if is_populated(user):
        return dict(user)
    if isinstance(user, str) and user:
        return {
            "_id": user,
            "email": _text(raw.get("email")),
            "fName": "",
            "lName": "",
            "phone": _text(raw.get("phone")),
        }
    placeholder = {
        "_id": UNKNOWN_USER_ID,
        "email": "",
        "fName": "Unknown",
        "lName": "User",
        "phone": "",
    }
    if isinstance(user, Mapping):
        # object without an id: keep what it has
        placeholder.update({k: v for k, v in user.items() if v is not None and k != "_id"})
    return placeholder


def _display_name(raw: Mapping[str, Any], user: Mapping[str, Any]) -> str:
    full_name = f"{user.get('fName') or ''} {user.get('lName') or ''}".strip()
    return _text(raw.get("name") or full_name or raw.get("companyName") or "Unnamed Client")


def synthesize_subscription(
    current_plan: Any,
    is_active: bool,
    created_at: Any,
    days: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Default subscription for a record that has none.

    Active clients get a ``days``-long term starting at ``created_at``;
    inactive clients get a cancelled, zero-length one.
    """
    days = settings.SYNTHESIZED_SUBSCRIPTION_DAYS if days is None else days
    expires_at = created_at
    created = parse_timestamp(created_at)
    if is_active and created is not None:
        expires_at = to_iso(created + timedelta(days=days))
    return {
        "plan": current_plan or DEFAULT_PLAN,
        "status": (SubscriptionStatus.ACTIVE if is_active else SubscriptionStatus.CANCELLED).value,
        "amount": 0,
        "startDate": created_at,
        "expiresAt": expires_at,
    }


def normalize_client(raw: Any, now: Timestamp = None) -> Dict[str, Any]:
    """
    Build the fully populated view model for one backend client record.

    Known fields are recomputed; every other field on ``raw`` passes through
    unchanged.

    Args:
        raw: Client record as returned by the backend
        now: Reference time for defaulted timestamps (defaults to current UTC time)

    Returns:
        New dict; ``raw`` is not modified

    Raises:
        InvalidRecord: If ``raw`` is not an object or has no ``_id``
    """
    if not isinstance(raw, Mapping):
        raise InvalidRecord("Client record must be an object", details={"type": type(raw).__name__})
    if raw.get("_id") in (None, ""):
        raise InvalidRecord("Client record is missing _id", details={"fields": sorted(raw.keys())})

    now_iso = to_iso(parse_timestamp(now) or utc_now())

    user = _resolve_user(raw)
    is_active = raw["isActive"] if isinstance(raw.get("isActive"), bool) else True
    is_client = raw["isClient"] if isinstance(raw.get("isClient"), bool) else True
    created_at = raw.get("createdAt") or now_iso
    updated_at = raw.get("updatedAt") or now_iso
    revenue = raw.get("revenue")
    if isinstance(revenue, bool) or not isinstance(revenue, (int, float)):
        revenue = 0

    subscription = raw.get("subscription")
    if isinstance(subscription, Mapping):
        subscription = dict(subscription)
    else:
        subscription = synthesize_subscription(raw.get("currentPlan"), is_active, created_at)

    normalized = dict(raw)
    normalized.update(
        {
            "user": user,
            "status": resolve_status(user, raw).value,
            "isActive": is_active,
            "isClient": is_client,
            "createdAt": created_at,
            "updatedAt": updated_at,
            "lastActive": raw.get("lastActive") or updated_at,
            "revenue": revenue,
            "name": _display_name(raw, user),
            "email": _text(raw.get("email") or user.get("email")),
            "phone": _text(raw.get("phone") or user.get("phone")),
            "subscription": subscription,
        }
    )
    return normalized


def normalize_clients(raws: Iterable[Any], now: Timestamp = None) -> List[Dict[str, Any]]:
    """Normalize a batch against a single reference time."""
    now = now if now is not None else utc_now()
    return [normalize_client(raw, now=now) for raw in raws]
