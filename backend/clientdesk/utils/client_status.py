"""
Resolve the single status a client is displayed with.

A client carries up to four status-like signals: the user's approval flag,
the user's status, the client's own status and the ``isActive`` flags. They
can disagree. The rules below are checked in order and the first one that
matches decides; user-level signals outrank client-level ones, and anything
unresolvable falls back to ``pending``.
"""

from typing import Any, Callable, List, Optional

from clientdesk.models.client import ClientStatus

# Statuses that can be copied straight from a status field. "pending" is
# handled by its own rules so it is matched before the others on each level.
_ASSIGNABLE = {
    ClientStatus.ACTIVE.value: ClientStatus.ACTIVE,
    ClientStatus.INACTIVE.value: ClientStatus.INACTIVE,
    ClientStatus.SUSPENDED.value: ClientStatus.SUSPENDED,
    ClientStatus.BLOCKED.value: ClientStatus.BLOCKED,
}

_MISSING = object()


def read_field(source: Any, name: str) -> Any:
    """
    Read ``name`` from a mapping or an object; missing means ``_MISSING``.

    Bare id strings and None have no fields.
    """
    if source is None or isinstance(source, str):
        return _MISSING
    dump = getattr(source, "model_dump", None)
    if callable(dump):
        source = dump(by_alias=True, exclude_none=True)
    if isinstance(source, dict):
        return source.get(name, _MISSING)
    getter = getattr(source, "get", None)
    if callable(getter):
        return getter(name, _MISSING)
    return getattr(source, name, _MISSING)


def _normalized_status(source: Any) -> Optional[str]:
    value = read_field(source, "status")
    if isinstance(value, ClientStatus):
        return value.value
    if isinstance(value, str):
        return value.strip().lower()
    return None


Rule = Callable[[Any, Any], Optional[ClientStatus]]


def _user_not_approved(user: Any, client: Any) -> Optional[ClientStatus]:
    if read_field(user, "isApproved") is False:
        return ClientStatus.PENDING
    return None


def _user_status_pending(user: Any, client: Any) -> Optional[ClientStatus]:
    if _normalized_status(user) == ClientStatus.PENDING.value:
        return ClientStatus.PENDING
    return None


def _user_status_assigned(user: Any, client: Any) -> Optional[ClientStatus]:
    return _ASSIGNABLE.get(_normalized_status(user))


def _client_status_pending(user: Any, client: Any) -> Optional[ClientStatus]:
    if _normalized_status(client) == ClientStatus.PENDING.value:
        return ClientStatus.PENDING
    return None


def _client_status_assigned(user: Any, client: Any) -> Optional[ClientStatus]:
    return _ASSIGNABLE.get(_normalized_status(client))


def _client_deactivated(user: Any, client: Any) -> Optional[ClientStatus]:
    if read_field(client, "isActive") is False:
        return ClientStatus.INACTIVE
    return None


def _user_deactivated(user: Any, client: Any) -> Optional[ClientStatus]:
    if read_field(user, "isActive") is False:
        return ClientStatus.INACTIVE
    return None


def _approved_and_active(user: Any, client: Any) -> Optional[ClientStatus]:
    client_active = read_field(client, "isActive")
    client_active_or_absent = client_active is True or client_active is _MISSING or client_active is None
    if read_field(user, "isApproved") is True and client_active_or_absent:
        return ClientStatus.ACTIVE
    return None


STATUS_RULES: List[Rule] = [
    _user_not_approved,
    _user_status_pending,
    _user_status_assigned,
    _client_status_pending,
    _client_status_assigned,
    _client_deactivated,
    _user_deactivated,
    _approved_and_active,
]


def resolve_status(user: Any, client: Any) -> ClientStatus:
    """
    Reduce the user and client signals to one ClientStatus.

    ``user`` may be a populated user mapping/object, a bare id string or None;
    ``client`` is anything exposing ``status`` and ``isActive``. Never raises
    and never returns None.
    """
    for rule in STATUS_RULES:
        resolved = rule(user, client)
        if resolved is not None:
            return resolved
    return ClientStatus.PENDING
