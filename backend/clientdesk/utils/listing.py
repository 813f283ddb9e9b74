"""
Stateless list querying: filtering and page slicing over in-memory lists.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Iterable, List, Mapping, Optional, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: List[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 0
    total_pages: int = 0


def filter_items(items: Iterable[T], predicate: Optional[Callable[[T], bool]] = None) -> List[T]:
    if predicate is None:
        return list(items)
    return [item for item in items if predicate(item)]


def paginate(items: List[T], page: int = 1, page_size: int = 10) -> Page[T]:
    """
    Slice one page out of ``items`` (1-based).

    Pages below 1 are read as page 1; pages past the end come back empty.
    """
    page = max(1, page)
    page_size = max(1, page_size)
    total = len(items)
    start = (page - 1) * page_size
    return Page(
        items=list(items[start:start + page_size]),
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size),
    )


def client_matches(search: Optional[str] = None, status: Optional[str] = None) -> Callable[[Mapping[str, Any]], bool]:
    """
    Predicate over normalized client records.

    ``search`` is a case-insensitive substring of name, email or company
    name; ``status`` must equal the resolved status.
    """
    needle = (search or "").strip().lower()
    wanted_status = (status or "").strip().lower()

    def predicate(client: Mapping[str, Any]) -> bool:
        if wanted_status and str(client.get("status") or "").lower() != wanted_status:
            return False
        if not needle:
            return True
        haystack = (client.get("name"), client.get("email"), client.get("companyName"))
        return any(needle in str(value).lower() for value in haystack if value)

    return predicate
