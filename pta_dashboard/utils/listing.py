# pta_dashboard/utils/listing.py
"""Search, sort and pagination over already-loaded rows."""
import re
from math import ceil
from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar('T')


def matches_query(record: Any, query: Optional[str], fields: Sequence[Callable[[Any], Optional[str]]]) -> bool:
    """Case-insensitive substring match against any of the given field getters."""
    if not query or not query.strip():
        return True
    needle = query.strip().lower()
    for getter in fields:
        value = getter(record)
        if value and needle in str(value).lower():
            return True
    return False


def search(
    records: Iterable[T],
    query: Optional[str],
    fields: Sequence[Callable[[T], Optional[str]]],
    predicate: Optional[Callable[[T], bool]] = None,
) -> List[T]:
    """Apply the tab predicate, then the text query. Order is preserved."""
    return [
        record for record in records
        if (predicate is None or predicate(record)) and matches_query(record, query, fields)
    ]


def natural_key(value: Optional[str]):
    """Sort key that orders embedded numbers by value, so "9" comes before "10"."""
    if value is None:
        return None
    return tuple(int(part) if part.isdigit() else part.lower() for part in re.split(r"(\d+)", value))


def sort_records(records: Iterable[T], key: Callable[[T], Any], descending: bool = False) -> List[T]:
    """Stable sort; rows whose key is None always go last."""
    records = list(records)
    present = [r for r in records if key(r) is not None]
    missing = [r for r in records if key(r) is None]
    present.sort(key=key, reverse=descending)
    return present + missing


def paginate(items: Sequence[T], page: int = 1, size: int = 20) -> Dict[str, Any]:
    """Slice a list into the same page shape the services return."""
    total = len(items)
    offset = (page - 1) * size
    return {
        "items": list(items[offset:offset + size]),
        "total": total,
        "page": page,
        "size": size,
        "total_pages": ceil(total / size) if size > 0 else 0,
        "has_next": page * size < total,
        "has_previous": page > 1,
    }
