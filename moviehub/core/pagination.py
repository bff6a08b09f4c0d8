"""
Cursor-based pagination shared by every list endpoint.

A page is requested with ``limit`` and ``cursor`` (the ``_id`` of the last
item of the previous page). Entities are ordered by their ascending,
monotonically assigned ``_id``, so "strictly greater than the cursor" always
selects the next unseen entities.

Ranked views order by another field and resume after the cursor entity's
position in that order instead, see ``ranked_after``.
"""
from typing import Any, Dict, Mapping, NamedTuple, Optional, Sequence

from bson import ObjectId

DEFAULT_LIMIT = 10
# Largest page size the store accepts as a 32-bit limit
STORE_MAX_LIMIT = 2**31 - 1


class PageWindow(NamedTuple):
    limit: int
    query: Dict[str, Any]
    cursor: Any = None


def parse_limit(limit: Any, default_limit: int = DEFAULT_LIMIT, max_limit: Optional[int] = None) -> int:
    """
    Positive integers pass through unchanged; anything else falls back to the default.

    Values beyond ``max_limit`` (or ``STORE_MAX_LIMIT`` when unset) are clamped.
    """
    value = None
    if isinstance(limit, int) and not isinstance(limit, bool):
        value = limit
    elif isinstance(limit, str):
        try:
            value = int(limit.strip())
        except ValueError:
            value = None

    if value is None or value <= 0:
        value = default_limit
    return min(value, max_limit if max_limit is not None else STORE_MAX_LIMIT)


def cursor_value(cursor: Any) -> Any:
    # Malformed cursors are passed through as-is; the store simply matches nothing
    if isinstance(cursor, str) and ObjectId.is_valid(cursor):
        return ObjectId(cursor)
    return cursor


def get_cursor_pagination_params(
    limit: Any = None,
    cursor: Any = None,
    *,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
) -> PageWindow:
    """
    Translate the raw ``limit``/``cursor`` request inputs into a page window.

    Never raises: bad limits degrade to ``default_limit`` and a missing cursor
    yields an empty filter (first page).

    Args:
        limit: Raw limit from the query string (str, int or None)
        cursor: Identity of the last item already seen, if any
        default_limit: Page size used when ``limit`` is unusable
        max_limit: Optional upper bound on the page size

    Returns:
        PageWindow with the page size and the filter fragment to AND into the query
    """
    query: Dict[str, Any] = {}
    after = None
    if cursor not in (None, ""):
        after = cursor_value(cursor)
        query = {"_id": {"$gt": after}}

    return PageWindow(
        limit=parse_limit(limit, default_limit, max_limit),
        query=query,
        cursor=after,
    )


def merge_filters(*filters: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    AND together filter fragments.

    Fragments are never dict-merged, so a domain filter on ``_id`` (e.g. ``$nin``)
    cannot overwrite the cursor's ``$gt`` constraint.
    """
    parts = [dict(f) for f in filters if f]
    if not parts:
        return {}
    if len(parts) == 1:
        return parts[0]
    return {"$and": parts}


def ranked_after(last: Mapping[str, Any], field: str, direction: int = -1) -> Dict[str, Any]:
    """
    Filter selecting the entities ranked after ``last``.

    Matches the order ``[(field, direction), ("_id", 1)]``: entities strictly
    beyond ``last``'s value of ``field``, then its ties with a greater ``_id``.
    Entities without a value sort first ascending and last descending.
    """
    value: Any = last
    for part in field.split("."):
        value = value.get(part) if isinstance(value, Mapping) else None

    tie = {field: value, "_id": {"$gt": last["_id"]}}
    if value is None:
        return tie if direction < 0 else {"$or": [tie, {field: {"$ne": None}}]}

    beyond = {field: {"$lt" if direction < 0 else "$gt": value}}
    if direction < 0:
        return {"$or": [beyond, tie, {field: None}]}
    return {"$or": [beyond, tie]}


def next_cursor(items: Sequence[Mapping[str, Any]], limit: int) -> Optional[str]:
    """
    Cursor for the following page.

    Only a full page can be followed by more data, so a short page returns None.
    """
    if limit <= 0 or len(items) != limit:
        return None
    last_id = items[-1].get("_id", items[-1].get("id"))
    return str(last_id) if last_id is not None else None
