"""
List-screen query helpers: search, tri-state sort, pagination.

All functions are pure and work on any sequence of records. A record is
a Pydantic model (fields read by attribute) or a plain dict (fields read
by key). Field names may be given in snake_case or camelCase.
"""
import functools
import math
import unicodedata
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Generic, List, Optional, Sequence, Tuple, TypeVar, Union

from pydantic.alias_generators import to_camel, to_snake

T = TypeVar("T")

ASC = "asc"
DESC = "desc"

Direction = Optional[str]  # "asc" | "desc" | None (unsorted)


def _field_value(item: Any, field: str) -> Any:
    if isinstance(item, dict):
        if field in item:
            return item[field]
        for alias in (to_snake(field), to_camel(field)):
            if alias in item:
                return item[alias]
        return None
    value = getattr(item, field, None)
    if value is None and field != to_snake(field):
        value = getattr(item, to_snake(field), None)
    return value


def _stringify(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def filter_items(items: Sequence[T], search_term: str, fields: Sequence[str]) -> Sequence[T]:
    """
    Case-insensitive substring search.

    A record matches when any of `fields`, stringified, contains the term.
    A blank or whitespace-only term returns `items` unchanged.
    """
    if not search_term or not search_term.strip():
        return items

    needle = search_term.lower()

    def matches(item: T) -> bool:
        for field in fields:
            value = _field_value(item, field)
            if value is not None and needle in _stringify(value).lower():
                return True
        return False

    return [item for item in items if matches(item)]


def _collation_key(text: str) -> Tuple[str, str, str]:
    # base letters, then accents, then case (lowercase first)
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    return base, text.casefold(), text.swapcase()


def locale_compare(a: str, b: str) -> int:
    ka, kb = _collation_key(a), _collation_key(b)
    return (ka > kb) - (ka < kb)


def _compare(a: Any, b: Any, ascending: bool) -> int:
    if a == b:
        return 0
    if a is None:
        return -1 if ascending else 1
    if b is None:
        return 1 if ascending else -1
    if isinstance(a, str) and isinstance(b, str):
        result = locale_compare(a, b)
        return result if ascending else -result
    try:
        less = a < b
    except TypeError:
        less = _stringify(a) < _stringify(b)
    if ascending:
        return -1 if less else 1
    return 1 if less else -1


def sort_items(items: Sequence[T], sort_field: Optional[str], direction: Direction) -> Sequence[T]:
    """
    Stable sort on one field.

    No field or no direction returns `items` unchanged. None values come
    first ascending and last descending.
    """
    if not sort_field or direction in (None, "", "none"):
        return items
    if direction not in (ASC, DESC):
        raise ValueError(f"Unknown sort direction: {direction}")

    ascending = direction == ASC
    key = functools.cmp_to_key(
        lambda x, y: _compare(_field_value(x, sort_field), _field_value(y, sort_field), ascending)
    )
    return sorted(items, key=key)


def next_sort_state(
    current_field: Optional[str],
    current_direction: Direction,
    selected_field: str,
) -> Tuple[Optional[str], Direction]:
    """Column-header toggle: asc -> desc -> unsorted for the same field."""
    if current_field != selected_field:
        return selected_field, ASC
    if current_direction == ASC:
        return selected_field, DESC
    if current_direction == DESC:
        return None, None
    return selected_field, ASC


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
    """Items of 1-based `page`. Out-of-range pages are empty."""
    if page < 1 or page_size < 1:
        return []
    start = (page - 1) * page_size
    return list(items[start:start + page_size])


def total_pages(count: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return math.ceil(count / page_size)


def pagination_range(current_page: int, pages: int, max_buttons: int = 5) -> List[Union[int, str]]:
    """Page buttons around the current page, with "..." for skipped runs."""
    if pages <= max_buttons:
        return list(range(1, pages + 1))

    half = max_buttons // 2
    start = max(current_page - half, 1)
    end = min(start + max_buttons - 1, pages)
    if end - start + 1 < max_buttons:
        start = max(end - max_buttons + 1, 1)

    result: List[Union[int, str]] = []
    if start > 1:
        result.append(1)
        if start > 2:
            result.append("...")
    result.extend(range(start, end + 1))
    if end < pages:
        if end < pages - 1:
            result.append("...")
        result.append(pages)
    return result


@dataclass
class Page(Generic[T]):
    items: List[T]
    total: int
    page: int
    page_size: int
    total_pages: int


def run_query(
    items: Sequence[T],
    search: str = "",
    fields: Sequence[str] = (),
    sort_field: Optional[str] = None,
    direction: Direction = None,
    page: int = 1,
    page_size: int = 10,
) -> Page[T]:
    """filter -> sort -> paginate, as a list screen does it."""
    filtered = filter_items(items, search, fields)
    ordered = sort_items(filtered, sort_field, direction)
    return Page(
        items=paginate(ordered, page, page_size),
        total=len(ordered),
        page=page,
        page_size=page_size,
        total_pages=total_pages(len(ordered), page_size),
    )
