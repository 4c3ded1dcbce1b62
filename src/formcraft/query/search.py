"""
Search and filter helpers for list views.

`search_filter()` applies, in order:
1. Case-insensitive substring search across the named attributes
2. An optional predicate over the selected filter values
3. An optional sort key
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class SearchResult(Generic[T]):
    """Filtered items plus the size of the unfiltered input."""
    items: Tuple[T, ...]
    total: int

    @property
    def filtered_count(self) -> int:
        return len(self.items)


def _field_text(item: Any, field: str) -> str:
    value = getattr(item, field, None)
    return "" if value is None else str(value)


def search_filter(
    items: Iterable[T],
    query: str = "",
    fields: Sequence[str] = (),
    *,
    filters: Sequence[str] = (),
    filter_fn: Optional[Callable[[T, Sequence[str]], bool]] = None,
    sort_key: Optional[Callable[[T], Any]] = None,
    reverse: bool = False,
) -> SearchResult[T]:
    """
    Search, filter and sort a collection.

    Args:
        items: Items to search
        query: Search text; blank matches everything
        fields: Attribute names searched for `query`
        filters: Selected filter values passed to `filter_fn`
        filter_fn: Predicate applied only when `filters` is non-empty
        sort_key: Optional sort key
        reverse: Sort descending

    Returns:
        SearchResult with the matching items

    Example:
        >>> search_filter(libraries, "demo", ["name", "description"]).filtered_count
        1
    """
    source = tuple(items)
    result = list(source)

    needle = query.strip().lower()
    if needle:
        result = [
            item for item in result
            if any(needle in _field_text(item, field).lower() for field in fields)
        ]

    if filters and filter_fn is not None:
        result = [item for item in result if filter_fn(item, filters)]

    if sort_key is not None:
        result.sort(key=sort_key, reverse=reverse)

    return SearchResult(items=tuple(result), total=len(source))
