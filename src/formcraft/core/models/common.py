"""
Module: common

Purpose:
    Shared helpers for the entity models: sequence freezing, timestamp
    parsing and partial-update merging.

Key Functions:
    - freeze_strings(): list/tuple of strings -> tuple (None passes through)
    - freeze_rows(): 2D table rows -> tuple of tuples
    - require_unique_ids(): Reject sibling collections with repeated ids
    - merge_updates(): dataclasses.replace with protected fields skipped

Used By:
    - core.models.* (all entities)
    - stores.library_store, stores.header_footer_store
"""

from __future__ import annotations

import logging
from dataclasses import fields, replace
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Tuple, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def freeze_strings(value: Optional[Iterable[str]]) -> Optional[Tuple[str, ...]]:
    """Convert an iterable of strings to a tuple, keeping None as None."""
    if value is None:
        return None
    if isinstance(value, str):
        raise TypeError(f"Expected a sequence of strings, got str: {value!r}")
    return tuple(value)


def freeze_rows(value: Optional[Iterable[Iterable[str]]]) -> Optional[Tuple[Tuple[str, ...], ...]]:
    """Convert row-major table data to a tuple of tuples."""
    if value is None:
        return None
    return tuple(tuple(row) for row in value)


def require_unique_ids(items: Iterable[Any], owner: str) -> None:
    """Raise ValueError if two items share an id."""
    seen: set = set()
    for item in items:
        if item.id in seen:
            raise ValueError(f"Duplicate id in {owner}: {item.id!r}")
        seen.add(item.id)


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 timestamp (datetime instances pass through)."""
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(str(value))


def merge_updates(entity: T, updates: Mapping[str, Any], protected: Iterable[str] = ("id",)) -> T:
    """
    Merge a partial update mapping onto a frozen dataclass.

    Protected fields (identity, type tags) are skipped. Unknown field names
    raise TypeError so typos surface at the call site.

    Args:
        entity: Frozen dataclass instance
        updates: Field name -> new value
        protected: Field names that are never overwritten

    Returns:
        New instance with updates applied
    """
    known = {f.name for f in fields(entity)}  # type: ignore[arg-type]
    unknown = sorted(set(updates) - known)
    if unknown:
        raise TypeError(f"Unknown {type(entity).__name__} fields: {unknown}")

    skipped = set(protected)
    changes = {name: value for name, value in updates.items() if name not in skipped}
    if len(changes) != len(updates):
        logger.debug(f"Ignoring protected fields on {type(entity).__name__}: {sorted(set(updates) & skipped)}")
    return replace(entity, **changes)  # type: ignore[type-var]
