"""
Ordering Utilities

Dense 1-based ranking for sibling entities (sections within a library or
questionnaire, questions within a section).

Rules:
- Display always sorts by `order` ascending (stable, so ties keep storage order)
- New items get `max(order) + 1`, or 1 in an empty collection
- Reorder and move assign `1..N` in the new sequence
"""

from __future__ import annotations

from dataclasses import replace
from typing import Iterable, List, Optional, Protocol, Sequence, Tuple, TypeVar

from ..models.questions import Question
from ..models.sections import Section


class Ordered(Protocol):
    id: str
    order: int


T = TypeVar("T", bound=Ordered)


def sorted_by_order(items: Iterable[T]) -> List[T]:
    """Return items sorted by `order` ascending."""
    return sorted(items, key=lambda item: item.order)


def next_order(items: Iterable[T]) -> int:
    """Order value for an item appended after all existing siblings."""
    return max((item.order for item in items), default=0) + 1


def renumber(items: Iterable[T]) -> Tuple[T, ...]:
    """Assign `order = 1..N` following the given sequence."""
    return tuple(replace(item, order=index) for index, item in enumerate(items, start=1))  # type: ignore[type-var]


def reorder_by_ids(items: Sequence[T], ordered_ids: Sequence[str]) -> Tuple[T, ...]:
    """
    Rebuild a sibling collection following `ordered_ids`.

    - Each known id gets its 1-based position in the supplied sequence
    - Unknown ids are dropped, repeated ids count once
    - Items missing from `ordered_ids` are kept, appended after the listed
      ones in their current display order

    Args:
        items: Current siblings
        ordered_ids: Desired sequence of ids (normally a full permutation)

    Returns:
        Siblings in the new sequence with dense `order` values
    """
    by_id = {item.id: item for item in items}
    listed: List[T] = []
    seen: set[str] = set()
    for item_id in ordered_ids:
        item = by_id.get(item_id)
        if item is None or item_id in seen:
            continue
        seen.add(item_id)
        listed.append(item)
    remainder = [item for item in sorted_by_order(items) if item.id not in seen]
    return renumber(listed + remainder)


def move_id(ordered_ids: Sequence[str], item_id: str, target_id: str) -> Optional[List[str]]:
    """
    Move `item_id` to the position currently held by `target_id`.

    Mirrors a drag-and-drop drop onto another item. Returns None when either
    id is absent or the two ids are equal.
    """
    if item_id == target_id or item_id not in ordered_ids or target_id not in ordered_ids:
        return None
    result = list(ordered_ids)
    old_index = result.index(item_id)
    new_index = result.index(target_id)
    result.insert(new_index, result.pop(old_index))
    return result


# ─────────────────────────────────────────────────────────────────────────────
# Display views
# ─────────────────────────────────────────────────────────────────────────────

def sorted_sections(sections: Iterable[Section]) -> List[Section]:
    return sorted_by_order(sections)


def sorted_questions(section: Section) -> List[Question]:
    return sorted_by_order(section.questions)


def visible_sections(sections: Iterable[Section]) -> List[Section]:
    """Non-hidden sections in display order."""
    return [s for s in sorted_by_order(sections) if not s.hidden]


def visible_questions(section: Section) -> List[Question]:
    """Non-hidden questions in display order."""
    return [q for q in sorted_by_order(section.questions) if not q.hidden]
