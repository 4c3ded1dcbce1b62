"""Page bookkeeping for long list views."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Pagination:
    """
    Immutable pagination state. Navigation returns a new instance.

    Attributes:
        total_items: Number of items being paged
        items_per_page: Page size (positive)
        current_page: 1-based page number

    Example:
        >>> p = Pagination(total_items=25, items_per_page=10)
        >>> p.total_pages, p.next_page().start_index
        (3, 10)
    """

    total_items: int
    items_per_page: int
    current_page: int = 1

    def __post_init__(self) -> None:
        if self.items_per_page <= 0:
            raise ValueError(f"items_per_page must be positive: {self.items_per_page}")
        if self.total_items < 0:
            raise ValueError(f"total_items must be non-negative: {self.total_items}")

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total_items / self.items_per_page)

    @property
    def start_index(self) -> int:
        return (self.current_page - 1) * self.items_per_page

    @property
    def end_index(self) -> int:
        return self.start_index + self.items_per_page

    @property
    def has_next_page(self) -> bool:
        return self.current_page < self.total_pages

    @property
    def has_previous_page(self) -> bool:
        return self.current_page > 1

    def go_to(self, page: int) -> "Pagination":
        """Jump to `page`, clamped to the valid range."""
        return replace(self, current_page=max(1, min(page, self.total_pages)))

    def next_page(self) -> "Pagination":
        return self.go_to(self.current_page + 1) if self.has_next_page else self

    def previous_page(self) -> "Pagination":
        return self.go_to(self.current_page - 1) if self.has_previous_page else self

    def first_page(self) -> "Pagination":
        return replace(self, current_page=1)

    def last_page(self) -> "Pagination":
        return replace(self, current_page=max(1, self.total_pages))

    def page_items(self, items: Sequence[T]) -> Sequence[T]:
        """Slice `items` down to the current page."""
        return items[self.start_index:self.end_index]
