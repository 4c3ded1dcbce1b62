"""
Unit Tests for search_filter
"""

from dataclasses import dataclass
from typing import Optional

import pytest

from formcraft.query.search import search_filter


@dataclass(frozen=True)
class Item:
    name: str
    description: Optional[str]
    kind: str
    rank: int


@pytest.fixture
def items():
    return [
        Item("Onboarding", "New starters", "hr", 3),
        Item("Exit interview", None, "hr", 1),
        Item("Customer feedback", "Quarterly starters pack", "sales", 2),
    ]


class TestSearchFilter:
    """Tests for search_filter."""

    def test_search_when_blank_query_then_everything(self, items):
        result = search_filter(items, "   ", ["name"])

        assert result.items == tuple(items)
        assert result.total == 3
        assert result.filtered_count == 3

    def test_search_when_query_then_case_insensitive_over_fields(self, items):
        result = search_filter(items, "STARTERS", ["name", "description"])

        assert [i.name for i in result.items] == ["Onboarding", "Customer feedback"]

    def test_search_when_field_is_none_then_treated_as_empty(self, items):
        assert search_filter(items, "none", ["description"]).items == ()

    def test_filter_when_selected_values_then_predicate_applied(self, items):
        result = search_filter(items, "", ["name"], filters=["sales"],
                               filter_fn=lambda item, selected: item.kind in selected)

        assert [i.name for i in result.items] == ["Customer feedback"]
        assert result.total == 3

    def test_filter_when_no_selected_values_then_predicate_skipped(self, items):
        result = search_filter(items, filter_fn=lambda item, selected: False)

        assert result.filtered_count == 3

    def test_sort_when_key_and_reverse_then_ordered(self, items):
        result = search_filter(items, sort_key=lambda i: i.rank, reverse=True)

        assert [i.rank for i in result.items] == [3, 2, 1]
