"""
Unit Tests for QuestionnaireCollection
"""

import pytest

from formcraft.assembly.collection import QuestionnaireCollection
from formcraft.core.models import QuestionnaireStatus


@pytest.fixture
def collection(clock, ids):
    return QuestionnaireCollection(clock=clock, id_factory=ids)


class TestQuestionnaireCollection:
    """Tests for collection mutations and queries."""

    def test_create_when_called_then_added_and_emitted(self, collection, signal_spy):
        calls = signal_spy(collection.changed)

        q = collection.create("Survey", "Annual")

        assert collection.questionnaires == (q,)
        assert calls == [((q,),)]

    def test_update_when_missing_then_none(self, collection):
        assert collection.update("missing", {"title": "X"}) is None

    def test_update_when_present_then_replaced_in_place(self, collection):
        a = collection.create("A")
        b = collection.create("B")

        updated = collection.update(a.id, {"title": "A2"})

        assert [q.title for q in collection.questionnaires] == ["A2", "B"]
        assert collection.get(a.id) == updated
        assert collection.get(b.id) == b

    def test_delete_when_present_then_removed(self, collection):
        q = collection.create("A")

        assert collection.delete(q.id) is True
        assert collection.delete(q.id) is False
        assert collection.questionnaires == ()

    def test_duplicate_when_present_then_copy_appended(self, collection):
        q = collection.create("A")

        copy = collection.duplicate(q.id)

        assert copy.title == "A (Copy)"
        assert collection.questionnaires == (q, copy)

    def test_set_status_when_present_then_updated(self, collection):
        q = collection.create("A")

        assert collection.set_status(q.id, "archived").status is QuestionnaireStatus.ARCHIVED

    def test_add_sections_when_nothing_matches_then_no_emit(self, collection, signal_spy):
        q = collection.create("A")
        calls = signal_spy(collection.changed)

        assert collection.add_sections_from_library(q.id, ["nope"], []) is q
        assert calls == []

    def test_search_when_query_and_status_then_filtered_newest_first(self, collection):
        a = collection.create("Customer survey")
        collection.create("Staff survey", status=QuestionnaireStatus.PUBLISHED)
        collection.create("Exit interview")
        collection.update(a.id, {"description": "touched"})

        result = collection.search("SURVEY")
        assert [q.title for q in result.items] == ["Customer survey", "Staff survey"]
        assert result.total == 3

        drafts = collection.search("survey", statuses=["draft"])
        assert [q.title for q in drafts.items] == ["Customer survey"]

    def test_reset_when_called_then_empty(self, collection):
        collection.create("A")
        collection.reset()
        assert collection.questionnaires == ()
