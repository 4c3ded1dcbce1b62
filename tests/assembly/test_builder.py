"""
Unit Tests for Questionnaire Assembly

Tests for the pure builder functions.
"""

import pytest
from datetime import datetime, timezone

from formcraft.assembly.builder import (
    add_sections_from_library,
    create_questionnaire,
    duplicate_questionnaire,
    remove_section,
    reorder_questionnaire_sections,
    resolve_footer,
    resolve_header,
    set_status,
    update_questionnaire,
)
from formcraft.core.models import (
    HeaderFooter,
    HeaderFooterKind,
    Question,
    QuestionLibrary,
    QuestionnaireStatus,
    QuestionType,
    Section,
)

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def libraries():
    """Two libraries; "shared" exists in both with different titles."""
    contact = Section(id="contact", title="Contact", order=1, questions=(
        Question(id="q-email", title="Email", type=QuestionType.EMAIL, order=2),
        Question(id="q-name", title="Name", type=QuestionType.TEXT, order=1),
    ))
    shared_a = Section(id="shared", title="From A", order=2)
    shared_b = Section(id="shared", title="From B", order=1)
    return (
        QuestionLibrary(id="lib-a", name="A", created_at=T0, updated_at=T0, sections=(contact, shared_a)),
        QuestionLibrary(id="lib-b", name="B", created_at=T0, updated_at=T0, sections=(shared_b,)),
    )


@pytest.fixture
def questionnaire(clock, ids):
    return create_questionnaire("Survey", "Annual", clock=clock, id_factory=ids)


class TestCreateQuestionnaire:
    """Tests for create_questionnaire."""

    def test_create_when_defaults_then_empty_draft(self, questionnaire):
        assert questionnaire.id == "id-1"
        assert questionnaire.status is QuestionnaireStatus.DRAFT
        assert questionnaire.sections == ()
        assert questionnaire.created_at == questionnaire.updated_at

    def test_create_when_raw_status_then_coerced(self, clock, ids):
        q = create_questionnaire("S", status="published", header_id="h1", client_id="c1",
                                 clock=clock, id_factory=ids)

        assert q.status is QuestionnaireStatus.PUBLISHED
        assert q.header_id == "h1"
        assert q.client_id == "c1"


class TestAddSectionsFromLibrary:
    """Tests for add_sections_from_library."""

    def test_add_when_known_section_then_copied_with_fresh_ids(self, questionnaire, libraries, clock, ids):
        result = add_sections_from_library(questionnaire, ["contact"], libraries, clock=clock, id_factory=ids)

        (section,) = result.sections
        assert section.id not in {"contact"}
        assert section.title == "Contact"
        assert section.order == 1
        assert [(q.title, q.order) for q in section.questions] == [("Name", 1), ("Email", 2)]
        assert not {q.id for q in section.questions} & {"q-email", "q-name"}
        assert result.updated_at > questionnaire.updated_at

    def test_add_when_id_in_two_libraries_then_first_match_wins(self, questionnaire, libraries, clock, ids):
        result = add_sections_from_library(questionnaire, ["shared"], libraries, clock=clock, id_factory=ids)

        assert [s.title for s in result.sections] == ["From A"]

    def test_add_when_unknown_ids_then_skipped(self, questionnaire, libraries, clock, ids):
        result = add_sections_from_library(
            questionnaire, ["nope", "contact", "missing"], libraries, clock=clock, id_factory=ids
        )

        assert [s.title for s in result.sections] == ["Contact"]

    def test_add_when_nothing_matches_then_same_instance(self, questionnaire, libraries, clock, ids):
        assert add_sections_from_library(questionnaire, ["nope"], libraries, clock=clock, id_factory=ids) is questionnaire

    def test_add_when_sections_exist_then_appended_after_max_order(self, questionnaire, libraries, clock, ids):
        first = add_sections_from_library(questionnaire, ["contact"], libraries, clock=clock, id_factory=ids)

        second = add_sections_from_library(first, ["shared", "contact"], libraries, clock=clock, id_factory=ids)

        assert [(s.title, s.order) for s in second.sections] == [("Contact", 1), ("From A", 2), ("Contact", 3)]
        assert len({s.id for s in second.sections}) == 3

    def test_add_when_library_edited_later_then_copy_unaffected(self, library_store, questionnaire, clock, ids):
        library = library_store.create_library("Live")
        section = library_store.add_section(library.id, "Intro")
        question = library_store.add_question(library.id, section.id, "Name", QuestionType.TEXT)
        result = add_sections_from_library(
            questionnaire, [section.id], library_store.libraries, clock=clock, id_factory=ids
        )

        library_store.update_question(library.id, section.id, question.id, {"title": "Full name"})
        library_store.delete_library(library.id)

        assert result.sections[0].questions[0].title == "Name"


class TestDuplicateQuestionnaire:
    """Tests for duplicate_questionnaire."""

    def test_duplicate_when_called_then_independent_copy(self, questionnaire, libraries, clock, ids):
        source = add_sections_from_library(questionnaire, ["contact"], libraries, clock=clock, id_factory=ids)
        source = set_status(source, QuestionnaireStatus.PUBLISHED, clock=clock)

        copy = duplicate_questionnaire(source, clock=clock, id_factory=ids)

        assert copy.id != source.id
        assert copy.title == "Survey (Copy)"
        assert copy.status is QuestionnaireStatus.PUBLISHED
        assert copy.created_at > source.created_at
        assert copy.sections[0].id != source.sections[0].id
        assert [q.title for q in copy.sections[0].questions] == ["Name", "Email"]


class TestStatusAndUpdates:
    """Tests for set_status, update_questionnaire and section edits."""

    @pytest.mark.parametrize("status", list(QuestionnaireStatus))
    def test_set_status_when_any_transition_then_allowed(self, questionnaire, clock, status):
        archived = set_status(questionnaire, QuestionnaireStatus.ARCHIVED, clock=clock)

        assert set_status(archived, status, clock=clock).status is status

    def test_update_when_protected_fields_then_ignored(self, questionnaire, clock):
        updated = update_questionnaire(
            questionnaire, {"title": "Renamed", "id": "x", "created_at": T0}, clock=clock
        )

        assert updated.title == "Renamed"
        assert updated.id == questionnaire.id
        assert updated.created_at == questionnaire.created_at
        assert updated.updated_at > questionnaire.updated_at

    def test_remove_section_when_missing_then_same_instance(self, questionnaire, clock):
        assert remove_section(questionnaire, "nope", clock=clock) is questionnaire

    def test_remove_and_reorder_when_called_then_sections_adjusted(self, questionnaire, libraries, clock, ids):
        q = add_sections_from_library(questionnaire, ["contact", "shared"], libraries, clock=clock, id_factory=ids)
        contact_id, shared_id = (s.id for s in q.sections)

        reordered = reorder_questionnaire_sections(q, [shared_id, contact_id], clock=clock)
        assert [(s.title, s.order) for s in reordered.sections] == [("From A", 1), ("Contact", 2)]

        removed = remove_section(reordered, shared_id, clock=clock)
        assert [s.id for s in removed.sections] == [contact_id]


class TestResolveHeaderFooter:
    """Tests for weak-reference resolution."""

    def test_resolve_when_present_then_returns_snippet(self, clock, ids):
        header = HeaderFooter("h1", "Logo", "", HeaderFooterKind.HEADER, T0, T0)
        footer = HeaderFooter("f1", "Legal", "", HeaderFooterKind.FOOTER, T0, T0)
        q = create_questionnaire("S", header_id="h1", footer_id="f1", clock=clock, id_factory=ids)

        assert resolve_header(q, [header]) == header
        assert resolve_footer(q, [footer]) == footer

    def test_resolve_when_dangling_or_unset_then_none(self, questionnaire):
        dangling = create_questionnaire("S", footer_id="gone")

        assert resolve_header(questionnaire, []) is None
        assert resolve_footer(dangling, []) is None
