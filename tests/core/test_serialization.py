"""
Unit Tests for Serialization

Tests for the store envelope serialize/deserialize helpers.
"""

import json
import pytest
from datetime import datetime, timezone

from formcraft.core.models import (
    HeaderFooter,
    HeaderFooterKind,
    Question,
    Questionnaire,
    QuestionLibrary,
    QuestionType,
    Section,
)
from formcraft.core.schemas import STORE_SCHEMA_VERSION, ValidationError
from formcraft.core.utils.serialization import (
    serialize_library_state,
    deserialize_library_state,
    serialize_header_footer_state,
    deserialize_header_footer_state,
    serialize_questionnaire,
    deserialize_questionnaire,
)

T0 = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


@pytest.fixture
def library() -> QuestionLibrary:
    question = Question(
        id="q1",
        title="Favourite colour",
        type=QuestionType.CHOICE,
        required=True,
        order=1,
        options=["Red", "Blue"],
    )
    section = Section(id="s1", title="Prefs", questions=(question,), order=1)
    return QuestionLibrary(id="lib1", name="Prefs", created_at=T0, updated_at=T0,
                           sections=(section,), description="Colours")


class TestLibraryState:
    """Tests for library store envelopes."""

    def test_serialize_when_called_then_versioned_envelope(self, library):
        data = serialize_library_state([library], "lib1")

        assert data["schema_version"] == STORE_SCHEMA_VERSION
        assert data["state"]["current_library_id"] == "lib1"
        assert data["state"]["libraries"][0]["id"] == "lib1"

    def test_round_trip_when_through_json_then_equal(self, library):
        text = json.dumps(serialize_library_state([library], None))

        libraries, current = deserialize_library_state(json.loads(text), strict=True)

        assert libraries == (library,)
        assert current is None

    def test_deserialize_when_invalid_then_raises_validation_error(self, library):
        data = serialize_library_state([library])
        data["state"]["libraries"][0]["sections"][0]["questions"][0]["type"] = "radio"

        with pytest.raises(ValidationError):
            deserialize_library_state(data)

    def test_deserialize_when_validation_disabled_then_skips_checks(self, library):
        data = serialize_library_state([library])
        data["schema_version"] = 99

        libraries, _ = deserialize_library_state(data, validate=False)

        assert libraries[0].name == "Prefs"


class TestHeaderFooterState:
    """Tests for header/footer store envelopes."""

    def test_round_trip_when_both_kinds_then_split_by_collection(self):
        header = HeaderFooter("h1", "Top", "<h1>Hi</h1>", HeaderFooterKind.HEADER, T0, T0)
        footer = HeaderFooter("f1", "Bottom", "<p>Bye</p>", HeaderFooterKind.FOOTER, T0, T0)

        headers, footers = deserialize_header_footer_state(
            serialize_header_footer_state([header], [footer]), strict=True
        )

        assert headers == (header,)
        assert footers == (footer,)


class TestQuestionnaireExport:
    """Tests for questionnaire export helpers."""

    def test_round_trip_when_exported_then_equal(self, library):
        questionnaire = Questionnaire(
            id="qn1",
            title="Prefs survey",
            created_at=T0,
            updated_at=T0,
            sections=library.sections,
            footer_id="f1",
        )

        assert deserialize_questionnaire(serialize_questionnaire(questionnaire)) == questionnaire
