"""
Unit Tests for the Builder Flow Wizard
"""

import pytest
from datetime import datetime, timezone

from formcraft.assembly.builder import create_questionnaire
from formcraft.assembly.flow import BuilderFlow, FlowError, FlowStep
from formcraft.core.models import QuestionLibrary, Section

T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


@pytest.fixture
def flow(clock, ids):
    return BuilderFlow(clock=clock, id_factory=ids)


@pytest.fixture
def libraries():
    sections = (Section(id="s1", title="Intro", order=1), Section(id="s2", title="Outro", order=2))
    return (QuestionLibrary(id="lib", name="Lib", created_at=T0, updated_at=T0, sections=sections),)


class TestBuilderFlow:
    """Tests for step navigation and completion."""

    def test_init_when_created_then_at_headers_step(self, flow):
        assert flow.step is FlowStep.HEADERS
        assert flow.selections.section_ids == ()

    def test_next_when_library_step_without_sections_then_raises_error(self, flow):
        flow.next()

        assert flow.step is FlowStep.LIBRARY
        assert not flow.can_proceed()
        with pytest.raises(FlowError):
            flow.next()

    def test_toggle_section_when_called_twice_then_deselected(self, flow):
        assert flow.toggle_section("s1") is True
        assert flow.toggle_section("s1") is False
        assert flow.section_ids == ()

    def test_skip_when_headers_step_then_header_cleared(self, flow):
        flow.select_header("h1")

        assert flow.skip() is FlowStep.LIBRARY
        assert flow.header_id is None

    def test_skip_when_library_step_then_raises_error(self, flow):
        flow.next()

        with pytest.raises(FlowError, match="cannot be skipped"):
            flow.skip()

    def test_back_when_at_first_step_then_stays(self, flow):
        assert flow.back() is FlowStep.HEADERS

    def test_complete_when_not_at_final_step_then_raises_error(self, flow, libraries):
        with pytest.raises(FlowError):
            flow.complete(create_questionnaire("Q"), libraries)

    def test_complete_when_walked_through_then_selections_applied(self, flow, libraries, clock, ids):
        questionnaire = create_questionnaire("Q", clock=clock, id_factory=ids)
        flow.select_header("h1")
        flow.next()
        flow.toggle_section("s2")
        flow.toggle_section("s1")
        flow.next()
        flow.select_footer("f1")
        assert flow.next() is FlowStep.COMPLETE

        result = flow.complete(questionnaire, libraries)

        assert result.header_id == "h1"
        assert result.footer_id == "f1"
        assert [(s.title, s.order) for s in result.sections] == [("Outro", 1), ("Intro", 2)]
        assert flow.step is FlowStep.HEADERS
        assert flow.header_id is None
