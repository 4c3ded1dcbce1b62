"""Questionnaire assembly: pure builder functions, session collection and wizard."""

from .builder import (
    add_sections_from_library,
    create_questionnaire,
    duplicate_questionnaire,
    find_library_section,
    remove_section,
    reorder_questionnaire_sections,
    resolve_footer,
    resolve_header,
    set_status,
    update_questionnaire,
)
from .collection import QuestionnaireCollection
from .flow import BuilderFlow, BuilderSelections, FlowError, FlowStep

__all__ = [
    "add_sections_from_library",
    "create_questionnaire",
    "duplicate_questionnaire",
    "find_library_section",
    "remove_section",
    "reorder_questionnaire_sections",
    "resolve_footer",
    "resolve_header",
    "set_status",
    "update_questionnaire",
    "QuestionnaireCollection",
    "BuilderFlow",
    "BuilderSelections",
    "FlowError",
    "FlowStep",
]
