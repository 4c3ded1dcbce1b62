"""
Utils Package

Serialization, ordering, cloning and table-editing helpers.
"""

from .serialization import (
    serialize_library_state,
    deserialize_library_state,
    serialize_header_footer_state,
    deserialize_header_footer_state,
    serialize_questionnaire,
    deserialize_questionnaire,
)
from .ordering import (
    sorted_by_order,
    next_order,
    renumber,
    reorder_by_ids,
    move_id,
    sorted_sections,
    sorted_questions,
    visible_sections,
    visible_questions,
)
from .cloning import clone_question, clone_section, copy_title
from .identifiers import new_id, utcnow

__all__ = [
    "serialize_library_state",
    "deserialize_library_state",
    "serialize_header_footer_state",
    "deserialize_header_footer_state",
    "serialize_questionnaire",
    "deserialize_questionnaire",
    "sorted_by_order",
    "next_order",
    "renumber",
    "reorder_by_ids",
    "move_id",
    "sorted_sections",
    "sorted_questions",
    "visible_sections",
    "visible_questions",
    "clone_question",
    "clone_section",
    "copy_title",
    "new_id",
    "utcnow",
]
