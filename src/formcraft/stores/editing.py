"""
Form submission helpers.

Section and question dialogs hand their raw form values plus an EditTarget
to these helpers, which decide between "add" and "update" and clean the
values the way the dialogs expect:

- blank strings become None for optional text fields
- blank entries are dropped from bullet points, options and table headers
- options are only kept for choice types, table fields only for tables
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

from formcraft.core.models import (
    EditTarget,
    EditingQuestion,
    EditingSection,
    NoEditTarget,
    Question,
    QuestionType,
    Section,
)

from .library_store import LibraryStore


def _clean(values: Sequence[str]) -> list[str]:
    return [value for value in values if value]


def _fit_row(row: Sequence[str], width: int) -> list[str]:
    return list(row[:width]) + [""] * (width - len(row))


@dataclass(frozen=True)
class QuestionForm:
    """Raw values from the question dialog."""
    title: str
    type: QuestionType
    required: bool = False
    description: str = ""
    placeholder: str = ""
    facility_number: Optional[str] = None
    bullet_points: Sequence[str] = ()
    options: Sequence[str] = ()
    table_columns: Sequence[str] = ()
    table_row_headers: Sequence[str] = ()

    def to_fields(self, existing: Optional[Question] = None) -> Dict[str, Any]:
        """
        Build Question field values from the form.

        Args:
            existing: Question being edited; its table cells are kept when
                the question stays a table, each row padded with blanks or
                cut to the submitted column count

        Returns:
            Mapping usable for update_question or add_question
        """
        question_type = QuestionType(self.type)
        is_table = question_type.uses_table
        columns = _clean(self.table_columns)

        if is_table and existing is not None and existing.table_rows is not None:
            table_rows: Optional[list] = [_fit_row(row, len(columns)) for row in existing.table_rows]
        elif is_table:
            table_rows = [[""] * len(columns)]
        else:
            table_rows = None

        return {
            "title": self.title,
            "type": question_type,
            "required": self.required,
            "description": self.description or None,
            "placeholder": self.placeholder or None,
            "facility_number": self.facility_number,
            "bullet_points": _clean(self.bullet_points),
            "options": _clean(self.options) if question_type.uses_options else None,
            "table_columns": columns if is_table else None,
            "table_row_headers": _clean(self.table_row_headers) if is_table else None,
            "table_rows": table_rows,
        }


def submit_section_form(
    store: LibraryStore,
    library_id: str,
    target: EditTarget,
    title: str,
    description: str = "",
) -> Optional[Section]:
    """Create a section (NoEditTarget) or update the edited one."""
    if isinstance(target, EditingSection):
        return store.update_section(
            library_id,
            target.section.id,
            {"title": title, "description": description or None},
        )
    if isinstance(target, NoEditTarget):
        return store.add_section(library_id, title, description or None, hidden=False)
    raise TypeError(f"Section form cannot submit for {type(target).__name__}")


def submit_question_form(
    store: LibraryStore,
    library_id: str,
    section_id: str,
    target: EditTarget,
    form: QuestionForm,
) -> Optional[Question]:
    """
    Create a question in `section_id` (NoEditTarget) or update the edited one.

    For EditingQuestion the target's own section id is used.
    """
    if isinstance(target, EditingQuestion):
        fields = form.to_fields(existing=target.question)
        return store.update_question(library_id, target.section_id, target.question.id, fields)
    if isinstance(target, NoEditTarget):
        fields = form.to_fields()
        title = fields.pop("title")
        question_type = fields.pop("type")
        return store.add_question(library_id, section_id, title, question_type, hidden=False, **fields)
    raise TypeError(f"Question form cannot submit for {type(target).__name__}")
