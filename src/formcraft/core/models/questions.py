"""
Module: questions

Purpose:
    Provides the Question dataclass and the closed QuestionType domain.
    A question is owned by exactly one section; its `order` is its rank
    among that section's questions.

Key Classes:
    - QuestionType: The 18 input formats a question may declare
    - QuestionValidation: Stored (never executed) min/max/pattern hints
    - Question: Immutable question record

Key Functions:
    - Question.to_dict() / Question.from_dict(): Serialization
    - question_type_label(): Human-readable label for a type

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - core.models.sections.Section
    - stores.library_store
    - core.utils.tables
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .common import freeze_rows, freeze_strings


class QuestionType(str, Enum):
    """Input format of a question."""
    TEXT = "text"
    TEXTAREA = "textarea"
    EMAIL = "email"
    URL = "url"
    PHONE = "phone"
    RICHTEXT = "richtext"
    CHOICE = "choice"      # Single choice (radio)
    CHOICES = "choices"    # Multiple choice (checkboxes)
    NUMBER = "number"
    DECIMAL = "decimal"
    CURRENCY = "currency"
    DATE = "date"
    DATETIME = "datetime"
    BOOLEAN = "boolean"
    FILE = "file"
    IMAGE = "image"
    TICKER = "ticker"
    TABLE = "table"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return QUESTION_TYPE_LABELS[self]

    @property
    def uses_options(self) -> bool:
        """True for the choice types that carry an options list."""
        return self in (QuestionType.CHOICE, QuestionType.CHOICES)

    @property
    def uses_table(self) -> bool:
        return self is QuestionType.TABLE


QUESTION_TYPE_LABELS: Dict[QuestionType, str] = {
    QuestionType.TEXT: "Single Line Text",
    QuestionType.TEXTAREA: "Multiple Line Text",
    QuestionType.EMAIL: "Email Address",
    QuestionType.URL: "URL",
    QuestionType.PHONE: "Phone Number",
    QuestionType.RICHTEXT: "Rich Text",
    QuestionType.CHOICE: "Single Choice",
    QuestionType.NUMBER: "Whole Number",
    QuestionType.DECIMAL: "Decimal Number",
    QuestionType.CURRENCY: "Currency",
    QuestionType.DATE: "Date Only",
    QuestionType.DATETIME: "Date and Time",
    QuestionType.CHOICES: "Multiple Choice",
    QuestionType.BOOLEAN: "Yes/No",
    QuestionType.FILE: "File Upload",
    QuestionType.IMAGE: "Image Upload",
    QuestionType.TICKER: "Ticker Symbol",
    QuestionType.TABLE: "Table",
}


def question_type_label(value: QuestionType | str) -> str:
    """Return the display label for a question type (enum or raw value)."""
    return QuestionType(value).label


@dataclass(frozen=True)
class QuestionValidation:
    """
    Validation hints attached to a question.

    The core stores these for form collaborators; it never evaluates them.
    """
    min: Optional[float] = None
    max: Optional[float] = None
    pattern: Optional[str] = None

    def to_dict(self) -> dict:
        return {k: v for k, v in (("min", self.min), ("max", self.max), ("pattern", self.pattern)) if v is not None}

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionValidation":
        return cls(min=data.get("min"), max=data.get("max"), pattern=data.get("pattern"))


@dataclass(frozen=True)
class Question:
    """
    Question record (immutable).

    Attributes:
        id: Unique identifier (UUID string)
        title: Question text shown to respondents
        type: Input format
        required: Whether an answer is mandatory
        order: Rank within the owning section (display sorts ascending)
        hidden: Hidden from previews/output while kept in the library
        description: Optional helper text
        options: Ordered choices for choice/choices questions
        placeholder: Optional input placeholder
        bullet_points: Ordered bullet list shown under the title
        facility_number: Optional free-form reference number
        validation: Optional stored validation hints
        table_columns: Column headers for table questions
        table_row_headers: Row headers for table questions
        table_rows: Row-major cell values, each row len(table_columns) long

    Invariants:
        - Sequences are tuples (lists passed in are frozen on construction)
        - `type` is always a QuestionType member

    Example:
        >>> q = Question(id="q1", title="Name", type=QuestionType.TEXT, required=True, order=1)
        >>> q.type.label
        'Single Line Text'
    """

    id: str
    title: str
    type: QuestionType
    required: bool = False
    order: int = 0
    hidden: bool = False
    description: Optional[str] = None
    options: Optional[Tuple[str, ...]] = None
    placeholder: Optional[str] = None
    bullet_points: Optional[Tuple[str, ...]] = None
    facility_number: Optional[str] = None
    validation: Optional[QuestionValidation] = None
    table_columns: Optional[Tuple[str, ...]] = None
    table_row_headers: Optional[Tuple[str, ...]] = None
    table_rows: Optional[Tuple[Tuple[str, ...], ...]] = None

    def __post_init__(self) -> None:
        """Normalise field types on construction (also runs on replace())."""
        object.__setattr__(self, "type", QuestionType(self.type))
        object.__setattr__(self, "options", freeze_strings(self.options))
        object.__setattr__(self, "bullet_points", freeze_strings(self.bullet_points))
        object.__setattr__(self, "table_columns", freeze_strings(self.table_columns))
        object.__setattr__(self, "table_row_headers", freeze_strings(self.table_row_headers))
        object.__setattr__(self, "table_rows", freeze_rows(self.table_rows))
        if isinstance(self.validation, dict):
            object.__setattr__(self, "validation", QuestionValidation.from_dict(self.validation))

    # ─────────────────────────────────────────────────────────────────────────
    # Serialization
    # ─────────────────────────────────────────────────────────────────────────

    def to_dict(self) -> dict:
        """
        Serialize to dictionary for JSON storage.

        Optional fields are omitted when None so that presence/absence
        survives a round-trip exactly (an empty list stays an empty list).
        """
        d: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "type": self.type.value,
            "required": self.required,
            "order": self.order,
            "hidden": self.hidden,
        }
        if self.description is not None:
            d["description"] = self.description
        if self.options is not None:
            d["options"] = list(self.options)
        if self.placeholder is not None:
            d["placeholder"] = self.placeholder
        if self.bullet_points is not None:
            d["bullet_points"] = list(self.bullet_points)
        if self.facility_number is not None:
            d["facility_number"] = self.facility_number
        if self.validation is not None:
            d["validation"] = self.validation.to_dict()
        if self.table_columns is not None:
            d["table_columns"] = list(self.table_columns)
        if self.table_row_headers is not None:
            d["table_row_headers"] = list(self.table_row_headers)
        if self.table_rows is not None:
            d["table_rows"] = [list(row) for row in self.table_rows]
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Question":
        """Create from dictionary (inverse of to_dict)."""
        validation = data.get("validation")
        return cls(
            id=data["id"],
            title=data["title"],
            type=QuestionType(data["type"]),
            required=bool(data.get("required", False)),
            order=int(data.get("order", 0)),
            hidden=bool(data.get("hidden", False)),
            description=data.get("description"),
            options=data.get("options"),
            placeholder=data.get("placeholder"),
            bullet_points=data.get("bullet_points"),
            facility_number=data.get("facility_number"),
            validation=QuestionValidation.from_dict(validation) if validation is not None else None,
            table_columns=data.get("table_columns"),
            table_row_headers=data.get("table_row_headers"),
            table_rows=data.get("table_rows"),
        )
