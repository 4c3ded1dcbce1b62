"""
Module: sections

Purpose:
    Provides the Section dataclass: an ordered, named grouping of
    questions owned by exactly one library or questionnaire.

Key Functions:
    - Section.get_question(id): Find an owned question
    - Section.max_question_order: Highest order among owned questions
    - Section.to_dict() / Section.from_dict(): Serialization

Used By:
    - core.models.libraries.QuestionLibrary
    - core.models.questionnaires.Questionnaire
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from .common import require_unique_ids
from .questions import Question


@dataclass(frozen=True)
class Section:
    """
    Section of questions (immutable).

    Attributes:
        id: Unique identifier within the owning library/questionnaire
        title: Section heading
        questions: Owned questions (storage order, display sorts by `order`)
        order: Rank within the owner
        hidden: Hidden from previews/output
        description: Optional section description

    Invariants:
        - Question ids are unique within the section
    """

    id: str
    title: str
    questions: Tuple[Question, ...] = ()
    order: int = 0
    hidden: bool = False
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))
        require_unique_ids(self.questions, f"section {self.id}")

    def get_question(self, question_id: str) -> Optional[Question]:
        """Find an owned question by id."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    @property
    def max_question_order(self) -> int:
        """Highest question order, 0 when the section is empty."""
        return max((q.order for q in self.questions), default=0)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "title": self.title,
            "questions": [q.to_dict() for q in self.questions],
            "order": self.order,
            "hidden": self.hidden,
        }
        if self.description is not None:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Section":
        return cls(
            id=data["id"],
            title=data["title"],
            questions=tuple(Question.from_dict(q) for q in data.get("questions", [])),
            order=int(data.get("order", 0)),
            hidden=bool(data.get("hidden", False)),
            description=data.get("description"),
        )
