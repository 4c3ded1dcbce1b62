"""
Module: questionnaires

Purpose:
    Provides the Questionnaire dataclass and its status enum. A
    questionnaire owns frozen copies of library sections and refers to
    headers/footers by id only.

Key Classes:
    - QuestionnaireStatus: draft | published | archived
    - Questionnaire: Immutable questionnaire snapshot

Used By:
    - assembly.builder
    - assembly.collection
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional, Tuple

from .common import parse_timestamp
from .sections import Section


class QuestionnaireStatus(str, Enum):
    """
    Lifecycle status.

    Every transition between the three states is permitted; status only
    changes through an explicit call.
    """
    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Questionnaire:
    """
    Assembled questionnaire (immutable).

    Attributes:
        id: Unique identifier
        title: Display title
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
        sections: Owned section copies (independent of the source library)
        status: Lifecycle status
        description: Optional description
        client_id: Optional weak reference to a client record
        header_id: Optional weak reference into the header collection
        footer_id: Optional weak reference into the footer collection

    Invariants:
        - header_id/footer_id are never cleared when the referenced
          snippet is deleted (dangling references are tolerated)
    """

    id: str
    title: str
    created_at: datetime
    updated_at: datetime
    sections: Tuple[Section, ...] = ()
    status: QuestionnaireStatus = QuestionnaireStatus.DRAFT
    description: Optional[str] = None
    client_id: Optional[str] = None
    header_id: Optional[str] = None
    footer_id: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        object.__setattr__(self, "status", QuestionnaireStatus(self.status))

    def get_section(self, section_id: str) -> Optional[Section]:
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    @property
    def max_section_order(self) -> int:
        return max((s.order for s in self.sections), default=0)

    @property
    def question_count(self) -> int:
        return sum(len(s.questions) for s in self.sections)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "title": self.title,
            "sections": [s.to_dict() for s in self.sections],
            "status": self.status.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        for key in ("description", "client_id", "header_id", "footer_id"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "Questionnaire":
        return cls(
            id=data["id"],
            title=data["title"],
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
            sections=tuple(Section.from_dict(s) for s in data.get("sections", [])),
            status=QuestionnaireStatus(data.get("status", "draft")),
            description=data.get("description"),
            client_id=data.get("client_id"),
            header_id=data.get("header_id"),
            footer_id=data.get("footer_id"),
        )
