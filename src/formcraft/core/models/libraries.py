"""
Module: libraries

Purpose:
    Provides the QuestionLibrary dataclass: a named, persisted collection
    of sections used as the template source for questionnaires.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from .common import parse_timestamp, require_unique_ids
from .sections import Section


@dataclass(frozen=True)
class QuestionLibrary:
    """
    Question library (immutable).

    Attributes:
        id: Unique identifier
        name: Display name
        created_at: Creation timestamp (UTC)
        updated_at: Bumped on every mutation of the library or its contents
        sections: Owned sections (storage order, display sorts by `order`)
        description: Optional description

    Invariants:
        - Section ids are unique within the library
    """

    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    sections: Tuple[Section, ...] = ()
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "sections", tuple(self.sections))
        require_unique_ids(self.sections, f"library {self.id}")

    def get_section(self, section_id: str) -> Optional[Section]:
        """Find an owned section by id."""
        for section in self.sections:
            if section.id == section_id:
                return section
        return None

    @property
    def max_section_order(self) -> int:
        """Highest section order, 0 when the library is empty."""
        return max((s.order for s in self.sections), default=0)

    @property
    def question_count(self) -> int:
        return sum(len(s.questions) for s in self.sections)

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "sections": [s.to_dict() for s in self.sections],
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        if self.description is not None:
            d["description"] = self.description
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "QuestionLibrary":
        return cls(
            id=data["id"],
            name=data["name"],
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
            sections=tuple(Section.from_dict(s) for s in data.get("sections", [])),
            description=data.get("description"),
        )
