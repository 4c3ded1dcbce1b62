"""
Module: header_footer

Purpose:
    Provides the HeaderFooter dataclass: a named, reusable rich-text
    snippet referenced by id from questionnaires. The content is an opaque
    HTML string; nothing in the core parses it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .common import parse_timestamp


class HeaderFooterKind(str, Enum):
    """Which collection a snippet belongs to."""
    HEADER = "header"
    FOOTER = "footer"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class HeaderFooter:
    """
    Header or footer snippet (immutable).

    Attributes:
        id: Unique identifier
        name: Display name
        content: Rich-text HTML (opaque)
        type: HEADER or FOOTER, fixed by the owning collection
        created_at: Creation timestamp (UTC)
        updated_at: Last modification timestamp (UTC)
    """

    id: str
    name: str
    content: str
    type: HeaderFooterKind
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        object.__setattr__(self, "type", HeaderFooterKind(self.type))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "content": self.content,
            "type": self.type.value,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "HeaderFooter":
        return cls(
            id=data["id"],
            name=data["name"],
            content=data["content"],
            type=HeaderFooterKind(data["type"]),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )
