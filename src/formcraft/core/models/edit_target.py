"""
Module: edit_target

Purpose:
    Tagged variant describing what a section/question form is editing.
    `NoEditTarget` means "create", the Editing* variants carry the entity
    being edited.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .questions import Question
from .sections import Section


@dataclass(frozen=True)
class NoEditTarget:
    """Form is creating a new entity."""


@dataclass(frozen=True)
class EditingSection:
    section: Section


@dataclass(frozen=True)
class EditingQuestion:
    section_id: str
    question: Question


EditTarget = Union[NoEditTarget, EditingSection, EditingQuestion]

NO_EDIT_TARGET = NoEditTarget()
