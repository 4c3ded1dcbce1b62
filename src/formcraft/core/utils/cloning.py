"""
Deep-copy helpers for sections and questions.

Any copy that crosses an ownership boundary (section copy inside a library,
library -> questionnaire, questionnaire duplicate) regenerates the ids of
the copied section and of every question inside it, so the two trees can
evolve independently without id collisions.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional

from ..models.questions import Question
from ..models.sections import Section
from .identifiers import IdFactory, new_id
from .ordering import sorted_by_order

COPY_SUFFIX = " (Copy)"


def copy_title(title: str) -> str:
    return f"{title}{COPY_SUFFIX}"


def clone_question(question: Question, *, order: int, id_factory: IdFactory = new_id,
                   title: Optional[str] = None) -> Question:
    """Copy a question verbatim under a new id."""
    return replace(
        question,
        id=id_factory(),
        order=order,
        title=question.title if title is None else title,
    )


def clone_section(section: Section, *, order: int, id_factory: IdFactory = new_id,
                  title: Optional[str] = None) -> Section:
    """
    Deep-copy a section under a new id.

    Questions are sorted by their existing order, given new ids and
    renumbered `1..N`. Description and hidden flag are kept.
    """
    questions = tuple(
        clone_question(question, order=index, id_factory=id_factory)
        for index, question in enumerate(sorted_by_order(section.questions), start=1)
    )
    return Section(
        id=id_factory(),
        title=section.title if title is None else title,
        questions=questions,
        order=order,
        hidden=section.hidden,
        description=section.description,
    )
