"""
Module: assembly.builder

Purpose:
    Build and evolve Questionnaire snapshots. All functions are pure: they
    take a questionnaire and return a new one, reading libraries and
    headers/footers only through the immutable snapshots they are given.

Key Functions:
    - create_questionnaire(): New empty questionnaire
    - duplicate_questionnaire(): Independent copy with " (Copy)" title
    - add_sections_from_library(): Append copies of library sections
    - set_status(): Status change (all transitions allowed)
    - resolve_header() / resolve_footer(): Weak-reference lookup

Copy rule:
    Sections copied into (or duplicated with) a questionnaire get new ids
    for the section and for every question inside it, so library and
    questionnaire trees never share ids. Later library edits or deletes do
    not reach the copies.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Iterable, Mapping, Optional, Sequence

from formcraft.core.models import (
    HeaderFooter,
    Questionnaire,
    QuestionnaireStatus,
    QuestionLibrary,
    Section,
)
from formcraft.core.models.common import merge_updates
from formcraft.core.utils.cloning import clone_section, copy_title
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow
from formcraft.core.utils.ordering import next_order, reorder_by_ids

logger = logging.getLogger(__name__)


def create_questionnaire(
    title: str,
    description: Optional[str] = None,
    header_id: Optional[str] = None,
    footer_id: Optional[str] = None,
    status: QuestionnaireStatus | str = QuestionnaireStatus.DRAFT,
    *,
    client_id: Optional[str] = None,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Questionnaire:
    """Create an empty questionnaire with a new id and current timestamps."""
    now = clock()
    return Questionnaire(
        id=id_factory(),
        title=title,
        created_at=now,
        updated_at=now,
        sections=(),
        status=QuestionnaireStatus(status),
        description=description,
        client_id=client_id,
        header_id=header_id,
        footer_id=footer_id,
    )


def duplicate_questionnaire(
    questionnaire: Questionnaire,
    *,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Questionnaire:
    """
    Copy a questionnaire by value.

    The copy gets a new id, fresh timestamps and " (Copy)" appended to the
    title. Sections keep their order; section and question ids are
    regenerated. Status and header/footer references are kept.
    """
    now = clock()
    sections = tuple(
        clone_section(section, order=section.order, id_factory=id_factory)
        for section in questionnaire.sections
    )
    return replace(
        questionnaire,
        id=id_factory(),
        title=copy_title(questionnaire.title),
        sections=sections,
        created_at=now,
        updated_at=now,
    )


def find_library_section(libraries: Iterable[QuestionLibrary], section_id: str) -> Optional[Section]:
    """First section with `section_id` across `libraries`."""
    for library in libraries:
        section = library.get_section(section_id)
        if section is not None:
            return section
    return None


def add_sections_from_library(
    questionnaire: Questionnaire,
    section_ids: Sequence[str],
    libraries: Iterable[QuestionLibrary],
    *,
    clock: Clock = utcnow,
    id_factory: IdFactory = new_id,
) -> Questionnaire:
    """
    Append copies of library sections to a questionnaire.

    For each id the first matching section across `libraries` is cloned
    (first match wins); unknown ids are skipped. Copies are appended in the
    order of `section_ids` with order = max + 1.

    Returns:
        Updated questionnaire, or the same instance if nothing matched
    """
    libraries = tuple(libraries)
    sections = list(questionnaire.sections)
    added = 0
    for section_id in section_ids:
        source = find_library_section(libraries, section_id)
        if source is None:
            logger.debug(f"Section not found in any library: {section_id}")
            continue
        sections.append(clone_section(source, order=next_order(sections), id_factory=id_factory))
        added += 1

    if not added:
        return questionnaire
    logger.debug(f"Added {added} sections to questionnaire {questionnaire.id}")
    return replace(questionnaire, sections=tuple(sections), updated_at=clock())


def set_status(
    questionnaire: Questionnaire,
    status: QuestionnaireStatus | str,
    *,
    clock: Clock = utcnow,
) -> Questionnaire:
    """Set the status and bump updated_at. Every transition is permitted."""
    return replace(questionnaire, status=QuestionnaireStatus(status), updated_at=clock())


def update_questionnaire(
    questionnaire: Questionnaire,
    updates: Mapping[str, Any],
    *,
    clock: Clock = utcnow,
) -> Questionnaire:
    """Merge `updates` (id and created_at are fixed) and bump updated_at."""
    updated = merge_updates(questionnaire, updates, protected=("id", "created_at"))
    return replace(updated, updated_at=clock())


def remove_section(
    questionnaire: Questionnaire,
    section_id: str,
    *,
    clock: Clock = utcnow,
) -> Questionnaire:
    """Drop one section copy. Missing ids return the questionnaire unchanged."""
    if questionnaire.get_section(section_id) is None:
        return questionnaire
    sections = tuple(s for s in questionnaire.sections if s.id != section_id)
    return replace(questionnaire, sections=sections, updated_at=clock())


def reorder_questionnaire_sections(
    questionnaire: Questionnaire,
    ordered_section_ids: Sequence[str],
    *,
    clock: Clock = utcnow,
) -> Questionnaire:
    """Assign each section its 1-based position in `ordered_section_ids`."""
    sections = reorder_by_ids(questionnaire.sections, ordered_section_ids)
    return replace(questionnaire, sections=sections, updated_at=clock())


def resolve_header(questionnaire: Questionnaire, headers: Iterable[HeaderFooter]) -> Optional[HeaderFooter]:
    """Look up the referenced header; None if unset or dangling."""
    return _resolve(questionnaire.header_id, headers)


def resolve_footer(questionnaire: Questionnaire, footers: Iterable[HeaderFooter]) -> Optional[HeaderFooter]:
    """Look up the referenced footer; None if unset or dangling."""
    return _resolve(questionnaire.footer_id, footers)


def _resolve(item_id: Optional[str], items: Iterable[HeaderFooter]) -> Optional[HeaderFooter]:
    if item_id is None:
        return None
    for item in items:
        if item.id == item_id:
            return item
    return None
