"""
Module: stores.library_store

Purpose:
    Single source of truth for question libraries, their sections and
    questions, plus the "current library" selection pointer.

Key Classes:
    - LibraryStore: Persisted, copy-on-write store of QuestionLibrary

Design:
    - Every mutation builds a new tuple of libraries; readers holding the
      previous tuple keep a consistent snapshot
    - Every mutation of a library or its contents bumps its updated_at
    - Missing ids are silent no-ops: operations return None/False and
      neither persist nor emit
    - State is written through to the slot after each mutation and the new
      libraries tuple is emitted on `changed`

Dependencies:
    - PySide6.QtCore: Change signals
    - stores.persistence: Slot I/O

Used By:
    - stores.session.StoreSession
    - stores.editing (form submission)
    - assembly.builder (read-only: libraries, find_section)
    - demo
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple

from PySide6.QtCore import Signal

from formcraft.core.models import (
    Question,
    QuestionLibrary,
    QuestionType,
    Section,
)
from formcraft.core.models.common import merge_updates
from formcraft.core.utils.cloning import clone_question, clone_section, copy_title
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow
from formcraft.core.utils.ordering import (
    move_id,
    next_order,
    reorder_by_ids,
    sorted_by_order,
)
from formcraft.core.utils.serialization import (
    deserialize_library_state,
    serialize_library_state,
)

from .persistence import PersistedStore, PersistenceSlot

logger = logging.getLogger(__name__)

_STORE_ASSIGNED_QUESTION_FIELDS = ("id", "order")


class LibraryStore(PersistedStore):
    """
    Persisted store of question libraries.

    Signals:
        changed(tuple): New libraries tuple after every data mutation
        currentLibraryChanged(object): New current library (or None)

    Example:
        >>> store = LibraryStore()
        >>> lib = store.create_library("Demo")
        >>> section = store.add_section(lib.id, "S1")
        >>> section.order
        1
    """

    changed = Signal(object)
    currentLibraryChanged = Signal(object)

    def __init__(
        self,
        slot: Optional[PersistenceSlot] = None,
        *,
        strict: bool = False,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_id,
    ) -> None:
        super().__init__(slot, strict=strict)
        self._clock = clock
        self._new_id = id_factory
        self._libraries: Tuple[QuestionLibrary, ...] = ()
        self._current_library_id: Optional[str] = None

        if self._rehydrate(self._apply_blob):
            logger.info(f"Restored {len(self._libraries)} libraries from {self.slot.path.name}")

    # ─────────────────────────────────────────────────────────────────────────
    # Persistence hooks
    # ─────────────────────────────────────────────────────────────────────────

    def _apply_blob(self, data: Dict[str, Any]) -> None:
        libraries, current_id = deserialize_library_state(data, strict=self.strict)
        self._libraries = libraries
        known = {library.id for library in libraries}
        self._current_library_id = current_id if current_id in known else None

    def _snapshot_payload(self) -> Dict[str, Any]:
        return serialize_library_state(self._libraries, self._current_library_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries (read-only snapshots)
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def libraries(self) -> Tuple[QuestionLibrary, ...]:
        return self._libraries

    def get_library(self, library_id: str) -> Optional[QuestionLibrary]:
        for library in self._libraries:
            if library.id == library_id:
                return library
        return None

    def get_section(self, library_id: str, section_id: str) -> Optional[Section]:
        library = self.get_library(library_id)
        return library.get_section(section_id) if library else None

    def get_question(self, library_id: str, section_id: str, question_id: str) -> Optional[Question]:
        section = self.get_section(library_id, section_id)
        return section.get_question(question_id) if section else None

    def find_section(self, section_id: str) -> Optional[Section]:
        """First section with this id across all libraries."""
        for library in self._libraries:
            section = library.get_section(section_id)
            if section is not None:
                return section
        return None

    @property
    def current_library_id(self) -> Optional[str]:
        return self._current_library_id

    @property
    def current_library(self) -> Optional[QuestionLibrary]:
        """The selected library, resolved against the live collection."""
        if self._current_library_id is None:
            return None
        return self.get_library(self._current_library_id)

    def libraries_by_recency(self) -> list[QuestionLibrary]:
        """Libraries sorted by updated_at, most recent first."""
        return sorted(self._libraries, key=lambda lib: lib.updated_at, reverse=True)

    # ─────────────────────────────────────────────────────────────────────────
    # Internal mutation helpers
    # ─────────────────────────────────────────────────────────────────────────

    def _commit(self, libraries: Tuple[QuestionLibrary, ...]) -> None:
        self._libraries = libraries
        self._persist()
        self.changed.emit(libraries)

    def _replace_library(
        self,
        library_id: str,
        transform: Callable[[QuestionLibrary], Optional[QuestionLibrary]],
    ) -> Optional[QuestionLibrary]:
        """
        Swap one library for `transform(library)` and bump its updated_at.

        Returns None (and changes nothing) when the library is missing or
        `transform` returns None.
        """
        library = self.get_library(library_id)
        if library is None:
            logger.debug(f"Library not found: {library_id}")
            return None
        updated = transform(library)
        if updated is None:
            return None
        updated = replace(updated, updated_at=self._clock())
        self._commit(tuple(updated if lib.id == library_id else lib for lib in self._libraries))
        return updated

    def _replace_section(
        self,
        library_id: str,
        section_id: str,
        transform: Callable[[Section], Optional[Section]],
    ) -> Optional[Section]:
        result: list[Section] = []

        def apply(library: QuestionLibrary) -> Optional[QuestionLibrary]:
            section = library.get_section(section_id)
            if section is None:
                logger.debug(f"Section not found: {section_id} in library {library_id}")
                return None
            updated = transform(section)
            if updated is None:
                return None
            result.append(updated)
            return replace(
                library,
                sections=tuple(updated if s.id == section_id else s for s in library.sections),
            )

        if self._replace_library(library_id, apply) is None:
            return None
        return result[0]

    def _replace_question(
        self,
        library_id: str,
        section_id: str,
        question_id: str,
        transform: Callable[[Question], Question],
    ) -> Optional[Question]:
        result: list[Question] = []

        def apply(section: Section) -> Optional[Section]:
            question = section.get_question(question_id)
            if question is None:
                logger.debug(f"Question not found: {question_id} in section {section_id}")
                return None
            updated = transform(question)
            result.append(updated)
            return replace(
                section,
                questions=tuple(updated if q.id == question_id else q for q in section.questions),
            )

        if self._replace_section(library_id, section_id, apply) is None:
            return None
        return result[0]

    # ─────────────────────────────────────────────────────────────────────────
    # Library operations
    # ─────────────────────────────────────────────────────────────────────────

    def create_library(
        self,
        name: str,
        description: Optional[str] = None,
        sections: Iterable[Section] = (),
    ) -> QuestionLibrary:
        """Create a library with a new id and timestamps and append it."""
        now = self._clock()
        library = QuestionLibrary(
            id=self._new_id(),
            name=name,
            created_at=now,
            updated_at=now,
            sections=tuple(sections),
            description=description,
        )
        logger.debug(f"Created library {library.id} ({name!r})")
        self._commit(self._libraries + (library,))
        return library

    def update_library(self, library_id: str, updates: Mapping[str, Any]) -> Optional[QuestionLibrary]:
        """Merge `updates` into the library and bump updated_at."""
        return self._replace_library(
            library_id,
            lambda library: merge_updates(library, updates, protected=("id", "created_at")),
        )

    def delete_library(self, library_id: str) -> bool:
        """Remove a library with all its sections and questions."""
        if self.get_library(library_id) is None:
            logger.debug(f"Library not found: {library_id}")
            return False
        cleared = self._current_library_id == library_id
        if cleared:
            self._current_library_id = None
        self._commit(tuple(lib for lib in self._libraries if lib.id != library_id))
        logger.debug(f"Deleted library {library_id}")
        if cleared:
            self.currentLibraryChanged.emit(None)
        return True

    def set_current_library(self, library: Optional[QuestionLibrary]) -> None:
        """Point the active selection at `library` (or clear it)."""
        self._current_library_id = library.id if library is not None else None
        self._persist()
        self.currentLibraryChanged.emit(self.current_library)

    # ─────────────────────────────────────────────────────────────────────────
    # Section operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_section(
        self,
        library_id: str,
        title: str,
        description: Optional[str] = None,
        hidden: bool = False,
    ) -> Optional[Section]:
        """Append an empty section with order = max + 1 (1 if none)."""
        result: list[Section] = []

        def apply(library: QuestionLibrary) -> QuestionLibrary:
            section = Section(
                id=self._new_id(),
                title=title,
                questions=(),
                order=next_order(library.sections),
                hidden=hidden,
                description=description,
            )
            result.append(section)
            return replace(library, sections=library.sections + (section,))

        if self._replace_library(library_id, apply) is None:
            return None
        return result[0]

    def update_section(self, library_id: str, section_id: str, updates: Mapping[str, Any]) -> Optional[Section]:
        """Merge `updates` into a section; order only changes if passed."""
        return self._replace_section(
            library_id, section_id, lambda section: merge_updates(section, updates)
        )

    def delete_section(self, library_id: str, section_id: str) -> bool:
        """Remove a section and all of its questions."""

        def apply(library: QuestionLibrary) -> Optional[QuestionLibrary]:
            if library.get_section(section_id) is None:
                return None
            return replace(library, sections=tuple(s for s in library.sections if s.id != section_id))

        return self._replace_library(library_id, apply) is not None

    def copy_section(self, library_id: str, section_id: str) -> Optional[Section]:
        """
        Deep-copy a section within its library.

        The copy gets a new id, " (Copy)" appended to its title and
        order = max + 1. Its questions get new ids and orders 1..N following
        the original relative order.
        """
        result: list[Section] = []

        def apply(library: QuestionLibrary) -> Optional[QuestionLibrary]:
            section = library.get_section(section_id)
            if section is None:
                return None
            copy = clone_section(
                section,
                order=next_order(library.sections),
                id_factory=self._new_id,
                title=copy_title(section.title),
            )
            result.append(copy)
            return replace(library, sections=library.sections + (copy,))

        if self._replace_library(library_id, apply) is None:
            return None
        return result[0]

    def reorder_sections(self, library_id: str, ordered_section_ids: Sequence[str]) -> Optional[Tuple[Section, ...]]:
        """
        Assign each section its 1-based position in `ordered_section_ids`.

        Unknown ids are dropped. Sections missing from the list are kept and
        appended after the listed ones, not deleted. Returns the sections in
        their new order.
        """
        library = self._replace_library(
            library_id,
            lambda lib: replace(lib, sections=reorder_by_ids(lib.sections, ordered_section_ids)),
        )
        return library.sections if library else None

    def move_section(self, library_id: str, section_id: str, target_section_id: str) -> Optional[Tuple[Section, ...]]:
        """Drag-and-drop: move a section to the target's display position."""
        library = self.get_library(library_id)
        if library is None:
            return None
        ids = move_id([s.id for s in sorted_by_order(library.sections)], section_id, target_section_id)
        if ids is None:
            return None
        return self.reorder_sections(library_id, ids)

    def toggle_section_hidden(self, library_id: str, section_id: str) -> Optional[Section]:
        return self._replace_section(
            library_id, section_id, lambda section: replace(section, hidden=not section.hidden)
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Question operations
    # ─────────────────────────────────────────────────────────────────────────

    def add_question(
        self,
        library_id: str,
        section_id: str,
        title: str,
        type: QuestionType | str,
        **fields: Any,
    ) -> Optional[Question]:
        """
        Append a question with order = max + 1 within the section (1 if none).

        Keyword fields are the optional Question attributes (required,
        description, options, placeholder, bullet_points, facility_number,
        validation, hidden, table_*). `id` and `order` are store-assigned.
        """
        assigned = [name for name in _STORE_ASSIGNED_QUESTION_FIELDS if name in fields]
        if assigned:
            raise TypeError(f"Question fields assigned by the store: {assigned}")
        result: list[Question] = []

        def apply(section: Section) -> Section:
            question = Question(
                id=self._new_id(),
                title=title,
                type=QuestionType(type),
                order=section.max_question_order + 1,
                **fields,
            )
            result.append(question)
            return replace(section, questions=section.questions + (question,))

        if self._replace_section(library_id, section_id, apply) is None:
            return None
        return result[0]

    def update_question(
        self,
        library_id: str,
        section_id: str,
        question_id: str,
        updates: Mapping[str, Any],
    ) -> Optional[Question]:
        """Merge `updates` onto a question."""
        return self._replace_question(
            library_id, section_id, question_id, lambda question: merge_updates(question, updates)
        )

    def delete_question(self, library_id: str, section_id: str, question_id: str) -> bool:
        """Remove a question. Sibling orders are left untouched."""

        def apply(section: Section) -> Optional[Section]:
            if section.get_question(question_id) is None:
                return None
            return replace(section, questions=tuple(q for q in section.questions if q.id != question_id))

        return self._replace_section(library_id, section_id, apply) is not None

    def copy_question(self, library_id: str, section_id: str, question_id: str) -> Optional[Question]:
        """Copy a question verbatim with a new id, " (Copy)" title and order = max + 1."""
        result: list[Question] = []

        def apply(section: Section) -> Optional[Section]:
            question = section.get_question(question_id)
            if question is None:
                return None
            copy = clone_question(
                question,
                order=section.max_question_order + 1,
                id_factory=self._new_id,
                title=copy_title(question.title),
            )
            result.append(copy)
            return replace(section, questions=section.questions + (copy,))

        if self._replace_section(library_id, section_id, apply) is None:
            return None
        return result[0]

    def reorder_questions(
        self,
        library_id: str,
        section_id: str,
        ordered_question_ids: Sequence[str],
    ) -> Optional[Tuple[Question, ...]]:
        """
        Assign each question its 1-based position in `ordered_question_ids`.

        Questions missing from the list are kept and appended, not deleted.
        """
        section = self._replace_section(
            library_id,
            section_id,
            lambda s: replace(s, questions=reorder_by_ids(s.questions, ordered_question_ids)),
        )
        return section.questions if section else None

    def move_question(
        self,
        library_id: str,
        section_id: str,
        question_id: str,
        target_question_id: str,
    ) -> Optional[Tuple[Question, ...]]:
        """Drag-and-drop: move a question to the target's display position."""
        section = self.get_section(library_id, section_id)
        if section is None:
            return None
        ids = move_id([q.id for q in sorted_by_order(section.questions)], question_id, target_question_id)
        if ids is None:
            return None
        return self.reorder_questions(library_id, section_id, ids)

    def toggle_question_hidden(self, library_id: str, section_id: str, question_id: str) -> Optional[Question]:
        return self._replace_question(
            library_id, section_id, question_id, lambda q: replace(q, hidden=not q.hidden)
        )

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def reset(self) -> None:
        """Drop every library and the selection, then persist the empty state."""
        had_current = self._current_library_id is not None
        self._current_library_id = None
        self._commit(())
        if had_current:
            self.currentLibraryChanged.emit(None)
