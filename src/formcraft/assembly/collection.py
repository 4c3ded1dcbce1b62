"""
Module: assembly.collection

Purpose:
    In-memory collection of questionnaires for the builder UI. Questionnaires
    are never written to a persistence slot; the collection only lives for
    the session.

Key Classes:
    - QuestionnaireCollection: QObject wrapper over the pure builder functions
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

from PySide6.QtCore import QObject, Signal

from formcraft.core.models import Questionnaire, QuestionnaireStatus, QuestionLibrary
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow
from formcraft.query.search import SearchResult, search_filter

from . import builder

logger = logging.getLogger(__name__)


class QuestionnaireCollection(QObject):
    """
    Session-scoped questionnaire list.

    Signals:
        changed(tuple): New questionnaire tuple after every mutation
    """

    changed = Signal(object)

    def __init__(
        self,
        parent: Optional[QObject] = None,
        *,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_id,
    ) -> None:
        super().__init__(parent)
        self._clock = clock
        self._new_id = id_factory
        self._questionnaires: Tuple[Questionnaire, ...] = ()

    @property
    def questionnaires(self) -> Tuple[Questionnaire, ...]:
        return self._questionnaires

    def get(self, questionnaire_id: str) -> Optional[Questionnaire]:
        for questionnaire in self._questionnaires:
            if questionnaire.id == questionnaire_id:
                return questionnaire
        return None

    def _commit(self, questionnaires: Tuple[Questionnaire, ...]) -> None:
        self._questionnaires = questionnaires
        self.changed.emit(questionnaires)

    def _replace(self, updated: Questionnaire) -> Questionnaire:
        self._commit(tuple(updated if q.id == updated.id else q for q in self._questionnaires))
        return updated

    # ─────────────────────────────────────────────────────────────────────────
    # Mutations
    # ─────────────────────────────────────────────────────────────────────────

    def add(self, questionnaire: Questionnaire) -> Questionnaire:
        """Append an already-built questionnaire, replacing one with the same id."""
        if self.get(questionnaire.id) is not None:
            return self._replace(questionnaire)
        self._commit(self._questionnaires + (questionnaire,))
        return questionnaire

    def create(
        self,
        title: str,
        description: Optional[str] = None,
        header_id: Optional[str] = None,
        footer_id: Optional[str] = None,
        status: QuestionnaireStatus | str = QuestionnaireStatus.DRAFT,
        client_id: Optional[str] = None,
    ) -> Questionnaire:
        questionnaire = builder.create_questionnaire(
            title,
            description,
            header_id,
            footer_id,
            status,
            client_id=client_id,
            clock=self._clock,
            id_factory=self._new_id,
        )
        logger.debug(f"Created questionnaire {questionnaire.id} ({title!r})")
        return self.add(questionnaire)

    def update(self, questionnaire_id: str, updates: Mapping[str, Any]) -> Optional[Questionnaire]:
        current = self.get(questionnaire_id)
        if current is None:
            return None
        return self._replace(builder.update_questionnaire(current, updates, clock=self._clock))

    def delete(self, questionnaire_id: str) -> bool:
        if self.get(questionnaire_id) is None:
            return False
        self._commit(tuple(q for q in self._questionnaires if q.id != questionnaire_id))
        return True

    def duplicate(self, questionnaire_id: str) -> Optional[Questionnaire]:
        current = self.get(questionnaire_id)
        if current is None:
            return None
        copy = builder.duplicate_questionnaire(current, clock=self._clock, id_factory=self._new_id)
        self._commit(self._questionnaires + (copy,))
        return copy

    def set_status(self, questionnaire_id: str, status: QuestionnaireStatus | str) -> Optional[Questionnaire]:
        current = self.get(questionnaire_id)
        if current is None:
            return None
        return self._replace(builder.set_status(current, status, clock=self._clock))

    def add_sections_from_library(
        self,
        questionnaire_id: str,
        section_ids: Sequence[str],
        libraries: Iterable[QuestionLibrary],
    ) -> Optional[Questionnaire]:
        current = self.get(questionnaire_id)
        if current is None:
            return None
        updated = builder.add_sections_from_library(
            current, section_ids, libraries, clock=self._clock, id_factory=self._new_id
        )
        if updated is current:
            return current
        return self._replace(updated)

    def remove_section(self, questionnaire_id: str, section_id: str) -> Optional[Questionnaire]:
        current = self.get(questionnaire_id)
        if current is None:
            return None
        updated = builder.remove_section(current, section_id, clock=self._clock)
        if updated is current:
            return current
        return self._replace(updated)

    def reset(self) -> None:
        self._commit(())

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    def search(
        self,
        query: str = "",
        statuses: Sequence[QuestionnaireStatus | str] = (),
    ) -> SearchResult[Questionnaire]:
        """Title/description search, optional status filter, newest first."""
        wanted = [QuestionnaireStatus(s) for s in statuses]
        return search_filter(
            self._questionnaires,
            query,
            ("title", "description"),
            filters=wanted,
            filter_fn=lambda q, selected: q.status in selected,
            sort_key=lambda q: q.updated_at,
            reverse=True,
        )
