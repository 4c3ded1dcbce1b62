"""
Questionnaire builder wizard.

The flow walks through four steps: pick a header, pick library sections,
pick a footer, then complete. Headers and footers are optional and can be
skipped; the library step needs at least one selected section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from formcraft.core.models import Questionnaire, QuestionLibrary
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow

from . import builder

logger = logging.getLogger(__name__)


class FlowStep(str, Enum):
    HEADERS = "headers"
    LIBRARY = "library"
    FOOTERS = "footers"
    COMPLETE = "complete"

    def __str__(self) -> str:
        return self.value


STEP_ORDER: Tuple[FlowStep, ...] = (
    FlowStep.HEADERS,
    FlowStep.LIBRARY,
    FlowStep.FOOTERS,
    FlowStep.COMPLETE,
)

SKIPPABLE_STEPS = frozenset({FlowStep.HEADERS, FlowStep.FOOTERS})


class FlowError(Exception):
    """Raised when a flow action is not allowed at the current step."""


@dataclass(frozen=True)
class BuilderSelections:
    header_id: Optional[str] = None
    section_ids: Tuple[str, ...] = ()
    footer_id: Optional[str] = None


class BuilderFlow:
    """
    Mutable wizard state for assembling one questionnaire.

    Example:
        >>> flow = BuilderFlow()
        >>> flow.skip()
        >>> flow.toggle_section("s1")
        >>> flow.next()
        >>> flow.skip()
        >>> flow.complete(questionnaire, libraries)
    """

    def __init__(self, *, clock: Clock = utcnow, id_factory: IdFactory = new_id) -> None:
        self._clock = clock
        self._new_id = id_factory
        self.reset()

    def reset(self) -> None:
        self.step = FlowStep.HEADERS
        self.header_id: Optional[str] = None
        self.footer_id: Optional[str] = None
        self._section_ids: List[str] = []

    @property
    def section_ids(self) -> Tuple[str, ...]:
        return tuple(self._section_ids)

    @property
    def selections(self) -> BuilderSelections:
        return BuilderSelections(self.header_id, self.section_ids, self.footer_id)

    def select_header(self, header_id: Optional[str]) -> None:
        self.header_id = header_id

    def select_footer(self, footer_id: Optional[str]) -> None:
        self.footer_id = footer_id

    def toggle_section(self, section_id: str) -> bool:
        """Add or remove a section from the selection. Returns the new state."""
        if section_id in self._section_ids:
            self._section_ids.remove(section_id)
            return False
        self._section_ids.append(section_id)
        return True

    def can_proceed(self) -> bool:
        if self.step is FlowStep.LIBRARY:
            return bool(self._section_ids)
        return self.step is not FlowStep.COMPLETE

    def next(self) -> FlowStep:
        if not self.can_proceed():
            raise FlowError(f"Cannot leave step {self.step}")
        self.step = STEP_ORDER[STEP_ORDER.index(self.step) + 1]
        return self.step

    def back(self) -> FlowStep:
        index = STEP_ORDER.index(self.step)
        if index > 0:
            self.step = STEP_ORDER[index - 1]
        return self.step

    def skip(self) -> FlowStep:
        """Clear the optional choice for this step and move on."""
        if self.step not in SKIPPABLE_STEPS:
            raise FlowError(f"Step {self.step} cannot be skipped")
        if self.step is FlowStep.HEADERS:
            self.header_id = None
        else:
            self.footer_id = None
        self.step = STEP_ORDER[STEP_ORDER.index(self.step) + 1]
        return self.step

    def complete(self, questionnaire: Questionnaire, libraries: Iterable[QuestionLibrary]) -> Questionnaire:
        """
        Apply the selections to `questionnaire` and reset the flow.

        Header and footer references are replaced by the selections (None
        clears them); selected sections are appended as copies.
        """
        if self.step is not FlowStep.COMPLETE:
            raise FlowError(f"Flow is at step {self.step}, not {FlowStep.COMPLETE}")
        updated = builder.update_questionnaire(
            questionnaire,
            {"header_id": self.header_id, "footer_id": self.footer_id},
            clock=self._clock,
        )
        updated = builder.add_sections_from_library(
            updated, self.section_ids, libraries, clock=self._clock, id_factory=self._new_id
        )
        logger.info(f"Completed builder flow for questionnaire {questionnaire.id}")
        self.reset()
        return updated
