"""
Module: stores.session

Purpose:
    Owns the one-per-session store instances. Constructed once at start-up
    and passed by reference to consumers; `reset()` and `close()` give
    tests and the CLI an explicit teardown.

Key Classes:
    - StoreSession: LibraryStore + HeaderFooterStore + QuestionnaireCollection
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional

from formcraft.assembly.collection import QuestionnaireCollection
from formcraft.config import StoreConfig
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow

from .header_footer_store import HeaderFooterStore
from .library_store import LibraryStore
from .persistence import PersistenceSlot

logger = logging.getLogger(__name__)


class StoreSession:
    """
    Session-scoped store instances.

    Example:
        >>> with StoreSession(StoreConfig(data_dir=Path("/tmp/fc"))) as session:
        ...     lib = session.libraries.create_library("Demo")
    """

    def __init__(
        self,
        config: StoreConfig,
        *,
        clock: Clock = utcnow,
        id_factory: IdFactory = new_id,
    ) -> None:
        self.config = config
        self.libraries = LibraryStore(
            PersistenceSlot(config.slot_path(config.library_slot), config.lock_timeout),
            strict=config.strict_validation,
            clock=clock,
            id_factory=id_factory,
        )
        self.headers_footers = HeaderFooterStore(
            PersistenceSlot(config.slot_path(config.header_footer_slot), config.lock_timeout),
            strict=config.strict_validation,
            clock=clock,
            id_factory=id_factory,
        )
        # Questionnaires are assembled in memory and never persisted
        self.questionnaires = QuestionnaireCollection(clock=clock, id_factory=id_factory)
        self._closed = False
        logger.info(f"Opened store session in {config.data_dir}")

    @classmethod
    def open(cls, data_dir: Optional[Path] = None) -> "StoreSession":
        """Open a session with default configuration."""
        return cls(StoreConfig.default(data_dir))

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def load_errors(self) -> Dict[str, str]:
        """Slot name -> error message for stores that started empty after a failed load."""
        errors: Dict[str, str] = {}
        if self.libraries.load_error:
            errors[self.config.library_slot] = self.libraries.load_error
        if self.headers_footers.load_error:
            errors[self.config.header_footer_slot] = self.headers_footers.load_error
        return errors

    def reset(self) -> None:
        """Clear every store (persisted slots included)."""
        self.libraries.reset()
        self.headers_footers.reset()
        self.questionnaires.reset()
        logger.info("Store session reset")

    def close(self) -> None:
        """Stop emitting change signals; stores remain readable."""
        if self._closed:
            return
        for store in (self.libraries, self.headers_footers, self.questionnaires):
            store.blockSignals(True)
        self._closed = True
        logger.info("Closed store session")

    def __enter__(self) -> "StoreSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
