"""
Module: stores.header_footer_store

Purpose:
    Two independent collections of reusable rich-text snippets (headers
    and footers) with identical CRUD operations. Questionnaires refer to
    entries by id only; deleting an entry never touches questionnaires.

Key Classes:
    - HeaderFooterStore: Persisted store of HeaderFooter snippets
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Mapping, Optional, Tuple

from PySide6.QtCore import Signal

from formcraft.core.models import HeaderFooter, HeaderFooterKind
from formcraft.core.models.common import merge_updates
from formcraft.core.utils.identifiers import Clock, IdFactory, new_id, utcnow
from formcraft.core.utils.serialization import (
    deserialize_header_footer_state,
    serialize_header_footer_state,
)

from .persistence import PersistedStore, PersistenceSlot

logger = logging.getLogger(__name__)


class HeaderFooterStore(PersistedStore):
    """
    Persisted store of headers and footers.

    Signals:
        changed(object, tuple): Kind and new collection after a mutation
    """

    changed = Signal(object, object)

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
        self._items: Dict[HeaderFooterKind, Tuple[HeaderFooter, ...]] = {
            HeaderFooterKind.HEADER: (),
            HeaderFooterKind.FOOTER: (),
        }

        if self._rehydrate(self._apply_blob):
            logger.info(
                f"Restored {len(self.headers)} headers and {len(self.footers)} footers "
                f"from {self.slot.path.name}"
            )

    def _apply_blob(self, data: Dict[str, Any]) -> None:
        headers, footers = deserialize_header_footer_state(data, strict=self.strict)
        self._items = {HeaderFooterKind.HEADER: headers, HeaderFooterKind.FOOTER: footers}

    def _snapshot_payload(self) -> Dict[str, Any]:
        return serialize_header_footer_state(self.headers, self.footers)

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def headers(self) -> Tuple[HeaderFooter, ...]:
        return self._items[HeaderFooterKind.HEADER]

    @property
    def footers(self) -> Tuple[HeaderFooter, ...]:
        return self._items[HeaderFooterKind.FOOTER]

    def items(self, kind: HeaderFooterKind | str) -> Tuple[HeaderFooter, ...]:
        return self._items[HeaderFooterKind(kind)]

    def find(self, kind: HeaderFooterKind | str, item_id: str) -> Optional[HeaderFooter]:
        for item in self.items(kind):
            if item.id == item_id:
                return item
        return None

    def find_header(self, header_id: str) -> Optional[HeaderFooter]:
        return self.find(HeaderFooterKind.HEADER, header_id)

    def find_footer(self, footer_id: str) -> Optional[HeaderFooter]:
        return self.find(HeaderFooterKind.FOOTER, footer_id)

    # ─────────────────────────────────────────────────────────────────────────
    # Generic operations (shared by headers and footers)
    # ─────────────────────────────────────────────────────────────────────────

    def _commit(self, kind: HeaderFooterKind, items: Tuple[HeaderFooter, ...]) -> None:
        self._items = {**self._items, kind: items}
        self._persist()
        self.changed.emit(kind, items)

    def create(self, kind: HeaderFooterKind | str, name: str, content: str) -> HeaderFooter:
        """Create an entry tagged with `kind`, stamping both timestamps."""
        kind = HeaderFooterKind(kind)
        now = self._clock()
        item = HeaderFooter(
            id=self._new_id(),
            name=name,
            content=content,
            type=kind,
            created_at=now,
            updated_at=now,
        )
        logger.debug(f"Created {kind} {item.id} ({name!r})")
        self._commit(kind, self.items(kind) + (item,))
        return item

    def update(self, kind: HeaderFooterKind | str, item_id: str, updates: Mapping[str, Any]) -> Optional[HeaderFooter]:
        """Merge `updates` (id, type and created_at are fixed) and bump updated_at."""
        kind = HeaderFooterKind(kind)
        current = self.find(kind, item_id)
        if current is None:
            logger.debug(f"{kind.value.capitalize()} not found: {item_id}")
            return None
        updated = merge_updates(current, updates, protected=("id", "type", "created_at"))
        updated = replace(updated, updated_at=self._clock())
        self._commit(kind, tuple(updated if item.id == item_id else item for item in self.items(kind)))
        return updated

    def delete(self, kind: HeaderFooterKind | str, item_id: str) -> bool:
        kind = HeaderFooterKind(kind)
        if self.find(kind, item_id) is None:
            logger.debug(f"{kind.value.capitalize()} not found: {item_id}")
            return False
        self._commit(kind, tuple(item for item in self.items(kind) if item.id != item_id))
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # Header / footer entry points
    # ─────────────────────────────────────────────────────────────────────────

    def create_header(self, name: str, content: str) -> HeaderFooter:
        return self.create(HeaderFooterKind.HEADER, name, content)

    def update_header(self, header_id: str, updates: Mapping[str, Any]) -> Optional[HeaderFooter]:
        return self.update(HeaderFooterKind.HEADER, header_id, updates)

    def delete_header(self, header_id: str) -> bool:
        return self.delete(HeaderFooterKind.HEADER, header_id)

    def create_footer(self, name: str, content: str) -> HeaderFooter:
        return self.create(HeaderFooterKind.FOOTER, name, content)

    def update_footer(self, footer_id: str, updates: Mapping[str, Any]) -> Optional[HeaderFooter]:
        return self.update(HeaderFooterKind.FOOTER, footer_id, updates)

    def delete_footer(self, footer_id: str) -> bool:
        return self.delete(HeaderFooterKind.FOOTER, footer_id)

    def reset(self) -> None:
        """Drop all headers and footers and persist the empty state."""
        self._items = {HeaderFooterKind.HEADER: (), HeaderFooterKind.FOOTER: ()}
        self._persist()
        self.changed.emit(HeaderFooterKind.HEADER, ())
        self.changed.emit(HeaderFooterKind.FOOTER, ())
