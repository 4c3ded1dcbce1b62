"""
Module: stores.persistence

Purpose:
    Device-local JSON slots for the stores. One slot (file) per store
    holding the full serialized state, rewritten after every mutation.

Key Classes:
    - PersistenceSlot: Locked read / atomic write of one JSON file
    - PersistedStore: QObject base wiring rehydration and write-through
    - PersistenceError: Slot I/O failure

Dependencies:
    - portalocker: Cross-platform file locking
    - PySide6.QtCore: Signals for the persistence health state

Used By:
    - stores.library_store.LibraryStore
    - stores.header_footer_store.HeaderFooterStore
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import portalocker
from PySide6.QtCore import QObject, Signal

from formcraft.core.schemas.validator import ValidationError

logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Error reading or writing a persistence slot."""
    pass


class PersistenceSlot:
    """
    One named JSON slot on disk.

    Reads hold a shared lock and writes an exclusive lock on a sidecar
    `.lock` file. Writes go to a temp file first and atomically replace the
    slot, so an interrupted write never leaves a truncated slot behind.

    Example:
        >>> slot = PersistenceSlot(Path("workspace/stores/header-footer-store.json"))
        >>> slot.write({"schema_version": 1, "state": {"headers": [], "footers": []}})
        >>> slot.read()["schema_version"]
        1
    """

    def __init__(self, path: Path, lock_timeout: float = 5.0) -> None:
        self.path = Path(path)
        self.lock_timeout = lock_timeout

    @property
    def lock_path(self) -> Path:
        return self.path.with_suffix(".lock")

    def exists(self) -> bool:
        return self.path.exists()

    def _lock(self, flags: int) -> portalocker.Lock:
        return portalocker.Lock(
            str(self.lock_path),
            mode="a",
            timeout=self.lock_timeout,
            flags=flags | portalocker.LOCK_NB,
        )

    def read(self) -> Optional[Dict[str, Any]]:
        """
        Read and decode the slot.

        Returns:
            Decoded JSON, or None if the slot does not exist

        Raises:
            PersistenceError: If the file cannot be read, locked or decoded
        """
        if not self.path.exists():
            return None
        try:
            with self._lock(portalocker.LOCK_SH):
                content = self.path.read_text(encoding="utf-8")
        except (OSError, portalocker.LockException) as e:
            raise PersistenceError(f"Failed to read {self.path.name}: {e}") from e
        try:
            return json.loads(content)
        except json.JSONDecodeError as e:
            raise PersistenceError(f"{self.path.name} is corrupted: {e}") from e

    def write(self, payload: Dict[str, Any]) -> None:
        """
        Atomically replace the slot contents.

        Raises:
            PersistenceError: If encoding, locking or writing fails
        """
        try:
            text = json.dumps(payload, indent=2, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Failed to encode {self.path.name}: {e}") from e

        temp_path = self.path.with_suffix(".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with self._lock(portalocker.LOCK_EX):
                temp_path.write_text(text, encoding="utf-8")
                # Atomic rename (overwrites existing)
                temp_path.replace(self.path)
        except (OSError, portalocker.LockException) as e:
            if temp_path.exists():
                try:
                    temp_path.unlink()
                except OSError:
                    logger.debug(f"Could not remove temp file {temp_path}")
            raise PersistenceError(f"Failed to write {self.path.name}: {e}") from e

    def clear(self) -> None:
        """Delete the slot file (the lock file is left in place)."""
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Failed to delete {self.path.name}: {e}") from e


class PersistedStore(QObject):
    """
    Base class for stores that write their full state through to a slot.

    Subclasses implement `_snapshot_payload()` and call `_rehydrate()` from
    `__init__` and `_persist()` after each mutation. Failures are logged and
    recorded; they never propagate to callers and the in-memory state stays
    authoritative.

    Signals:
        persistenceFailed(str): Emitted with the error message when a write fails
    """

    persistenceFailed = Signal(str)

    def __init__(self, slot: Optional[PersistenceSlot] = None, *, strict: bool = False) -> None:
        super().__init__()
        self.slot = slot
        self.strict = strict
        self.load_error: Optional[str] = None
        self.last_save_error: Optional[str] = None

    @property
    def is_healthy(self) -> bool:
        """False when the most recent write failed."""
        return self.last_save_error is None

    def _rehydrate(self, apply: Callable[[Dict[str, Any]], None]) -> bool:
        """
        Load the slot and hand the decoded blob to `apply`.

        `apply` is expected to validate and deserialize; ValidationError and
        the AttributeError, KeyError, TypeError or ValueError raised by it
        mark the blob as malformed. Returns True if state was restored.
        """
        if self.slot is None:
            return False
        try:
            data = self.slot.read()
        except PersistenceError as e:
            self.load_error = str(e)
            logger.warning(f"Starting empty: {e}")
            return False
        if data is None:
            return False
        try:
            apply(data)
        except ValidationError as e:
            self.load_error = f"{self.slot.path.name} failed validation at {e.path or '<root>'}: {e}"
            logger.warning(f"Discarding persisted state: {self.load_error}")
            return False
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            self.load_error = f"{self.slot.path.name} is malformed: {e!r}"
            logger.warning(f"Discarding persisted state: {self.load_error}")
            return False
        return True

    def _snapshot_payload(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _persist(self) -> None:
        """Write the current state through to the slot (fire-and-forget)."""
        if self.slot is None:
            return
        try:
            self.slot.write(self._snapshot_payload())
        except PersistenceError as e:
            self.last_save_error = str(e)
            logger.warning(f"Failed to persist state: {e}")
            self.persistenceFailed.emit(str(e))
            return
        self.last_save_error = None
