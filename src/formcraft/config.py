"""
Module: config

Purpose:
    Configuration dataclass for the persisted stores. Immutable
    configuration with validation on construction.

Key Classes:
    - StoreConfig: Where and how store slots are persisted

Used By:
    - stores.session.StoreSession
    - cli
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from formcraft.paths import get_store_dir


@dataclass(frozen=True)
class StoreConfig:
    """
    Configuration for the persisted stores (immutable).

    Attributes:
        data_dir: Directory holding the slot files
        library_slot: Slot name of the question-library store
        header_footer_slot: Slot name of the header/footer store
        strict_validation: Run jsonschema on rehydration, not only basic checks
        lock_timeout: Seconds to wait for the slot lock before giving up

    Example:
        >>> config = StoreConfig(data_dir=Path("/tmp/formcraft"))
        >>> config.slot_path(config.library_slot).name
        'question-library-store.json'
    """

    data_dir: Path
    library_slot: str = "question-library-store"
    header_footer_slot: str = "header-footer-store"
    strict_validation: bool = True
    lock_timeout: float = 5.0

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        object.__setattr__(self, "data_dir", Path(self.data_dir))
        for name in (self.library_slot, self.header_footer_slot):
            if not name or "/" in name or "\\" in name:
                raise ValueError(f"slot name must be a plain file stem: {name!r}")
        if self.library_slot == self.header_footer_slot:
            raise ValueError(f"slot names must differ: {self.library_slot!r}")
        if self.lock_timeout <= 0:
            raise ValueError(f"lock_timeout must be positive: {self.lock_timeout}")

    def slot_path(self, slot: str) -> Path:
        return self.data_dir / f"{slot}.json"

    @classmethod
    def default(cls, data_dir: Optional[Path] = None) -> "StoreConfig":
        """Config rooted at `data_dir`, or the platform store directory."""
        return cls(data_dir=data_dir if data_dir is not None else get_store_dir())
