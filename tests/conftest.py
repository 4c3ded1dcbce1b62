import pytest
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add src to sys.path so we can import formcraft
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from formcraft.config import StoreConfig
from formcraft.stores.header_footer_store import HeaderFooterStore
from formcraft.stores.library_store import LibraryStore
from formcraft.stores.persistence import PersistenceSlot

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class StepClock:
    """Deterministic clock: every call is one second after the previous one."""

    def __init__(self, start: datetime = BASE_TIME):
        self.now = start

    def __call__(self) -> datetime:
        self.now += timedelta(seconds=1)
        return self.now


class SequentialIds:
    """Deterministic id factory: id-1, id-2, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}-{self.count}"


# Common test fixtures
@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def ids():
    return SequentialIds()


@pytest.fixture
def store_config(tmp_path: Path) -> StoreConfig:
    return StoreConfig(data_dir=tmp_path / "stores")


@pytest.fixture
def library_slot(store_config: StoreConfig) -> PersistenceSlot:
    return PersistenceSlot(store_config.slot_path(store_config.library_slot))


@pytest.fixture
def header_footer_slot(store_config: StoreConfig) -> PersistenceSlot:
    return PersistenceSlot(store_config.slot_path(store_config.header_footer_slot))


@pytest.fixture
def library_store(library_slot, clock, ids) -> LibraryStore:
    return LibraryStore(library_slot, strict=True, clock=clock, id_factory=ids)


@pytest.fixture
def header_footer_store(header_footer_slot, clock, ids) -> HeaderFooterStore:
    return HeaderFooterStore(header_footer_slot, strict=True, clock=clock, id_factory=ids)


@pytest.fixture
def signal_spy():
    """Factory for recording Qt signal emissions (direct connections, no event loop)."""
    def spy(signal):
        calls = []
        signal.connect(lambda *args: calls.append(args))
        return calls
    return spy
