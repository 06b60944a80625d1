"""
Shared fixtures.

Every service is wired against an InMemoryKeyValueStore unless a test asks
for the SQLite-backed session_factory.
"""

import os

os.environ.setdefault("ENVIRONMENT", "test")

import pytest

from rhythm.core.exceptions import StorageError
from rhythm.infrastructure.local.database import get_session_factory, init_db
from rhythm.infrastructure.local.event_repository import KeyValueCalendarEventRepository
from rhythm.infrastructure.local.habit_repository import KeyValueHabitRepository
from rhythm.infrastructure.local.kv_store import InMemoryKeyValueStore
from rhythm.infrastructure.local.ledger_repository import KeyValueRolloverLedgerRepository
from rhythm.infrastructure.local.reflection_repository import KeyValueReflectionRepository
from rhythm.infrastructure.local.task_repository import KeyValueTaskRepository
from rhythm.models.schedule import GridConfig
from rhythm.services.event_store import EventStore
from rhythm.services.rollover_service import RolloverEngine


class FlakyKeyValueStore(InMemoryKeyValueStore):
    """In-memory store whose writes fail for the keys listed in `failing_keys`."""

    def __init__(self, prefix: str = ""):
        super().__init__(prefix)
        self.failing_keys: set[str] = set()

    def _write_raw(self, full_key: str, raw: str) -> None:
        if full_key[len(self.prefix):] in self.failing_keys:
            raise StorageError(f"quota exceeded writing {full_key}")
        super()._write_raw(full_key, raw)


@pytest.fixture
def store():
    return FlakyKeyValueStore()


@pytest.fixture
def session_factory(tmp_path):
    url = f"sqlite:///{tmp_path / 'rhythm.db'}"
    init_db(url)
    return get_session_factory(url)


@pytest.fixture
def event_repo(store):
    return KeyValueCalendarEventRepository(store)


@pytest.fixture
def habit_repo(store):
    return KeyValueHabitRepository(store)


@pytest.fixture
def task_repo(store):
    return KeyValueTaskRepository(store)


@pytest.fixture
def reflection_repo(store):
    return KeyValueReflectionRepository(store)


@pytest.fixture
def ledger_repo(store):
    return KeyValueRolloverLedgerRepository(store)


@pytest.fixture
def grid():
    return GridConfig(start_hour=9, visible_hours=8, hour_height=64, top_padding=6)


@pytest.fixture
def event_store(event_repo, task_repo, habit_repo):
    return EventStore(event_repo, task_repo, habit_repo)


@pytest.fixture
def engine(ledger_repo, habit_repo, event_store, task_repo, reflection_repo):
    return RolloverEngine(
        ledger_repo=ledger_repo,
        habit_repo=habit_repo,
        event_store=event_store,
        task_repo=task_repo,
        reflection_repo=reflection_repo,
    )


@pytest.fixture
def container(store):
    from rhythm.container import Container
    from rhythm.core.config import Settings

    return Container(Settings(ENVIRONMENT="test"), store=store)
