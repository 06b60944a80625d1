"""
Composition root.

Builds the storage backend, repositories and services from Settings. Only
this module (and the entry point) reads configuration; services receive
plain values.
"""

from __future__ import annotations

from typing import Optional

from rhythm.core.config import Settings, get_settings
from rhythm.infrastructure.local.database import get_session_factory, init_db
from rhythm.infrastructure.local.event_repository import KeyValueCalendarEventRepository
from rhythm.infrastructure.local.habit_repository import KeyValueHabitRepository
from rhythm.infrastructure.local.kv_store import InMemoryKeyValueStore, SqliteKeyValueStore
from rhythm.infrastructure.local.ledger_repository import KeyValueRolloverLedgerRepository
from rhythm.infrastructure.local.reflection_repository import KeyValueReflectionRepository
from rhythm.infrastructure.local.task_repository import KeyValueTaskRepository
from rhythm.interfaces.kv_store import IKeyValueStore
from rhythm.models.schedule import GridConfig
from rhythm.services.background_scheduler import BackgroundRolloverScheduler
from rhythm.services.drag_drop_service import DragDropController, ListReorderSession
from rhythm.services.editor_session import EventEditorSession
from rhythm.services.event_store import EventStore
from rhythm.services.habit_service import HabitService
from rhythm.services.rollover_service import RolloverEngine
from rhythm.services.task_service import TaskService


def grid_from_settings(settings: Settings) -> GridConfig:
    return GridConfig(
        start_hour=settings.GRID_START_HOUR,
        visible_hours=settings.GRID_VISIBLE_HOURS,
        hour_height=settings.HOUR_HEIGHT_PX,
        top_padding=settings.GRID_TOP_PADDING_PX,
    )


def create_store(settings: Settings) -> IKeyValueStore:
    """SQLite store for local runs, in-memory store under test."""
    if settings.is_test:
        return InMemoryKeyValueStore(prefix=settings.STORAGE_KEY_PREFIX)
    init_db(settings.DATABASE_URL)
    return SqliteKeyValueStore(
        session_factory=get_session_factory(settings.DATABASE_URL),
        prefix=settings.STORAGE_KEY_PREFIX,
    )


class Container:
    """Wired object graph for one process."""

    def __init__(self, settings: Optional[Settings] = None, store: Optional[IKeyValueStore] = None):
        self.settings = settings or get_settings()
        self.store = store or create_store(self.settings)
        timezone = self.settings.timezone_name

        self.event_repo = KeyValueCalendarEventRepository(self.store)
        self.habit_repo = KeyValueHabitRepository(self.store)
        self.task_repo = KeyValueTaskRepository(self.store)
        self.reflection_repo = KeyValueReflectionRepository(self.store)
        self.ledger_repo = KeyValueRolloverLedgerRepository(self.store)

        self.grid = grid_from_settings(self.settings)
        self.snap_increment = self.settings.SNAP_INCREMENT_MINUTES
        self.event_store = EventStore(self.event_repo, self.task_repo, self.habit_repo)
        self.habit_service = HabitService(
            self.habit_repo,
            history_days=self.settings.HABIT_HISTORY_DAYS,
            user_timezone=timezone,
        )
        self.task_service = TaskService(self.task_repo)
        self.rollover_engine = RolloverEngine(
            ledger_repo=self.ledger_repo,
            habit_repo=self.habit_repo,
            event_store=self.event_store,
            task_repo=self.task_repo,
            reflection_repo=self.reflection_repo,
            archive_limit=self.settings.COMPLETED_ARCHIVE_LIMIT,
            user_timezone=timezone,
        )
        self.drag_drop = DragDropController(
            self.event_store, self.task_repo, self.habit_repo, self.grid
        )
        self.editor = EventEditorSession(self.event_store, self.task_repo, self.habit_repo)
        self.scheduler = BackgroundRolloverScheduler(self.rollover_engine, self.settings)

    def habit_reorder_session(self) -> ListReorderSession:
        return ListReorderSession(
            list_ids=lambda: [habit.id for habit in self.habit_service.list_habits()],
            reorder=self.habit_service.reorder,
        )
