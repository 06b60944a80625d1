"""
Repository interfaces.

Services depend on these contracts; the local key-value implementations live
in rhythm.infrastructure.local.
"""

from rhythm.interfaces.event_repository import ICalendarEventRepository
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.interfaces.kv_store import IKeyValueStore
from rhythm.interfaces.ledger_repository import IRolloverLedgerRepository
from rhythm.interfaces.reflection_repository import IReflectionRepository
from rhythm.interfaces.task_repository import ITaskRepository

__all__ = [
    "ICalendarEventRepository",
    "IHabitRepository",
    "IKeyValueStore",
    "IReflectionRepository",
    "IRolloverLedgerRepository",
    "ITaskRepository",
]
