"""
Key-value implementation of the habit repository.
"""

from __future__ import annotations

from typing import Optional

from rhythm.infrastructure.local.kv_repository import KeyValueRepository
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.models.habit import Habit

HABITS_KEY = "habits"


class KeyValueHabitRepository(KeyValueRepository, IHabitRepository):
    def list(self) -> list[Habit]:
        return self._load_list(HABITS_KEY, Habit)

    def get(self, habit_id: str) -> Optional[Habit]:
        return next((habit for habit in self.list() if habit.id == habit_id), None)

    def save_all(self, habits: list[Habit]) -> bool:
        return self._save_list(HABITS_KEY, habits)
