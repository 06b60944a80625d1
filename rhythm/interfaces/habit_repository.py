"""
Habit repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from rhythm.models.habit import Habit


class IHabitRepository(ABC):
    @abstractmethod
    def list(self) -> list[Habit]:
        """List habits in display (priority) order."""
        pass

    @abstractmethod
    def get(self, habit_id: str) -> Optional[Habit]:
        pass

    @abstractmethod
    def save_all(self, habits: list[Habit]) -> bool:
        pass
