"""
Habit service.

Toggling writes today's entry into the capped history window; the streak
view reads the last seven calendar days from it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rhythm.core.exceptions import NotFoundError
from rhythm.core.logger import setup_logger
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.models.habit import Habit, HabitHistoryEntry
from rhythm.utils.datetime_utils import to_date_key, trailing_date_keys
from rhythm.utils.list_utils import reorder_by_id

logger = setup_logger(__name__)

DEFAULT_HISTORY_DAYS = 7


class HabitService:
    def __init__(
        self,
        habit_repo: IHabitRepository,
        history_days: int = DEFAULT_HISTORY_DAYS,
        user_timezone: Optional[str] = None,
    ):
        self.habit_repo = habit_repo
        self.history_days = history_days
        self.user_timezone = user_timezone

    def list_habits(self) -> list[Habit]:
        return self.habit_repo.list()

    def toggle(self, habit_id: str, now: datetime) -> Habit:
        """
        Flip today's check state and upsert today's history entry.

        Raises:
            NotFoundError: unknown habit id
        """
        today = to_date_key(now, self.user_timezone)
        habits = self.habit_repo.list()
        toggled: Optional[Habit] = None
        updated: list[Habit] = []
        for habit in habits:
            if habit.id == habit_id:
                toggled = self._toggled(habit, today)
                habit = toggled
            updated.append(habit)
        if toggled is None:
            raise NotFoundError(f"Habit not found: {habit_id}")
        self.habit_repo.save_all(updated)
        return toggled

    def reorder(self, habit_id: str, new_index: int) -> list[Habit]:
        """Move a habit to a new position in the priority order."""
        habits = self.habit_repo.list()
        reordered = reorder_by_id(habits, habit_id, new_index, key=lambda habit: habit.id)
        if [h.id for h in reordered] != [h.id for h in habits]:
            self.habit_repo.save_all(reordered)
        return reordered

    def streak(self, habit: Habit, now: datetime) -> list[bool]:
        """Done flags for the last seven days, oldest first, today last."""
        today = to_date_key(now, self.user_timezone)
        by_date = {entry.date: entry.done for entry in habit.history}
        return [by_date.get(day, False) for day in trailing_date_keys(today, 7)]

    def _toggled(self, habit: Habit, today: str) -> Habit:
        done = not habit.done
        history = [entry.model_copy() for entry in habit.history]
        for entry in history:
            if entry.date == today:
                entry.done = done
                break
        else:
            history.append(HabitHistoryEntry(date=today, done=done))
        return habit.model_copy(update={"done": done, "history": history[-self.history_days:]})
