"""
Task model definitions.

Tasks live in one of four ordered working lists plus a capped `completed`
archive filled by the day rollover.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from rhythm.models.enums import TaskListName

_LEADING_INT = re.compile(r"^\s*(\d+)")


class Task(BaseModel):
    """A to-do item in a working list or in the archive."""

    id: str
    text: str = ""
    done: bool = False
    cat: Optional[str] = None
    time: Optional[Union[int, str]] = Field(
        None, description="Free-form time estimate, e.g. 45 or '45m'"
    )
    total_focus_minutes: int = 0
    completed_at: Optional[datetime] = None
    archived_at: Optional[datetime] = None
    from_list: Optional[TaskListName] = None

    @property
    def estimated_minutes(self) -> Optional[int]:
        """Leading integer of the time estimate, if any."""
        if self.time is None:
            return None
        if isinstance(self.time, int):
            return self.time if self.time > 0 else None
        match = _LEADING_INT.match(self.time)
        if not match:
            return None
        value = int(match.group(1))
        return value if value > 0 else None


class TaskBoard(BaseModel):
    """All task lists as persisted under a single key."""

    primary: list[Task] = Field(default_factory=list)
    today: list[Task] = Field(default_factory=list)
    this_week: list[Task] = Field(default_factory=list)
    later: list[Task] = Field(default_factory=list)
    completed: list[Task] = Field(default_factory=list)

    def working_list(self, name: TaskListName) -> list[Task]:
        return getattr(self, _LIST_ATTRS[name])

    def set_working_list(self, name: TaskListName, tasks: list[Task]) -> None:
        setattr(self, _LIST_ATTRS[name], tasks)

    def working_tasks(self) -> list[tuple[TaskListName, Task]]:
        return [(name, task) for name in TaskListName for task in self.working_list(name)]

    def find(self, task_id: str) -> Optional[tuple[TaskListName, Task]]:
        for name, task in self.working_tasks():
            if task.id == task_id:
                return name, task
        return None


_LIST_ATTRS = {
    TaskListName.PRIMARY: "primary",
    TaskListName.TODAY: "today",
    TaskListName.THIS_WEEK: "this_week",
    TaskListName.LATER: "later",
}
