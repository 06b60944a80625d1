"""
Task service.

Only the task operations the rollover and schedule paths depend on: toggling
completion (which stamps completedAt for the archive) and moving a task
within or across the working lists.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rhythm.core.exceptions import NotFoundError
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.enums import TaskListName
from rhythm.models.task import Task, TaskBoard
from rhythm.utils.list_utils import clamp_index


class TaskService:
    def __init__(self, task_repo: ITaskRepository):
        self.task_repo = task_repo

    def get_board(self) -> TaskBoard:
        return self.task_repo.get_board()

    def open_tasks(self) -> list[tuple[TaskListName, Task]]:
        """Tasks that can still be scheduled (not done), in list order."""
        return [(name, task) for name, task in self.get_board().working_tasks() if not task.done]

    def find(self, task_id: str) -> Optional[Task]:
        found = self.get_board().find(task_id)
        return found[1] if found else None

    def toggle(self, task_id: str, now: datetime) -> Task:
        """
        Flip a task's done flag, stamping or clearing completed_at.

        Raises:
            NotFoundError: unknown task id
        """
        board = self.task_repo.get_board()
        found = board.find(task_id)
        if found is None:
            raise NotFoundError(f"Task not found: {task_id}")
        list_name, task = found
        done = not task.done
        toggled = task.model_copy(update={"done": done, "completed_at": now if done else None})
        board.set_working_list(
            list_name,
            [toggled if item.id == task_id else item for item in board.working_list(list_name)],
        )
        self.task_repo.save_board(board)
        return toggled

    def reorder(
        self,
        task_id: str,
        from_list: TaskListName,
        to_list: TaskListName,
        target_index: int,
    ) -> TaskBoard:
        """Splice a task out of from_list and into to_list at the clamped index."""
        board = self.task_repo.get_board()
        source = board.working_list(from_list)
        task = next((item for item in source if item.id == task_id), None)
        if task is None:
            return board

        remaining = [item for item in source if item.id != task_id]
        board.set_working_list(from_list, remaining)
        target = list(board.working_list(to_list))
        target.insert(clamp_index(target_index, len(target)), task)
        board.set_working_list(to_list, target)
        self.task_repo.save_board(board)
        return board
