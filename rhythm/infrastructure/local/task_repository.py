"""
Key-value implementation of the task repository.
"""

from rhythm.infrastructure.local.kv_repository import KeyValueRepository
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.task import TaskBoard

TASKS_KEY = "tasks"


class KeyValueTaskRepository(KeyValueRepository, ITaskRepository):
    def get_board(self) -> TaskBoard:
        return self._load_model(TASKS_KEY, TaskBoard) or TaskBoard()

    def save_board(self, board: TaskBoard) -> bool:
        return self._save_model(TASKS_KEY, board)
