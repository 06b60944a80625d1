"""
Task repository interface.

Tasks are persisted as a single board (four working lists + archive).
"""

from abc import ABC, abstractmethod

from rhythm.models.task import TaskBoard


class ITaskRepository(ABC):
    @abstractmethod
    def get_board(self) -> TaskBoard:
        pass

    @abstractmethod
    def save_board(self, board: TaskBoard) -> bool:
        pass
