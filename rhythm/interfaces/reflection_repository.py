"""
Reflection repository interface (evening reflections + gratitude line).
"""

from abc import ABC, abstractmethod

from rhythm.models.reflection import Reflections


class IReflectionRepository(ABC):
    @abstractmethod
    def get_reflections(self) -> Reflections:
        pass

    @abstractmethod
    def save_reflections(self, reflections: Reflections) -> bool:
        pass

    @abstractmethod
    def get_gratitude(self) -> str:
        pass

    @abstractmethod
    def save_gratitude(self, text: str) -> bool:
        pass

    def clear(self) -> bool:
        """Clear both reflection fields and gratitude."""
        reflections_ok = self.save_reflections(Reflections())
        gratitude_ok = self.save_gratitude("")
        return reflections_ok and gratitude_ok
