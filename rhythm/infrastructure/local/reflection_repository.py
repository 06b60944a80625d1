"""
Key-value implementation of the reflection repository.
"""

from rhythm.infrastructure.local.kv_repository import KeyValueRepository
from rhythm.interfaces.reflection_repository import IReflectionRepository
from rhythm.models.reflection import Reflections

REFLECTIONS_KEY = "reflections"
GRATITUDE_KEY = "gratitude"


class KeyValueReflectionRepository(KeyValueRepository, IReflectionRepository):
    def get_reflections(self) -> Reflections:
        return self._load_model(REFLECTIONS_KEY, Reflections) or Reflections()

    def save_reflections(self, reflections: Reflections) -> bool:
        return self._save_model(REFLECTIONS_KEY, reflections)

    def get_gratitude(self) -> str:
        value = self._store.get(GRATITUDE_KEY, "")
        return value if isinstance(value, str) else ""

    def save_gratitude(self, text: str) -> bool:
        return self._store.set(GRATITUDE_KEY, text)
