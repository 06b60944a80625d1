"""
Base class for repositories that keep one collection under one key.
"""

from __future__ import annotations

from typing import Any, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from rhythm.core.logger import setup_logger
from rhythm.interfaces.kv_store import IKeyValueStore

logger = setup_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class KeyValueRepository:
    """Decode/encode pydantic models stored in a key-value namespace."""

    def __init__(self, store: IKeyValueStore):
        self._store = store

    def _load_model(self, key: str, model: type[ModelT]) -> Optional[ModelT]:
        data = self._store.get(key)
        if data is None:
            return None
        try:
            return model.model_validate(data)
        except PydanticValidationError as e:
            logger.warning(f"Ignoring malformed '{key}' value: {e.error_count()} error(s)")
            return None

    def _load_list(self, key: str, model: type[ModelT]) -> list[ModelT]:
        data = self._store.get(key, [])
        if not isinstance(data, list):
            logger.warning(f"Ignoring non-list '{key}' value")
            return []
        items: list[ModelT] = []
        for entry in data:
            try:
                items.append(model.model_validate(entry))
            except PydanticValidationError as e:
                logger.warning(
                    f"Skipping malformed '{key}' entry ({e.error_count()} error(s)); "
                    "it will be dropped on the next save"
                )
        return items

    def _save_model(self, key: str, value: BaseModel) -> bool:
        return self._store.set(key, value.model_dump(mode="json"))

    def _save_list(self, key: str, items: list[Any]) -> bool:
        return self._store.set(key, [item.model_dump(mode="json") for item in items])
