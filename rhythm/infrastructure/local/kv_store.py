"""
Local key-value store implementations.

Values are JSON documents. Reads never raise (corrupt or missing values
return the caller's default) and writes never raise (failures are logged and
reported as False while the value stays readable from the in-process cache).
"""

from __future__ import annotations

import json
from abc import abstractmethod
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError

from rhythm.core.exceptions import StorageError
from rhythm.core.logger import setup_logger
from rhythm.infrastructure.local.database import KeyValueORM, get_session_factory
from rhythm.interfaces.kv_store import IKeyValueStore

logger = setup_logger(__name__)

_MISSING = object()


def encode_value(value: Any) -> str:
    """Encode a JSON-compatible value."""
    try:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    except (TypeError, ValueError) as e:
        raise StorageError(f"Value is not JSON serializable: {e}")


class JsonKeyValueStore(IKeyValueStore):
    """Shared encode/decode, prefixing and error policy."""

    def __init__(self, prefix: str = ""):
        self.prefix = prefix
        self._cache: dict[str, str] = {}

    def _full_key(self, key: str) -> str:
        return f"{self.prefix}{key}"

    @abstractmethod
    def _read_raw(self, full_key: str) -> Optional[str]:
        """Read the encoded value. May raise StorageError."""
        pass

    @abstractmethod
    def _write_raw(self, full_key: str, raw: str) -> None:
        """Persist the encoded value. May raise StorageError."""
        pass

    @abstractmethod
    def _delete_raw(self, full_key: str) -> bool:
        pass

    @abstractmethod
    def _list_raw_keys(self) -> list[str]:
        pass

    def get(self, key: str, default: Any = None) -> Any:
        full_key = self._full_key(key)
        raw = self._cache.get(full_key, _MISSING)
        if raw is _MISSING:
            try:
                raw = self._read_raw(full_key)
            except StorageError as e:
                logger.error(f"Storage read failed for key '{key}': {e}")
                return default
            if raw is None:
                return default
            self._cache[full_key] = raw
        try:
            return json.loads(raw)
        except ValueError as e:
            logger.warning(f"Discarding undecodable value for key '{key}': {e}")
            return default

    def set(self, key: str, value: Any) -> bool:
        full_key = self._full_key(key)
        try:
            raw = encode_value(value)
        except StorageError as e:
            logger.error(f"Storage write failed for key '{key}': {e.message}")
            return False
        self._cache[full_key] = raw
        try:
            self._write_raw(full_key, raw)
        except StorageError as e:
            logger.error(f"Storage write failed for key '{key}': {e.message}")
            return False
        return True

    def delete(self, key: str) -> bool:
        full_key = self._full_key(key)
        existed = self._cache.pop(full_key, None) is not None
        try:
            return self._delete_raw(full_key) or existed
        except StorageError as e:
            logger.error(f"Storage delete failed for key '{key}': {e.message}")
            return False

    def keys(self) -> list[str]:
        try:
            stored = set(self._list_raw_keys())
        except StorageError as e:
            logger.error(f"Storage key listing failed: {e.message}")
            stored = set()
        stored.update(self._cache)
        return sorted(
            full_key[len(self.prefix):] for full_key in stored if full_key.startswith(self.prefix)
        )


class InMemoryKeyValueStore(JsonKeyValueStore):
    """
    Process-local store.

    Keeps encoded JSON text so values go through the same serialization as
    the SQLite store.
    """

    def __init__(self, prefix: str = ""):
        super().__init__(prefix)
        self._data: dict[str, str] = {}

    def _read_raw(self, full_key: str) -> Optional[str]:
        return self._data.get(full_key)

    def _write_raw(self, full_key: str, raw: str) -> None:
        self._data[full_key] = raw

    def _delete_raw(self, full_key: str) -> bool:
        return self._data.pop(full_key, None) is not None

    def _list_raw_keys(self) -> list[str]:
        return list(self._data)

    def put_raw(self, key: str, raw: str) -> None:
        """Store pre-encoded text as-is (used to load exported or legacy data)."""
        full_key = self._full_key(key)
        self._cache.pop(full_key, None)
        self._data[full_key] = raw


class SqliteKeyValueStore(JsonKeyValueStore):
    """SQLite-backed store with a write-through cache."""

    def __init__(self, session_factory=None, prefix: str = ""):
        super().__init__(prefix)
        self._session_factory = session_factory or get_session_factory()

    def _read_raw(self, full_key: str) -> Optional[str]:
        try:
            with self._session_factory() as session:
                orm = session.get(KeyValueORM, full_key)
                return orm.value if orm else None
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def _write_raw(self, full_key: str, raw: str) -> None:
        try:
            with self._session_factory() as session:
                orm = session.get(KeyValueORM, full_key)
                if orm:
                    orm.value = raw
                else:
                    session.add(KeyValueORM(key=full_key, value=raw))
                session.commit()
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def _delete_raw(self, full_key: str) -> bool:
        try:
            with self._session_factory() as session:
                result = session.execute(delete(KeyValueORM).where(KeyValueORM.key == full_key))
                session.commit()
                return bool(result.rowcount)
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def _list_raw_keys(self) -> list[str]:
        try:
            with self._session_factory() as session:
                return list(session.execute(select(KeyValueORM.key)).scalars())
        except SQLAlchemyError as e:
            raise StorageError(str(e))

    def invalidate_cache(self) -> None:
        """Drop cached values so the next read goes to the database."""
        self._cache.clear()
