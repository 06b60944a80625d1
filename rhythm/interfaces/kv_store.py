"""
Key-value store interface.

Defines the contract for the flat, string-keyed persistence namespace.
Implementations: SQLite (SQLAlchemy) and in-memory.
"""

from abc import ABC, abstractmethod
from typing import Any


class IKeyValueStore(ABC):
    """Abstract interface for a synchronous JSON key-value store."""

    @abstractmethod
    def get(self, key: str, default: Any = None) -> Any:
        """
        Read and decode a value.

        Never raises: a missing key or an undecodable value returns `default`.
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> bool:
        """
        Encode and write a value.

        Never raises: failures are logged and reported by returning False.
        The value stays readable through get() for the life of the process.
        """
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key. Returns False if the key did not exist or removal failed."""
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List stored keys."""
        pass
