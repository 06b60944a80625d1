"""
Custom exceptions for the application.
"""

from typing import Any, Optional


class RhythmError(Exception):
    """Base exception for daily-rhythm."""

    def __init__(self, message: str, details: Optional[Any] = None):
        self.message = message
        self.details = details
        super().__init__(message)


class NotFoundError(RhythmError):
    """Resource not found."""

    pass


class DuplicateError(RhythmError):
    """Duplicate resource detected."""

    pass


class StorageError(RhythmError):
    """Key-value storage failure (serialization, quota, I/O)."""

    pass
