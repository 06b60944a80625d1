"""
Calendar event repository interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from rhythm.models.calendar_event import CalendarEvent


class ICalendarEventRepository(ABC):
    """Abstract interface for calendar event persistence."""

    @abstractmethod
    def list(self) -> list[CalendarEvent]:
        """List all events in insertion order."""
        pass

    @abstractmethod
    def get(self, event_id: str) -> Optional[CalendarEvent]:
        pass

    @abstractmethod
    def add(self, event: CalendarEvent) -> bool:
        pass

    @abstractmethod
    def replace(self, event: CalendarEvent) -> bool:
        """Overwrite the stored event with the same id."""
        pass

    @abstractmethod
    def delete(self, event_id: str) -> bool:
        pass

    @abstractmethod
    def replace_all(self, events: list[CalendarEvent]) -> bool:
        """Overwrite the whole collection. Returns False if the write failed."""
        pass
