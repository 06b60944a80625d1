"""
Key-value implementation of the calendar event repository.
"""

from __future__ import annotations

from typing import Optional

from rhythm.infrastructure.local.kv_repository import KeyValueRepository
from rhythm.interfaces.event_repository import ICalendarEventRepository
from rhythm.models.calendar_event import CalendarEvent

EVENTS_KEY = "sched_events"


class KeyValueCalendarEventRepository(KeyValueRepository, ICalendarEventRepository):
    def list(self) -> list[CalendarEvent]:
        return self._load_list(EVENTS_KEY, CalendarEvent)

    def get(self, event_id: str) -> Optional[CalendarEvent]:
        for event in self.list():
            if event.id == event_id:
                return event
        return None

    def add(self, event: CalendarEvent) -> bool:
        events = self.list()
        events.append(event)
        return self.replace_all(events)

    def replace(self, event: CalendarEvent) -> bool:
        events = [event if existing.id == event.id else existing for existing in self.list()]
        return self.replace_all(events)

    def delete(self, event_id: str) -> bool:
        events = self.list()
        remaining = [event for event in events if event.id != event_id]
        if len(remaining) == len(events):
            return False
        return self.replace_all(remaining)

    def replace_all(self, events: list[CalendarEvent]) -> bool:
        return self._save_list(EVENTS_KEY, events)
