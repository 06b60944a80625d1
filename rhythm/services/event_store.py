"""
Event store service.

CRUD over the calendar events (time blocks) plus the queries the schedule
surface needs: events in the visible hour window, linked items already on the
calendar, and the day-rollover purge of non-persistent events.
"""

from __future__ import annotations

from typing import Optional

from rhythm.core.exceptions import DuplicateError, NotFoundError
from rhythm.core.logger import setup_logger
from rhythm.interfaces.event_repository import ICalendarEventRepository
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.calendar_event import (
    CalendarEvent,
    CalendarEventCreate,
    CalendarEventUpdate,
    generate_event_id,
)
from rhythm.models.enums import EventKind
from rhythm.models.schedule import GridConfig

logger = setup_logger(__name__)


class EventStore:
    """
    Service for calendar event persistence and queries.

    Event ids are unique; create() rejects a duplicate id and generates one
    when none is supplied.
    """

    def __init__(
        self,
        event_repo: ICalendarEventRepository,
        task_repo: Optional[ITaskRepository] = None,
        habit_repo: Optional[IHabitRepository] = None,
    ):
        self.event_repo = event_repo
        self.task_repo = task_repo
        self.habit_repo = habit_repo

    # ------------------------------------------------------------------
    # CRUD
    # ------------------------------------------------------------------

    def list_events(self) -> list[CalendarEvent]:
        return self.event_repo.list()

    def get(self, event_id: str) -> Optional[CalendarEvent]:
        return self.event_repo.get(event_id)

    def create(self, data: CalendarEventCreate) -> CalendarEvent:
        """
        Create a calendar event.

        Raises:
            DuplicateError: an event with the requested id already exists
        """
        event_id = data.id or generate_event_id()
        if self.event_repo.get(event_id) is not None:
            raise DuplicateError(f"Calendar event already exists: {event_id}")

        event = CalendarEvent(id=event_id, **data.model_dump(exclude={"id"}))
        if not self.event_repo.add(event):
            logger.warning(f"Event {event.id} kept in memory only; storage write failed")
        logger.debug(
            f"Created event {event.id} '{event.title}' at "
            f"{event.start_hour:02d}:{event.start_minute:02d} ({event.duration_minutes}m)"
        )
        return event

    def update(self, event_id: str, update: CalendarEventUpdate) -> CalendarEvent:
        """
        Apply the explicitly set fields of `update`.

        Raises:
            NotFoundError: no event with this id
        """
        existing = self._require(event_id)
        changes = update.model_dump(exclude_unset=True)
        updated = CalendarEvent.model_validate({**existing.model_dump(), **changes})
        self.event_repo.replace(updated)
        return updated

    def move(self, event_id: str, start_hour: int, start_minute: int) -> CalendarEvent:
        """Change only the start time; id and duration are preserved."""
        return self.update(
            event_id, CalendarEventUpdate(start_hour=start_hour, start_minute=start_minute)
        )

    def delete(self, event_id: str) -> bool:
        deleted = self.event_repo.delete(event_id)
        if deleted:
            logger.debug(f"Deleted event {event_id}")
        return deleted

    def clear(self) -> int:
        """Remove every event (manual "reset today's schedule")."""
        count = len(self.event_repo.list())
        self.event_repo.replace_all([])
        logger.info(f"Cleared schedule ({count} events)")
        return count

    def purge_transient(self) -> tuple[int, bool]:
        """
        Remove every event whose persistent flag is not set.

        Returns:
            (removed count, whether the write succeeded)
        """
        events = self.event_repo.list()
        kept = [event for event in events if event.persistent]
        removed = len(events) - len(kept)
        ok = self.event_repo.replace_all(kept)
        return removed, ok

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_in_window(self, grid: GridConfig) -> list[CalendarEvent]:
        """Events whose start hour falls inside the visible window, by start time."""
        visible = [event for event in self.event_repo.list() if grid.contains_hour(event.start_hour)]
        return sorted(visible, key=lambda event: event.start_total_minutes)

    def scheduled_item_ids(self, kind: EventKind) -> set[str]:
        """Ids of tasks or habits that already have a block on the calendar."""
        return {
            event.linked_item_id
            for event in self.event_repo.list()
            if event.kind == kind and event.linked_item_id
        }

    def resolve_title(self, event: CalendarEvent) -> str:
        """
        Display title for an event.

        Linked events show the linked item's current text; a dangling link
        falls back to the last-known title stored on the event.
        """
        if event.kind == EventKind.TASK_LINK and event.linked_item_id and self.task_repo:
            found = self.task_repo.get_board().find(event.linked_item_id)
            if found:
                return found[1].text
        if event.kind == EventKind.HABIT_LINK and event.linked_item_id and self.habit_repo:
            habit = self.habit_repo.get(event.linked_item_id)
            if habit:
                return habit.name
        return event.title

    def _require(self, event_id: str) -> CalendarEvent:
        event = self.event_repo.get(event_id)
        if event is None:
            raise NotFoundError(f"Calendar event not found: {event_id}")
        return event
