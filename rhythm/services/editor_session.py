"""
Event editor session.

Transient form state for creating or editing one calendar event. Nothing is
written until save(); invalid input is clamped or makes save() a silent
no-op instead of raising.
"""

from __future__ import annotations

from typing import Optional

from rhythm.core.logger import setup_logger
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.calendar_event import CalendarEvent, CalendarEventCreate, CalendarEventUpdate
from rhythm.models.enums import EventKind, Meridiem
from rhythm.models.schedule import TimeOfDay
from rhythm.services.event_store import EventStore
from rhythm.utils.datetime_utils import add_minutes, format_time_slot, to_24_hour

logger = setup_logger(__name__)

# (minutes, chip label)
DURATION_PRESETS: list[tuple[int, str]] = [
    (15, "15m"),
    (30, "30m"),
    (45, "45m"),
    (60, "1h"),
    (90, "1.5h"),
    (120, "2h"),
    (180, "3h"),
    (240, "4h"),
]
DEFAULT_DURATION = 30
CUSTOM_DURATION_MIN = 5
CUSTOM_DURATION_MAX = 600
CUSTOM_DURATION_STEP = 5


def parse_custom_duration(text: str) -> Optional[int]:
    """
    Clamp free-form minutes to [5, 600], rounded to the nearest 5.

    Returns None for blank or non-numeric input.
    """
    text = (text or "").strip()
    if not text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if value != value:  # NaN
        return None
    value = max(CUSTOM_DURATION_MIN, min(value, CUSTOM_DURATION_MAX))
    return int(value / CUSTOM_DURATION_STEP + 0.5) * CUSTOM_DURATION_STEP


class EventEditorSession:
    """
    Single-record editor bound to a new or existing calendar event.

    Usage:
        session.open_new(14, 30)
        session.set_title("Deep work")
        session.choose_preset(90)
        event = session.save()
    """

    def __init__(
        self,
        event_store: EventStore,
        task_repo: ITaskRepository,
        habit_repo: IHabitRepository,
    ):
        self.event_store = event_store
        self.task_repo = task_repo
        self.habit_repo = habit_repo
        self._reset()

    def _reset(self) -> None:
        self.is_open = False
        self.event_id: Optional[str] = None
        self.kind = EventKind.PLAIN
        self.title = ""
        self.linked_item_id: Optional[str] = None
        self.start_hour = 9
        self.start_minute = 0
        self.base_duration = DEFAULT_DURATION
        self.custom_duration = ""
        self.persistent = False
        self.delete_armed = False

    @property
    def is_new(self) -> bool:
        return self.event_id is None

    # ------------------------------------------------------------------
    # Opening / closing
    # ------------------------------------------------------------------

    def open_new(self, hour: int, minute: int = 0) -> None:
        """Open a blank form at a clicked grid slot."""
        self._reset()
        start = TimeOfDay.from_total_minutes(hour * 60 + minute)
        self.start_hour, self.start_minute = start.hour, start.minute
        self.is_open = True

    def open_existing(self, event_id: str) -> bool:
        """Load an event into the form. Returns False if it no longer exists."""
        event = self.event_store.get(event_id)
        if event is None:
            return False
        self._reset()
        self.event_id = event.id
        self.kind = event.kind
        self.title = event.title if event.kind == EventKind.PLAIN else ""
        self.linked_item_id = event.linked_item_id
        self.start_hour = event.start_hour
        self.start_minute = event.start_minute
        # Stored duration is kept as-is; clamping applies only to typed entries.
        self.base_duration = event.duration_minutes
        self.persistent = event.persistent
        self.is_open = True
        return True

    def close(self) -> None:
        self._reset()

    # ------------------------------------------------------------------
    # Field edits
    # ------------------------------------------------------------------

    def set_kind(self, kind: EventKind) -> None:
        """Switch event type; title and link are cleared."""
        self.kind = EventKind(kind)
        self.title = ""
        self.linked_item_id = None

    def set_title(self, title: str) -> None:
        self.title = title

    def set_linked_item(self, item_id: Optional[str]) -> None:
        self.linked_item_id = item_id or None

    def set_start_time(self, hour12: int, minute: int, meridiem: Meridiem | str) -> None:
        hour12 = max(1, min(int(hour12), 12))
        minute = max(0, min(int(minute), 59))
        self.start_hour = to_24_hour(hour12, Meridiem(meridiem).value)
        self.start_minute = minute

    def set_meridiem(self, meridiem: Meridiem | str) -> None:
        if Meridiem(meridiem) == Meridiem.PM and self.start_hour < 12:
            self.start_hour += 12
        elif Meridiem(meridiem) == Meridiem.AM and self.start_hour >= 12:
            self.start_hour -= 12

    def choose_preset(self, minutes: int) -> None:
        """Pick a duration chip; clears any custom entry."""
        if not any(value == minutes for value, _ in DURATION_PRESETS):
            logger.debug(f"Ignoring unknown duration preset: {minutes}")
            return
        self.base_duration = minutes
        self.custom_duration = ""

    def set_custom_duration(self, text: str) -> None:
        self.custom_duration = "" if text is None else str(text)

    def set_persistent(self, persistent: bool) -> None:
        self.persistent = bool(persistent)

    # ------------------------------------------------------------------
    # Derived values
    # ------------------------------------------------------------------

    @property
    def duration_minutes(self) -> int:
        custom = parse_custom_duration(self.custom_duration)
        return custom if custom is not None else self.base_duration

    @property
    def end_time(self) -> TimeOfDay:
        hour, minute = add_minutes(self.start_hour, self.start_minute, self.duration_minutes)
        return TimeOfDay(hour=hour, minute=minute)

    @property
    def end_label(self) -> str:
        end = self.end_time
        return format_time_slot(end.hour, end.minute)

    @property
    def display_title(self) -> str:
        """Title that would be saved: literal text for plain, the linked item's text otherwise."""
        if self.kind == EventKind.PLAIN:
            return self.title.strip()
        return self._resolve_linked_title() or ""

    def _resolve_linked_title(self) -> Optional[str]:
        if not self.linked_item_id:
            return None
        if self.kind == EventKind.TASK_LINK:
            found = self.task_repo.get_board().find(self.linked_item_id)
            return found[1].text if found else None
        habit = self.habit_repo.get(self.linked_item_id)
        return habit.name if habit else None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    def save(self) -> Optional[CalendarEvent]:
        """
        Commit the form to the event store.

        Returns the saved event, or None when there is no usable title yet
        (empty plain title or an unresolved link); the form stays open.
        """
        if not self.is_open:
            return None
        title = self.display_title
        if not title:
            return None

        linked_item_id = None if self.kind == EventKind.PLAIN else self.linked_item_id
        fields = {
            "title": title,
            "start_hour": self.start_hour,
            "start_minute": self.start_minute,
            "duration_minutes": self.duration_minutes,
            "kind": self.kind,
            "linked_item_id": linked_item_id,
            "persistent": self.persistent,
        }

        event: Optional[CalendarEvent] = None
        if self.event_id is not None and self.event_store.get(self.event_id) is not None:
            event = self.event_store.update(self.event_id, CalendarEventUpdate(**fields))
        else:
            event = self.event_store.create(CalendarEventCreate(**fields))
        self.close()
        return event

    def delete(self) -> bool:
        """
        Press-to-arm delete: the first call arms, the second deletes.

        Returns True once the event has been removed.
        """
        if not self.is_open or self.is_new:
            return False
        if not self.delete_armed:
            self.delete_armed = True
            return False
        deleted = self.event_store.delete(self.event_id)
        self.close()
        return deleted

    def disarm_delete(self) -> None:
        self.delete_armed = False
