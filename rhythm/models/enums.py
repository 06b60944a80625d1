"""
Enum definitions for the application.

These enums are used across models and provide type-safe kind/state values.
"""

from enum import Enum


class EventKind(str, Enum):
    """Kind of calendar event (time block)."""

    PLAIN = "plain"
    TASK_LINK = "taskLink"
    HABIT_LINK = "habitLink"


class TaskListName(str, Enum):
    """Ordered working lists a task can live in."""

    PRIMARY = "primary"
    TODAY = "today"
    THIS_WEEK = "thisWeek"
    LATER = "later"


class DragPhase(str, Enum):
    """
    Drag/drop interaction phase.

    COMMITTED and CANCELLED are terminal outcomes; the machine is back in
    IDLE as soon as either is reached.
    """

    IDLE = "idle"
    DRAGGING = "dragging"
    COMMITTED = "committed"
    CANCELLED = "cancelled"


class RolloverTrigger(str, Enum):
    """Call sites that invoke the rollover tick."""

    MOUNT = "mount"
    MINUTE_INTERVAL = "minute_interval"
    HOURLY_INTERVAL = "hourly_interval"
    MANUAL_RESET = "manual_reset"
    PULL_TO_REFRESH = "pull_to_refresh"


class Meridiem(str, Enum):
    """AM/PM selector used by the event editor."""

    AM = "AM"
    PM = "PM"
