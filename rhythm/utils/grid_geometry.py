"""
Grid geometry for the schedule surface.

Pure functions mapping between pixel offsets (measured from the top edge of
the calendar surface) and wall-clock (hour, minute) values. Pointer-derived
times are snapped to POINTER_RESOLUTION_MINUTES; the configurable snap
increment only affects which grid lines are drawn.
"""

import math

from rhythm.models.calendar_event import CalendarEventBase
from rhythm.models.schedule import (
    MINUTES_PER_DAY,
    BlockStyle,
    DragPreview,
    GridConfig,
    GridLine,
    TimeOfDay,
)
from rhythm.utils.datetime_utils import format_hour, format_time_slot

POINTER_RESOLUTION_MINUTES = 5
MIN_BLOCK_HEIGHT = 24.0
COMPACT_DURATION_MINUTES = 30


def snap_minutes(minutes: float, resolution: int = POINTER_RESOLUTION_MINUTES) -> int:
    """Round to the nearest multiple of `resolution`, halves rounding up."""
    return int(math.floor(minutes / resolution + 0.5)) * resolution


def time_from_offset(
    pixel_y: float,
    grid_top_padding: float,
    start_hour: int,
    hour_height: float,
    visible_hours: int,
) -> TimeOfDay:
    """
    Resolve a vertical pixel offset to a snapped wall-clock time.

    The result is always inside [start_hour, start_hour + visible_hours):
    a pointer above the grid resolves to the first slot and one below it to
    the last 5-minute slot. A minute that snaps to 60 carries into the hour
    before the window clamp is applied.
    """
    adjusted = max(0.0, pixel_y - grid_top_padding)
    clamped = min(adjusted, visible_hours * hour_height)
    offset_minutes = snap_minutes(clamped / hour_height * 60)
    last_slot = visible_hours * 60 - POINTER_RESOLUTION_MINUTES
    offset_minutes = max(0, min(offset_minutes, last_slot))
    return TimeOfDay.from_total_minutes(start_hour * 60 + offset_minutes)


def offset_from_time(
    hour: int,
    minute: int,
    grid_top_padding: float,
    start_hour: int,
    hour_height: float,
) -> float:
    """Pixel offset of the top edge of (hour, minute) on the grid."""
    hours_from_start = (hour - start_hour) + minute / 60
    return hours_from_start * hour_height + grid_top_padding


def time_at(pixel_y: float, grid: GridConfig) -> TimeOfDay:
    return time_from_offset(
        pixel_y, grid.top_padding, grid.start_hour, grid.hour_height, grid.visible_hours
    )


def offset_of(hour: int, minute: int, grid: GridConfig) -> float:
    return offset_from_time(hour, minute, grid.top_padding, grid.start_hour, grid.hour_height)


def duration_height(duration_minutes: int, grid: GridConfig) -> float:
    return max(duration_minutes / 60 * grid.hour_height, MIN_BLOCK_HEIGHT)


def block_style(event: CalendarEventBase, grid: GridConfig) -> BlockStyle:
    """Top offset and height of an event block."""
    return BlockStyle(
        top=offset_of(event.start_hour, event.start_minute, grid),
        height=duration_height(event.duration_minutes, grid),
        compact=event.duration_minutes <= COMPACT_DURATION_MINUTES,
    )


def preview_rect(time: TimeOfDay, duration_minutes: int, grid: GridConfig) -> DragPreview:
    """Live drop preview, kept inside the visible surface."""
    height = duration_height(duration_minutes, grid)
    top = offset_of(time.hour, time.minute, grid)
    max_top = grid.usable_height - height
    top = max(0.0, min(top, max_top))
    return DragPreview(
        time=time,
        top=top,
        height=height,
        label=format_time_slot(time.hour, time.minute),
        duration_minutes=duration_minutes,
    )


def clamp_start_within_day(start_total: int, duration_minutes: int) -> int:
    """
    Clamp a start (minutes since midnight) so start + duration ends by 24:00.

    A clamped start is floored to the pointer resolution so it never spills
    past midnight after snapping.
    """
    latest = MINUTES_PER_DAY - duration_minutes
    if start_total <= latest:
        return max(0, start_total)
    latest -= latest % POINTER_RESOLUTION_MINUTES
    return max(0, latest)


def grid_lines(grid: GridConfig, snap_increment: int) -> list[GridLine]:
    """Horizontal guide lines: one per hour plus one per snap increment."""
    step = max(POINTER_RESOLUTION_MINUTES, snap_increment)
    lines = []
    for hour in range(grid.start_hour, grid.end_hour):
        for minute in range(0, 60, step):
            lines.append(
                GridLine(
                    time=TimeOfDay(hour=hour, minute=minute),
                    offset=offset_of(hour, minute, grid),
                    is_hour=minute == 0,
                )
            )
    return lines


def hour_labels(grid: GridConfig) -> list[tuple[int, str]]:
    return [(hour, format_hour(hour)) for hour in range(grid.start_hour, grid.end_hour)]
