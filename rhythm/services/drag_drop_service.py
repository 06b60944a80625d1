"""
Drag/drop interaction state machines.

DragDropController drives drops onto the schedule grid: creating a block
from a dragged task or habit, or repositioning an existing block. Preview
updates are render-only; the event store is written on commit and nowhere
else.

ListReorderSession is the simpler machine used for reordering plain lists
(habit priority order): it tracks the dragged id and hovered index and
performs one splice on drop.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from pydantic import ValidationError as PydanticValidationError

from rhythm.core.logger import setup_logger
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.calendar_event import CalendarEvent, CalendarEventCreate
from rhythm.models.drag import (
    DEFAULT_HABIT_DURATION,
    DEFAULT_TASK_DURATION,
    AnyDragSource,
    HabitDragSource,
    RepositionDragSource,
    TaskDragSource,
    decode_drag_source,
)
from rhythm.models.enums import DragPhase, EventKind
from rhythm.models.schedule import DragPreview, GridConfig, TimeOfDay
from rhythm.services.event_store import EventStore
from rhythm.utils.grid_geometry import clamp_start_within_day, preview_rect, time_at

logger = setup_logger(__name__)


class DragDropController:
    """
    Idle -> Dragging(source, preview) -> Committed | Cancelled -> Idle.

    `phase` is IDLE or DRAGGING; `last_outcome` records how the previous drag
    ended.
    """

    def __init__(
        self,
        event_store: EventStore,
        task_repo: ITaskRepository,
        habit_repo: IHabitRepository,
        grid: GridConfig,
    ):
        self.event_store = event_store
        self.task_repo = task_repo
        self.habit_repo = habit_repo
        self.grid = grid
        self.phase = DragPhase.IDLE
        self.source: Optional[AnyDragSource] = None
        self.duration_minutes: int = DEFAULT_TASK_DURATION
        self.preview: Optional[DragPreview] = None
        self.last_outcome: Optional[DragPhase] = None

    @property
    def is_dragging(self) -> bool:
        return self.phase == DragPhase.DRAGGING

    def set_grid(self, grid: GridConfig) -> None:
        """Use a new visible window (start hour / span changed)."""
        self.grid = grid
        if self.preview is not None:
            self.preview = preview_rect(self.preview.time, self.duration_minutes, grid)

    def begin_drag(self, source: AnyDragSource | dict | str) -> bool:
        """
        Start dragging. Raw payloads are decoded here, once.

        Returns False (and stays idle) for an undecodable payload or a
        reposition of an unknown event.
        """
        if self.is_dragging:
            self.cancel_drag()

        if isinstance(source, (dict, str, bytes)):
            try:
                source = decode_drag_source(source)
            except PydanticValidationError as e:
                logger.debug(f"Ignoring drag with invalid payload: {e.error_count()} error(s)")
                return False

        duration = self._suggested_duration(source)
        if duration is None:
            logger.debug(f"Ignoring drag of unknown event: {source}")
            return False

        self.source = source
        self.duration_minutes = duration
        self.preview = None
        self.phase = DragPhase.DRAGGING
        return True

    def update_drag_preview(self, pixel_y: float) -> Optional[DragPreview]:
        """Recompute the preview rectangle and time label. Never mutates the store."""
        if not self.is_dragging:
            return None
        self.preview = preview_rect(time_at(pixel_y, self.grid), self.duration_minutes, self.grid)
        return self.preview

    def commit_drag(self, pixel_y: float) -> Optional[CalendarEvent]:
        """
        Drop at pixel_y.

        External sources create a linked event at the drop time with the
        suggested duration; a reposition moves the existing event's start
        (kept inside the day) and preserves its id and duration. Returns the
        created/moved event, or None if nothing was written.
        """
        if not self.is_dragging or self.source is None:
            return None

        time = time_at(pixel_y, self.grid)
        source = self.source
        if isinstance(source, RepositionDragSource):
            event = self._reposition(source, time)
        elif isinstance(source, TaskDragSource):
            event = self._create_from_task(source, time)
        else:
            event = self._create_from_habit(source, time)

        self._finish(DragPhase.COMMITTED if event is not None else DragPhase.CANCELLED)
        return event

    def cancel_drag(self) -> None:
        """Pointer left the surface without a drop: discard the preview."""
        if self.is_dragging:
            self._finish(DragPhase.CANCELLED)

    # ------------------------------------------------------------------

    def _finish(self, outcome: DragPhase) -> None:
        self.last_outcome = outcome
        self.phase = DragPhase.IDLE
        self.source = None
        self.preview = None

    def _suggested_duration(self, source: AnyDragSource) -> Optional[int]:
        if isinstance(source, RepositionDragSource):
            event = self.event_store.get(source.event_id)
            return event.duration_minutes if event else None
        if isinstance(source, HabitDragSource):
            return DEFAULT_HABIT_DURATION
        if source.duration:
            return source.duration
        found = self.task_repo.get_board().find(source.task_id)
        estimate = found[1].estimated_minutes if found else None
        return min(estimate, 600) if estimate else DEFAULT_TASK_DURATION

    def _reposition(self, source: RepositionDragSource, time: TimeOfDay) -> Optional[CalendarEvent]:
        event = self.event_store.get(source.event_id)
        if event is None:
            logger.debug(f"Dropped event {source.event_id} no longer exists")
            return None
        start = TimeOfDay.from_total_minutes(
            clamp_start_within_day(time.total_minutes, event.duration_minutes)
        )
        return self.event_store.move(event.id, start.hour, start.minute)

    def _create_from_task(self, source: TaskDragSource, time: TimeOfDay) -> Optional[CalendarEvent]:
        found = self.task_repo.get_board().find(source.task_id)
        if found is None or found[1].done:
            logger.debug(f"Dropped task {source.task_id} is not an open task")
            return None
        task = found[1]
        return self.event_store.create(
            CalendarEventCreate(
                title=task.text,
                start_hour=time.hour,
                start_minute=time.minute,
                duration_minutes=self.duration_minutes,
                kind=EventKind.TASK_LINK,
                linked_item_id=task.id,
            )
        )

    def _create_from_habit(self, source: HabitDragSource, time: TimeOfDay) -> Optional[CalendarEvent]:
        habit = self.habit_repo.get(source.habit_id)
        if habit is None:
            logger.debug(f"Dropped habit {source.habit_id} no longer exists")
            return None
        return self.event_store.create(
            CalendarEventCreate(
                title=habit.name,
                start_hour=time.hour,
                start_minute=time.minute,
                duration_minutes=self.duration_minutes,
                kind=EventKind.HABIT_LINK,
                linked_item_id=habit.id,
            )
        )


class ListReorderSession:
    """
    Drag-to-reorder for a flat list.

    Args:
        list_ids: returns the current ids in order
        reorder: applies the move, e.g. HabitService.reorder(item_id, index)
    """

    def __init__(
        self,
        list_ids: Callable[[], list[str]],
        reorder: Callable[[str, int], Any],
    ):
        self._list_ids = list_ids
        self._reorder = reorder
        self.dragged_id: Optional[str] = None
        self.hover_index: int = -1

    @property
    def is_dragging(self) -> bool:
        return self.dragged_id is not None

    def begin(self, item_id: str) -> bool:
        if item_id not in self._list_ids():
            return False
        self.dragged_id = item_id
        self.hover_index = -1
        return True

    def hover(self, index: int) -> None:
        if self.is_dragging:
            self.hover_index = index

    def drop(self, target_index: Optional[int] = None) -> Any:
        """Apply the splice. Returns the reorder result, or None for a no-op."""
        if not self.is_dragging:
            return None
        item_id = self.dragged_id
        index = self.hover_index if target_index is None else target_index
        self.cancel()

        ids = self._list_ids()
        if index < 0 or item_id not in ids or ids.index(item_id) == index:
            return None
        return self._reorder(item_id, index)

    def cancel(self) -> None:
        self.dragged_id = None
        self.hover_index = -1
