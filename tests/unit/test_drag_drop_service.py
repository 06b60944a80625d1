"""
Unit tests for the drag/drop state machines.
"""

import pytest

from rhythm.models.calendar_event import CalendarEventCreate
from rhythm.models.drag import HabitDragSource, RepositionDragSource, TaskDragSource
from rhythm.models.enums import DragPhase, EventKind
from rhythm.models.habit import Habit
from rhythm.models.schedule import GridConfig, TimeOfDay
from rhythm.models.task import Task, TaskBoard
from rhythm.services.drag_drop_service import DragDropController, ListReorderSession
from rhythm.services.habit_service import HabitService

Y_14_15 = 342.0  # (14 - 9 + 0.25) * 64 + 6


@pytest.fixture
def controller(event_store, task_repo, habit_repo, grid):
    task_repo.save_board(
        TaskBoard(
            today=[
                Task(id="t1", text="Write draft", time="45m"),
                Task(id="t2", text="No estimate"),
                Task(id="t3", text="Already done", done=True),
            ]
        )
    )
    habit_repo.save_all([Habit(id="h1", name="Meditate")])
    return DragDropController(event_store, task_repo, habit_repo, grid)


class TestDragDoesNotMutateUntilDrop:
    def test_previews_leave_store_untouched(self, controller, event_store, store):
        event = event_store.create(
            CalendarEventCreate(title="Focus", start_hour=9, start_minute=0)
        )
        before = dict(store._data)

        assert controller.begin_drag(RepositionDragSource(event_id=event.id))
        for y in (10, 100, 250.5, 400, 9000):
            controller.update_drag_preview(y)

        assert dict(store._data) == before
        assert controller.phase == DragPhase.DRAGGING

    def test_preview_tracks_pointer(self, controller):
        controller.begin_drag(TaskDragSource(task_id="t1"))
        preview = controller.update_drag_preview(Y_14_15)
        assert preview.time == TimeOfDay(hour=14, minute=15)
        assert preview.label == "2:15 PM"
        assert preview.duration_minutes == 45
        assert preview.height == 48.0

    def test_preview_when_idle_is_none(self, controller):
        assert controller.update_drag_preview(100) is None


class TestReposition:
    def test_scenario_move_to_14_15(self, controller, event_store):
        event = event_store.create(
            CalendarEventCreate(title="Focus", start_hour=9, start_minute=0, duration_minutes=30)
        )

        controller.begin_drag(RepositionDragSource(event_id=event.id))
        moved = controller.commit_drag(Y_14_15)

        assert (moved.start_hour, moved.start_minute) == (14, 15)
        assert moved.duration_minutes == 30
        assert moved.id == event.id
        assert event_store.get(event.id) == moved
        assert controller.phase == DragPhase.IDLE
        assert controller.last_outcome == DragPhase.COMMITTED

    def test_reposition_keeps_event_inside_the_day(self, controller, event_store):
        controller.set_grid(GridConfig(start_hour=16, visible_hours=8))
        event = event_store.create(
            CalendarEventCreate(title="Late", start_hour=17, start_minute=0, duration_minutes=120)
        )

        controller.begin_drag(RepositionDragSource(event_id=event.id))
        moved = controller.commit_drag(10_000)

        assert (moved.start_hour, moved.start_minute) == (22, 0)

    def test_reposition_of_unknown_event_is_refused(self, controller):
        assert controller.begin_drag(RepositionDragSource(event_id="missing")) is False
        assert controller.phase == DragPhase.IDLE


class TestExternalDrop:
    def test_task_drop_creates_linked_event(self, controller, event_store):
        controller.begin_drag(TaskDragSource(task_id="t1"))
        event = controller.commit_drag(Y_14_15)

        assert event.kind == EventKind.TASK_LINK
        assert event.linked_item_id == "t1"
        assert event.title == "Write draft"
        assert event.duration_minutes == 45
        assert (event.start_hour, event.start_minute) == (14, 15)
        assert event_store.list_events() == [event]

    def test_task_without_estimate_defaults_to_thirty_minutes(self, controller):
        controller.begin_drag(TaskDragSource(task_id="t2"))
        assert controller.commit_drag(Y_14_15).duration_minutes == 30

    def test_payload_duration_wins(self, controller):
        controller.begin_drag({"kind": "task", "task_id": "t1", "duration": 60})
        assert controller.commit_drag(Y_14_15).duration_minutes == 60

    def test_habit_drop_is_fifteen_minutes(self, controller):
        controller.begin_drag(HabitDragSource(habit_id="h1"))
        event = controller.commit_drag(6.0)
        assert event.kind == EventKind.HABIT_LINK
        assert event.title == "Meditate"
        assert event.duration_minutes == 15
        assert (event.start_hour, event.start_minute) == (9, 0)

    def test_json_payload_is_decoded(self, controller):
        assert controller.begin_drag('{"kind": "habit", "habit_id": "h1"}')
        assert isinstance(controller.source, HabitDragSource)

    def test_task_with_long_text_can_be_dropped(self, controller, task_repo, event_store):
        task_repo.save_board(TaskBoard(today=[Task(id="long", text="x" * 600)]))

        assert controller.begin_drag({"kind": "task", "task_id": "long"})
        event = controller.commit_drag(200)

        assert event is not None
        assert event.title == "x" * 600
        assert event_store.list_events() == [event]
        assert controller.last_outcome == DragPhase.COMMITTED

    def test_drop_of_missing_or_done_task_is_a_no_op(self, controller, event_store):
        for task_id in ("t3", "deleted"):
            controller.begin_drag(TaskDragSource(task_id=task_id))
            assert controller.commit_drag(Y_14_15) is None
            assert controller.last_outcome == DragPhase.CANCELLED
        assert event_store.list_events() == []


class TestInvalidAndCancel:
    @pytest.mark.parametrize(
        "payload",
        [{"kind": "scheduleBlock"}, {"kind": "task"}, "not json", {}],
    )
    def test_invalid_payload_stays_idle(self, controller, payload):
        assert controller.begin_drag(payload) is False
        assert controller.phase == DragPhase.IDLE

    def test_cancel_discards_preview(self, controller, event_store):
        controller.begin_drag(TaskDragSource(task_id="t1"))
        controller.update_drag_preview(Y_14_15)

        controller.cancel_drag()

        assert controller.phase == DragPhase.IDLE
        assert controller.preview is None
        assert controller.last_outcome == DragPhase.CANCELLED
        assert controller.commit_drag(Y_14_15) is None
        assert event_store.list_events() == []

    def test_new_drag_replaces_unfinished_one(self, controller):
        controller.begin_drag(TaskDragSource(task_id="t1"))
        controller.begin_drag(HabitDragSource(habit_id="h1"))
        assert controller.duration_minutes == 15
        assert controller.last_outcome == DragPhase.CANCELLED


class TestListReorderSession:
    @pytest.fixture
    def habits(self, habit_repo):
        habit_repo.save_all([Habit(id=i, name=i.upper()) for i in ("a", "b", "c", "d")])
        return HabitService(habit_repo)

    def _session(self, habits):
        return ListReorderSession(
            list_ids=lambda: [h.id for h in habits.list_habits()],
            reorder=habits.reorder,
        )

    def test_drop_moves_item(self, habits):
        session = self._session(habits)
        assert session.begin("a")
        session.hover(2)
        session.drop()
        assert [h.id for h in habits.list_habits()] == ["b", "c", "a", "d"]
        assert not session.is_dragging

    def test_drop_on_own_slot_is_a_no_op(self, habits):
        session = self._session(habits)
        session.begin("c")
        assert session.drop(2) is None
        assert [h.id for h in habits.list_habits()] == ["a", "b", "c", "d"]

    def test_unknown_item_cannot_be_dragged(self, habits):
        session = self._session(habits)
        assert session.begin("zzz") is False
        assert session.drop(0) is None

    def test_cancel(self, habits):
        session = self._session(habits)
        session.begin("d")
        session.hover(0)
        session.cancel()
        assert session.drop() is None
        assert [h.id for h in habits.list_habits()] == ["a", "b", "c", "d"]
