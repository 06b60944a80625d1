"""
Unit tests for the event editor session.
"""

import pytest

from rhythm.models.calendar_event import CalendarEventCreate
from rhythm.models.enums import EventKind, Meridiem
from rhythm.models.habit import Habit
from rhythm.models.schedule import TimeOfDay
from rhythm.models.task import Task, TaskBoard
from rhythm.services.editor_session import EventEditorSession, parse_custom_duration


@pytest.fixture
def editor(event_store, task_repo, habit_repo):
    task_repo.save_board(TaskBoard(today=[Task(id="t1", text="Plan sprint")]))
    habit_repo.save_all([Habit(id="h1", name="Journal")])
    return EventEditorSession(event_store, task_repo, habit_repo)


class TestParseCustomDuration:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("47", 45),
            ("48", 50),
            ("3", 5),
            ("1000", 600),
            ("-20", 5),
            (" 90 ", 90),
            ("", None),
            ("abc", None),
            ("nan", None),
        ],
    )
    def test_clamped_and_rounded(self, text, expected):
        assert parse_custom_duration(text) == expected


class TestCreate:
    def test_save_plain_event(self, editor, event_store):
        editor.open_new(14, 30)
        editor.set_title("  Deep work  ")
        editor.choose_preset(90)
        editor.set_persistent(True)

        event = editor.save()

        assert event.title == "Deep work"
        assert (event.start_hour, event.start_minute) == (14, 30)
        assert event.duration_minutes == 90
        assert event.kind == EventKind.PLAIN
        assert event.persistent is True
        assert event_store.list_events() == [event]
        assert editor.is_open is False

    def test_empty_title_is_a_silent_no_op(self, editor, event_store):
        editor.open_new(9)
        editor.set_title("   ")
        assert editor.save() is None
        assert editor.is_open is True
        assert event_store.list_events() == []

    def test_custom_duration_overrides_preset(self, editor):
        editor.open_new(9)
        editor.set_title("Call")
        editor.choose_preset(60)
        editor.set_custom_duration("47")
        assert editor.save().duration_minutes == 45

    def test_malformed_custom_duration_falls_back_to_preset(self, editor):
        editor.open_new(9)
        editor.set_title("Call")
        editor.choose_preset(120)
        editor.set_custom_duration("two hours")
        assert editor.duration_minutes == 120

    def test_unknown_preset_is_ignored(self, editor):
        editor.open_new(9)
        editor.choose_preset(50)
        assert editor.duration_minutes == 30


class TestLinkedEvents:
    def test_task_link_takes_title_from_task(self, editor):
        editor.open_new(10)
        editor.set_kind(EventKind.TASK_LINK)
        editor.set_linked_item("t1")
        assert editor.display_title == "Plan sprint"

        event = editor.save()

        assert event.title == "Plan sprint"
        assert event.linked_item_id == "t1"
        assert event.kind == EventKind.TASK_LINK

    def test_unresolved_link_cannot_be_saved(self, editor, event_store):
        editor.open_new(10)
        editor.set_kind(EventKind.HABIT_LINK)
        assert editor.save() is None
        editor.set_linked_item("deleted")
        assert editor.save() is None
        assert event_store.list_events() == []

    def test_kind_change_resets_title_and_link(self, editor):
        editor.open_new(10)
        editor.set_title("Typed")
        editor.set_kind(EventKind.HABIT_LINK)
        editor.set_linked_item("h1")
        assert editor.display_title == "Journal"

        editor.set_kind(EventKind.PLAIN)

        assert editor.title == ""
        assert editor.linked_item_id is None
        assert editor.display_title == ""


class TestTime:
    def test_twelve_hour_entry(self, editor):
        editor.open_new(9)
        editor.set_start_time(12, 0, Meridiem.AM)
        assert editor.start_hour == 0
        editor.set_start_time(3, 45, "PM")
        assert (editor.start_hour, editor.start_minute) == (15, 45)

    def test_meridiem_toggle(self, editor):
        editor.open_new(9)
        editor.set_meridiem(Meridiem.PM)
        assert editor.start_hour == 21
        editor.set_meridiem(Meridiem.AM)
        assert editor.start_hour == 9

    def test_end_time_wraps_past_midnight(self, editor):
        editor.open_new(23, 45)
        assert editor.end_time == TimeOfDay(hour=0, minute=15)
        assert editor.end_label == "12:15 AM"


class TestEditExisting:
    def test_edit_updates_in_place(self, editor, event_store):
        event = event_store.create(
            CalendarEventCreate(title="Gym", start_hour=7, start_minute=0, duration_minutes=50)
        )

        assert editor.open_existing(event.id)
        assert editor.custom_duration == ""
        editor.set_title("Gym + sauna")
        saved = editor.save()

        assert saved.id == event.id
        assert saved.title == "Gym + sauna"
        assert saved.duration_minutes == 50
        assert len(event_store.list_events()) == 1

    def test_open_missing_event(self, editor):
        assert editor.open_existing("missing") is False
        assert editor.is_open is False

    def test_delete_requires_confirmation(self, editor, event_store):
        event = event_store.create(CalendarEventCreate(title="Gym", start_hour=7, start_minute=0))
        editor.open_existing(event.id)

        assert editor.delete() is False
        assert editor.delete_armed
        assert event_store.get(event.id) is not None

        assert editor.delete() is True
        assert event_store.get(event.id) is None
        assert editor.is_open is False

    def test_delete_on_new_event_does_nothing(self, editor):
        editor.open_new(9)
        assert editor.delete() is False
        assert editor.delete() is False

    def test_disarm_cancels_pending_delete(self, editor, event_store):
        event = event_store.create(CalendarEventCreate(title="Gym", start_hour=7, start_minute=0))
        editor.open_existing(event.id)

        editor.delete()
        editor.disarm_delete()

        assert editor.delete() is False
        assert event_store.get(event.id) is not None

    def test_title_only_edit_keeps_off_preset_duration(self, editor, event_store):
        event = event_store.create(
            CalendarEventCreate(title="Stretch", start_hour=8, start_minute=0, duration_minutes=7)
        )

        editor.open_existing(event.id)
        assert editor.duration_minutes == 7
        editor.set_title("Stretch + breathe")
        saved = editor.save()

        assert saved.duration_minutes == 7
        assert event_store.get(event.id).duration_minutes == 7

    def test_typed_duration_is_still_clamped_on_existing_event(self, editor, event_store):
        event = event_store.create(
            CalendarEventCreate(title="Stretch", start_hour=8, start_minute=0, duration_minutes=7)
        )

        editor.open_existing(event.id)
        editor.set_custom_duration("7")

        assert editor.save().duration_minutes == 5


class TestLongTitles:
    def test_task_link_with_long_text_saves_full_title(self, editor, task_repo, event_store):
        task_repo.save_board(TaskBoard(today=[Task(id="long", text="x" * 600)]))
        editor.open_new(10)
        editor.set_kind(EventKind.TASK_LINK)
        editor.set_linked_item("long")

        event = editor.save()

        assert event is not None
        assert len(event.title) == 600
        assert event_store.get(event.id).title == "x" * 600

    def test_plain_long_title_is_not_truncated(self, editor):
        editor.open_new(10)
        editor.set_title("y" * 750)
        assert len(editor.save().title) == 750
