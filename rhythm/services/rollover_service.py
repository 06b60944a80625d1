"""
Rollover engine.

Decides, exactly once per calendar day and once per ISO week, how to roll
over habit state, archive completed tasks, purge transient schedule events
and clear the day's reflections. Every trigger (mount, the minute and hourly
intervals, manual reset, pull-to-refresh) goes through tick().
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rhythm.core.logger import setup_logger
from rhythm.interfaces.habit_repository import IHabitRepository
from rhythm.interfaces.ledger_repository import IRolloverLedgerRepository
from rhythm.interfaces.reflection_repository import IReflectionRepository
from rhythm.interfaces.task_repository import ITaskRepository
from rhythm.models.enums import RolloverTrigger, TaskListName
from rhythm.models.rollover import RolloverReport
from rhythm.models.task import Task, TaskBoard
from rhythm.services.event_store import EventStore
from rhythm.utils.datetime_utils import to_date_key, to_local, to_week_key

logger = setup_logger(__name__)

DEFAULT_ARCHIVE_LIMIT = 100
WEEKLY_PROMPT_WEEKDAY = 6  # Sunday
WEEKLY_PROMPT_HOUR = 18


class RolloverEngine:
    """
    Idempotent day/week rollover.

    tick() compares "now" with the ledger and runs the day transaction and/or
    the week transaction when a boundary has been crossed. Missed days are not
    replayed: one catch-up transaction covers any number of skipped days.

    Ordering:
    - The day ledger key is written last, only after every step of the day
      transaction persisted. A failed step leaves the key stale so the next
      tick retries; re-running the archive on an already-partitioned board is
      a no-op.
    - The week transaction is independent of the day transaction.
    """

    def __init__(
        self,
        ledger_repo: IRolloverLedgerRepository,
        habit_repo: IHabitRepository,
        event_store: EventStore,
        task_repo: ITaskRepository,
        reflection_repo: IReflectionRepository,
        archive_limit: int = DEFAULT_ARCHIVE_LIMIT,
        user_timezone: Optional[str] = None,
    ):
        self.ledger_repo = ledger_repo
        self.habit_repo = habit_repo
        self.event_store = event_store
        self.task_repo = task_repo
        self.reflection_repo = reflection_repo
        self.archive_limit = archive_limit
        self.user_timezone = user_timezone

    def tick(
        self,
        now: datetime,
        trigger: RolloverTrigger = RolloverTrigger.MINUTE_INTERVAL,
    ) -> RolloverReport:
        """
        Run any pending rollover for `now`.

        Safe to call arbitrarily often; once a boundary has been processed,
        further calls with the same day/week are no-ops.
        """
        day_key = to_date_key(now, self.user_timezone)
        week_key = to_week_key(now, self.user_timezone)
        ledger = self.ledger_repo.get()

        report = RolloverReport(
            trigger=trigger,
            day_key=day_key,
            week_key=week_key,
            previous_day_key=ledger.last_day_key,
        )

        if ledger.last_day_key != day_key:
            self._roll_day(now, ledger.last_day_key, report)

        if ledger.last_week_key != week_key:
            self._roll_week(ledger.last_week_key, report)

        return report

    def reset_today(self, now: datetime) -> RolloverReport:
        """
        Manual "reset today": uncheck habits and clear the reflections.

        Pending rollovers run first so a reset pressed right after midnight
        still archives yesterday's work.
        """
        report = self.tick(now, RolloverTrigger.MANUAL_RESET)
        habits_ok = self._uncheck_habits()
        reflections_ok = self.reflection_repo.clear()
        if not (habits_ok and reflections_ok):
            logger.warning("Manual reset applied in memory only; storage write failed")
        logger.info(f"Manual reset for {report.day_key}")
        return report

    def should_prompt_weekly_reflection(self, now: datetime, enabled: bool) -> bool:
        """
        True at most once per ISO week: Sunday from 18:00, when enabled.
        """
        if not enabled:
            return False
        local = to_local(now, self.user_timezone)
        if local.weekday() != WEEKLY_PROMPT_WEEKDAY or local.hour < WEEKLY_PROMPT_HOUR:
            return False
        week_key = to_week_key(now, self.user_timezone)
        if self.ledger_repo.get().last_weekly_prompt_key == week_key:
            return False
        self.ledger_repo.set_weekly_prompt_key(week_key)
        return True

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def _roll_day(self, now: datetime, previous_day_key: Optional[str], report: RolloverReport) -> None:
        logger.info(
            f"New day detected ({previous_day_key or 'never'} -> {report.day_key}, "
            f"trigger={report.trigger.value}); performing daily rollover"
        )
        archived, yesterday_completed, tasks_ok = self._archive_completed_tasks(now, previous_day_key)
        habits_ok = self._uncheck_habits()
        purged, events_ok = self.event_store.purge_transient()
        reflections_ok = self.reflection_repo.clear()

        report.day_rolled = True
        report.archived_count = archived
        report.purged_event_count = purged
        report.yesterday_completed = yesterday_completed

        if not (tasks_ok and habits_ok and events_ok and reflections_ok):
            logger.warning(
                f"Daily rollover for {report.day_key} not fully persisted "
                f"(tasks={tasks_ok}, habits={habits_ok}, events={events_ok}, "
                f"reflections={reflections_ok}); ledger left at {previous_day_key}"
            )
            report.ledger_advanced = False
            return

        if not self.ledger_repo.set_day_key(report.day_key):
            report.ledger_advanced = False
            return

        logger.info(
            f"Daily rollover complete: archived={archived}, purged_events={purged}, "
            f"yesterday_completed={yesterday_completed}"
        )

    def _roll_week(self, previous_week_key: Optional[str], report: RolloverReport) -> None:
        logger.info(
            f"New week detected ({previous_week_key or 'never'} -> {report.week_key}); "
            "resetting habits"
        )
        report.week_rolled = True
        if not self._uncheck_habits():
            logger.warning(f"Weekly habit reset for {report.week_key} not persisted; will retry")
            report.ledger_advanced = False
            return
        if not self.ledger_repo.set_week_key(report.week_key):
            report.ledger_advanced = False

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _archive_completed_tasks(
        self, now: datetime, previous_day_key: Optional[str]
    ) -> tuple[int, int, bool]:
        """
        Move every done task from the working lists into the archive.

        Returns:
            (archived count, tasks completed on previous_day_key, write ok)
        """
        board = self.task_repo.get_board()
        moved = self._partition_done(board, now)

        # Always written: a retry after a failed write must persist the cached board.
        board.completed = (board.completed + moved)[-self.archive_limit:]
        ok = self.task_repo.save_board(board)

        yesterday_completed = 0
        if previous_day_key:
            yesterday_completed = sum(
                1
                for task in board.completed
                if task.completed_at
                and to_date_key(task.completed_at, self.user_timezone) == previous_day_key
            )
        return len(moved), yesterday_completed, ok

    @staticmethod
    def _partition_done(board: TaskBoard, now: datetime) -> list[Task]:
        moved: list[Task] = []
        for name in TaskListName:
            remaining: list[Task] = []
            for task in board.working_list(name):
                if not task.done:
                    remaining.append(task)
                    continue
                moved.append(
                    task.model_copy(
                        update={
                            "archived_at": now,
                            "completed_at": task.completed_at or now,
                            "from_list": task.from_list or name,
                        }
                    )
                )
            board.set_working_list(name, remaining)
        return moved

    def _uncheck_habits(self) -> bool:
        """
        Clear every habit's done flag; history is left untouched.

        The list is written even when nothing changed so a retry persists
        values that only reached the cache.
        """
        habits = self.habit_repo.list()
        return self.habit_repo.save_all(
            [habit.model_copy(update={"done": False}) for habit in habits]
        )
