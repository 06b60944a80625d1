"""
Background scheduler for the rollover tick.

Runs RolloverEngine.tick() on mount and on two intervals (every minute and
every hour). Uses APScheduler for in-process scheduling; every trigger goes
through the same idempotent tick, so overlapping or repeated firings are
harmless.
"""

from __future__ import annotations

from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from rhythm.core.config import Settings, get_settings
from rhythm.core.logger import logger
from rhythm.models.enums import RolloverTrigger
from rhythm.models.rollover import RolloverReport
from rhythm.services.rollover_service import RolloverEngine
from rhythm.utils.datetime_utils import now_local


class BackgroundRolloverScheduler:
    """
    Periodic rollover driver.

    Features:
    - Tick on start (covers an app closed across midnight or several days)
    - Tick every TICK_INTERVAL_SECONDS
    - Tick every ARCHIVE_TICK_INTERVAL_MINUTES
    - Optional weekly reflection prompt callback (Sunday evening)
    """

    def __init__(
        self,
        engine: RolloverEngine,
        settings: Optional[Settings] = None,
        on_weekly_prompt: Optional[Callable[[], None]] = None,
    ):
        self._engine = engine
        self._settings = settings or get_settings()
        self._on_weekly_prompt = on_weekly_prompt
        self._scheduler: Optional[AsyncIOScheduler] = None
        self.last_report: Optional[RolloverReport] = None

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self):
        """Tick once for mount, then start the interval jobs."""
        # Only run scheduler in non-test environments
        if self._settings.is_test:
            logger.info("Background scheduler disabled in test environment")
            return

        self.run_tick(RolloverTrigger.MOUNT)

        self._scheduler = AsyncIOScheduler()
        self._scheduler.add_job(
            self._run_minute_tick,
            IntervalTrigger(seconds=self._settings.TICK_INTERVAL_SECONDS),
            id="rollover_minute_tick",
            name="Rollover Tick",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.add_job(
            self._run_hourly_tick,
            IntervalTrigger(minutes=self._settings.ARCHIVE_TICK_INTERVAL_MINUTES),
            id="rollover_hourly_tick",
            name="Rollover Archive Tick",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()
        logger.info(
            "Background scheduler started:\n"
            f"  - Rollover tick: every {self._settings.TICK_INTERVAL_SECONDS}s\n"
            f"  - Archive tick: every {self._settings.ARCHIVE_TICK_INTERVAL_MINUTES}m"
        )

    async def stop(self):
        """Stop the scheduler."""
        if self._scheduler:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Background scheduler stopped")

    def refresh(self) -> RolloverReport:
        """Pull-to-refresh: tick immediately."""
        return self.run_tick(RolloverTrigger.PULL_TO_REFRESH)

    def run_tick(self, trigger: RolloverTrigger) -> RolloverReport:
        now = now_local(self._settings.timezone_name)
        report = self._engine.tick(now, trigger)
        self.last_report = report
        if report.changed:
            logger.info(
                f"Rollover via {trigger.value}: day_rolled={report.day_rolled}, "
                f"week_rolled={report.week_rolled}, ledger_advanced={report.ledger_advanced}"
            )

        if self._on_weekly_prompt and self._engine.should_prompt_weekly_reflection(
            now, self._settings.WEEKLY_REFLECTION_PROMPT
        ):
            self._on_weekly_prompt()
        return report

    async def _run_minute_tick(self):
        try:
            self.run_tick(RolloverTrigger.MINUTE_INTERVAL)
        except Exception as e:
            logger.error(f"Rollover tick failed: {e}")

    async def _run_hourly_tick(self):
        try:
            self.run_tick(RolloverTrigger.HOURLY_INTERVAL)
        except Exception as e:
            logger.error(f"Rollover archive tick failed: {e}")
