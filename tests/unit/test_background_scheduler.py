"""
Unit tests for BackgroundRolloverScheduler.
"""

import pytest

from rhythm.core.config import Settings
from rhythm.models.enums import RolloverTrigger
from rhythm.services.background_scheduler import BackgroundRolloverScheduler


@pytest.mark.asyncio
async def test_disabled_in_test_environment(engine, ledger_repo):
    scheduler = BackgroundRolloverScheduler(engine, Settings(ENVIRONMENT="test"))

    await scheduler.start()

    assert scheduler.running is False
    assert scheduler.last_report is None
    assert ledger_repo.get().last_day_key is None


@pytest.mark.asyncio
async def test_start_ticks_for_mount_then_schedules(engine, ledger_repo):
    scheduler = BackgroundRolloverScheduler(engine, Settings(ENVIRONMENT="local"))

    await scheduler.start()
    try:
        assert scheduler.running is True
        assert scheduler.last_report.trigger == RolloverTrigger.MOUNT
        assert scheduler.last_report.day_rolled is True
        assert ledger_repo.get().last_day_key == scheduler.last_report.day_key
    finally:
        await scheduler.stop()

    assert scheduler.running is False


def test_refresh_is_idempotent(engine):
    scheduler = BackgroundRolloverScheduler(engine, Settings(ENVIRONMENT="test"))

    first = scheduler.refresh()
    second = scheduler.refresh()

    assert first.trigger == RolloverTrigger.PULL_TO_REFRESH
    assert first.day_rolled is True
    assert second.changed is False


def test_weekly_prompt_callback_respects_setting(engine):
    prompts = []
    scheduler = BackgroundRolloverScheduler(
        engine,
        Settings(ENVIRONMENT="test", WEEKLY_REFLECTION_PROMPT=False),
        on_weekly_prompt=lambda: prompts.append(True),
    )

    scheduler.refresh()

    assert prompts == []
