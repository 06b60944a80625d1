"""
Rollover ledger and report models.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from rhythm.models.enums import RolloverTrigger


class RolloverLedger(BaseModel):
    """
    Persisted markers recording the last boundary already processed.

    A None key means "never rolled over" (also used for unparseable markers),
    which forces the corresponding transaction to run.
    """

    last_day_key: Optional[str] = None
    last_week_key: Optional[str] = None
    last_weekly_prompt_key: Optional[str] = None


class RolloverReport(BaseModel):
    """Outcome of a single tick."""

    trigger: RolloverTrigger
    day_key: str
    week_key: str
    day_rolled: bool = False
    week_rolled: bool = False
    archived_count: int = 0
    purged_event_count: int = 0
    yesterday_completed: int = 0
    previous_day_key: Optional[str] = None
    ledger_advanced: bool = True

    @property
    def changed(self) -> bool:
        return self.day_rolled or self.week_rolled
