"""
Rollover ledger repository interface.
"""

from abc import ABC, abstractmethod

from rhythm.models.rollover import RolloverLedger


class IRolloverLedgerRepository(ABC):
    """Persisted boundary markers. Unparseable markers read as None."""

    @abstractmethod
    def get(self) -> RolloverLedger:
        pass

    @abstractmethod
    def set_day_key(self, day_key: str) -> bool:
        pass

    @abstractmethod
    def set_week_key(self, week_key: str) -> bool:
        pass

    @abstractmethod
    def set_weekly_prompt_key(self, week_key: str) -> bool:
        pass
