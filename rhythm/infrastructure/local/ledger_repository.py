"""
Key-value implementation of the rollover ledger.

Each marker lives under its own key. A marker that does not parse reads as
None, which makes the engine run the rollover rather than skip it.
"""

from rhythm.core.logger import setup_logger
from rhythm.infrastructure.local.kv_repository import KeyValueRepository
from rhythm.interfaces.ledger_repository import IRolloverLedgerRepository
from rhythm.models.rollover import RolloverLedger
from rhythm.utils.datetime_utils import is_valid_date_key, is_valid_week_key

logger = setup_logger(__name__)

LAST_DAY_KEY = "last_daily_reset"
LAST_WEEK_KEY = "last_habit_reset_week"
LAST_WEEKLY_PROMPT_KEY = "last_weekly_prompt"


class KeyValueRolloverLedgerRepository(KeyValueRepository, IRolloverLedgerRepository):
    def get(self) -> RolloverLedger:
        return RolloverLedger(
            last_day_key=self._read_marker(LAST_DAY_KEY, is_valid_date_key),
            last_week_key=self._read_marker(LAST_WEEK_KEY, is_valid_week_key),
            last_weekly_prompt_key=self._read_marker(LAST_WEEKLY_PROMPT_KEY, is_valid_week_key),
        )

    def set_day_key(self, day_key: str) -> bool:
        return self._store.set(LAST_DAY_KEY, day_key)

    def set_week_key(self, week_key: str) -> bool:
        return self._store.set(LAST_WEEK_KEY, week_key)

    def set_weekly_prompt_key(self, week_key: str) -> bool:
        return self._store.set(LAST_WEEKLY_PROMPT_KEY, week_key)

    def _read_marker(self, key: str, is_valid) -> str | None:
        value = self._store.get(key)
        if value is None:
            return None
        if not is_valid(value):
            logger.warning(f"Unrecognized ledger marker '{key}'={value!r}; treating as unset")
            return None
        return value
