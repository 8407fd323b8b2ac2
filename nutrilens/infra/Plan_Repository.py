import logging
from datetime import date, timedelta
from typing import Dict, Optional

from nutrilens.domain.DailyPlan import DailyPlan
from nutrilens.domain.Preferences import Preferences
from nutrilens.infra.Storage import load_json, save_json
from nutrilens.utilities.constants import DATE_FORMAT, MEALS_KEY

logger = logging.getLogger(__name__)


class PlanRepository:
    """Date-keyed meal plans persisted as a single mapping under the `meals` key.

    The whole mapping is rewritten after every mutation.
    """

    def __init__(self, storage):
        self.storage = storage
        self._plans: Dict[str, DailyPlan] = self._load()

    def _load(self) -> Dict[str, DailyPlan]:
        store = load_json(self.storage, MEALS_KEY, {})
        if not isinstance(store, dict):
            logger.warning("Stored meal plans are not a mapping; starting with no plans")
            return {}
        plans = {}
        for day, entry in store.items():
            try:
                plans[day] = DailyPlan.from_dict(day, entry)
            except ValueError as e:
                logger.warning(f"Skipping malformed plan entry: {e}")
        return plans

    def reload(self) -> None:
        self._plans = self._load()

    def get(self, day: str) -> Optional[DailyPlan]:
        return self._plans.get(day)

    def set(self, day: str, meals: Dict[str, str], preferences: Preferences) -> DailyPlan:
        """Merge `meals` into the day's entry (creating it if needed) and persist everything.

        The stored mapping is re-read under the storage lock so plans committed by
        other requests since this repository was loaded are kept. The cache only
        changes once the write succeeded.
        """
        with self.storage.lock:
            plans = self._load()
            current = plans.get(day)
            plan = DailyPlan.from_dict(day, current.to_dict()) if current else DailyPlan(day)
            plan.merge(meals, preferences)
            plans[day] = plan
            save_json(self.storage, MEALS_KEY, {d: p.to_dict() for d, p in plans.items()})
            self._plans = plans
        return plan

    def all(self) -> Dict[str, DailyPlan]:
        return dict(self._plans)

    def week(self, start: date) -> Dict[str, Optional[DailyPlan]]:
        """Seven consecutive days starting at `start`, planned or not."""
        days = [(start + timedelta(days=i)).strftime(DATE_FORMAT) for i in range(7)]
        return {d: self._plans.get(d) for d in days}
