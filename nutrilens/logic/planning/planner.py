"""Meal plan generation flow: AI (or fallback) suggestions merged into the plan store.

Whole-day generation replaces all three slots; a swap replaces one slot. Both
replace the day's preferences snapshot with the preferences used for this
action, so the snapshot reflects only the most recent generation.
"""
import logging
from contextlib import contextmanager
from threading import Lock
from typing import Optional, Set

from nutrilens.domain.DailyPlan import DailyPlan
from nutrilens.domain.Preferences import Preferences
from nutrilens.events.event_helpers import publish_plan_fallback, publish_plan_generated
from nutrilens.infra.Plan_Repository import PlanRepository
from nutrilens.logic.planning.remote_generator import GenerationResult, RemoteMealGenerator

logger = logging.getLogger(__name__)


class GenerationInProgressError(RuntimeError):
    """A generation for this date is already running."""


class GenerationGuard:
    """Per-date busy flags: at most one generation in flight for a given date."""

    def __init__(self):
        self._lock = Lock()
        self._busy: Set[str] = set()

    def is_busy(self, day: str) -> bool:
        with self._lock:
            return day in self._busy

    @contextmanager
    def hold(self, day: str):
        with self._lock:
            if day in self._busy:
                raise GenerationInProgressError(f"A meal plan for {day} is already being generated")
            self._busy.add(day)
        try:
            yield
        finally:
            with self._lock:
                self._busy.discard(day)


# Shared by every request handled by this process
GLOBAL_GENERATION_GUARD = GenerationGuard()


class PlanOutcome:
    def __init__(self, plan: DailyPlan, result: Optional[GenerationResult] = None):
        self.plan = plan
        self.generated = result is not None
        self.used_fallback = bool(result and result.used_fallback)
        self.warning = result.warning if result else None


class MealPlanner:
    def __init__(self, repository: PlanRepository, generator: RemoteMealGenerator,
                 guard: Optional[GenerationGuard] = None):
        self.repository = repository
        self.generator = generator
        self.guard = guard or GenerationGuard()

    def _run(self, day: str, preferences: Preferences, slot: Optional[str]) -> PlanOutcome:
        with self.guard.hold(day):
            result = self.generator.generate(preferences, slot)
            plan = self.repository.set(day, result.meals, preferences)
        if result.used_fallback:
            logger.warning(f"Meal plan for {day} ({slot or 'whole day'}) uses fallback options")
            publish_plan_fallback(day, slot, result.warning or "")
        else:
            publish_plan_generated(day, slot, result.meals)
        return PlanOutcome(plan, result)

    def generate_day(self, day: str, preferences: Preferences) -> PlanOutcome:
        return self._run(day, preferences, None)

    def swap_meal(self, day: str, slot: str, preferences: Preferences) -> PlanOutcome:
        return self._run(day, preferences, slot)

    def plan_for(self, day: str, preferences: Preferences) -> PlanOutcome:
        """Selecting a day: show its plan, generating one first if the day has none."""
        plan = self.repository.get(day)
        if plan is not None:
            return PlanOutcome(plan)
        return self.generate_day(day, preferences)
