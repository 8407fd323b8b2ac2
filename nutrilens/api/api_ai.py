import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from openai import OpenAI

from nutrilens.domain.DailyPlan import DailyPlan
from nutrilens.domain.Preferences import Preferences
from nutrilens.infra.Plan_Repository import PlanRepository
from nutrilens.infra.Preferences_Repository import load_preferences, save_preferences
from nutrilens.infra.Storage import get_storage
from nutrilens.logic.planning.local_generator import LocalMealGenerator
from nutrilens.logic.planning.planner import (
    GLOBAL_GENERATION_GUARD,
    GenerationInProgressError,
    MealPlanner,
    PlanOutcome,
)
from nutrilens.logic.planning.remote_generator import RemoteMealGenerator
from nutrilens.utilities.config import GENERATION_TIMEOUT, OPENAI_API_KEY, OPENAI_MODEL
from nutrilens.utilities.constants import SLOTS
from nutrilens.utilities.validators import PreferencesInput, parse_iso_date

logger = logging.getLogger(__name__)


# === Helper: Get OpenAI Client ===
def get_openai_client() -> Optional[OpenAI]:
    """Return an OpenAI client if OPENAI_API_KEY is set, otherwise None."""
    if not OPENAI_API_KEY:
        logger.warning("OPENAI_API_KEY not set; meal plans will use fallback options.")
        return None
    return OpenAI(api_key=OPENAI_API_KEY, timeout=GENERATION_TIMEOUT, max_retries=0)


def get_meal_planner(storage=Depends(get_storage)) -> MealPlanner:
    generator = RemoteMealGenerator(get_openai_client(), LocalMealGenerator(), model=OPENAI_MODEL)
    return MealPlanner(PlanRepository(storage), generator, GLOBAL_GENERATION_GUARD)


# === Response helpers ===
def check_day(day: str) -> str:
    """Validate a path date, answering 422 when it is not YYYY-MM-DD."""
    try:
        return parse_iso_date(day)
    except ValueError:
        raise HTTPException(status_code=422, detail=f"Invalid date '{day}', expected YYYY-MM-DD")


def _plan_dict(plan: DailyPlan):
    data = plan.to_dict()
    data["date"] = plan.date
    data["complete"] = plan.is_complete()
    return data


def _outcome_dict(outcome: PlanOutcome):
    data = _plan_dict(outcome.plan)
    data.update({
        "generated": outcome.generated,
        "used_fallback": outcome.used_fallback,
        "warning": outcome.warning,
    })
    return data


def _resolve_preferences(storage, body: Optional[PreferencesInput]) -> Preferences:
    """Explicit preferences in the request win over the stored ones."""
    if body is None:
        return load_preferences(storage)
    return Preferences(body.diet, body.allergies)


def _generate(action, storage, body: Optional[PreferencesInput], preferences: Preferences):
    """Run a planner action; explicit request preferences are stored only once it succeeded."""
    try:
        outcome = action()
    except GenerationInProgressError as e:
        raise HTTPException(status_code=409, detail=str(e))
    if body is not None:
        save_preferences(storage, preferences)
    return _outcome_dict(outcome)


# === FastAPI Endpoints ===
router = APIRouter(prefix="/api")


@router.get("/preferences")
def get_preferences(storage=Depends(get_storage)):
    return load_preferences(storage).to_dict()


@router.put("/preferences")
def update_preferences(body: PreferencesInput, storage=Depends(get_storage)):
    return save_preferences(storage, Preferences(body.diet, body.allergies)).to_dict()


@router.get("/plan/week/{start}")
def get_week(start: str, storage=Depends(get_storage)):
    start_date = date.fromisoformat(check_day(start))
    week = PlanRepository(storage).week(start_date)
    return {
        "start": start,
        "days": [{"date": d, "plan": _plan_dict(p) if p else None} for d, p in week.items()],
    }


@router.get("/plan/{day}")
def get_plan(day: str, storage=Depends(get_storage)):
    plan = PlanRepository(storage).get(check_day(day))
    if plan is None:
        raise HTTPException(status_code=404, detail=f"No meal plan for {day}")
    return _plan_dict(plan)


@router.post("/plan/{day}/select")
def select_day(day: str, preferences: Optional[PreferencesInput] = Body(None),
               storage=Depends(get_storage), planner: MealPlanner = Depends(get_meal_planner)):
    """Open a day: returns its plan, generating a whole day first when there is none yet."""
    day = check_day(day)
    prefs = _resolve_preferences(storage, preferences)
    return _generate(lambda: planner.plan_for(day, prefs), storage, preferences, prefs)


@router.post("/plan/{day}/generate")
def generate_plan(day: str, preferences: Optional[PreferencesInput] = Body(None),
                  storage=Depends(get_storage), planner: MealPlanner = Depends(get_meal_planner)):
    day = check_day(day)
    prefs = _resolve_preferences(storage, preferences)
    return _generate(lambda: planner.generate_day(day, prefs), storage, preferences, prefs)


@router.post("/plan/{day}/swap/{slot}")
def swap_meal(day: str, slot: str, preferences: Optional[PreferencesInput] = Body(None),
              storage=Depends(get_storage), planner: MealPlanner = Depends(get_meal_planner)):
    day = check_day(day)
    if slot not in SLOTS:
        raise HTTPException(status_code=422, detail=f"Unknown meal slot '{slot}'")
    prefs = _resolve_preferences(storage, preferences)
    return _generate(lambda: planner.swap_meal(day, slot, prefs), storage, preferences, prefs)
