from datetime import date
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Query

from nutrilens.api.api_ai import check_day
from nutrilens.domain.LoggedMeal import LoggedMeal
from nutrilens.infra.Storage import get_storage
from nutrilens.infra.Tracker_Repository import (
    add_water,
    load_logged_meals,
    load_reminders,
    load_water,
    log_meal,
    remove_logged_meal,
    save_reminders,
    save_water,
)
from nutrilens.logic.reporting.nutrition import compute_day_summary
from nutrilens.utilities.constants import DATE_FORMAT
from nutrilens.utilities.validators import LoggedMealInput, RemindersInput, WaterInput

router = APIRouter(prefix="/api")


# -------------------- Meal log --------------------
@router.get("/log/{day}")
def get_log(day: str, storage=Depends(get_storage)):
    return [m.to_dict() for m in load_logged_meals(storage, check_day(day))]


@router.post("/log/{day}")
def add_log_entry(day: str, body: LoggedMealInput, storage=Depends(get_storage)):
    meal = LoggedMeal(**body.model_dump())
    log_meal(storage, check_day(day), meal)
    return meal.to_dict()


@router.delete("/log/{day}/{meal_id}")
def delete_log_entry(day: str, meal_id: str, storage=Depends(get_storage)):
    if not remove_logged_meal(storage, check_day(day), meal_id):
        raise HTTPException(status_code=404, detail="Logged meal not found")
    return {"status": "deleted", "id": meal_id}


# -------------------- Dashboard --------------------
@router.get("/dashboard")
def dashboard(day: Optional[str] = Query(default=None, alias="date"), storage=Depends(get_storage)):
    """Today's (or the given day's) totals against the daily goals."""
    day = check_day(day) if day else date.today().strftime(DATE_FORMAT)
    summary = compute_day_summary(load_logged_meals(storage, day), load_water(storage))
    summary["date"] = day
    summary["reminders"] = load_reminders(storage)
    return summary


# -------------------- Water --------------------
@router.get("/water")
def get_water(storage=Depends(get_storage)):
    return {"glasses": load_water(storage)}


@router.post("/water")
def drink_water(body: Optional[WaterInput] = Body(None), storage=Depends(get_storage)):
    return {"glasses": add_water(storage, body.glasses if body else 1)}


@router.delete("/water")
def reset_water(storage=Depends(get_storage)):
    return {"glasses": save_water(storage, 0)}


# -------------------- Reminders --------------------
@router.get("/reminders")
def get_reminders(storage=Depends(get_storage)):
    return load_reminders(storage)


@router.put("/reminders")
def update_reminders(body: RemindersInput, storage=Depends(get_storage)):
    return save_reminders(storage, body.changes())
