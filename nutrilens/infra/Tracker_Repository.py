"""Daily tracking persistence: meal log, water intake counter and reminder settings.

Each record is stored under its own key; unreadable values fall back to defaults.
"""
import logging
from typing import Dict, List

from nutrilens.domain.LoggedMeal import LoggedMeal
from nutrilens.infra.Storage import load_json, save_json
from nutrilens.utilities.constants import (
    DEFAULT_REMINDERS,
    MEAL_LOG_KEY,
    REMINDERS_KEY,
    WATER_KEY,
)

logger = logging.getLogger(__name__)


# --- Water intake ---
def load_water(storage) -> int:
    raw = load_json(storage, WATER_KEY, 0)
    try:
        return max(int(raw), 0)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring malformed water intake value: {raw!r}")
        return 0


def save_water(storage, glasses: int) -> int:
    glasses = max(int(glasses), 0)
    save_json(storage, WATER_KEY, glasses)
    return glasses


def add_water(storage, delta: int = 1) -> int:
    with storage.lock:
        return save_water(storage, load_water(storage) + delta)


# --- Reminders ---
def load_reminders(storage) -> Dict[str, bool]:
    raw = load_json(storage, REMINDERS_KEY, None)
    reminders = dict(DEFAULT_REMINDERS)
    if isinstance(raw, dict):
        for k in reminders:
            if isinstance(raw.get(k), bool):
                reminders[k] = raw[k]
    elif raw is not None:
        logger.warning("Stored reminders are not an object; using defaults")
    return reminders


def save_reminders(storage, reminders: Dict[str, bool]) -> Dict[str, bool]:
    with storage.lock:
        merged = load_reminders(storage)
        merged.update({k: bool(v) for k, v in reminders.items() if k in DEFAULT_REMINDERS})
        save_json(storage, REMINDERS_KEY, merged)
    return merged


# --- Meal log ---
def _load_log(storage) -> Dict[str, list]:
    raw = load_json(storage, MEAL_LOG_KEY, {})
    if not isinstance(raw, dict):
        logger.warning("Stored meal log is not a mapping; ignoring it")
        return {}
    return raw


def load_logged_meals(storage, day: str) -> List[LoggedMeal]:
    entries = _load_log(storage).get(day)
    if not isinstance(entries, list):
        return []
    meals = []
    for entry in entries:
        try:
            meals.append(LoggedMeal.from_dict(entry))
        except (ValueError, TypeError) as e:
            logger.warning(f"Skipping malformed logged meal on {day}: {e}")
    return meals


def log_meal(storage, day: str, meal: LoggedMeal) -> List[LoggedMeal]:
    with storage.lock:
        log = _load_log(storage)
        meals = load_logged_meals(storage, day) + [meal]
        log[day] = [m.to_dict() for m in meals]
        save_json(storage, MEAL_LOG_KEY, log)
    return meals


def remove_logged_meal(storage, day: str, meal_id: str) -> bool:
    """Remove one entry; returns False when the id is unknown for that day."""
    with storage.lock:
        log = _load_log(storage)
        meals = load_logged_meals(storage, day)
        kept = [m for m in meals if m.id != meal_id]
        if len(kept) == len(meals):
            return False
        log[day] = [m.to_dict() for m in kept]
        save_json(storage, MEAL_LOG_KEY, log)
    return True
