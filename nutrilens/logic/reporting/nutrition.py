"""Daily nutrition totals compared against goals."""
from collections import defaultdict
from typing import Any, Dict, Iterable, Optional

from nutrilens.domain.LoggedMeal import LoggedMeal
from nutrilens.utilities.constants import DAILY_GOALS

MACROS = ('calories', 'protein', 'carbs', 'fats')


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def _progress(value: float, goal: float) -> float:
    if goal <= 0:
        return 0.0
    return round(min(value / goal * 100, 100.0), 1)


def compute_day_summary(meals: Iterable[LoggedMeal], water_glasses: int = 0,
                        goals: Optional[Dict[str, int]] = None):
    """Aggregate the day's logged meals.

    Returns structure:
    {
      'totals': { 'calories': kcal, 'protein': g, 'carbs': g, 'fats': g },
      'water': { 'glasses': int, 'goal': int, 'progress': pct },
      'goals': { 'calories': 2000, ... },
      'progress': { 'calories': pct, 'protein': pct, 'carbs': pct, 'fats': pct },
      'meals': [ {id, name, time, calories, protein, carbs, fats, image}, ... ]
    }
    """
    goals = goals or DAILY_GOALS
    totals = defaultdict(float)
    meal_list = list(meals)
    for meal in meal_list:
        for key in MACROS:
            totals[key] += _number(getattr(meal, key, 0))

    rounded = {key: round(totals[key], 1) for key in MACROS}
    return {
        'totals': rounded,
        'water': {
            'glasses': water_glasses,
            'goal': goals.get('water', 0),
            'progress': _progress(water_glasses, goals.get('water', 0)),
        },
        'goals': dict(goals),
        'progress': {key: _progress(rounded[key], goals.get(key, 0)) for key in MACROS},
        'meals': [m.to_dict() for m in meal_list],
    }


__all__ = ["compute_day_summary"]
