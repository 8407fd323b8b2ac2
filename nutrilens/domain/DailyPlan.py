"""DailyPlan domain entity: one day's breakfast/lunch/dinner plus the preferences used to generate them.

An empty slot string means the slot was never generated.
"""
from typing import Dict, Optional

from nutrilens.domain.Preferences import Preferences
from nutrilens.utilities.constants import SLOTS


class DailyPlan:
    def __init__(self, date: str, breakfast: str = "", lunch: str = "", dinner: str = "",
                 preferences: Optional[Preferences] = None):
        self.date = date
        self.breakfast = breakfast
        self.lunch = lunch
        self.dinner = dinner
        self.preferences = preferences or Preferences()

    def __str__(self) -> str:
        return (f"{self.date} - Breakfast: {self.breakfast or '-'} - Lunch: {self.lunch or '-'}"
                f" - Dinner: {self.dinner or '-'} - {self.preferences}")

    __repr__ = __str__

    def meals(self) -> Dict[str, str]:
        return {slot: getattr(self, slot) for slot in SLOTS}

    def is_generated(self, slot: str) -> bool:
        return bool(getattr(self, slot, ""))

    def is_complete(self) -> bool:
        return all(self.is_generated(slot) for slot in SLOTS)

    def merge(self, meals: Dict[str, str], preferences: Preferences) -> None:
        """Shallow merge at slot level; the preferences snapshot is always replaced."""
        for slot in SLOTS:
            if slot in meals:
                setattr(self, slot, meals[slot])
        self.preferences = preferences

    @staticmethod
    def from_dict(date: str, data) -> "DailyPlan":
        if not isinstance(data, dict):
            raise ValueError(f"Plan entry for {date} is not an object")
        slots = {}
        for slot in SLOTS:
            val = data.get(slot, "")
            slots[slot] = val if isinstance(val, str) else ""
        return DailyPlan(date, preferences=Preferences.from_dict(data.get("preferences")), **slots)

    def to_dict(self):
        return {
            "breakfast": self.breakfast,
            "lunch": self.lunch,
            "dinner": self.dinner,
            "preferences": self.preferences.to_dict(),
        }
