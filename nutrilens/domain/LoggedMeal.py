"""LoggedMeal domain entity: something the user ate on a given day, with its nutrition."""
from typing import Optional
from uuid import uuid4


class LoggedMeal:
    def __init__(self, name: str, time: str = "", calories: float = 0, protein: float = 0,
                 carbs: float = 0, fats: float = 0, image: str = "", id: Optional[str] = None):
        self.id = id or uuid4().hex
        self.name = name
        self.time = time
        self.calories = calories
        self.protein = protein
        self.carbs = carbs
        self.fats = fats
        self.image = image

    def __str__(self) -> str:
        return f"{self.name} at {self.time or '?'} - {self.calories} kcal"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        '''Creates a LoggedMeal from a dictionary. Ignores unknown keys.'''
        if not isinstance(data, dict) or not data.get("name"):
            raise ValueError("Logged meal entry must be an object with a name")
        allowed = {"id", "name", "time", "calories", "protein", "carbs", "fats", "image"}
        return LoggedMeal(**{k: v for k, v in data.items() if k in allowed})

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "time": self.time,
            "calories": self.calories,
            "protein": self.protein,
            "carbs": self.carbs,
            "fats": self.fats,
            "image": self.image,
        }
