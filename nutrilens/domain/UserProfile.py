"""UserProfile domain entity: personal details collected during onboarding and on the profile page."""
from typing import List, Optional


class UserProfile:
    def __init__(self, name: str = "", age: Optional[int] = None, gender: str = "",
                 height: Optional[float] = None, weight: Optional[float] = None, goal: str = "",
                 diet_type: str = "", allergies: Optional[List[str]] = None):
        self.name = name
        self.age = age
        self.gender = gender
        self.height = height
        self.weight = weight
        self.goal = goal
        self.diet_type = diet_type
        self.allergies = allergies[:] if allergies else []

    def __str__(self) -> str:
        return f"{self.name or 'anonymous'} - {self.age or '?'}y - goal: {self.goal or '-'}"

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        allowed = {"name", "age", "gender", "height", "weight", "goal", "diet_type", "allergies"}
        filtered = {k: v for k, v in d.items() if k in allowed}
        if not isinstance(filtered.get("allergies"), list):
            filtered["allergies"] = []
        return UserProfile(**filtered)

    def to_dict(self):
        return {
            "name": self.name,
            "age": self.age,
            "gender": self.gender,
            "height": self.height,
            "weight": self.weight,
            "goal": self.goal,
            "diet_type": self.diet_type,
            "allergies": self.allergies,
        }


def split_list(value: Optional[str]) -> List[str]:
    """Split a comma-separated form field into trimmed, non-empty items."""
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]
