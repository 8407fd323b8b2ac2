"""Preferences domain entity: diet type and allergy exclusions used for meal generation."""
from typing import List, Optional


class Preferences:
    def __init__(self, diet: str = "", allergies: Optional[List[str]] = None):
        self.diet = diet or ""
        self.allergies = list(allergies) if allergies else []

    def __eq__(self, other):
        if not isinstance(other, Preferences):
            return NotImplemented
        return self.diet == other.diet and self.allergies == other.allergies

    def __str__(self) -> str:
        allergies = ", ".join(self.allergies) if self.allergies else "none"
        return f"Diet: {self.diet or 'any'} - Allergies: {allergies}"

    __repr__ = __str__

    @property
    def diet_key(self) -> str:
        """Lower-cased, hyphen-stripped diet used to index the fallback table."""
        if not self.diet:
            return "default"
        return self.diet.lower().replace("-", "")

    def active_allergies(self) -> List[str]:
        return [a.strip() for a in self.allergies if isinstance(a, str) and a.strip()]

    @staticmethod
    def from_dict(data):
        '''Creates Preferences from a stored dictionary. Ignores unknown keys.'''
        d = dict(data) if isinstance(data, dict) else {}
        diet = d.get("diet") if isinstance(d.get("diet"), str) else ""
        allergies = d.get("allergies")
        if not isinstance(allergies, list):
            allergies = []
        return Preferences(diet, [str(a) for a in allergies])

    def to_dict(self):
        return {"diet": self.diet, "allergies": list(self.allergies)}
