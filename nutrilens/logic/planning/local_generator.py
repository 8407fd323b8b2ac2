"""Offline meal suggestions.

Picks a meal name per slot from a fixed candidate list, dropping candidates the
selected diet or any active allergy rules out. Matching is a case-insensitive
substring test, so "Nuts" also removes "Donuts". When nothing survives the
filter, a fixed per-diet fallback dish is returned.
"""
import random
import re
from typing import Dict, Iterable, List, Optional

from nutrilens.domain.Preferences import Preferences
from nutrilens.utilities.constants import DIET_EXCLUSIONS, FALLBACK_MEALS, MEAL_CANDIDATES, SLOTS

_DIET_PATTERNS = {
    diet: re.compile("|".join(re.escape(word) for word in words), re.IGNORECASE)
    for diet, words in DIET_EXCLUSIONS.items()
}


def _check_slot(slot: str) -> None:
    if slot not in SLOTS:
        raise ValueError(f"Unknown meal slot: {slot!r}")


class LocalMealGenerator:
    def __init__(self, rng: Optional[random.Random] = None,
                 candidates: Optional[Dict[str, List[str]]] = None,
                 fallbacks: Optional[Dict[str, Dict[str, str]]] = None):
        self.rng = rng or random.Random()
        self.candidates = candidates or MEAL_CANDIDATES
        self.fallbacks = fallbacks or FALLBACK_MEALS

    def allowed_candidates(self, slot: str, preferences: Preferences) -> List[str]:
        """Candidates for `slot` that pass the diet blacklist and allergy filter, in list order."""
        _check_slot(slot)
        diet_pattern = _DIET_PATTERNS.get(preferences.diet)
        allergies = [a.lower() for a in preferences.active_allergies()]
        allowed = []
        for option in self.candidates.get(slot, []):
            if diet_pattern and diet_pattern.search(option):
                continue
            if any(allergy in option.lower() for allergy in allergies):
                continue
            allowed.append(option)
        return allowed

    def fallback_meal(self, slot: str, preferences: Preferences) -> str:
        _check_slot(slot)
        table = self.fallbacks[slot]
        return table.get(preferences.diet_key) or table["default"]

    def generate_meal(self, slot: str, preferences: Preferences) -> str:
        options = self.allowed_candidates(slot, preferences)
        if options:
            return self.rng.choice(options)
        return self.fallback_meal(slot, preferences)

    def generate(self, preferences: Preferences, slots: Iterable[str] = SLOTS) -> Dict[str, str]:
        """Suggest one meal for each requested slot, in breakfast/lunch/dinner order."""
        return {slot: self.generate_meal(slot, preferences) for slot in slots}
