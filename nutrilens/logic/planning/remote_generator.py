"""AI meal suggestions with an offline fallback.

The model is asked for a raw JSON object with `breakfast`, `lunch` and `dinner`
keys. Markdown code fences around the reply are stripped before parsing. Any
transport error, unparsable reply, or reply missing a requested slot makes the
whole request fall back to the LocalMealGenerator; the caller gets the fallback
meals together with a warning message and never an exception.
"""
import json
import logging
import re
from dataclasses import dataclass
from json import JSONDecodeError
from typing import Dict, Optional, Tuple

from nutrilens.domain.Preferences import Preferences
from nutrilens.logic.planning.local_generator import LocalMealGenerator
from nutrilens.utilities.config import OPENAI_MODEL
from nutrilens.utilities.constants import (
    GENERATION_FAILED_MESSAGE,
    GENERATION_UNPARSABLE_MESSAGE,
    MEAL_JSON_FORMAT,
    PROMPT_TEMPLATE,
    SLOTS,
)

logger = logging.getLogger(__name__)


class MealResponseError(ValueError):
    """The model reply is not a usable meal JSON object."""


@dataclass
class GenerationResult:
    meals: Dict[str, str]
    used_fallback: bool = False
    warning: Optional[str] = None


# === Prompt ===
def build_prompt(preferences: Preferences, slot: Optional[str] = None) -> str:
    allergies = preferences.active_allergies()
    meal_type = f"a {slot} meal" if slot else "breakfast, lunch and dinner meals"
    diet = f"{preferences.diet} diet" if preferences.diet else "any diet"
    allergy = f"avoiding {', '.join(allergies)}" if allergies else "no allergy restrictions"
    never = ", ".join(allergies) if allergies else "any allergens"
    return PROMPT_TEMPLATE.format(meal_type=meal_type, diet=diet, allergy=allergy, never=never) + MEAL_JSON_FORMAT


# === Text Cleaning Helpers ===
def strip_code_fences(text: str) -> str:
    """Remove a leading ```json / ``` fence and a trailing ``` fence."""
    text = (text or "").strip()
    text = re.sub(r"^```(?:json)?", "", text, flags=re.IGNORECASE)
    text = re.sub(r"```$", "", text)
    return text.strip()


def parse_meals(text: str, slots: Tuple[str, ...]) -> Dict[str, str]:
    """Decode the model reply and return the requested slots verbatim."""
    try:
        parsed = json.loads(strip_code_fences(text))
    except JSONDecodeError as e:
        raise MealResponseError(f"Reply is not valid JSON: {e}") from e
    if not isinstance(parsed, dict):
        raise MealResponseError("Reply is not a JSON object")
    meals = {}
    for slot in slots:
        value = parsed.get(slot)
        if not isinstance(value, str) or not value.strip():
            raise MealResponseError(f"Reply has no usable '{slot}' entry")
        meals[slot] = value
    return meals


class RemoteMealGenerator:
    def __init__(self, client, local: LocalMealGenerator, model: str = OPENAI_MODEL):
        # client: an openai.OpenAI instance (or anything exposing responses.create); None means unavailable
        self.client = client
        self.local = local
        self.model = model

    def _complete(self, prompt: str) -> str:
        if self.client is None:
            raise RuntimeError("OPENAI_API_KEY not set; AI generation unavailable")
        response = self.client.responses.create(model=self.model, input=prompt)
        return (response.output_text or "").strip()

    def generate(self, preferences: Preferences, slot: Optional[str] = None) -> GenerationResult:
        """Generate the whole day, or only `slot` when given."""
        if slot is not None and slot not in SLOTS:
            raise ValueError(f"Unknown meal slot: {slot!r}")
        slots = (slot,) if slot else SLOTS
        prompt = build_prompt(preferences, slot)

        try:
            text = self._complete(prompt)
        except Exception:
            logger.exception("Error generating meal; using fallback options")
            return self._fallback(preferences, slots, GENERATION_FAILED_MESSAGE)

        try:
            meals = parse_meals(text, slots)
        except MealResponseError as e:
            logger.warning(f"Failed to parse AI response ({e}). Text was: {text!r}")
            return self._fallback(preferences, slots, GENERATION_UNPARSABLE_MESSAGE)

        return GenerationResult(meals=meals)

    def _fallback(self, preferences: Preferences, slots: Tuple[str, ...], warning: str) -> GenerationResult:
        return GenerationResult(meals=self.local.generate(preferences, slots), used_fallback=True, warning=warning)
