"""Preferences repository helpers (storage persistence)."""

from nutrilens.domain.Preferences import Preferences
from nutrilens.infra.Storage import load_json, save_json
from nutrilens.utilities.constants import PREFERENCES_KEY


def load_preferences(storage) -> Preferences:
    return Preferences.from_dict(load_json(storage, PREFERENCES_KEY, {}))


def save_preferences(storage, preferences: Preferences) -> Preferences:
    save_json(storage, PREFERENCES_KEY, preferences.to_dict())
    return preferences
