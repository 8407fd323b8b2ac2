"""User profile repository helpers (storage persistence)."""
import logging

from nutrilens.domain.Preferences import Preferences
from nutrilens.domain.UserProfile import UserProfile
from nutrilens.infra.Preferences_Repository import load_preferences, save_preferences
from nutrilens.infra.Storage import load_json, save_json
from nutrilens.utilities.constants import PROFILE_KEY

logger = logging.getLogger(__name__)


def load_profile(storage) -> UserProfile:
    raw = load_json(storage, PROFILE_KEY, {})
    if not isinstance(raw, dict):
        logger.warning("Stored profile is not an object; using an empty profile")
        raw = {}
    return UserProfile.from_dict(raw)


def save_profile(storage, profile: UserProfile) -> UserProfile:
    """Persist the profile and carry its diet and allergies over to the meal preferences."""
    with storage.lock:
        save_json(storage, PROFILE_KEY, profile.to_dict())
        current = load_preferences(storage)
        save_preferences(storage, Preferences(
            diet=profile.diet_type or current.diet,
            allergies=profile.allergies or current.allergies,
        ))
    return profile
