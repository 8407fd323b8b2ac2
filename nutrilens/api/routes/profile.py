import logging

from fastapi import APIRouter, Depends

from nutrilens.domain.UserProfile import UserProfile, split_list
from nutrilens.infra.Profile_Repository import load_profile, save_profile
from nutrilens.infra.Storage import get_storage
from nutrilens.utilities.validators import OnboardingInput, ProfileInput

router = APIRouter(prefix="/api")
logger = logging.getLogger(__name__)


@router.get("/profile")
def get_profile(storage=Depends(get_storage)):
    return load_profile(storage).to_dict()


@router.put("/profile")
def update_profile(body: ProfileInput, storage=Depends(get_storage)):
    profile = save_profile(storage, UserProfile(**body.model_dump()))
    logger.info("Profile updated")
    return profile.to_dict()


@router.post("/onboarding")
def onboarding(body: OnboardingInput, storage=Depends(get_storage)):
    """First-run form: numeric text becomes numbers, comma-separated text becomes lists."""
    diets = split_list(body.dietary_preferences)
    profile = UserProfile(
        name=body.name.strip(),
        age=int(body.age),
        gender=body.gender,
        height=float(body.height),
        weight=float(body.weight),
        diet_type=diets[0] if diets else "",
        allergies=split_list(body.allergies),
    )
    save_profile(storage, profile)
    logger.info("Profile created during onboarding")
    return profile.to_dict()
