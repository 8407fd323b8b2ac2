"""
Input validation schemas using Pydantic for better data integrity.
"""
from datetime import date
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


def parse_iso_date(value: str) -> str:
    """Validate a YYYY-MM-DD string and return it unchanged."""
    if not isinstance(value, str) or len(value) != 10:
        raise ValueError('Date must use the YYYY-MM-DD format')
    date.fromisoformat(value)
    return value


class PreferencesInput(BaseModel):
    """Schema for meal preferences. Unknown diets and allergies are accepted as-is."""
    diet: str = Field("", max_length=50)
    allergies: List[str] = Field(default_factory=list)

    @field_validator('diet')
    @classmethod
    def strip_diet(cls, v):
        """Treat the 'none' option as no diet."""
        v = v.strip()
        return "" if v.lower() == "none" else v

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        """Drop blank tags and duplicates, keep order."""
        seen = []
        for tag in v:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class NutritionItemInput(BaseModel):
    """Schema for an ingredient selected in the nutrition calculator."""
    name: str = Field(..., min_length=1, max_length=200)
    calories: float = Field(0, ge=0)
    serving_size_g: float = Field(0, ge=0)
    fat_total_g: float = Field(0, ge=0)
    fat_saturated_g: float = Field(0, ge=0)
    protein_g: float = Field(0, ge=0)
    sodium_mg: float = Field(0, ge=0)
    potassium_mg: float = Field(0, ge=0)
    cholesterol_mg: float = Field(0, ge=0)
    carbohydrates_total_g: float = Field(0, ge=0)
    fiber_g: float = Field(0, ge=0)
    sugar_g: float = Field(0, ge=0)


class TotalsInput(BaseModel):
    items: List[NutritionItemInput] = Field(default_factory=list)


class LoggedMealInput(BaseModel):
    """Schema for a meal added to the daily log."""
    name: str = Field(..., min_length=1, max_length=200)
    time: str = Field("", pattern=r'^$|^([01]\d|2[0-3]):[0-5]\d$')
    calories: float = Field(0, ge=0, le=10000)
    protein: float = Field(0, ge=0, le=1000)
    carbs: float = Field(0, ge=0, le=1000)
    fats: float = Field(0, ge=0, le=1000)
    image: str = ""

    @field_validator('name')
    @classmethod
    def strip_name(cls, v):
        if not v.strip():
            raise ValueError('Meal name cannot be empty')
        return v.strip()


class WaterInput(BaseModel):
    glasses: int = Field(1, ge=-20, le=20)


class RemindersInput(BaseModel):
    water: Optional[bool] = None
    logging: Optional[bool] = None
    weekly_reports: Optional[bool] = None

    def changes(self) -> Dict[str, bool]:
        return {k: v for k, v in self.model_dump().items() if v is not None}


class ProfileInput(BaseModel):
    """Schema for the profile page."""
    name: str = Field("", max_length=100)
    age: Optional[int] = Field(None, ge=1, le=120)
    gender: str = Field("", pattern=r'^(|male|female|other)$')
    height: Optional[float] = Field(None, gt=0, le=300)
    weight: Optional[float] = Field(None, gt=0, le=500)
    goal: str = Field("", max_length=100)
    diet_type: str = Field("", max_length=50)
    allergies: List[str] = Field(default_factory=list)

    @field_validator('name', 'goal', 'diet_type')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        return v.strip() if isinstance(v, str) else v

    @field_validator('allergies')
    @classmethod
    def validate_allergies(cls, v):
        return [a.strip() for a in v if a and a.strip()]


class OnboardingInput(BaseModel):
    """Schema for the onboarding form: numbers arrive as text, lists as comma-separated text."""
    name: str = Field(..., min_length=1, max_length=100)
    age: str = Field(..., pattern=r'^\s*\d{1,3}\s*$')
    weight: str = Field(..., pattern=r'^\s*\d+(\.\d+)?\s*$')
    height: str = Field(..., pattern=r'^\s*\d+(\.\d+)?\s*$')
    gender: str = Field("other", pattern=r'^(male|female|other)$')
    dietary_preferences: str = ""
    allergies: str = ""


__all__ = [
    'parse_iso_date', 'PreferencesInput', 'NutritionItemInput', 'TotalsInput',
    'LoggedMealInput', 'WaterInput', 'RemindersInput', 'ProfileInput', 'OnboardingInput',
]
