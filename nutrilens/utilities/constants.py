from typing import Final

DATE_FORMAT: Final[str] = "%Y-%m-%d"
SLOTS: Final[tuple[str, ...]] = ("breakfast", "lunch", "dinner")

DIET_OPTIONS: Final[list[str]] = ["Vegetarian", "Vegan", "Keto", "Paleo", "Low-Carb"]
ALLERGIES_LIST: Final[list[str]] = ["Dairy", "Gluten", "Nuts", "Shellfish", "Soy", "Eggs"]

# Storage keys (one independent record per key)
MEALS_KEY: Final[str] = "meals"
PREFERENCES_KEY: Final[str] = "preferences"
WATER_KEY: Final[str] = "waterIntake"
REMINDERS_KEY: Final[str] = "reminders"
RECENT_SCANS_KEY: Final[str] = "recentScans"
MEAL_LOG_KEY: Final[str] = "mealLog"
PROFILE_KEY: Final[str] = "profile"

MAX_RECENT_SCANS: Final[int] = 10
KJ_PER_KCAL: Final[float] = 4.184

DAILY_GOALS: Final[dict[str, int]] = {
    "calories": 2000,
    "protein": 120,
    "carbs": 250,
    "fats": 65,
    "water": 8,
}

DEFAULT_REMINDERS: Final[dict[str, bool]] = {
    "water": True,
    "logging": False,
    "weekly_reports": True,
}

MEAL_CANDIDATES: Final[dict[str, list[str]]] = {
    "breakfast": [
        "Oatmeal with fruits",
        "Yogurt with granola",
        "Avocado toast",
        "Smoothie bowl",
        "Pancakes with maple syrup",
    ],
    "lunch": [
        "Quinoa salad",
        "Grilled chicken wrap",
        "Vegetable soup",
        "Pasta primavera",
        "Burrito bowl",
    ],
    "dinner": [
        "Salmon with vegetables",
        "Stir-fried tofu",
        "Beef stew",
        "Vegetable lasagna",
        "Shrimp tacos",
    ],
}

# Ingredient keywords a diet rules out (matched case-insensitively)
DIET_EXCLUSIONS: Final[dict[str, list[str]]] = {
    "Vegan": ["chicken", "beef", "shrimp", "yogurt", "salmon"],
    "Vegetarian": ["chicken", "beef", "shrimp", "salmon"],
}

# Indexed by diet key: lower-cased diet with hyphens stripped
FALLBACK_MEALS: Final[dict[str, dict[str, str]]] = {
    "breakfast": {
        "default": "Oatmeal with fruits",
        "vegan": "Chia pudding with berries",
        "vegetarian": "Whole grain toast with avocado",
        "keto": "Avocado and spinach omelet",
        "paleo": "Mixed fruit bowl with nuts",
        "lowcarb": "Greek yogurt with berries",
    },
    "lunch": {
        "default": "Mixed greens salad",
        "vegan": "Hummus and vegetable wrap",
        "vegetarian": "Quinoa bowl with roasted vegetables",
        "keto": "Cauliflower rice with vegetables",
        "paleo": "Sweet potato and vegetable hash",
        "lowcarb": "Vegetable soup with leafy greens",
    },
    "dinner": {
        "default": "Vegetable stir-fry",
        "vegan": "Lentil and vegetable curry",
        "vegetarian": "Eggplant parmesan",
        "keto": "Zucchini noodles with pesto",
        "paleo": "Roasted vegetables with herbs",
        "lowcarb": "Cauliflower crust pizza with vegetables",
    },
}

PROMPT_TEMPLATE: Final[str] = (
    """Generate {meal_type} for {diet} {allergy}.
Never include {never}.
Respond ONLY with this plain JSON format (no markdown, no code blocks, just the raw JSON):
"""
)
MEAL_JSON_FORMAT: Final[str] = (
    """{
  "breakfast": "meal suggestion",
  "lunch": "meal suggestion",
  "dinner": "meal suggestion"
}"""
)

GENERATION_FAILED_MESSAGE: Final[str] = "Failed to generate meal. Using fallback options."
GENERATION_UNPARSABLE_MESSAGE: Final[str] = "AI response could not be read. Using fallback options."
