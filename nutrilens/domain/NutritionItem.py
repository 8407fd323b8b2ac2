"""NutritionItem domain entity: one record returned by the nutrition lookup service."""
from typing import Iterable


NUMERIC_FIELDS = (
    "calories", "serving_size_g", "fat_total_g", "fat_saturated_g", "protein_g",
    "sodium_mg", "potassium_mg", "cholesterol_mg", "carbohydrates_total_g",
    "fiber_g", "sugar_g",
)


def _to_float(value) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        # the free tier answers with strings like "Only available for premium subscribers."
        return 0.0


class NutritionItem:
    def __init__(self, name: str = "", **nutrients):
        self.name = name
        for field in NUMERIC_FIELDS:
            setattr(self, field, _to_float(nutrients.get(field, 0)))

    def __str__(self) -> str:
        return (f"{self.name} - {self.calories} cal | {self.serving_size_g}g - "
                f"P {self.protein_g}g C {self.carbohydrates_total_g}g F {self.fat_total_g}g")

    __repr__ = __str__

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return NutritionItem(str(d.get("name", "")), **{k: d.get(k, 0) for k in NUMERIC_FIELDS})

    def to_dict(self):
        data = {"name": self.name}
        data.update({field: getattr(self, field) for field in NUMERIC_FIELDS})
        return data


def compute_totals(items: Iterable[NutritionItem]):
    """Sum calories and macros over the selected ingredients."""
    totals = {"calories": 0.0, "protein": 0.0, "carbs": 0.0, "fat": 0.0}
    for item in items:
        totals["calories"] += item.calories
        totals["protein"] += item.protein_g
        totals["carbs"] += item.carbohydrates_total_g
        totals["fat"] += item.fat_total_g
    return {k: round(v, 1) for k, v in totals.items()}
