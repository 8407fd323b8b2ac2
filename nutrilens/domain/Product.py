"""Product domain entity: packaged food record returned by the barcode lookup service."""
from typing import Dict, List, Optional

from nutrilens.utilities.constants import KJ_PER_KCAL

NOVA_GROUPS = {
    1: "Unprocessed or minimally processed foods",
    2: "Processed culinary ingredients",
    3: "Processed foods",
    4: "Ultra-processed food and drink products",
}

NUTRIMENT_KEYS = ("energy", "proteins", "carbohydrates", "fat", "fiber", "sugars", "salt")
NUTRIENT_KEYS = ("vitamin-a", "vitamin-c", "calcium", "iron")


class Product:
    def __init__(self, barcode: str, product_name: str = "", brands: str = "", serving_size: str = "",
                 nutriments: Optional[Dict[str, float]] = None, nutrients: Optional[Dict[str, str]] = None,
                 ingredients_text: str = "", allergens: str = "", image_url: str = "",
                 nova_group: Optional[int] = None, ecoscore_grade: str = ""):
        self.barcode = barcode
        self.product_name = product_name
        self.brands = brands
        self.serving_size = serving_size
        self.nutriments = dict(nutriments) if nutriments else {}
        self.nutrients = dict(nutrients) if nutrients else {}
        self.ingredients_text = ingredients_text
        self.allergens = allergens
        self.image_url = image_url
        self.nova_group = nova_group
        self.ecoscore_grade = ecoscore_grade

    def __str__(self) -> str:
        return f"{self.product_name or self.barcode} ({self.brands or 'unknown brand'})"

    __repr__ = __str__

    @property
    def calories(self) -> int:
        """Energy converted from kJ to kcal, 0 when the product has none."""
        energy = self.nutriments.get("energy")
        if not energy:
            return 0
        return round(energy / KJ_PER_KCAL)

    @property
    def protein(self) -> float:
        return self.nutriments.get("proteins") or 0

    def allergen_list(self) -> List[str]:
        return parse_allergens(self.allergens)

    def nova_label(self) -> Optional[str]:
        return NOVA_GROUPS.get(self.nova_group) if self.nova_group else None

    @staticmethod
    def from_api(barcode: str, data) -> "Product":
        """Build a Product from the `product` object of an Open Food Facts response."""
        p = data if isinstance(data, dict) else {}
        raw_nutriments = p.get("nutriments") if isinstance(p.get("nutriments"), dict) else {}
        nutriments = {}
        for key in NUTRIMENT_KEYS:
            val = raw_nutriments.get(key)
            if isinstance(val, (int, float)) and not isinstance(val, bool):
                nutriments[key] = val
        raw_nutrients = p.get("nutrients") if isinstance(p.get("nutrients"), dict) else {}
        nutrients = {k: str(raw_nutrients[k]) for k in NUTRIENT_KEYS if raw_nutrients.get(k)}
        nova = p.get("nova_group")
        try:
            nova = int(nova) if nova not in (None, "") else None
        except (TypeError, ValueError):
            nova = None
        return Product(
            barcode=barcode,
            product_name=p.get("product_name") or "",
            brands=p.get("brands") or "",
            serving_size=p.get("serving_size") or "",
            nutriments=nutriments,
            nutrients=nutrients,
            ingredients_text=p.get("ingredients_text") or "",
            allergens=p.get("allergens") or "",
            image_url=p.get("image_url") or "",
            nova_group=nova,
            ecoscore_grade=p.get("ecoscore_grade") or "",
        )

    def to_dict(self, serving_multiplier: float = 1):
        return {
            "barcode": self.barcode,
            "product_name": self.product_name,
            "brands": self.brands,
            "serving_size": self.serving_size,
            "nutriments": self.nutriments,
            "nutrients": self.nutrients,
            "ingredients_text": self.ingredients_text,
            "allergens": self.allergen_list(),
            "image_url": self.image_url,
            "nova_group": self.nova_group,
            "nova_label": self.nova_label(),
            "ecoscore_grade": self.ecoscore_grade,
            "calories": self.calories,
            "serving": {
                "multiplier": serving_multiplier,
                "protein": format_nutrient(self.nutriments.get("proteins"), "g", serving_multiplier),
                "carbohydrates": format_nutrient(self.nutriments.get("carbohydrates"), "g", serving_multiplier),
                "fat": format_nutrient(self.nutriments.get("fat"), "g", serving_multiplier),
                "fiber": format_nutrient(self.nutriments.get("fiber"), "g", serving_multiplier),
                "sugars": format_nutrient(self.nutriments.get("sugars"), "g", serving_multiplier),
                "salt": format_nutrient(self.nutriments.get("salt"), "g", serving_multiplier),
            },
        }


def parse_allergens(allergens: Optional[str]) -> List[str]:
    """Split an allergen tag string such as 'en:milk,en:soybeans' into plain names."""
    if not allergens:
        return []
    parsed = [a.replace("en:", "", 1).strip() for a in allergens.split(",")]
    return [a for a in parsed if a]


def format_nutrient(value: Optional[float], unit: str = "", multiplier: float = 1) -> str:
    if value is None or value != value:
        return "N/A"
    scaled = round(value * multiplier * 10) / 10
    return f"{scaled:g}{unit}"
