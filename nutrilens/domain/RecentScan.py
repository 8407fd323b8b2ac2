"""RecentScan domain entity: a barcode lookup remembered in the recent-scans list."""
import time
from typing import Optional

from nutrilens.domain.Product import Product


class RecentScan:
    def __init__(self, id: str, name: str, calories: int = 0, protein: float = 0,
                 image: Optional[str] = None, date: Optional[int] = None):
        self.id = id
        self.name = name
        self.calories = calories
        self.protein = protein
        self.image = image
        # epoch milliseconds
        self.date = date if date is not None else int(time.time() * 1000)

    def __str__(self) -> str:
        return f"{self.name} [{self.id}] - {self.calories} kcal, {self.protein}g protein"

    __repr__ = __str__

    @staticmethod
    def from_product(product: Product, timestamp: Optional[int] = None) -> "RecentScan":
        return RecentScan(
            id=product.barcode,
            name=product.product_name,
            calories=product.calories,
            protein=product.protein,
            image=product.image_url or None,
            date=timestamp,
        )

    @staticmethod
    def from_dict(data):
        if not isinstance(data, dict) or not data.get("id"):
            raise ValueError("Recent scan entry must be an object with an id")
        return RecentScan(
            id=str(data["id"]),
            name=str(data.get("name", "")),
            calories=data.get("calories", 0) or 0,
            protein=data.get("protein", 0) or 0,
            image=data.get("image"),
            date=int(data.get("date", 0) or 0),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "calories": self.calories,
            "protein": self.protein,
            "image": self.image,
            "date": self.date,
        }
