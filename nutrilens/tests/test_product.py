import unittest

from nutrilens.domain.Product import Product, format_nutrient, parse_allergens
from nutrilens.domain.RecentScan import RecentScan

OFF_PRODUCT = {
    "product_name": "Crunchy Peanut Butter",
    "brands": "Nutty Co",
    "serving_size": "30 g",
    "nutriments": {"energy": 2510, "proteins": 25.3, "carbohydrates": 12.0, "fat": 50.1, "sugars": "n/a"},
    "nutrients": {"iron": "1.9mg", "calcium": ""},
    "ingredients_text": "Peanuts, salt",
    "allergens": "en:peanuts, en:soybeans,,",
    "image_url": "https://images.example/pb.jpg",
    "nova_group": "3",
    "ecoscore_grade": "c",
}


class TestProductHelpers(unittest.TestCase):
    def test_parse_allergens(self):
        self.assertEqual(parse_allergens("en:milk,en:soybeans"), ["milk", "soybeans"])
        self.assertEqual(parse_allergens(" en:gluten , fr:lait"), ["gluten", "fr:lait"])
        self.assertEqual(parse_allergens(""), [])
        self.assertEqual(parse_allergens(None), [])

    def test_format_nutrient(self):
        self.assertEqual(format_nutrient(2.34, "g", 2), "4.7g")
        self.assertEqual(format_nutrient(12.0, "g"), "12g")
        self.assertEqual(format_nutrient(0, "g"), "0g")
        self.assertEqual(format_nutrient(None, "g"), "N/A")
        self.assertEqual(format_nutrient(float("nan"), "g"), "N/A")


class TestProduct(unittest.TestCase):
    def test_from_api(self):
        product = Product.from_api("737628064502", OFF_PRODUCT)
        self.assertEqual(product.product_name, "Crunchy Peanut Butter")
        self.assertEqual(product.nutriments, {"energy": 2510, "proteins": 25.3, "carbohydrates": 12.0, "fat": 50.1})
        self.assertEqual(product.nutrients, {"iron": "1.9mg"})
        self.assertEqual(product.allergen_list(), ["peanuts", "soybeans"])
        self.assertEqual(product.nova_group, 3)
        self.assertEqual(product.nova_label(), "Processed foods")

    def test_calories_from_kilojoules(self):
        self.assertEqual(Product("1", nutriments={"energy": 1046}).calories, 250)
        self.assertEqual(Product("1").calories, 0)
        self.assertEqual(Product("1").protein, 0)

    def test_to_dict_scales_serving(self):
        data = Product.from_api("737628064502", OFF_PRODUCT).to_dict(serving_multiplier=2)
        self.assertEqual(data["calories"], 600)
        self.assertEqual(data["serving"]["protein"], "50.6g")
        self.assertEqual(data["serving"]["fat"], "100.2g")
        self.assertEqual(data["serving"]["fiber"], "N/A")
        self.assertEqual(data["allergens"], ["peanuts", "soybeans"])

    def test_sparse_product(self):
        product = Product.from_api("42", {"nova_group": "x"})
        self.assertEqual(product.product_name, "")
        self.assertIsNone(product.nova_group)
        self.assertIsNone(product.nova_label())


class TestRecentScan(unittest.TestCase):
    def test_from_product(self):
        product = Product.from_api("737628064502", OFF_PRODUCT)
        scan = RecentScan.from_product(product, timestamp=1700000000000)
        self.assertEqual(scan.to_dict(), {
            "id": "737628064502",
            "name": "Crunchy Peanut Butter",
            "calories": 600,
            "protein": 25.3,
            "image": "https://images.example/pb.jpg",
            "date": 1700000000000,
        })

    def test_from_dict_requires_id(self):
        with self.assertRaises(ValueError):
            RecentScan.from_dict({"name": "No barcode"})
        with self.assertRaises(ValueError):
            RecentScan.from_dict("junk")


if __name__ == '__main__':
    unittest.main()
