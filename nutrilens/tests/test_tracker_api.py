import unittest
from datetime import date

from fastapi.testclient import TestClient

from nutrilens.api.api_run import app
from nutrilens.infra.Preferences_Repository import load_preferences
from nutrilens.infra.Storage import MemoryStorage, get_storage


class TestTrackerAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.storage = MemoryStorage()
        app.dependency_overrides[get_storage] = lambda: self.storage

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_meal_log_and_dashboard(self):
        first = self.client.post('/api/log/2024-08-01', json={
            "name": " Greek yogurt ", "time": "08:15", "calories": 180, "protein": 15, "carbs": 12, "fats": 8})
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json()["name"], "Greek yogurt")
        self.client.post('/api/log/2024-08-01', json={"name": "Salmon bowl", "calories": 620, "protein": 45})
        self.client.post('/api/water', json={"glasses": 4})

        dash = self.client.get('/api/dashboard', params={"date": "2024-08-01"}).json()
        self.assertEqual(dash["date"], "2024-08-01")
        self.assertEqual(dash["totals"]["calories"], 800.0)
        self.assertEqual(dash["totals"]["protein"], 60.0)
        self.assertEqual(dash["progress"]["protein"], 50.0)
        self.assertEqual(dash["water"]["progress"], 50.0)
        self.assertEqual(dash["reminders"]["water"], True)

        meal_id = first.json()["id"]
        self.assertEqual(self.client.delete(f'/api/log/2024-08-01/{meal_id}').status_code, 200)
        self.assertEqual(self.client.delete(f'/api/log/2024-08-01/{meal_id}').status_code, 404)
        self.assertEqual([m["name"] for m in self.client.get('/api/log/2024-08-01').json()], ["Salmon bowl"])

    def test_log_validation(self):
        self.assertEqual(self.client.post('/api/log/2024-08-01', json={"name": "  "}).status_code, 422)
        self.assertEqual(self.client.post('/api/log/2024-08-01', json={"name": "Tea", "time": "25:00"}).status_code,
                         422)
        self.assertEqual(self.client.post('/api/log/yesterday', json={"name": "Tea"}).status_code, 422)

    def test_dashboard_defaults_to_today(self):
        dash = self.client.get('/api/dashboard').json()
        self.assertEqual(dash["date"], date.today().isoformat())
        self.assertEqual(dash["meals"], [])

    def test_water_counter(self):
        self.assertEqual(self.client.get('/api/water').json(), {"glasses": 0})
        self.assertEqual(self.client.post('/api/water').json(), {"glasses": 1})
        self.assertEqual(self.client.post('/api/water', json={"glasses": 2}).json(), {"glasses": 3})
        self.assertEqual(self.client.post('/api/water', json={"glasses": -5}).json(), {"glasses": 0})
        self.assertEqual(self.client.post('/api/water', json={"glasses": 50}).status_code, 422)
        self.client.post('/api/water')
        self.assertEqual(self.client.delete('/api/water').json(), {"glasses": 0})

    def test_reminders(self):
        self.assertEqual(self.client.get('/api/reminders').json(),
                         {"water": True, "logging": False, "weekly_reports": True})
        resp = self.client.put('/api/reminders', json={"weekly_reports": False})
        self.assertEqual(resp.json(), {"water": True, "logging": False, "weekly_reports": False})


class TestProfileAPI(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.client = TestClient(app)

    def setUp(self):
        self.storage = MemoryStorage()
        app.dependency_overrides[get_storage] = lambda: self.storage

    def tearDown(self):
        app.dependency_overrides.clear()

    def test_onboarding_converts_form_values(self):
        resp = self.client.post('/api/onboarding', json={
            "name": "Sam", "age": " 34 ", "weight": "70.5", "height": "172", "gender": "other",
            "dietary_preferences": "Vegetarian, Low-Carb", "allergies": "Nuts, , Soy",
        })
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["age"], 34)
        self.assertEqual(data["weight"], 70.5)
        self.assertEqual(data["height"], 172.0)
        self.assertEqual(data["diet_type"], "Vegetarian")
        self.assertEqual(data["allergies"], ["Nuts", "Soy"])

        prefs = load_preferences(self.storage)
        self.assertEqual(prefs.diet, "Vegetarian")
        self.assertEqual(prefs.allergies, ["Nuts", "Soy"])
        self.assertEqual(self.client.get('/api/profile').json()["name"], "Sam")

    def test_onboarding_rejects_non_numeric_age(self):
        resp = self.client.post('/api/onboarding', json={"name": "Sam", "age": "old", "weight": "70", "height": "172"})
        self.assertEqual(resp.status_code, 422)

    def test_profile_update_keeps_existing_preferences(self):
        self.client.put('/api/preferences', json={"diet": "Keto", "allergies": ["Dairy"]})
        resp = self.client.put('/api/profile', json={"name": "  Alex ", "age": 29, "goal": "Lose weight"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Alex")
        prefs = load_preferences(self.storage)
        self.assertEqual((prefs.diet, prefs.allergies), ("Keto", ["Dairy"]))

    def test_empty_profile(self):
        self.assertEqual(self.client.get('/api/profile').json()["allergies"], [])


if __name__ == '__main__':
    unittest.main()
