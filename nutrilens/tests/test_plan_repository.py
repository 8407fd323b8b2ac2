import json
import os
import tempfile
import unittest
from datetime import date

from nutrilens.domain.Preferences import Preferences
from nutrilens.infra.Plan_Repository import PlanRepository
from nutrilens.infra.Storage import FileStorage, MemoryStorage
from nutrilens.utilities.constants import MEALS_KEY


class _FailingStorage(MemoryStorage):
    def set_item(self, key, value):
        raise OSError("disk full")


class TestPlanRepository(unittest.TestCase):
    def setUp(self):
        self.storage = MemoryStorage()
        self.repo = PlanRepository(self.storage)

    def test_swap_merges_single_slot_and_replaces_preferences(self):
        self.repo.set("2024-01-01", {"breakfast": "Oats", "lunch": "Soup", "dinner": "Stew"},
                      Preferences("", []))
        vegan = Preferences("Vegan", [])
        self.repo.set("2024-01-01", {"lunch": "New Dish"}, vegan)

        plan = self.repo.get("2024-01-01")
        self.assertEqual(plan.meals(), {"breakfast": "Oats", "lunch": "New Dish", "dinner": "Stew"})
        self.assertEqual(plan.preferences, vegan)

    def test_first_set_leaves_other_slots_ungenerated(self):
        plan = self.repo.set("2024-02-10", {"dinner": "Curry"}, Preferences())
        self.assertEqual(plan.breakfast, "")
        self.assertFalse(plan.is_generated("breakfast"))
        self.assertTrue(plan.is_generated("dinner"))
        self.assertFalse(plan.is_complete())

    def test_plans_persist_as_one_mapping(self):
        self.repo.set("2024-03-01", {"breakfast": "A", "lunch": "B", "dinner": "C"}, Preferences("Keto", ["Nuts"]))
        self.repo.set("2024-03-02", {"lunch": "D"}, Preferences())

        stored = json.loads(self.storage.get_item(MEALS_KEY))
        self.assertEqual(set(stored), {"2024-03-01", "2024-03-02"})
        self.assertEqual(stored["2024-03-01"]["preferences"], {"diet": "Keto", "allergies": ["Nuts"]})

        reopened = PlanRepository(self.storage)
        self.assertEqual(reopened.get("2024-03-01").meals(), {"breakfast": "A", "lunch": "B", "dinner": "C"})
        self.assertEqual(reopened.get("2024-03-01").preferences, Preferences("Keto", ["Nuts"]))
        self.assertIsNone(reopened.get("2024-03-03"))

    def test_malformed_store_treated_as_empty(self):
        self.storage.set_item(MEALS_KEY, "{not json")
        self.assertEqual(PlanRepository(self.storage).all(), {})
        self.storage.set_item(MEALS_KEY, "[1, 2, 3]")
        self.assertEqual(PlanRepository(self.storage).all(), {})

    def test_malformed_entries_skipped(self):
        self.storage.set_item(MEALS_KEY, json.dumps({
            "2024-04-01": {"breakfast": "Toast", "lunch": 5},
            "2024-04-02": "garbage",
        }))
        repo = PlanRepository(self.storage)
        self.assertEqual(list(repo.all()), ["2024-04-01"])
        plan = repo.get("2024-04-01")
        self.assertEqual(plan.breakfast, "Toast")
        self.assertEqual(plan.lunch, "")
        self.assertEqual(plan.preferences, Preferences())

    def test_reload_picks_up_external_changes(self):
        other = PlanRepository(self.storage)
        other.set("2024-05-05", {"lunch": "Salad"}, Preferences())
        self.assertIsNone(self.repo.get("2024-05-05"))
        self.repo.reload()
        self.assertEqual(self.repo.get("2024-05-05").lunch, "Salad")

    def test_set_keeps_plans_written_by_another_repository(self):
        stale = PlanRepository(self.storage)
        self.repo.set("2024-05-06", {"breakfast": "Granola"}, Preferences())
        stale.set("2024-05-07", {"dinner": "Paella"}, Preferences())

        stored = json.loads(self.storage.get_item(MEALS_KEY))
        self.assertEqual(sorted(stored), ["2024-05-06", "2024-05-07"])
        self.assertEqual(stale.get("2024-05-06").breakfast, "Granola")

    def test_failed_write_leaves_cache_unchanged(self):
        self.repo.set("2024-05-08", {"lunch": "Soup"}, Preferences())
        storage = _FailingStorage(dict(self.storage._items))
        repo = PlanRepository(storage)
        with self.assertRaises(OSError):
            repo.set("2024-05-08", {"lunch": "Curry"}, Preferences("Vegan"))
        self.assertEqual(repo.get("2024-05-08").lunch, "Soup")
        self.assertEqual(repo.get("2024-05-08").preferences, Preferences())

    def test_week_lists_seven_days(self):
        self.repo.set("2024-12-31", {"dinner": "Fondue"}, Preferences())
        week = self.repo.week(date(2024, 12, 30))
        self.assertEqual(list(week), ["2024-12-30", "2024-12-31", "2025-01-01", "2025-01-02",
                                      "2025-01-03", "2025-01-04", "2025-01-05"])
        self.assertEqual(week["2024-12-31"].dinner, "Fondue")
        self.assertIsNone(week["2024-12-30"])


class TestFileStorage(unittest.TestCase):
    def test_round_trip_without_leftover_temp_files(self):
        with tempfile.TemporaryDirectory() as tmp:
            storage = FileStorage(tmp)
            repo = PlanRepository(storage)
            repo.set("2024-06-01", {"breakfast": "Eggs"}, Preferences("Paleo"))
            repo.set("2024-06-01", {"lunch": "Steak salad"}, Preferences("Paleo"))

            self.assertEqual(os.listdir(tmp), [f"{MEALS_KEY}.json"])
            reopened = PlanRepository(FileStorage(tmp))
            self.assertEqual(reopened.get("2024-06-01").meals(),
                             {"breakfast": "Eggs", "lunch": "Steak salad", "dinner": ""})

    def test_remove_and_keys(self):
        with tempfile.TemporaryDirectory() as tmp:
            storage = FileStorage(tmp)
            storage.set_item("waterIntake", "3")
            storage.set_item("reminders", "{}")
            self.assertEqual(storage.keys(), ["reminders", "waterIntake"])
            storage.remove_item("reminders")
            storage.remove_item("reminders")
            self.assertIsNone(storage.get_item("reminders"))
            self.assertEqual(storage.get_item("waterIntake"), "3")

    def test_invalid_key_rejected(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ValueError):
                FileStorage(tmp).set_item("../escape", "{}")


if __name__ == '__main__':
    unittest.main()
