import json
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from tripwise.schedule import Stop, TripPlan
from tripwise.storage import PlanNotFoundError, PlanStore, default_start, plan_from_dict, plan_to_dict

START = datetime(2024, 5, 6, 9, 30)


def sample_plan():
    return TripPlan(
        START,
        (
            Stop("Museum", "Things to Do", 45, ("Monday: 10:00 AM – 6:00 PM",), (35.0, 139.0), 4.5),
            Stop("Cafe", "Food & Drink", 20),
        ),
        travel_durations=(12,),
    )


class TestPlanStore(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = Path(self.tmp.name) / "plans.json"
        self.store = PlanStore(self.path)

    def tearDown(self):
        self.tmp.cleanup()

    def test_empty_store(self):
        self.assertIsNone(self.store.load_session())
        self.assertEqual(self.store.plan_names(), [])

    def test_session_round_trip_drops_route(self):
        self.store.save_session(sample_plan())
        loaded = self.store.load_session()
        self.assertEqual(loaded.stops, sample_plan().stops)
        self.assertEqual(loaded.start, START)
        self.assertIsNone(loaded.travel_durations)
        self.store.clear_session()
        self.assertIsNone(self.store.load_session())

    def test_named_plans(self):
        self.store.save_plan("  Tokyo day ", sample_plan())
        self.store.save_plan("Empty", TripPlan(START))
        self.assertEqual(self.store.plan_names(), ["Tokyo day", "Empty"])
        self.assertEqual(self.store.load_plan("Tokyo day").stops[0].name, "Museum")
        with self.assertRaises(PlanNotFoundError):
            self.store.load_plan("Empty")
        self.store.delete_plan("Tokyo day")
        self.assertEqual(self.store.plan_names(), ["Empty"])
        with self.assertRaises(PlanNotFoundError):
            self.store.delete_plan("Tokyo day")

    def test_corrupt_file_reads_as_empty(self):
        self.path.write_text("{not json", encoding="utf-8")
        with self.assertLogs("tripwise.storage", level="WARNING"):
            self.assertIsNone(self.store.load_session())
        self.assertEqual(self.store.plan_names(), [])
        self.store.save_plan("Fresh", sample_plan())
        self.assertEqual(self.store.plan_names(), ["Fresh"])

    def test_blank_name_rejected(self):
        with self.assertRaises(ValueError):
            self.store.save_plan("   ", sample_plan())

    def test_file_layout(self):
        self.store.save_plan("Trip", sample_plan())
        data = json.loads(self.path.read_text(encoding="utf-8"))
        stop = data["plans"]["Trip"]["stops"][0]
        self.assertEqual(stop["time"], 45)
        self.assertEqual(stop["weekdayText"], ["Monday: 10:00 AM – 6:00 PM"])
        self.assertEqual((stop["lat"], stop["lng"]), (35.0, 139.0))
        self.assertEqual(data["plans"]["Trip"]["startTime"], "09:30")


class TestSerialisation(unittest.TestCase):
    def test_missing_fields_default(self):
        plan = plan_from_dict({"startDate": "2024-05-06", "stops": [{"name": "Park"}]})
        self.assertEqual(plan.start, datetime(2024, 5, 6, 9, 0))
        self.assertEqual(plan.stops[0], Stop("Park"))

    def test_round_trip(self):
        self.assertEqual(plan_from_dict(plan_to_dict(sample_plan())).stops, sample_plan().stops)

    def test_default_start(self):
        self.assertEqual(default_start(datetime(2024, 5, 6, 15, 12)), datetime(2024, 5, 6, 9, 0))


if __name__ == "__main__":
    unittest.main()
