import unittest
from datetime import datetime

from tripwise.export import format_itinerary_text, itinerary_csv, itinerary_rows
from tripwise.schedule import Stop, TripPlan, schedule_trip

START = datetime(2024, 5, 6, 9, 0)
STOPS = (
    Stop("Museum", "Things to Do", 30, ("Monday: 9:00 AM – 5:00 PM",)),
    Stop("Cafe", "Food & Drink", 45, ("Monday: Closed",)),
)


class TestExport(unittest.TestCase):
    def test_rows_pending_before_routing(self):
        rows = itinerary_rows(TripPlan(START, STOPS))
        self.assertEqual([r["Status"] for r in rows], ["Pending", "Pending"])
        self.assertEqual([r["Arrival"] for r in rows], ["", ""])
        self.assertEqual([r["Walk to next (min)"] for r in rows], ["", ""])

    def test_rows_after_routing(self):
        plan = TripPlan(START, STOPS, travel_durations=(20,))
        rows = itinerary_rows(plan, schedule_trip(plan))
        self.assertEqual(rows[1]["Arrival"], "09:50")
        self.assertEqual(rows[0]["Status"], "Will be Open")
        self.assertEqual(rows[1]["Status"], "Will be Closed")
        self.assertEqual(rows[1]["Time spent (min)"], 45)
        self.assertEqual([r["Walk to next (min)"] for r in rows], [20, ""])

    def test_itinerary_text(self):
        plan = TripPlan(START, STOPS, travel_durations=(20,))
        text = format_itinerary_text(plan, schedule_trip(plan))
        self.assertIn("1. Museum: arrive 09:00, leave 09:30", text)
        self.assertIn("1. Museum: arrive 09:00, leave 09:30\n   Walk to next stop: 20 min\n2. Cafe", text)
        self.assertEqual(text.count("Walk to next stop"), 1)
        self.assertIn("2. Cafe: arrive 09:50, leave 10:35 (Will be Closed)", text)
        self.assertIn("Trip ends at 10:35", text)
        self.assertIn("Total walking time: 0h 20m", text)

    def test_csv(self):
        plan = TripPlan(START, STOPS, travel_durations=(20,))
        lines = itinerary_csv(plan, schedule_trip(plan)).splitlines()
        self.assertEqual(lines[0], "#,Name,Category,Arrival,Status,Time spent (min),Walk to next (min)")
        self.assertEqual(lines[2], "2,Cafe,Food & Drink,09:50,Will be Closed,45,")
        self.assertEqual(lines[1], "1,Museum,Things to Do,09:00,Will be Open,30,20")


if __name__ == "__main__":
    unittest.main()
