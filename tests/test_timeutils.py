import unittest
from datetime import date, datetime

from tripwise.timeutils import (
    ClockTime,
    FormatError,
    add_minutes,
    add_minutes_to_timestamp,
    format_clock_time,
    format_timestamp,
    parse_clock_time,
    parse_twelve_hour,
    parse_twenty_four_hour,
    resolve_timestamp,
)

TRIP_DAY = date(2024, 5, 6)  # a Monday


class TestClockTime(unittest.TestCase):
    def test_parse_and_format(self):
        self.assertEqual(parse_clock_time("9:05"), ClockTime(9, 5))
        self.assertEqual(parse_clock_time(" 17:45 "), ClockTime(17, 45))
        self.assertEqual(format_clock_time(ClockTime(9, 5)), "09:05")
        self.assertEqual(str(ClockTime(0, 0)), "00:00")

    def test_parse_rejects_bad_text(self):
        for text in ["9:5", "24:00", "09:60", "9:00 AM", "", "1:02:03", "noon"]:
            with self.subTest(text=text):
                with self.assertRaises(FormatError):
                    parse_clock_time(text)

    def test_round_trip_every_minute(self):
        for total in range(0, 24 * 60):
            t = ClockTime.from_minutes(total)
            self.assertEqual(parse_clock_time(format_clock_time(t)), t)

    def test_out_of_range_clock_time(self):
        with self.assertRaises(ValueError):
            ClockTime(24, 0)


class TestAddMinutes(unittest.TestCase):
    def test_wraps_past_midnight(self):
        self.assertEqual(add_minutes(ClockTime(23, 50), 20), ClockTime(0, 10))

    def test_negative_delta_wraps_backwards(self):
        self.assertEqual(add_minutes(ClockTime(0, 5), -10), ClockTime(23, 55))

    def test_result_always_normalised(self):
        for delta in (-5000, -1441, -1, 0, 1, 59, 1440, 3001):
            result = add_minutes(ClockTime(12, 30), delta)
            self.assertTrue(0 <= result.hours <= 23)
            self.assertTrue(0 <= result.minutes <= 59)

    def test_timestamp_addition_moves_date(self):
        ts = datetime(2024, 5, 6, 23, 50)
        self.assertEqual(add_minutes_to_timestamp(ts, 20), datetime(2024, 5, 7, 0, 10))


class TestParsers(unittest.TestCase):
    def test_twelve_hour(self):
        self.assertEqual(parse_twelve_hour("3:45 PM", TRIP_DAY), datetime(2024, 5, 6, 15, 45))
        self.assertEqual(parse_twelve_hour("opens 9:00am daily", TRIP_DAY), datetime(2024, 5, 6, 9, 0))
        self.assertEqual(parse_twelve_hour("12:00 AM", TRIP_DAY), datetime(2024, 5, 6, 0, 0))
        self.assertEqual(parse_twelve_hour("12:30 PM", TRIP_DAY), datetime(2024, 5, 6, 12, 30))

    def test_twelve_hour_without_meridiem_returns_none(self):
        self.assertIsNone(parse_twelve_hour("15:45", TRIP_DAY))
        self.assertIsNone(parse_twelve_hour("13:00 PM", TRIP_DAY))

    def test_twenty_four_hour(self):
        self.assertEqual(parse_twenty_four_hour("15:45", TRIP_DAY), datetime(2024, 5, 6, 15, 45))
        with self.assertRaises(FormatError):
            parse_twenty_four_hour("3:45 PM", TRIP_DAY)

    def test_resolve_tries_twelve_hour_then_twenty_four_hour(self):
        self.assertEqual(resolve_timestamp("3:45 PM", TRIP_DAY).time(), datetime(2024, 5, 6, 15, 45).time())
        self.assertEqual(resolve_timestamp("15:45", TRIP_DAY), datetime(2024, 5, 6, 15, 45))

    def test_resolve_unknown_is_none(self):
        self.assertIsNone(resolve_timestamp("late afternoon", TRIP_DAY))

    def test_resolve_with_custom_parsers(self):
        def never(text, base_date):
            return None

        self.assertIsNone(resolve_timestamp("15:45", TRIP_DAY, parsers=[never]))

    def test_format_timestamp(self):
        ts = datetime(2024, 5, 6, 15, 5)
        self.assertEqual(format_timestamp(ts), "15:05")
        self.assertEqual(format_timestamp(ts, twelve_hour=True), "3:05 PM")
        self.assertEqual(format_timestamp(datetime(2024, 5, 6, 0, 30), twelve_hour=True), "12:30 AM")


if __name__ == "__main__":
    unittest.main()
