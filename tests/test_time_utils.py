"""
Tests for app/utils/time_utils.py
"""
import unittest
from datetime import time

from app.utils.time_utils import (
    format_time_24,
    generate_slots,
    parse_slot_time,
    parse_time,
    to_12_hour,
    to_24_hour,
)


class TestTimeConversion(unittest.TestCase):

    def test_to_12_hour(self):
        self.assertEqual(to_12_hour("00:00"), "12:00 AM")
        self.assertEqual(to_12_hour("09:05"), "9:05 AM")
        self.assertEqual(to_12_hour("12:00"), "12:00 PM")
        self.assertEqual(to_12_hour("13:30"), "1:30 PM")
        self.assertEqual(to_12_hour("23:59"), "11:59 PM")

    def test_to_24_hour(self):
        self.assertEqual(to_24_hour("12:00 AM"), "00:00")
        self.assertEqual(to_24_hour("12:15 PM"), "12:15")
        self.assertEqual(to_24_hour("2:30 PM"), "14:30")
        self.assertEqual(to_24_hour("09:45 AM"), "09:45")

    def test_round_trip_every_minute_of_the_day(self):
        for minute_of_day in range(24 * 60):
            value = f"{minute_of_day // 60:02d}:{minute_of_day % 60:02d}"
            self.assertEqual(to_24_hour(to_12_hour(value)), value)

    def test_rejects_malformed_input(self):
        with self.assertRaises(ValueError):
            to_12_hour("24:00")
        with self.assertRaises(ValueError):
            to_24_hour("13:00 PM")
        with self.assertRaises(ValueError):
            to_24_hour("2:30PM")


class TestParseTime(unittest.TestCase):

    def test_accepts_both_formats(self):
        self.assertEqual(parse_time("2:30 PM"), time(14, 30))
        self.assertEqual(parse_time("14:30"), time(14, 30))
        self.assertEqual(parse_time("9:05"), time(9, 5))
        self.assertEqual(parse_time("14:30:15"), time(14, 30, 15))

    def test_rejects_invalid(self):
        for bad in ["25:00", "12:60", "noon", "", "2:30 pm"]:
            with self.assertRaises(ValueError, msg=bad):
                parse_time(bad)

    def test_slot_time_is_minute_precision(self):
        self.assertEqual(parse_slot_time("10:00:30"), time(10, 0))
        self.assertEqual(parse_slot_time("10:00 AM"), time(10, 0))
        with self.assertRaises(ValueError):
            parse_slot_time("10:61")

    def test_format_time_24(self):
        self.assertEqual(format_time_24(time(9, 0)), "09:00")
        self.assertEqual(format_time_24("09:00:00"), "09:00")


class TestGenerateSlots(unittest.TestCase):

    def test_half_hour_slots_in_one_hour(self):
        self.assertEqual(
            generate_slots(time(9, 0), time(10, 0), 30),
            ["9:00 AM", "9:30 AM"]
        )

    def test_slot_starting_at_close_is_excluded(self):
        slots = generate_slots(time(9, 0), time(17, 0), 60)
        self.assertEqual(len(slots), 8)
        self.assertEqual(slots[-1], "4:00 PM")
        self.assertNotIn("5:00 PM", slots)

    def test_last_slot_may_overrun_closing(self):
        self.assertEqual(
            generate_slots(time(9, 0), time(10, 0), 45),
            ["9:00 AM", "9:45 AM"]
        )

    def test_empty_when_close_not_after_open(self):
        self.assertEqual(generate_slots(time(10, 0), time(10, 0), 30), [])
        self.assertEqual(generate_slots(time(11, 0), time(10, 0), 30), [])

    def test_is_repeatable(self):
        first = generate_slots(time(8, 0), time(12, 0), 20)
        second = generate_slots(time(8, 0), time(12, 0), 20)
        self.assertEqual(first, second)

    def test_non_positive_duration_raises(self):
        with self.assertRaises(ValueError):
            generate_slots(time(9, 0), time(10, 0), 0)
        with self.assertRaises(ValueError):
            generate_slots(time(9, 0), time(10, 0), -15)
