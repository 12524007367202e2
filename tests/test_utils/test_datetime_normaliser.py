import unittest
from datetime import date, datetime, timezone, timedelta
from common.utils.datetime_normaliser import from_iso_string, to_iso_string, date_or_none

class TestDatetimeNormaliser(unittest.TestCase):
    def test_from_iso_string_with_timezone(self):
        iso = "2026-01-29T12:00:00+05:30"
        dt = from_iso_string(iso)
        self.assertIsInstance(dt, datetime)
        self.assertEqual(dt.tzinfo, timezone.utc)
        self.assertEqual(dt.hour, 6)

    def test_from_iso_string_naive_raises(self):
        iso = "2026-01-29T12:00:00"
        with self.assertRaises(ValueError):
            from_iso_string(iso)

    def test_to_iso_string_normalises_to_utc(self):
        dt = datetime(2026, 1, 29, 12, 0, tzinfo=timezone(timedelta(hours=5, minutes=30)))
        self.assertEqual(to_iso_string(dt), "2026-01-29T06:30:00+00:00")

    def test_to_iso_string_naive_raises(self):
        with self.assertRaises(ValueError):
            to_iso_string(datetime(2026, 1, 29))

    def test_date_or_none(self):
        self.assertEqual(date_or_none("2024-01-10"), date(2024, 1, 10))
        self.assertIsNone(date_or_none(None))
        self.assertIsNone(date_or_none(""))

if __name__ == "__main__":
    unittest.main()
