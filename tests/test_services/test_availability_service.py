import unittest
from unittest.mock import MagicMock
from datetime import date

from common.services.availability_service import AvailabilityService


class TestAvailabilityService(unittest.TestCase):

    def setUp(self):
        self.booking_repo = MagicMock()
        self.service = AvailabilityService(self.booking_repo)

    def test_conflict_when_any_night_is_held(self):
        self.booking_repo.get_booked_nights.return_value = [date(2024, 1, 12)]

        self.assertTrue(
            self.service.has_conflict("p1", date(2024, 1, 12), date(2024, 1, 15))
        )
        self.booking_repo.get_booked_nights.assert_called_once_with(
            "p1", date(2024, 1, 12), date(2024, 1, 15)
        )

    def test_no_conflict_when_nights_free(self):
        self.booking_repo.get_booked_nights.return_value = []

        self.assertFalse(
            self.service.has_conflict("p1", date(2024, 1, 13), date(2024, 1, 15))
        )


if __name__ == "__main__":
    unittest.main()
