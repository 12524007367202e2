import logging
from datetime import date

from common.repository.booking_repo import BookingRepository

logger = logging.getLogger(__name__)


class AvailabilityService:
    """Point-in-time overlap check for place stays.

    Only confirmed bookings hold nights, so pending and canceled bookings never
    block. Exclusion itself is enforced by the night claims written together
    with the booking.
    """

    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    def has_conflict(self, place_id: str, check_in: date, check_out: date) -> bool:
        booked = self.booking_repo.get_booked_nights(place_id, check_in, check_out)
        if booked:
            logger.info(
                f"Place {place_id} already booked on {len(booked)} night(s) between {check_in} and {check_out}"
            )
        return bool(booked)
