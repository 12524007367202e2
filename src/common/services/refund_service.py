import logging
from datetime import datetime, timezone
from typing import Optional

from common.models.bookings import Booking, BookingStatus
from common.repository.booking_repo import BookingRepository
from common.services.booking_service import authorize_requester
from common.utils.custom_exceptions import InvalidBookingState, NotFoundException

logger = logging.getLogger(__name__)


class RefundService:
    """Records refund requests for canceled bookings. No money moves here."""

    def __init__(self, booking_repo: BookingRepository):
        self.booking_repo = booking_repo

    def request_refund(self, booking_id: str, requester_id: Optional[str]) -> Booking:
        booking = self.booking_repo.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("booking", booking_id, 404)

        authorize_requester(booking, requester_id)
        if booking.status != BookingStatus.CANCELED:
            raise InvalidBookingState("Only canceled bookings can be refunded")
        if booking.refund_requested:
            raise InvalidBookingState("Refund already requested")

        requested_at = datetime.now(timezone.utc)
        self.booking_repo.mark_refund_requested(booking_id, requested_at)
        booking.refund_requested = True
        booking.refund_requested_at = requested_at
        logger.info(f"Refund requested for booking {booking_id}")
        return booking
