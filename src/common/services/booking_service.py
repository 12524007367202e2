from botocore.exceptions import BotoCoreError, ClientError
from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.models.bookings import Booking, BookingStatus, BookingType
from common.models.catalog import CatalogItem
from common.schemas.bookings import PlaceBookingRequest, BookingRequest
from common.services.availability_service import AvailabilityService
from common.services.payment_service import PaymentService
from common.services.pricing_service import PricingService
from common.services.receipt_service import ReceiptService
from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidBookingState,
    NotFoundException,
    PaymentDeclined,
    UnauthorizedAction,
)
from common.utils.settings import ConfirmationPolicy
from common.utils.transaction_ids import generate_transaction_id
from typing import Callable, List, Optional
from uuid import uuid4
import logging

logger = logging.getLogger(__name__)


def authorize_requester(booking: Booking, requester_id: Optional[str]):
    """Guests may act on any booking; an identified user only on their own."""
    if requester_id and booking.user_id and booking.user_id != requester_id:
        raise UnauthorizedAction("Unauthorized action")


class BookingService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        catalog_repo: CatalogRepository,
        pricing_service: Optional[PricingService] = None,
        availability_service: Optional[AvailabilityService] = None,
        payment_service: Optional[PaymentService] = None,
        receipt_service: Optional[ReceiptService] = None,
        confirmation_policy: ConfirmationPolicy = ConfirmationPolicy.AUTO,
        transaction_id_factory: Callable[[], str] = generate_transaction_id,
    ):
        self.booking_repo = booking_repo
        self.catalog_repo = catalog_repo
        self.pricing_service = pricing_service or PricingService()
        self.availability_service = availability_service or AvailabilityService(
            booking_repo
        )
        self.payment_service = payment_service or PaymentService()
        self.receipt_service = receipt_service
        self.confirmation_policy = confirmation_policy
        self.transaction_id_factory = transaction_id_factory

    def add_booking(self, req: BookingRequest, user_id: Optional[str]) -> Booking:
        booking_type = BookingType(req.type)
        item = self.get_item_details(booking_type, req.item_id)

        if isinstance(req, PlaceBookingRequest):
            if self.availability_service.has_conflict(
                item.item_id, req.check_in, req.check_out
            ):
                raise BookingConflict("Place already booked")
            quote = self.pricing_service.compute_price(
                booking_type,
                item.price,
                req.number_of_guests,
                req.check_in,
                req.check_out,
            )
        else:
            quote = self.pricing_service.compute_price(
                booking_type, item.price, req.number_of_guests
            )

        status = (
            BookingStatus.CONFIRMED
            if self.confirmation_policy == ConfirmationPolicy.AUTO
            else BookingStatus.PENDING
        )
        booking = Booking(
            booking_id=str(uuid4()),
            type=booking_type,
            item_id=item.item_id,
            user_id=user_id,
            number_of_guests=req.number_of_guests,
            name=req.name,
            phone=req.phone,
            price=quote.price,
            service_fee=quote.service_fee,
            total_amount=quote.total_amount,
            transaction_id=req.transaction_id or self.transaction_id_factory(),
            payment_method=req.payment_method,
            status=status,
            address=item.address,
        )
        if isinstance(req, PlaceBookingRequest):
            booking.check_in = req.check_in
            booking.check_out = req.check_out
        else:
            booking.event_date = req.event_date

        self.booking_repo.add_booking(booking)
        logger.info(
            f"Created {booking_type.value} booking {booking.booking_id} as {status.value}"
        )

        if req.email and self.receipt_service:
            self._send_receipt_quietly(req.email, booking)
        return booking

    def _send_receipt_quietly(self, email: str, booking: Booking):
        try:
            self.receipt_service.send_booking_receipt(email, booking)
        except (BotoCoreError, ClientError, NotFoundException):
            logger.exception(f"Receipt for booking {booking.booking_id} could not be sent")

    def initiate_payment(self, booking_id: str) -> Booking:
        booking = self.get_booking(booking_id)
        if booking.status != BookingStatus.PENDING:
            raise InvalidBookingState("Booking already paid or canceled")

        if not self.payment_service.charge(booking_id):
            logger.info(f"Simulated payment declined for booking {booking_id}")
            raise PaymentDeclined("Payment failed")

        transaction_id = self.transaction_id_factory()
        self.booking_repo.confirm_booking(booking, transaction_id)
        booking.status = BookingStatus.CONFIRMED
        booking.transaction_id = transaction_id
        logger.info(f"Booking {booking_id} confirmed with transaction {transaction_id}")
        return booking

    def cancel_booking(self, booking_id: str, requester_id: Optional[str]) -> Booking:
        booking = self.get_booking(booking_id)
        authorize_requester(booking, requester_id)
        if booking.status == BookingStatus.CANCELED:
            raise InvalidBookingState("Booking already canceled")

        self.booking_repo.cancel_booking(booking)
        booking.status = BookingStatus.CANCELED
        logger.info(f"Booking {booking_id} canceled")
        return booking

    def get_booking(self, booking_id: str) -> Booking:
        booking = self.booking_repo.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("booking", booking_id, 404)
        return booking

    def get_booking_by_transaction(self, transaction_id: str) -> Booking:
        booking = self.booking_repo.get_booking_by_transaction_id(transaction_id)
        if booking is None:
            raise NotFoundException("booking", transaction_id, 404)
        return booking

    def get_user_bookings(self, user_id: str) -> List[Booking]:
        return self.booking_repo.get_user_bookings(user_id)

    def get_item_details(self, item_type: BookingType, item_id: str) -> CatalogItem:
        item = self.catalog_repo.get_item(item_type, item_id)
        if item is None:
            raise NotFoundException(item_type.value, item_id, 404)
        return item
