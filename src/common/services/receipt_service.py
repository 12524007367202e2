import boto3
import logging
from email.mime.text import MIMEText
from email.mime.multipart import MIMEMultipart
from typing import Optional

from common.models.bookings import Booking
from common.models.receipt import Receipt
from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.utils.custom_exceptions import NotFoundException

logger = logging.getLogger(__name__)

SUBJECT = "Your Booking Receipt - Domio"


class ReceiptService:
    def __init__(
        self,
        booking_repo: BookingRepository,
        catalog_repo: CatalogRepository,
        sender: Optional[str] = None,
        region: Optional[str] = None,
    ):
        self.booking_repo = booking_repo
        self.catalog_repo = catalog_repo
        self.sender = sender
        self.ses = boto3.client("ses", region_name=region) if sender else None

    def send_email(self, to: str, subject: str, body: str) -> bool:
        """Send a plain-text mail. Returns False when no sender is configured
        and the send was only simulated."""
        if not self.ses:
            logger.warning(f"No receipt sender configured, simulating mail to {to}")
            return False

        msg = MIMEMultipart()
        msg["From"] = self.sender
        msg["To"] = to
        msg["Subject"] = subject
        msg.attach(MIMEText(body, "plain"))

        self.ses.send_raw_email(
            Source=self.sender,
            Destinations=[to],
            RawMessage={"Data": msg.as_string()},
        )
        logger.info(f"Sent '{subject}' to {to}")
        return True

    def send_receipt(self, email: str, booking_id: str) -> bool:
        receipt = self.generate_receipt(booking_id)
        return self.send_email(email, SUBJECT, self.render(receipt))

    def send_booking_receipt(self, email: str, booking: Booking) -> bool:
        return self.send_email(email, SUBJECT, self.render(self.build_receipt(booking)))

    def generate_receipt(self, booking_id: str) -> Receipt:
        booking = self.booking_repo.get_booking_by_id(booking_id)
        if booking is None:
            raise NotFoundException("booking", booking_id, 404)
        return self.build_receipt(booking)

    def build_receipt(self, booking: Booking) -> Receipt:
        item = self.catalog_repo.get_item(booking.type, booking.item_id)
        return Receipt(
            booking_id=booking.booking_id,
            transaction_id=booking.transaction_id,
            total_amount=booking.total_amount,
            item_title=item.title if item and item.title else "N/A",
            guest_name=booking.name,
            phone=booking.phone,
            number_of_guests=booking.number_of_guests,
        )

    @staticmethod
    def render(receipt: Receipt) -> str:
        return f"""
            Thank you for your booking with Domio!

            Booking Details:
            ----------------
            Booking ID: {receipt.booking_id}
            Transaction ID: {receipt.transaction_id or "N/A"}
            Total Paid: ₹{receipt.total_amount}
            Item: {receipt.item_title}
            Guest Name: {receipt.guest_name}
            Phone: {receipt.phone}
            Number of Guests: {receipt.number_of_guests}

            Thank you for choosing Domio!
            """
