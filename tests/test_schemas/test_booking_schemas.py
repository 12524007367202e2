import unittest
from datetime import date, datetime, timezone
from decimal import Decimal

from pydantic import ValidationError

from common.models.bookings import Booking, BookingStatus, BookingType
from common.schemas.bookings import (
    BookingView,
    DatedBookingRequest,
    PaymentRequest,
    PlaceBookingRequest,
    ReceiptRequest,
    booking_request_adapter,
)


def body(**overrides):
    payload = {
        "type": "place",
        "itemId": "p1",
        "numberOfGuests": 2,
        "name": "Asha",
        "phone": "9999999999",
        "paymentMethod": "card",
        "checkIn": "2024-01-10",
        "checkOut": "2024-01-13",
    }
    payload.update(overrides)
    return {k: v for k, v in payload.items() if v is not None}


class TestBookingRequest(unittest.TestCase):

    def test_place_request(self):
        req = booking_request_adapter.validate_python(body())

        self.assertIsInstance(req, PlaceBookingRequest)
        self.assertEqual(req.check_in, date(2024, 1, 10))
        self.assertEqual(req.check_out, date(2024, 1, 13))
        self.assertIsNone(req.transaction_id)

    def test_experience_and_service_requests(self):
        for kind in ("experience", "service"):
            req = booking_request_adapter.validate_python(
                body(type=kind, checkIn=None, checkOut=None, date="2024-02-01")
            )
            self.assertIsInstance(req, DatedBookingRequest)
            self.assertEqual(req.type, kind)
            self.assertEqual(req.event_date, date(2024, 2, 1))

    def test_parses_json_body(self):
        req = booking_request_adapter.validate_json(
            '{"type": "service", "itemId": "s1", "numberOfGuests": 1, "name": "A",'
            ' "phone": "1", "paymentMethod": "cash", "date": "2024-03-03",'
            ' "transactionId": "TXN-9", "email": "a@example.com"}'
        )

        self.assertEqual(req.transaction_id, "TXN-9")
        self.assertEqual(req.email, "a@example.com")

    def test_invalid_type_rejected(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(type="flight"))

    def test_missing_required_fields_rejected(self):
        for field in ("itemId", "numberOfGuests", "name", "phone", "paymentMethod"):
            with self.subTest(field=field), self.assertRaises(ValidationError):
                booking_request_adapter.validate_python(body(**{field: None}))

    def test_place_requires_both_dates(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(checkOut=None))

    def test_dated_types_require_date(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(
                body(type="experience", checkIn=None, checkOut=None)
            )

    def test_checkout_must_follow_checkin(self):
        for check_out in ("2024-01-10", "2024-01-09"):
            with self.subTest(check_out=check_out), self.assertRaises(ValidationError):
                booking_request_adapter.validate_python(body(checkOut=check_out))

    def test_stay_is_capped(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(checkOut="2024-06-01"))

    def test_guests_must_be_positive(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(numberOfGuests=0))

    def test_blank_contact_rejected(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(name="   "))

    def test_invalid_email_rejected(self):
        with self.assertRaises(ValidationError):
            booking_request_adapter.validate_python(body(email="not-an-email"))


class TestOtherRequests(unittest.TestCase):

    def test_payment_request(self):
        self.assertEqual(
            PaymentRequest.model_validate_json('{"bookingId": "b1"}').booking_id, "b1"
        )
        with self.assertRaises(ValidationError):
            PaymentRequest.model_validate_json("{}")

    def test_receipt_request(self):
        req = ReceiptRequest.model_validate_json(
            '{"email": "a@example.com", "bookingId": "b1"}'
        )
        self.assertEqual(req.booking_id, "b1")
        with self.assertRaises(ValidationError):
            ReceiptRequest.model_validate_json('{"email": "nope", "bookingId": "b1"}')


class TestBookingView(unittest.TestCase):

    def test_payload_uses_public_names(self):
        booking = Booking(
            booking_id="b1",
            type=BookingType.EXPERIENCE,
            item_id="e1",
            user_id=None,
            number_of_guests=4,
            name="Asha",
            phone="9999999999",
            price=Decimal("2000"),
            service_fee=Decimal("100.00"),
            total_amount=Decimal("2100.00"),
            transaction_id="TXN-1-1",
            payment_method="upi",
            status=BookingStatus.CANCELED,
            event_date=date(2024, 2, 1),
            refund_requested=True,
            refund_requested_at=datetime(2024, 2, 2, tzinfo=timezone.utc),
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

        payload = BookingView.from_booking(booking).to_payload()

        self.assertEqual(payload["id"], "b1")
        self.assertEqual(payload["type"], "experience")
        self.assertEqual(payload["itemId"], "e1")
        self.assertEqual(payload["status"], "canceled")
        self.assertEqual(payload["transactionId"], "TXN-1-1")
        self.assertEqual(payload["numberOfGuests"], 4)
        self.assertEqual(payload["price"], 2000.0)
        self.assertEqual(payload["serviceFee"], 100.0)
        self.assertEqual(payload["totalAmount"], 2100.0)
        self.assertEqual(payload["date"], "2024-02-01")
        self.assertIsNone(payload["checkIn"])
        self.assertTrue(payload["refundRequested"])
        self.assertTrue(payload["refundRequestedAt"].startswith("2024-02-02T00:00:00"))


if __name__ == "__main__":
    unittest.main()
