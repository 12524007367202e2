from datetime import date
from decimal import Decimal

from common.models.bookings import Booking, BookingStatus, BookingType


def make_booking(**overrides):
    fields = dict(
        booking_id="b1",
        type=BookingType.PLACE,
        item_id="p1",
        user_id="u1",
        number_of_guests=2,
        name="Asha",
        phone="9999999999",
        price=Decimal("3000"),
        service_fee=Decimal("150.00"),
        total_amount=Decimal("3150.00"),
        transaction_id="TXN-1-1",
        payment_method="card",
        status=BookingStatus.CONFIRMED,
        check_in=date(2024, 1, 10),
        check_out=date(2024, 1, 13),
    )
    fields.update(overrides)
    return Booking(**fields)
