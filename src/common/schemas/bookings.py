from datetime import date, datetime, timedelta
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    TypeAdapter,
    model_validator,
)

from common.models.bookings import Booking, BookingType
from common.utils.constants import MAX_STAY


class _BookingRequestBase(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    item_id: str = Field(alias="itemId", min_length=1)
    number_of_guests: int = Field(alias="numberOfGuests", gt=0)
    name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    payment_method: str = Field(alias="paymentMethod", min_length=1)
    transaction_id: Optional[str] = Field(default=None, alias="transactionId")
    email: Optional[EmailStr] = None


class PlaceBookingRequest(_BookingRequestBase):
    type: Literal["place"]
    check_in: date = Field(alias="checkIn")
    check_out: date = Field(alias="checkOut")

    @model_validator(mode="after")
    def validate_stay(self):
        if self.check_out <= self.check_in:
            raise ValueError("checkOut must be after checkIn")
        if self.check_out - self.check_in > timedelta(days=MAX_STAY):
            raise ValueError(f"Maximum stay is {MAX_STAY} days")
        return self


class DatedBookingRequest(_BookingRequestBase):
    type: Literal["experience", "service"]
    event_date: date = Field(alias="date")


BookingRequest = Annotated[
    Union[PlaceBookingRequest, DatedBookingRequest],
    Field(discriminator="type"),
]

booking_request_adapter = TypeAdapter(BookingRequest)


class PaymentRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: str = Field(alias="bookingId", min_length=1)


class ReceiptRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr
    booking_id: str = Field(alias="bookingId", min_length=1)


class BookingView(BaseModel):
    """Public shape of a booking, as returned by every booking endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    type: BookingType
    item_id: str = Field(serialization_alias="itemId")
    status: str
    transaction_id: str = Field(serialization_alias="transactionId")
    name: str
    phone: str
    number_of_guests: int = Field(serialization_alias="numberOfGuests")
    price: float
    service_fee: float = Field(serialization_alias="serviceFee")
    total_amount: float = Field(serialization_alias="totalAmount")
    payment_method: str = Field(serialization_alias="paymentMethod")
    check_in: Optional[date] = Field(default=None, serialization_alias="checkIn")
    check_out: Optional[date] = Field(default=None, serialization_alias="checkOut")
    event_date: Optional[date] = Field(default=None, serialization_alias="date")
    address: Optional[str] = None
    refund_requested: bool = Field(default=False, serialization_alias="refundRequested")
    refund_requested_at: Optional[datetime] = Field(
        default=None, serialization_alias="refundRequestedAt"
    )
    created_at: datetime = Field(serialization_alias="createdAt")

    @classmethod
    def from_booking(cls, booking: Booking) -> "BookingView":
        return cls(
            id=booking.booking_id,
            type=booking.type,
            item_id=booking.item_id,
            status=booking.status.value,
            transaction_id=booking.transaction_id,
            name=booking.name,
            phone=booking.phone,
            number_of_guests=booking.number_of_guests,
            price=float(booking.price),
            service_fee=float(booking.service_fee),
            total_amount=float(booking.total_amount),
            payment_method=booking.payment_method or "N/A",
            check_in=booking.check_in,
            check_out=booking.check_out,
            event_date=booking.event_date,
            address=booking.address or None,
            refund_requested=booking.refund_requested,
            refund_requested_at=booking.refund_requested_at,
            created_at=booking.created_at,
        )

    def to_payload(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)
