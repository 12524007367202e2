from enum import Enum
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional


class BookingType(str, Enum):
    PLACE = "place"
    EXPERIENCE = "experience"
    SERVICE = "service"


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELED = "canceled"


@dataclass
class Booking:
    booking_id: str
    type: BookingType
    item_id: str
    user_id: Optional[str]
    number_of_guests: int
    name: str
    phone: str
    price: Decimal
    service_fee: Decimal
    total_amount: Decimal
    transaction_id: str
    payment_method: str
    status: BookingStatus = BookingStatus.CONFIRMED

    check_in: Optional[date] = None
    check_out: Optional[date] = None
    event_date: Optional[date] = None

    address: str = ""

    refund_requested: bool = False
    refund_requested_at: Optional[datetime] = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def nights(self) -> List[date]:
        """Calendar nights covered by a place stay, i.e. every day in [check_in, check_out)."""
        if self.type != BookingType.PLACE or not self.check_in or not self.check_out:
            return []
        return [
            self.check_in + timedelta(days=offset)
            for offset in range((self.check_out - self.check_in).days)
        ]
