import math
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from common.models.bookings import BookingType
from common.utils.settings import FeePolicy

CENTS = Decimal("0.01")


@dataclass(frozen=True)
class Quote:
    price: Decimal
    service_fee: Decimal
    total_amount: Decimal


class PricingService:
    def __init__(self, fee_policy: Optional[FeePolicy] = None):
        self.fee_policy = fee_policy or FeePolicy()

    @staticmethod
    def nights(check_in: date, check_out: date) -> int:
        return math.ceil((check_out - check_in) / timedelta(days=1))

    def service_fee(self, price: Decimal) -> Decimal:
        commission = (price * self.fee_policy.fee_rate).quantize(CENTS, rounding=ROUND_HALF_UP)
        return max(self.fee_policy.minimum_fee, commission)

    def compute_price(
        self,
        booking_type: BookingType,
        base_price: float,
        number_of_guests: int,
        check_in: Optional[date] = None,
        check_out: Optional[date] = None,
    ) -> Quote:
        base = Decimal(str(base_price))
        if booking_type == BookingType.PLACE:
            price = base * self.nights(check_in, check_out)
        else:
            price = base * number_of_guests

        service_fee = self.service_fee(price)
        return Quote(
            price=price,
            service_fee=service_fee,
            total_amount=price + service_fee,
        )
