import random
from typing import Optional

from common.utils.constants import DEFAULT_PAYMENT_SUCCESS_RATE


class PaymentService:
    """Stand-in for a payment gateway: approves a fixed share of charges."""

    def __init__(
        self,
        success_rate: float = DEFAULT_PAYMENT_SUCCESS_RATE,
        rng: Optional[random.Random] = None,
    ):
        self.success_rate = success_rate
        self.rng = rng or random.Random()

    def charge(self, booking_id: str) -> bool:
        return self.rng.random() < self.success_rate
