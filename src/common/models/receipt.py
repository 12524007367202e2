from dataclasses import dataclass
from decimal import Decimal
from typing import Optional


@dataclass
class Receipt:
    booking_id: str
    transaction_id: Optional[str]
    total_amount: Decimal
    item_title: str
    guest_name: str
    phone: str
    number_of_guests: int
