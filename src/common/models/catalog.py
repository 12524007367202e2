from dataclasses import dataclass
from common.models.bookings import BookingType


@dataclass
class CatalogItem:
    item_id: str
    type: BookingType
    price: float
    title: str = ""
    address: str = ""
