from botocore.exceptions import ClientError
import logging
from typing import Optional
from common.models.bookings import BookingType
from common.models.catalog import CatalogItem

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
else:
    Table = object


logger = logging.getLogger(__name__)


class CatalogRepository:
    """Read-only view over places, experiences and services listed by hosts."""

    def __init__(self, table: Table):
        self.table = table

    def get_item(self, item_type: BookingType, item_id: str) -> Optional[CatalogItem]:
        prefix = item_type.value.upper()
        try:
            response = self.table.get_item(
                Key={"pk": f"{prefix}#{item_id}", "sk": "DETAILS"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving {item_type.value} {item_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return CatalogItem(
            item_id=item_id,
            type=item_type,
            price=float(item["price"]),
            title=item.get("title", ""),
            address=item.get("address", ""),
        )
