import logging
from boto3 import resource

from common.models.bookings import BookingType
from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.booking_service import BookingService
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import NotFoundException
from common.utils.settings import Settings

logger = logging.getLogger()
logger.setLevel(logging.INFO)

settings = Settings.from_env()

dynamodb = resource("dynamodb", region_name=settings.region)
table = dynamodb.Table(settings.table_name)

booking_service = BookingService(
    booking_repo=BookingRepository(table),
    catalog_repo=CatalogRepository(table),
)


def get_item_details(event, context):
    params = event.get("pathParameters") or {}
    item_type_raw = params.get("type")
    item_id = params.get("id")
    if not item_type_raw or not item_id:
        return send_custom_response(400, "Missing type or id")

    try:
        item_type = BookingType(item_type_raw.lower())
    except ValueError:
        allowed = ", ".join(f"'{t.value}'" for t in BookingType)
        return send_custom_response(400, f"Invalid type. Must be {allowed}")

    try:
        item = booking_service.get_item_details(item_type, item_id)
        return send_custom_response(
            200,
            data={
                "item": {
                    "id": item.item_id,
                    "type": item.type.value,
                    "title": item.title,
                    "price": item.price,
                    "address": item.address,
                }
            },
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception(f"Unhandled error while fetching {item_type.value} {item_id}")
        return send_custom_response(500, "Internal server error")
