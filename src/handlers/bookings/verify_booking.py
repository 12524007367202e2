import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.booking_service import BookingService
from common.schemas.bookings import BookingView
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


def verify_booking(event, context):
    transaction_id = (event.get("queryStringParameters") or {}).get("tx")
    if not transaction_id:
        return send_custom_response(400, "Missing transaction reference")

    try:
        booking = booking_service.get_booking_by_transaction(transaction_id)
        return send_custom_response(
            200,
            data={"booking": BookingView.from_booking(booking).to_payload()},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except Exception:
        logger.exception(f"Unhandled error while verifying transaction {transaction_id}")
        return send_custom_response(500, "Internal server error")
