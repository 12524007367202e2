import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.booking_service import BookingService
from common.schemas.bookings import BookingView
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import (
    InvalidBookingState,
    NotFoundException,
    UnauthorizedAction,
)
from common.utils.identity import get_requester_id
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


def cancel_booking(event, context):
    booking_id = (event.get("pathParameters") or {}).get("id")
    if not booking_id:
        return send_custom_response(400, "Booking id is required")

    try:
        booking = booking_service.cancel_booking(booking_id, get_requester_id(event))
        return send_custom_response(
            200,
            "Booking canceled successfully",
            {"booking": BookingView.from_booking(booking).to_payload()},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except UnauthorizedAction as err:
        return send_custom_response(403, str(err))

    except InvalidBookingState as err:
        return send_custom_response(400, str(err))

    except Exception:
        logger.exception(f"Unhandled error while canceling booking {booking_id}")
        return send_custom_response(500, "Internal server error")
