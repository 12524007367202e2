import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.services.refund_service import RefundService
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

refund_service = RefundService(BookingRepository(table))


def request_refund(event, context):
    booking_id = (event.get("pathParameters") or {}).get("id")
    if not booking_id:
        return send_custom_response(400, "Booking id is required")

    try:
        booking = refund_service.request_refund(booking_id, get_requester_id(event))
        return send_custom_response(
            200,
            "Refund request submitted",
            {"booking": BookingView.from_booking(booking).to_payload()},
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except UnauthorizedAction as err:
        return send_custom_response(403, str(err))

    except InvalidBookingState as err:
        return send_custom_response(400, str(err))

    except Exception:
        logger.exception(f"Unhandled error while requesting refund for {booking_id}")
        return send_custom_response(500, "Internal server error")
