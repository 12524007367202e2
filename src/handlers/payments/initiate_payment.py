import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.booking_service import BookingService
from common.services.payment_service import PaymentService
from common.schemas.bookings import PaymentRequest
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidBookingState,
    NotFoundException,
    PaymentDeclined,
)
from common.utils.settings import Settings
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

settings = Settings.from_env()

dynamodb = resource("dynamodb", region_name=settings.region)
table = dynamodb.Table(settings.table_name)

booking_service = BookingService(
    booking_repo=BookingRepository(table),
    catalog_repo=CatalogRepository(table),
    payment_service=PaymentService(settings.payment_success_rate),
    confirmation_policy=settings.confirmation_policy,
)


def initiate_payment(event, context):
    if not event.get("body"):
        return send_custom_response(400, "Missing bookingId")

    try:
        request_body = PaymentRequest.model_validate_json(event["body"])
    except ValidationError:
        return send_custom_response(400, "Missing bookingId")

    try:
        booking = booking_service.initiate_payment(request_body.booking_id)
        return send_custom_response(
            200,
            data={
                "transactionId": booking.transaction_id,
                "status": booking.status.value,
            },
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except InvalidBookingState as err:
        return send_custom_response(400, str(err))

    except PaymentDeclined as err:
        return send_custom_response(402, str(err))

    except BookingConflict as err:
        return send_custom_response(409, str(err))

    except Exception:
        logger.exception("Unhandled error while initiating payment")
        return send_custom_response(500, "Internal server error")
