import logging
from boto3 import resource

from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.booking_service import BookingService
from common.services.payment_service import PaymentService
from common.services.pricing_service import PricingService
from common.services.receipt_service import ReceiptService
from common.schemas.bookings import BookingView, booking_request_adapter
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import BookingConflict, NotFoundException
from common.utils.identity import get_requester_id
from common.utils.settings import Settings
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

settings = Settings.from_env()

dynamodb = resource("dynamodb", region_name=settings.region)
table = dynamodb.Table(settings.table_name)

booking_repo = BookingRepository(table)
catalog_repo = CatalogRepository(table)

booking_service = BookingService(
    booking_repo=booking_repo,
    catalog_repo=catalog_repo,
    pricing_service=PricingService(settings.fee_policy),
    payment_service=PaymentService(settings.payment_success_rate),
    receipt_service=ReceiptService(
        booking_repo, catalog_repo, settings.receipt_sender, settings.region
    ),
    confirmation_policy=settings.confirmation_policy,
)


def create_booking(event, context):
    if not event.get("body"):
        return send_custom_response(400, "Request body is required")

    try:
        request_body = booking_request_adapter.validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted)

    try:
        booking = booking_service.add_booking(request_body, get_requester_id(event))

        return send_custom_response(
            201,
            "Booking created successfully",
            {
                "bookingId": booking.booking_id,
                "booking": BookingView.from_booking(booking).to_payload(),
            },
        )

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except BookingConflict as err:
        return send_custom_response(409, str(err))

    except Exception:
        logger.exception("Unhandled error while creating booking")
        return send_custom_response(500, "Internal server error")
