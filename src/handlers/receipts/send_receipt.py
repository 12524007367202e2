import logging
from boto3 import resource
from botocore.exceptions import ClientError

from common.repository.booking_repo import BookingRepository
from common.repository.catalog_repo import CatalogRepository
from common.services.receipt_service import ReceiptService
from common.schemas.bookings import ReceiptRequest
from common.utils.custom_response import send_custom_response
from common.utils.custom_exceptions import NotFoundException
from common.utils.settings import Settings
from pydantic import ValidationError

logger = logging.getLogger()
logger.setLevel(logging.INFO)

settings = Settings.from_env()

dynamodb = resource("dynamodb", region_name=settings.region)
table = dynamodb.Table(settings.table_name)

receipt_service = ReceiptService(
    booking_repo=BookingRepository(table),
    catalog_repo=CatalogRepository(table),
    sender=settings.receipt_sender,
    region=settings.region,
)


def send_receipt(event, context):
    if not event.get("body"):
        return send_custom_response(400, "Missing email or bookingId")

    try:
        request_body = ReceiptRequest.model_validate_json(event["body"])
    except ValidationError as e:
        formatted = "; ".join(f"{err['msg']}" for err in e.errors())
        return send_custom_response(400, formatted)

    try:
        sent = receipt_service.send_receipt(request_body.email, request_body.booking_id)
        message = "Receipt sent successfully"
        if not sent:
            message += " (simulated)"
        return send_custom_response(200, message, {"simulated": not sent})

    except NotFoundException as err:
        return send_custom_response(err.status_code, str(err))

    except ClientError as err:
        logger.error(f"Failed to send receipt for {request_body.booking_id}: {err}")
        return send_custom_response(500, "Failed to send receipt")

    except Exception:
        logger.exception("Unhandled error while sending receipt")
        return send_custom_response(500, "Internal server error")
