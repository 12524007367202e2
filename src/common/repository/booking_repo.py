from botocore.exceptions import ClientError
import logging
from typing import Optional, List, Tuple
from boto3.dynamodb.conditions import Key
from common.models.bookings import Booking, BookingStatus, BookingType
from common.utils.custom_exceptions import (
    BookingConflict,
    InvalidBookingState,
    TransactionIdConflict,
)
from common.utils.datetime_normaliser import (
    date_or_none,
    from_iso_string,
    to_iso_string,
)
from decimal import Decimal
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from types_boto3_dynamodb.service_resource import Table
    from types_boto3_dynamodb import DynamoDBClient
else:
    Table = object
    DynamoDBClient = object


logger = logging.getLogger(__name__)

BOOKING_ITEM = "booking"
TRANSACTION_ITEM = "transaction"
USER_ITEM = "user"
NIGHT_ITEM = "night"


class BookingRepository:
    def __init__(self, table: Table, client: DynamoDBClient = None):
        self.table = table
        self.client = client if client else table.meta.client

    @staticmethod
    def _night_key(place_id: str, night: date) -> dict:
        return {"pk": f"PLACE#{place_id}", "sk": f"NIGHT#{night.isoformat()}"}

    def _night_puts(self, booking: Booking) -> List[Tuple[str, dict]]:
        return [
            (
                NIGHT_ITEM,
                {
                    "Put": {
                        "TableName": self.table.name,
                        "Item": {
                            **self._night_key(booking.item_id, night),
                            "booking_id": booking.booking_id,
                        },
                        "ConditionExpression": "attribute_not_exists(pk)",
                    }
                },
            )
            for night in booking.nights()
        ]

    def _transaction_put(self, booking_id: str, transaction_id: str) -> Tuple[str, dict]:
        return (
            TRANSACTION_ITEM,
            {
                "Put": {
                    "TableName": self.table.name,
                    "Item": {
                        "pk": f"TXN#{transaction_id}",
                        "sk": "DETAILS",
                        "booking_id": booking_id,
                    },
                    "ConditionExpression": "attribute_not_exists(pk)",
                }
            },
        )

    def _to_item(self, booking: Booking) -> dict:
        item = {
            "pk": f"BOOKING#{booking.booking_id}",
            "sk": "DETAILS",
            "booking_type": booking.type.value,
            "item_id": booking.item_id,
            "number_of_guests": booking.number_of_guests,
            "name": booking.name,
            "phone": booking.phone,
            "price": Decimal(str(booking.price)),
            "service_fee": Decimal(str(booking.service_fee)),
            "total_amount": Decimal(str(booking.total_amount)),
            "transaction_id": booking.transaction_id,
            "payment_method": booking.payment_method,
            "booking_status": booking.status.value,
            "address": booking.address,
            "refund_requested": booking.refund_requested,
            "created_at": to_iso_string(booking.created_at),
        }
        if booking.user_id:
            item["user_id"] = booking.user_id
        if booking.check_in and booking.check_out:
            item["check_in"] = booking.check_in.isoformat()
            item["check_out"] = booking.check_out.isoformat()
        if booking.event_date:
            item["event_date"] = booking.event_date.isoformat()
        return item

    @staticmethod
    def _to_domain(item: dict) -> Booking:
        refund_requested_at = item.get("refund_requested_at")
        return Booking(
            booking_id=item["pk"].removeprefix("BOOKING#"),
            type=BookingType(item["booking_type"]),
            item_id=item["item_id"],
            user_id=item.get("user_id"),
            number_of_guests=int(item["number_of_guests"]),
            name=item["name"],
            phone=item["phone"],
            price=Decimal(item["price"]),
            service_fee=Decimal(item["service_fee"]),
            total_amount=Decimal(item["total_amount"]),
            transaction_id=item["transaction_id"],
            payment_method=item.get("payment_method", ""),
            status=BookingStatus(item["booking_status"]),
            check_in=date_or_none(item.get("check_in")),
            check_out=date_or_none(item.get("check_out")),
            event_date=date_or_none(item.get("event_date")),
            address=item.get("address", ""),
            refund_requested=bool(item.get("refund_requested", False)),
            refund_requested_at=(
                from_iso_string(refund_requested_at) if refund_requested_at else None
            ),
            created_at=from_iso_string(item["created_at"]),
        )

    def _transact(self, labelled: List[Tuple[str, dict]], booking_id: str):
        try:
            self.client.transact_write_items(
                TransactItems=[request for _, request in labelled]
            )
        except ClientError as err:
            failed = self._failed_items(err, labelled)
            if NIGHT_ITEM in failed:
                raise BookingConflict("Place already booked for the selected dates")
            if TRANSACTION_ITEM in failed:
                raise TransactionIdConflict("transaction id already in use, retry")
            if BOOKING_ITEM in failed:
                raise InvalidBookingState(
                    f"booking '{booking_id}' changed state, operation rejected"
                )
            logger.error(f"Error writing booking {booking_id}: {err}")
            raise

    @staticmethod
    def _failed_items(err: ClientError, labelled: List[Tuple[str, dict]]) -> set:
        if err.response.get("Error", {}).get("Code") != "TransactionCanceledException":
            return set()
        reasons = err.response.get("CancellationReasons", [])
        return {
            labelled[index][0]
            for index, reason in enumerate(reasons)
            if reason.get("Code") == "ConditionalCheckFailed"
        }

    def add_booking(self, booking: Booking):
        """Write the booking, its transaction claim, its user index entry and,
        for a confirmed stay, one claim per night, all or nothing."""
        labelled = [
            (
                BOOKING_ITEM,
                {
                    "Put": {
                        "TableName": self.table.name,
                        "Item": self._to_item(booking),
                        "ConditionExpression": "attribute_not_exists(pk)",
                    }
                },
            ),
            self._transaction_put(booking.booking_id, booking.transaction_id),
        ]
        if booking.user_id:
            labelled.append(
                (
                    USER_ITEM,
                    {
                        "Put": {
                            "TableName": self.table.name,
                            "Item": {
                                "pk": f"USER#{booking.user_id}",
                                "sk": f"BOOKING#{booking.booking_id}",
                                "created_at": to_iso_string(booking.created_at),
                            },
                        }
                    },
                )
            )
        if booking.status == BookingStatus.CONFIRMED:
            labelled.extend(self._night_puts(booking))

        self._transact(labelled, booking.booking_id)

    def get_booking_by_id(self, booking_id: str) -> Optional[Booking]:
        try:
            response = self.table.get_item(
                Key={"pk": f"BOOKING#{booking_id}", "sk": "DETAILS"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving booking {booking_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self._to_domain(item)

    def get_booking_by_transaction_id(self, transaction_id: str) -> Optional[Booking]:
        try:
            response = self.table.get_item(
                Key={"pk": f"TXN#{transaction_id}", "sk": "DETAILS"}
            )
        except ClientError as err:
            logger.error(f"Error retrieving transaction {transaction_id}: {err}")
            raise

        item = response.get("Item")
        if not item:
            return None
        return self.get_booking_by_id(item["booking_id"])

    def get_user_bookings(self, user_id: str) -> List[Booking]:
        try:
            response = self.table.query(
                KeyConditionExpression=Key("pk").eq(f"USER#{user_id}")
                & Key("sk").begins_with("BOOKING#")
            )
        except ClientError as err:
            logger.error(f"Error retrieving user {user_id} bookings: {err}")
            raise

        bookings = []
        for item in response.get("Items", []):
            booking = self.get_booking_by_id(item["sk"].removeprefix("BOOKING#"))
            if booking:
                bookings.append(booking)
        return bookings

    def get_booked_nights(
        self, place_id: str, check_in: date, check_out: date
    ) -> List[date]:
        """Nights in [check_in, check_out) already held by a confirmed booking."""
        last_night = check_out - timedelta(days=1)
        condition = Key("pk").eq(f"PLACE#{place_id}") & Key("sk").between(
            f"NIGHT#{check_in.isoformat()}", f"NIGHT#{last_night.isoformat()}"
        )
        nights = []
        try:
            resp = self.table.query(KeyConditionExpression=condition)
            nights.extend(resp.get("Items", []))
            while "LastEvaluatedKey" in resp:
                resp = self.table.query(
                    KeyConditionExpression=condition,
                    ExclusiveStartKey=resp["LastEvaluatedKey"],
                )
                nights.extend(resp.get("Items", []))
        except ClientError as err:
            logger.error(
                f"Error retrieving nights for place {place_id} between {check_in} and {check_out}: {err}"
            )
            raise
        return [date.fromisoformat(item["sk"].removeprefix("NIGHT#")) for item in nights]

    def confirm_booking(self, booking: Booking, transaction_id: str):
        """Move a pending booking to confirmed under a new transaction id and
        claim its nights."""
        labelled = [
            (
                BOOKING_ITEM,
                {
                    "Update": {
                        "Key": {"pk": f"BOOKING#{booking.booking_id}", "sk": "DETAILS"},
                        "TableName": self.table.name,
                        "UpdateExpression": "SET #booking_status = :confirmed, #transaction_id = :transaction_id",
                        "ExpressionAttributeNames": {
                            "#booking_status": "booking_status",
                            "#transaction_id": "transaction_id",
                        },
                        "ExpressionAttributeValues": {
                            ":confirmed": BookingStatus.CONFIRMED.value,
                            ":pending": BookingStatus.PENDING.value,
                            ":transaction_id": transaction_id,
                        },
                        "ConditionExpression": "#booking_status = :pending",
                    }
                },
            ),
            self._transaction_put(booking.booking_id, transaction_id),
        ]
        if booking.transaction_id and booking.transaction_id != transaction_id:
            labelled.append(
                (
                    TRANSACTION_ITEM,
                    {
                        "Delete": {
                            "TableName": self.table.name,
                            "Key": {"pk": f"TXN#{booking.transaction_id}", "sk": "DETAILS"},
                        }
                    },
                )
            )
        labelled.extend(self._night_puts(booking))

        self._transact(labelled, booking.booking_id)

    def cancel_booking(self, booking: Booking):
        """Mark the booking canceled and release any nights it holds."""
        labelled = [
            (
                BOOKING_ITEM,
                {
                    "Update": {
                        "Key": {"pk": f"BOOKING#{booking.booking_id}", "sk": "DETAILS"},
                        "TableName": self.table.name,
                        "UpdateExpression": "SET #booking_status = :canceled",
                        "ExpressionAttributeNames": {"#booking_status": "booking_status"},
                        "ExpressionAttributeValues": {
                            ":canceled": BookingStatus.CANCELED.value,
                            ":observed": booking.status.value,
                        },
                        # the nights released below follow the status read, so it must still hold
                        "ConditionExpression": "attribute_exists(pk) AND #booking_status = :observed",
                    }
                },
            )
        ]
        if booking.status == BookingStatus.CONFIRMED:
            labelled.extend(
                (
                    NIGHT_ITEM,
                    {
                        "Delete": {
                            "TableName": self.table.name,
                            "Key": self._night_key(booking.item_id, night),
                        }
                    },
                )
                for night in booking.nights()
            )

        self._transact(labelled, booking.booking_id)

    def mark_refund_requested(self, booking_id: str, requested_at: datetime):
        try:
            self.table.update_item(
                Key={"pk": f"BOOKING#{booking_id}", "sk": "DETAILS"},
                UpdateExpression="SET #refund_requested = :true, #refund_requested_at = :requested_at",
                ExpressionAttributeNames={
                    "#refund_requested": "refund_requested",
                    "#refund_requested_at": "refund_requested_at",
                    "#booking_status": "booking_status",
                },
                ExpressionAttributeValues={
                    ":true": True,
                    ":false": False,
                    ":canceled": BookingStatus.CANCELED.value,
                    ":requested_at": to_iso_string(requested_at),
                },
                ConditionExpression="#booking_status = :canceled AND #refund_requested = :false",
            )
        except ClientError as err:
            if (
                err.response.get("Error", {}).get("Code")
                == "ConditionalCheckFailedException"
            ):
                raise InvalidBookingState(
                    f"refund for booking '{booking_id}' is not allowed in its current state"
                )
            logger.error(f"Error requesting refund for booking {booking_id}: {err}")
            raise
