import os
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Mapping, Optional

from common.utils.constants import (
    DEFAULT_FEE_RATE,
    DEFAULT_MINIMUM_FEE,
    DEFAULT_PAYMENT_SUCCESS_RATE,
    DEFAULT_REGION,
)


class ConfirmationPolicy(str, Enum):
    AUTO = "auto"
    PAYMENT = "payment"


@dataclass(frozen=True)
class FeePolicy:
    minimum_fee: Decimal = Decimal(DEFAULT_MINIMUM_FEE)
    fee_rate: Decimal = Decimal(DEFAULT_FEE_RATE)


@dataclass(frozen=True)
class Settings:
    table_name: Optional[str]
    region: str = DEFAULT_REGION
    fee_policy: FeePolicy = FeePolicy()
    confirmation_policy: ConfirmationPolicy = ConfirmationPolicy.AUTO
    payment_success_rate: float = DEFAULT_PAYMENT_SUCCESS_RATE
    receipt_sender: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            table_name=env.get("TABLE_NAME"),
            region=env.get("AWS_REGION_NAME", DEFAULT_REGION),
            fee_policy=FeePolicy(
                minimum_fee=Decimal(env.get("SERVICE_FEE_MINIMUM", DEFAULT_MINIMUM_FEE)),
                fee_rate=Decimal(env.get("SERVICE_FEE_RATE", DEFAULT_FEE_RATE)),
            ),
            confirmation_policy=ConfirmationPolicy(
                env.get("BOOKING_CONFIRMATION_POLICY", ConfirmationPolicy.AUTO.value).lower()
            ),
            payment_success_rate=float(
                env.get("PAYMENT_SUCCESS_RATE", DEFAULT_PAYMENT_SUCCESS_RATE)
            ),
            receipt_sender=env.get("RECEIPT_SENDER") or None,
        )
