import random
import time
from typing import Optional

from common.utils.constants import TRANSACTION_SUFFIX_BOUND


def generate_transaction_id(rng: Optional[random.Random] = None) -> str:
    rng = rng or random
    millis = int(time.time() * 1000)
    return f"TXN-{millis}-{rng.randrange(TRANSACTION_SUFFIX_BOUND)}"
