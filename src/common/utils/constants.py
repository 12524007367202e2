# A confirmed stay writes one night claim per night inside a single
# DynamoDB transaction, which is capped at 100 items.
MAX_STAY = 90

DEFAULT_MINIMUM_FEE = "50"
DEFAULT_FEE_RATE = "0.05"
DEFAULT_PAYMENT_SUCCESS_RATE = 0.8
DEFAULT_REGION = "ap-south-1"

TRANSACTION_SUFFIX_BOUND = 100000
