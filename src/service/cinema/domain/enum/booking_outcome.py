from enum import StrEnum


class BookingOutcome(StrEnum):
    """Terminal states of one booking attempt"""

    CONFIRMED = 'confirmed'
    CONFLICT = 'conflict'  # SeatsAlreadyBooked
    INVALID_INPUT = 'invalid_input'
    STORE_ERROR = 'store_error'  # StoreUnavailable
