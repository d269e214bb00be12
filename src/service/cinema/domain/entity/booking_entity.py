from collections import Counter
from datetime import datetime
from decimal import Decimal
from typing import Any, List, Optional

import attrs

from src.platform.exception.exceptions import InvalidInputError
from src.platform.logging.loguru_io import Logger


def _is_positive_int(value: Any) -> bool:
    # bool is an int subclass; True must not pass as id 1
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


@attrs.define
class Booking:
    showtime_id: int
    customer_name: str
    customer_email: str
    seat_ids: List[int] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        showtime_id: Any,
        customer_name: Any,
        customer_email: Any,
        seat_ids: Any,
    ) -> 'Booking':
        """
        Validate a booking request before any transaction is opened.

        Duplicate seat ids are kept as-is; they surface later as a store
        conflict and are reported back to the caller.

        Raises:
            InvalidInputError: missing or malformed field
        """
        missing = [
            name
            for name, value in (
                ('showtimeId', showtime_id),
                ('customerName', customer_name),
                ('customerEmail', customer_email),
                ('seatIds', seat_ids),
            )
            if value is None
        ]
        if missing:
            raise InvalidInputError(f'Missing required fields: {", ".join(missing)}')

        if not _is_positive_int(showtime_id):
            raise InvalidInputError('showtimeId must be a positive integer')
        if _is_blank(customer_name):
            raise InvalidInputError('customerName must be a non-empty string')
        if _is_blank(customer_email):
            raise InvalidInputError('customerEmail must be a non-empty string')

        if not isinstance(seat_ids, (list, tuple)) or not seat_ids:
            raise InvalidInputError('seatIds must be a non-empty array')
        if not all(_is_positive_int(seat_id) for seat_id in seat_ids):
            raise InvalidInputError('seatIds must contain only positive integers')

        return cls(
            showtime_id=showtime_id,
            customer_name=customer_name.strip(),
            customer_email=customer_email.strip(),
            seat_ids=list(seat_ids),
        )

    @property
    def duplicate_seat_ids(self) -> List[int]:
        return sorted(seat_id for seat_id, count in Counter(self.seat_ids).items() if count > 1)


@attrs.define(frozen=True)
class BookingConfirmation:
    booking_id: int
    customer_name: str
    customer_email: str
    created_at: datetime
    movie_title: str
    showtime: datetime
    seats: str  # comma-joined labels ordered by row, then number: "A1,A2"
    total_price: Decimal
