from decimal import Decimal
from typing import Optional

import attrs

from src.service.cinema.domain.enum.seat_type import SeatType


def seat_label(row_letter: str, seat_number: int) -> str:
    return f'{row_letter}{seat_number}'


@attrs.define
class Seat:
    id: int
    row_letter: str
    seat_number: int
    seat_type: SeatType
    price: Decimal
    # Only known when the seat is read for a particular showtime
    is_booked: Optional[bool] = None

    @property
    def label(self) -> str:
        return seat_label(self.row_letter, self.seat_number)
