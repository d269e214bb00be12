from typing import List

from pydantic import BaseModel

from src.service.cinema.domain.entity.seat_entity import Seat
from src.service.cinema.driving_adapter.schema.envelope_schema import ApiListResponse


class SeatResponse(BaseModel):
    id: int
    row_letter: str
    seat_number: int
    seat_type: str
    price: float
    label: str

    @classmethod
    def from_entity(cls, seat: Seat) -> 'SeatResponse':
        return cls(
            id=seat.id,
            row_letter=seat.row_letter,
            seat_number=seat.seat_number,
            seat_type=seat.seat_type.value,
            price=float(seat.price),
            label=seat.label,
        )


class ShowtimeSeatResponse(SeatResponse):
    is_booked: bool

    @classmethod
    def from_entity(cls, seat: Seat) -> 'ShowtimeSeatResponse':
        return cls(
            **SeatResponse.from_entity(seat).model_dump(),
            is_booked=bool(seat.is_booked),
        )


class ShowtimeSeatListResponse(ApiListResponse[ShowtimeSeatResponse]):
    showtime_id: int

    @classmethod
    def from_entities(cls, *, showtime_id: int, seats: List[Seat]) -> 'ShowtimeSeatListResponse':
        return cls(
            message='Seats for showtime retrieved',
            data=[ShowtimeSeatResponse.from_entity(seat) for seat in seats],
            count=len(seats),
            showtime_id=showtime_id,
        )
