from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt

from src.service.cinema.domain.entity.booking_entity import BookingConfirmation
from src.service.cinema.driving_adapter.schema.envelope_schema import ApiResponse


class BookingCreateRequest(BaseModel):
    """Field presence and content are validated by Booking.create; only types are checked here."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            'examples': [
                {
                    'showtimeId': 7,
                    'customerName': 'Jane',
                    'customerEmail': 'jane@x.com',
                    'seatIds': [101, 102],
                }
            ]
        },
    )

    showtime_id: Optional[StrictInt] = Field(default=None, alias='showtimeId')
    customer_name: Optional[str] = Field(default=None, alias='customerName')
    customer_email: Optional[str] = Field(default=None, alias='customerEmail')
    seat_ids: Optional[List[StrictInt]] = Field(default=None, alias='seatIds')


class BookingConfirmationResponse(BaseModel):
    booking_id: int
    customer_name: str
    customer_email: str
    created_at: datetime
    movie_title: str
    showtime: datetime
    seats: str
    total_price: float

    @classmethod
    def from_entity(cls, confirmation: BookingConfirmation) -> 'BookingConfirmationResponse':
        return cls(
            booking_id=confirmation.booking_id,
            customer_name=confirmation.customer_name,
            customer_email=confirmation.customer_email,
            created_at=confirmation.created_at,
            movie_title=confirmation.movie_title,
            showtime=confirmation.showtime,
            seats=confirmation.seats,
            total_price=float(confirmation.total_price),
        )


BookingCreateResponse = ApiResponse[BookingConfirmationResponse]
