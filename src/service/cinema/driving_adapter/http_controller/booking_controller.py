from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.driving_adapter.schema.booking_schema import (
    BookingConfirmationResponse,
    BookingCreateRequest,
    BookingCreateResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingCreateResponse:
    """
    Errors:
        400 {success, message, bookedSeatIds} - some seats are already booked
        400 {success, message} - malformed request
        500 {success, message, retryable} - store unavailable, safe to retry
    """
    confirmation = await use_case.create_booking(
        showtime_id=request.showtime_id,  # type: ignore[arg-type]
        customer_name=request.customer_name,  # type: ignore[arg-type]
        customer_email=request.customer_email,  # type: ignore[arg-type]
        seat_ids=request.seat_ids,  # type: ignore[arg-type]
    )
    return BookingCreateResponse(
        message='Booking created',
        data=BookingConfirmationResponse.from_entity(confirmation),
    )
