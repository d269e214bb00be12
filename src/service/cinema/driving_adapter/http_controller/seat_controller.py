from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.cinema.driving_adapter.schema.envelope_schema import ApiListResponse
from src.service.cinema.driving_adapter.schema.seat_schema import SeatResponse


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_seats(
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> ApiListResponse[SeatResponse]:
    seats = await use_case.list_seats()
    return ApiListResponse[SeatResponse](
        message='Seats retrieved',
        data=[SeatResponse.from_entity(seat) for seat in seats],
        count=len(seats),
    )
