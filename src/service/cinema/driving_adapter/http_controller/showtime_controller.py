from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.cinema.app.query.list_showtimes_use_case import ListShowtimesUseCase
from src.service.cinema.driving_adapter.schema.envelope_schema import ApiListResponse
from src.service.cinema.driving_adapter.schema.movie_schema import ShowtimeResponse
from src.service.cinema.driving_adapter.schema.seat_schema import ShowtimeSeatListResponse


router = APIRouter()


@router.get('', status_code=status.HTTP_200_OK)
@Logger.io
async def list_showtimes(
    use_case: ListShowtimesUseCase = Depends(ListShowtimesUseCase.depends),
) -> ApiListResponse[ShowtimeResponse]:
    showtimes = await use_case.list_showtimes()
    return ApiListResponse[ShowtimeResponse](
        message='Showtimes retrieved',
        data=[ShowtimeResponse.from_entity(showtime) for showtime in showtimes],
        count=len(showtimes),
    )


@router.get('/{showtime_id}/seats', status_code=status.HTTP_200_OK)
@Logger.io
async def list_showtime_seats(
    showtime_id: int,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> ShowtimeSeatListResponse:
    seats = await use_case.list_seats_for_showtime(showtime_id=showtime_id)
    return ShowtimeSeatListResponse.from_entities(showtime_id=showtime_id, seats=seats)
